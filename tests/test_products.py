"""products module unit tests"""

from tl_datalayer import AncillaryPricing, build_ancillary_breakdown, build_purchase_products

ONWARD = {"flightNumber": "TL101", "currentPrice": 4500, "origin": "DEL", "destination": "BOM"}
RETURN = {"flightNumber": "TL102", "currentPrice": 5000, "origin": "BOM", "destination": "DEL"}
TRAVELLERS = [
    {"firstName": "Asha", "lastName": "Rao"},
    {"firstName": "Vikram", "lastName": "Singh"},
]


def test_flight_products() -> None:
    products = build_purchase_products(
        ONWARD,
        RETURN,
        {},
        TRAVELLERS,
        {"date": "2025-10-20T00:00:00.000Z", "returnDate": "2025-10-27"},
    )

    onward, ret = products
    assert onward["productName"] == "Flight TL101"
    assert onward["price"] == 9000
    assert onward["quantity"] == 2
    assert onward["departureDate"] == "2025-10-20"
    assert onward["cabinClass"] == "economy"
    assert onward["currency"] == "INR"
    assert ret["subCategory"] == "return"
    assert ret["departureDate"] == "2025-10-27"


def test_missing_departure_date() -> None:
    products = build_purchase_products(ONWARD, None, {}, TRAVELLERS[:1], {"cabinClass": "business"})
    assert len(products) == 1
    assert products[0]["departureDate"] is None
    assert products[0]["cabinClass"] == "business"


def test_ancillary_products() -> None:
    ancillary = {
        "onward": [
            {"seatNumber": "12A", "seatType": "window", "baggage": 10, "priorityBoarding": True},
            {"seatNumber": "12B", "seatPrice": 750, "loungeAccess": True},
        ],
        "return": [None, {"baggage": 7}],
    }

    products = build_purchase_products(ONWARD, None, ancillary, TRAVELLERS, {})
    by_id = [(p["productId"], p["price"]) for p in products[1:]]

    assert by_id == [
        ("seat", 500),
        ("baggage", 2800),
        ("priorityBoarding", 500),
        ("seat", 750),
        ("loungeAccess", 1500),
        ("baggage", 1000),
    ]
    assert products[1]["productName"] == "Seat 12A - Passenger 1 - onward"
    assert products[-1]["baggageType"] == "7kg"
    assert products[-1]["journey"] == "return"


def test_custom_pricing() -> None:
    pricing = AncillaryPricing(currency="USD", lounge_access_price=40)
    products = build_purchase_products(
        None, None, {"onward": [{"loungeAccess": True}]}, TRAVELLERS[:1], {}, pricing
    )
    assert products == [
        {
            "productId": "loungeAccess",
            "productName": "Lounge Access - onward",
            "category": "ancillary",
            "subCategory": "loungeAccess",
            "price": 40,
            "quantity": 1,
            "currency": "USD",
            "journey": "onward",
        }
    ]


def test_ancillary_breakdown() -> None:
    ancillary = {
        "onward": [
            {"seatNumber": "3C", "seatPrice": 500, "meal": "veg_meal", "baggage": 15},
            {"priorityBoarding": True, "priorityBoardingPrice": 500},
        ],
        "return": [{"meal": "non_veg"}],
    }

    breakdown = build_ancillary_breakdown(ancillary, TRAVELLERS, RETURN)

    first = breakdown["servicesSelected"]["passenger1"]
    assert first["passengerName"] == "Asha Rao"
    assert first["onward"]["totalCost"] == 4500
    assert first["onward"]["baggage"] == {
        "details": "15kg",
        "cost": 4000,
        "currency": "INR",
        "type": "paid",
    }
    assert first["return"]["meals"]["details"] == "non_veg"
    second = breakdown["servicesSelected"]["passenger2"]
    assert second["return"]["totalCost"] == 0

    assert breakdown["totalAncillaryCost"] == 5000
    assert breakdown["summary"] == {
        "totalServicesSelected": 5,
        "totalPaidServices": 3,
        "totalFreeServices": 2,
        "categoriesSelected": ["seating", "dining", "baggage", "boarding"],
    }


def test_breakdown_one_way_has_no_return() -> None:
    breakdown = build_ancillary_breakdown({}, TRAVELLERS[:1])
    entry = breakdown["servicesSelected"]["passenger1"]
    assert "return" not in entry
    assert entry["onward"]["seats"]["details"] is None
    assert breakdown["totalAncillaryCost"] == 0
    assert breakdown["summary"]["categoriesSelected"] == []


def test_departure_date_is_converted_to_utc() -> None:
    """An offset timestamp past local midnight falls on the previous UTC day."""
    products = build_purchase_products(
        ONWARD, None, {}, TRAVELLERS[:1], {"date": "2025-03-10T02:00:00+05:30"}
    )
    assert products[0]["departureDate"] == "2025-03-09"


def test_baggage_weight_from_string_and_fraction() -> None:
    """Numeric strings use the weight table; fractional weights get the default price."""
    ancillary = {"onward": [{"baggage": "15"}, {"baggage": 10.5}], "return": [{"baggage": "heavy"}]}

    products = build_purchase_products(None, None, ancillary, TRAVELLERS, {})

    assert [(p["baggageType"], p["price"]) for p in products] == [("15kg", 4000), ("10.5kg", 1000)]


def test_breakdown_baggage_weight_from_string_and_fraction() -> None:
    ancillary = {"onward": [{"baggage": "15"}, {"baggage": 10.5}]}

    breakdown = build_ancillary_breakdown(ancillary, TRAVELLERS)

    first = breakdown["servicesSelected"]["passenger1"]["onward"]["baggage"]
    second = breakdown["servicesSelected"]["passenger2"]["onward"]["baggage"]
    assert first == {"details": "15kg", "cost": 4000, "currency": "INR", "type": "paid"}
    assert second == {"details": "10.5kg", "cost": 0, "currency": "INR", "type": "free"}
    assert breakdown["totalAncillaryCost"] == 4000
