"""Purchase products and ancillary breakdowns for booking events."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

DIRECTIONS = ("onward", "return")


@dataclass
class AncillaryPricing:
    """Price tables for ancillaries, in ``currency``."""

    currency: str = "INR"
    baggage_prices: dict[int, float] = field(
        default_factory=lambda: {5: 1500, 10: 2800, 15: 4000, 20: 5000}
    )
    default_baggage_price: float = 1000
    seat_prices: dict[str, float] = field(
        default_factory=lambda: {
            "standard": 0,
            "window": 500,
            "aisle": 500,
            "extra_legroom": 1000,
            "preferred": 200,
        }
    )
    priority_boarding_price: float = 500
    lounge_access_price: float = 1500

    @staticmethod
    def baggage_weight(value: Any) -> float | None:
        """Numeric baggage weight in kg from an int, float or numeric string."""
        if isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    def baggage_price(self, kg: Any, default: float) -> float:
        """Table price for a whole-number weight, else ``default``."""
        weight = self.baggage_weight(kg)
        if weight is None or not weight.is_integer():
            return default
        return self.baggage_prices.get(int(weight), default)


def _iso_date(value: Any) -> str | None:
    """UTC YYYY-MM-DD from a date or ISO datetime string, None when unparseable."""
    if not value:
        return None
    text = str(value).replace("Z", "+00:00")
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date().isoformat()


def _flight_product(
    flight: Mapping[str, Any],
    direction: str,
    passengers: int,
    departure: Any,
    cabin_class: str,
    pricing: AncillaryPricing,
) -> dict[str, Any]:
    return {
        "productId": "base fare",
        "productName": f"Flight {flight.get('flightNumber')}",
        "category": "flight",
        "subCategory": direction,
        "price": (flight.get("currentPrice") or 0) * passengers,
        "quantity": passengers,
        "currency": pricing.currency,
        "origin": flight.get("origin"),
        "destination": flight.get("destination"),
        "departureDate": _iso_date(departure),
        "cabinClass": cabin_class,
        "journeyType": direction,
    }


def _ancillary_products(
    selection: Mapping[str, Any],
    passenger: int,
    direction: str,
    pricing: AncillaryPricing,
) -> list[dict[str, Any]]:
    products: list[dict[str, Any]] = []

    if selection.get("seatNumber"):
        products.append(
            {
                "productId": "seat",
                "productName": f"Seat {selection['seatNumber']} - Passenger {passenger} - {direction}",
                "category": "ancillary",
                "subCategory": "seat",
                "price": selection.get("seatPrice")
                or pricing.seat_prices.get(selection.get("seatType") or "")
                or 0,
                "quantity": 1,
                "currency": pricing.currency,
                "passengerIndex": passenger,
                "seatNumber": selection["seatNumber"],
                "journeyType": direction,
            }
        )

    baggage = selection.get("baggage")
    weight = pricing.baggage_weight(baggage)
    if weight is not None and weight > 0:
        baggage_type = selection.get("baggageType") or f"{baggage}kg"
        products.append(
            {
                "productId": "baggage",
                "productName": f"Baggage {baggage_type} - {direction}",
                "category": "ancillary",
                "subCategory": "baggage",
                "price": pricing.baggage_price(baggage, pricing.default_baggage_price),
                "quantity": 1,
                "currency": pricing.currency,
                "baggageType": baggage_type,
                "journey": direction,
            }
        )

    if selection.get("priorityBoarding"):
        products.append(
            {
                "productId": "priorityBoarding",
                "productName": f"Priority Boarding - {direction}",
                "category": "ancillary",
                "subCategory": "priorityBoarding",
                "price": selection.get("priorityBoardingPrice") or pricing.priority_boarding_price,
                "quantity": 1,
                "currency": pricing.currency,
                "journey": direction,
            }
        )

    if selection.get("loungeAccess"):
        products.append(
            {
                "productId": "loungeAccess",
                "productName": f"Lounge Access - {direction}",
                "category": "ancillary",
                "subCategory": "loungeAccess",
                "price": pricing.lounge_access_price,
                "quantity": 1,
                "currency": pricing.currency,
                "journey": direction,
            }
        )

    return products


def build_purchase_products(
    onward_flight: Mapping[str, Any] | None,
    return_flight: Mapping[str, Any] | None,
    ancillary_services: Mapping[str, Sequence[Mapping[str, Any] | None]],
    travellers: Sequence[Mapping[str, Any]],
    query: Mapping[str, Any],
    pricing: AncillaryPricing | None = None,
) -> list[dict[str, Any]]:
    """Products array of a purchase event.

    Flights come first (fare multiplied by passenger count), then for each
    direction and passenger the seat, baggage, priority boarding and lounge
    selections. ``ancillary_services`` maps a direction to one selection per
    traveller, by index.
    """
    pricing = pricing or AncillaryPricing()
    passengers = len(travellers)
    cabin_class = query.get("cabinClass") or "economy"
    products: list[dict[str, Any]] = []

    if onward_flight:
        products.append(
            _flight_product(
                onward_flight, "onward", passengers, query.get("date"), cabin_class, pricing
            )
        )
    if return_flight:
        products.append(
            _flight_product(
                return_flight, "return", passengers, query.get("returnDate"), cabin_class, pricing
            )
        )

    for direction in DIRECTIONS:
        selections = ancillary_services.get(direction)
        if not selections:
            continue
        for index in range(passengers):
            selection = selections[index] if index < len(selections) else None
            if selection:
                products.extend(_ancillary_products(selection, index + 1, direction, pricing))

    return products


def _flight_services(
    selection: Mapping[str, Any] | None, pricing: AncillaryPricing
) -> dict[str, Any]:
    currency = pricing.currency
    if not selection:
        return {
            "seats": {"details": None, "cost": 0, "currency": currency, "type": "paid"},
            "meals": {"details": None, "cost": 0, "currency": currency, "type": "free"},
            "baggage": {"details": None, "cost": 0, "currency": currency, "type": "free"},
            "priorityBoarding": {"details": False, "cost": 0, "currency": currency, "type": "paid"},
            "loungeAccess": {"details": False, "cost": 0, "currency": currency, "type": "paid"},
            "totalCost": 0,
            "currency": currency,
        }

    baggage = selection.get("baggage")
    seat_cost = selection.get("seatPrice") or 0
    weight = pricing.baggage_weight(baggage)
    baggage_cost = pricing.baggage_price(baggage, 0) if weight and weight > 0 else 0
    priority_cost = selection.get("priorityBoardingPrice") or 0
    # lounge access is not sold per passenger on the payment page
    lounge_cost = 0

    return {
        "seats": {
            "details": selection.get("seatNumber") or None,
            "cost": seat_cost,
            "currency": currency,
            "type": "paid",
        },
        "meals": {
            "details": selection.get("meal") or None,
            "cost": 0,
            "currency": currency,
            "type": "free",
        },
        "baggage": {
            "details": f"{baggage}kg" if baggage else None,
            "cost": baggage_cost,
            "currency": currency,
            "type": "paid" if baggage_cost > 0 else "free",
        },
        "priorityBoarding": {
            "details": selection.get("priorityBoarding") or False,
            "cost": priority_cost,
            "currency": currency,
            "type": "paid",
        },
        "loungeAccess": {
            "details": False,
            "cost": lounge_cost,
            "currency": currency,
            "type": "paid",
        },
        "totalCost": seat_cost + baggage_cost + priority_cost + lounge_cost,
        "currency": currency,
    }


def build_ancillary_breakdown(
    ancillary_services: Mapping[str, Sequence[Mapping[str, Any] | None]],
    travellers: Sequence[Mapping[str, Any]],
    return_flight: Mapping[str, Any] | None = None,
    pricing: AncillaryPricing | None = None,
) -> dict[str, Any]:
    """Per-passenger ancillary costs and a summary, for the payment page."""
    pricing = pricing or AncillaryPricing()
    services_selected: dict[str, Any] = {}
    total_cost: float = 0
    total_selected = 0
    total_paid = 0
    total_free = 0
    categories: dict[str, None] = {}

    def selection_for(direction: str, index: int) -> Mapping[str, Any] | None:
        selections = ancillary_services.get(direction) or []
        return selections[index] if index < len(selections) else None

    for index, traveller in enumerate(travellers):
        entry: dict[str, Any] = {
            "passengerName": f"{traveller.get('firstName', '')} {traveller.get('lastName', '')}",
            "onward": _flight_services(selection_for("onward", index), pricing),
        }
        if return_flight:
            entry["return"] = _flight_services(selection_for("return", index), pricing)
        services_selected[f"passenger{index + 1}"] = entry

        for direction in DIRECTIONS:
            services = entry.get(direction)
            if not services:
                continue
            total_cost += services["totalCost"]

            if services["seats"]["cost"] > 0:
                total_paid += 1
                total_selected += 1
                categories["seating"] = None
            if services["meals"]["details"]:
                total_free += 1
                total_selected += 1
                categories["dining"] = None
            if services["baggage"]["cost"] > 0:
                total_paid += 1
                total_selected += 1
                categories["baggage"] = None
            if services["priorityBoarding"]["details"]:
                if services["priorityBoarding"]["cost"] > 0:
                    total_paid += 1
                total_selected += 1
                categories["boarding"] = None
            if services["loungeAccess"]["details"]:
                if services["loungeAccess"]["cost"] > 0:
                    total_paid += 1
                total_selected += 1
                categories["lounge"] = None

    return {
        "totalAncillaryCost": total_cost,
        "currency": pricing.currency,
        "servicesSelected": services_selected,
        "summary": {
            "totalServicesSelected": total_selected,
            "totalPaidServices": total_paid,
            "totalFreeServices": total_free,
            "categoriesSelected": list(categories),
        },
    }
