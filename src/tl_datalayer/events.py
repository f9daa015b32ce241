"""Data layer event builders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .clock import Clock, MonotonicClock, utc_timestamp
from .context import PageContext
from .session import DIRECT, get_previous_page, get_session_id


def _segment(is_authenticated: bool) -> str:
    return "registered" if is_authenticated else "anonymous"


@dataclass
class PageData:
    """Description of the page being viewed.

    ``user`` is the identity provider's profile (``sub``, ``email``) or None
    for anonymous visitors.
    """

    page_type: str
    page_name: str
    page_title: str | None = None
    page_description: str | None = None
    page_category: str | None = None
    booking_step: str | None = None
    booking_step_number: int | None = None
    total_booking_steps: int | None = None
    sections: list[str] | None = None
    search_type: str | None = None
    user: dict[str, Any] | None = None


@dataclass
class UserContextData:
    is_authenticated: bool
    user_id: str | None
    hashed_user_id: str | None = None
    user_segment: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class SearchData:
    search_id: str
    origin: str
    destination: str
    departure_date: str
    passengers: int
    trip_type: str
    cabin_class: str
    return_date: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class BookingData:
    booking_id: str
    pnr: str
    booking_status: str
    booking_step: str
    booking_step_number: int
    total_steps: int
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class PurchaseData:
    transaction_id: str
    total_revenue: float
    currency: str
    products: list[dict[str, Any]]
    payment_method: str
    booking_reference: str
    extra: dict[str, Any] = field(default_factory=dict)


# optional pageData fields, copied only when truthy
_OPTIONAL_PAGE_FIELDS = (
    ("page_title", "pageTitle"),
    ("page_description", "pageDescription"),
    ("page_category", "pageCategory"),
    ("booking_step", "bookingStep"),
    ("booking_step_number", "bookingStepNumber"),
    ("total_booking_steps", "totalBookingSteps"),
    ("sections", "sections"),
    ("search_type", "searchType"),
)


def build_page_view(
    ctx: PageContext,
    page: PageData,
    additional: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """pageView event. ``additional`` is spread into pageData last."""
    previous_page = get_previous_page(ctx)
    session_id = get_session_id(ctx)

    is_authenticated = bool(page.user)
    user_id = (page.user or {}).get("sub")
    user_email = (page.user or {}).get("email")

    page_data: dict[str, Any] = {
        "pageType": page.page_type,
        "pageName": page.page_name,
        "pageURL": ctx.url,
        "referrer": ctx.referrer,
        "previousPage": previous_page,
        "timestamp": utc_timestamp(),
        "userAgent": ctx.user_agent,
        "screenResolution": ctx.screen_resolution,
        "viewportSize": ctx.viewport_size,
    }
    for attr, key in _OPTIONAL_PAGE_FIELDS:
        value = getattr(page, attr)
        if value:
            page_data[key] = value
    page_data["userData"] = {
        "isAuthenticated": is_authenticated,
        "userId": user_id,
        "userEmail": user_email,
        "userSegment": _segment(is_authenticated),
        "hashedUserId": None,
        "hashedEmail": None,
    }
    page_data.update(additional or {})

    return {
        "event": "pageView",
        "pageData": page_data,
        "viewData": {
            "landingPage": previous_page == DIRECT,
            "userAuthenticated": is_authenticated,
            "userId": user_id,
            "sessionId": session_id,
            "userEmail": user_email,
            "userLoyaltyTier": None,
        },
    }


def build_user_context(data: UserContextData) -> dict[str, Any]:
    return {
        "event": "userContextUpdated",
        "userData": {
            "isAuthenticated": data.is_authenticated,
            "userId": data.user_id,
            "hashedUserId": data.hashed_user_id,
            "userSegment": data.user_segment or _segment(data.is_authenticated),
            **data.extra,
        },
    }


def build_search_context(data: SearchData, clock: Clock | None = None) -> dict[str, Any]:
    """searchInitiated event; performanceTime is milliseconds on ``clock``."""
    clock = clock or MonotonicClock()
    return {
        "event": "searchInitiated",
        "searchContext": {
            "searchId": data.search_id,
            "origin": data.origin,
            "destination": data.destination,
            "originDestination": f"{data.origin}-{data.destination}",
            "departureDate": data.departure_date,
            "returnDate": data.return_date,
            "passengers": data.passengers,
            "tripType": data.trip_type,
            "cabinClass": data.cabin_class,
            "immediate": True,
            **data.extra,
        },
        "timing": {
            "immediate": True,
            "performanceTime": clock.now() * 1000,
        },
    }


def build_booking_context(data: BookingData) -> dict[str, Any]:
    return {
        "event": "bookingContextUpdated",
        "bookingContext": {
            "bookingId": data.booking_id,
            "pnr": data.pnr,
            "bookingStatus": data.booking_status,
            "bookingStep": data.booking_step,
            "bookingStepNumber": data.booking_step_number,
            "totalSteps": data.total_steps,
            "bookingStartTime": utc_timestamp(),
            **data.extra,
        },
    }


def build_purchase(data: PurchaseData) -> dict[str, Any]:
    timestamp = utc_timestamp()
    return {
        "event": "purchase",
        "eventData": {
            "revenue": {
                "transactionId": data.transaction_id,
                "totalRevenue": data.total_revenue,
                "currency": data.currency,
                "products": data.products,
                "bookingReference": data.booking_reference,
                "paymentMethod": data.payment_method,
                "paymentStatus": "completed",
                "timestamp": timestamp,
                **data.extra,
            }
        },
        "timestamp": timestamp,
    }


def build_custom_event(event_name: str, event_data: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "event": event_name,
        **(event_data or {}),
        "timestamp": utc_timestamp(),
    }
