"""TL Airways analytics data layer library."""

from .clock import Clock, ManualClock, MonotonicClock
from .config import DataLayerSettings, deep_merge, load_settings
from .context import PageContext
from .events import (
    BookingData,
    PageData,
    PurchaseData,
    SearchData,
    UserContextData,
    build_booking_context,
    build_custom_event,
    build_page_view,
    build_purchase,
    build_search_context,
    build_user_context,
)
from .exceptions import DataLayerError, DataLayerErrorCodes
from .hashing import HashedCustomer, create_hashed_customer, hash_phone, hash_sha256, hash_user_id
from .logger import configure_logging, new_logger
from .models import TargetRetryConfig, TriggerOutcome, ViewTriggerState, WaitConfig
from .products import AncillaryPricing, build_ancillary_breakdown, build_purchase_products
from .readiness import (
    clear_data_layer,
    get_data_layer_state,
    is_data_layer_ready,
    push_immediate,
    push_to_data_layer,
    wait_for_data_layer,
)
from .session import get_previous_page, get_session_id, set_current_page_as_previous
from .target import (
    ViewTrigger,
    ensure_target_page_params_callback,
    get_target_page_params,
    schedule_target_view,
    set_target_page_params,
    sync_target_for_view,
    trigger_target_view,
)
from .tracker import DataLayerTracker

__all__ = [
    "AncillaryPricing",
    "BookingData",
    "Clock",
    "DataLayerError",
    "DataLayerErrorCodes",
    "DataLayerSettings",
    "DataLayerTracker",
    "HashedCustomer",
    "ManualClock",
    "MonotonicClock",
    "PageContext",
    "PageData",
    "PurchaseData",
    "SearchData",
    "TargetRetryConfig",
    "TriggerOutcome",
    "UserContextData",
    "ViewTrigger",
    "ViewTriggerState",
    "WaitConfig",
    "build_ancillary_breakdown",
    "build_booking_context",
    "build_custom_event",
    "build_page_view",
    "build_purchase",
    "build_purchase_products",
    "build_search_context",
    "build_user_context",
    "clear_data_layer",
    "configure_logging",
    "create_hashed_customer",
    "deep_merge",
    "ensure_target_page_params_callback",
    "get_data_layer_state",
    "get_previous_page",
    "get_session_id",
    "get_target_page_params",
    "hash_phone",
    "hash_sha256",
    "hash_user_id",
    "is_data_layer_ready",
    "load_settings",
    "new_logger",
    "push_immediate",
    "push_to_data_layer",
    "schedule_target_view",
    "set_current_page_as_previous",
    "set_target_page_params",
    "sync_target_for_view",
    "trigger_target_view",
    "wait_for_data_layer",
]
