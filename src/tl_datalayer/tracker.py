"""DataLayerTracker: builds events and pushes them once the buffer is ready."""

from __future__ import annotations

from typing import Any

from .clock import Clock, MonotonicClock
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
from .models import WaitConfig
from .readiness import push_to_data_layer
from .session import get_session_id, set_current_page_as_previous


class DataLayerTracker:
    """Tracking entry points for one page session.

    Every track_* coroutine returns the push result; none of them raise.
    """

    def __init__(
        self,
        ctx: PageContext,
        wait_config: WaitConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.ctx = ctx
        self._wait_config = wait_config or WaitConfig()
        self._clock = clock or MonotonicClock()

    @property
    def session_id(self) -> str:
        return get_session_id(self.ctx)

    async def _push(self, event: dict[str, Any]) -> bool:
        return await push_to_data_layer(self.ctx, event, self._wait_config, self._clock)

    async def track_page_view(
        self, page: PageData, additional: dict[str, Any] | None = None
    ) -> bool:
        pushed = await self._push(build_page_view(self.ctx, page, additional))
        set_current_page_as_previous(self.ctx, page.page_name)
        return pushed

    async def track_user_context(self, data: UserContextData) -> bool:
        return await self._push(build_user_context(data))

    async def track_search(self, data: SearchData) -> bool:
        return await self._push(build_search_context(data, self._clock))

    async def track_booking(self, data: BookingData) -> bool:
        return await self._push(build_booking_context(data))

    async def track_purchase(self, data: PurchaseData) -> bool:
        return await self._push(build_purchase(data))

    async def track_custom_event(
        self, event_name: str, event_data: dict[str, Any] | None = None
    ) -> bool:
        return await self._push(build_custom_event(event_name, event_data))
