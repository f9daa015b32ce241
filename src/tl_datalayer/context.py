"""PageContext: the host page state the helpers read and write."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol


class TargetHelper(Protocol):
    """Site-provided wrapper around the personalization script."""

    def set_page_params(self, params: dict[str, Any]) -> None: ...

    def trigger_view(self, view_name: str, data: dict[str, Any]) -> None: ...


class AdobeTarget(Protocol):
    """The personalization script's own global handle."""

    def trigger_view(self, view_name: str, data: dict[str, Any]) -> None: ...


@dataclass
class PageContext:
    """State owned by one page session.

    ``available`` is False outside a real page (server rendering, tooling);
    every helper is then a silent no-op. ``data_layer`` stays None until the
    page or the waiter creates it.
    """

    available: bool = True
    data_layer: list[Any] | None = None
    target_page_params: dict[str, Any] = field(default_factory=dict)
    target_helper: TargetHelper | None = None
    adobe_target: AdobeTarget | None = None
    target_page_params_all: Callable[[], dict[str, Any]] | None = None
    session_storage: dict[str, str] = field(default_factory=dict)
    url: str = ""
    referrer: str = ""
    user_agent: str = ""
    screen_resolution: str = ""
    viewport_size: str = ""
    _pending: set[asyncio.Task[Any]] = field(default_factory=set, repr=False)

    @classmethod
    def unavailable(cls) -> PageContext:
        """Context for code running without a host page."""
        return cls(available=False)

    def track_task(self, task: asyncio.Task[Any]) -> None:
        """Hold a reference to a background task until it finishes."""
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    @property
    def pending_tasks(self) -> frozenset[asyncio.Task[Any]]:
        return frozenset(self._pending)
