"""Data layer readiness: wait for the buffer, then push into it."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from .clock import Clock, MonotonicClock
from .context import PageContext
from .models import WaitConfig

logger = structlog.stdlib.get_logger(__name__)


def is_data_layer_ready(ctx: PageContext) -> bool:
    """Synchronous check that the page has created the buffer."""
    return ctx.available and isinstance(ctx.data_layer, list)


async def wait_for_data_layer(
    ctx: PageContext,
    config: WaitConfig | None = None,
    clock: Clock | None = None,
) -> bool:
    """Poll until ``ctx.data_layer`` is a list or the timeout elapses.

    Returns True as soon as the buffer is ready. On timeout an empty buffer
    is created when none exists and False is returned; a buffer of the wrong
    type is left alone.
    """
    if not ctx.available:
        return False
    config = config or WaitConfig()
    clock = clock or MonotonicClock()
    start = clock.now()

    while True:
        if isinstance(ctx.data_layer, list):
            return True
        if clock.now() - start >= config.timeout:
            logger.warning(
                "data layer wait timed out",
                timeout=config.timeout,
                created=ctx.data_layer is None,
            )
            if ctx.data_layer is None:
                ctx.data_layer = []
            return False
        await clock.sleep(config.check_interval)


async def push_to_data_layer(
    ctx: PageContext,
    event: Any,
    config: WaitConfig | None = None,
    clock: Clock | None = None,
) -> bool:
    """Append ``event`` to the buffer once it is ready.

    Returns False without waiting when ``event`` is not a mapping, and False
    when the buffer is still unusable after the wait.
    """
    if not isinstance(event, Mapping):
        logger.warning("invalid data layer event", value=repr(event))
        return False
    if not ctx.available:
        return False

    await wait_for_data_layer(ctx, config, clock)

    if is_data_layer_ready(ctx):
        ctx.data_layer.append(event)  # type: ignore[union-attr]
        logger.debug("data layer push", event_name=event.get("event", "event"))
        return True

    logger.warning("data layer unavailable after waiting", event_name=event.get("event"))
    return False


def push_immediate(ctx: PageContext, event: Mapping[str, Any]) -> None:
    """Append without waiting, creating the buffer when the page has not."""
    if not ctx.available:
        return
    if ctx.data_layer is None:
        ctx.data_layer = []
    if not isinstance(ctx.data_layer, list):
        logger.warning("data layer is not a list", kind=type(ctx.data_layer).__name__)
        return
    ctx.data_layer.append(event)
    logger.debug("data layer push", event_name=event.get("event", "event"))


def get_data_layer_state(ctx: PageContext) -> list[Any]:
    """Copy of the buffer contents; empty when there is no buffer."""
    if not ctx.available or not isinstance(ctx.data_layer, list):
        return []
    return list(ctx.data_layer)


def clear_data_layer(ctx: PageContext) -> None:
    """Reset the buffer to an empty list."""
    if ctx.available:
        ctx.data_layer = []
