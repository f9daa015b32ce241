"""Target page parameters and SPA view triggering."""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from .clock import Clock, MonotonicClock
from .context import PageContext
from .models import TargetRetryConfig, TriggerOutcome, ViewTriggerState

logger = structlog.stdlib.get_logger(__name__)


def _helper_method(ctx: PageContext, name: str) -> Any:
    method = getattr(ctx.target_helper, name, None)
    return method if callable(method) else None


def get_target_page_params(ctx: PageContext) -> dict[str, Any]:
    """Current targeting snapshot."""
    if not ctx.available:
        return {}
    return ctx.target_page_params


def set_target_page_params(ctx: PageContext, params: dict[str, Any] | None = None) -> None:
    """Merge ``params`` into the snapshot, or hand them to the site helper."""
    if not ctx.available:
        return
    params = params or {}

    set_page_params = _helper_method(ctx, "set_page_params")
    if set_page_params is not None:
        set_page_params(params)
        return

    ctx.target_page_params = {**ctx.target_page_params, **params}


def ensure_target_page_params_callback(ctx: PageContext) -> None:
    """Install the pull callback the tag manager reads params through.

    An already installed callback is kept.
    """
    if not ctx.available or callable(ctx.target_page_params_all):
        return
    ctx.target_page_params_all = lambda: get_target_page_params(ctx)


class ViewTrigger:
    """Bounded, fixed-delay attempts at calling ``adobe_target.trigger_view``.

    step() performs one attempt and returns the new state; run() loops step()
    with the clock sleeping ``retry_delay`` between attempts.
    """

    def __init__(
        self,
        ctx: PageContext,
        view_name: str,
        data: dict[str, Any] | None = None,
        config: TargetRetryConfig | None = None,
    ) -> None:
        self.ctx = ctx
        self.view_name = view_name
        self.data = data or {}
        self.config = config or TargetRetryConfig()
        self.attempts = 0
        self.state = ViewTriggerState.IDLE

    def step(self) -> ViewTriggerState:
        if self.state.terminal:
            return self.state
        self.state = ViewTriggerState.ATTEMPTING

        trigger = getattr(self.ctx.adobe_target, "trigger_view", None)
        if callable(trigger):
            try:
                trigger(self.view_name, self.data)
            except Exception as e:
                logger.error(
                    "target view trigger failed",
                    view_name=self.view_name,
                    error=str(e),
                )
                self.state = ViewTriggerState.FAILED
            else:
                logger.info("target view triggered", view_name=self.view_name)
                self.state = ViewTriggerState.SUCCEEDED
            return self.state

        self.attempts += 1
        if self.attempts >= self.config.max_attempts:
            logger.warning(
                "target trigger_view unavailable",
                view_name=self.view_name,
                attempts=self.attempts,
            )
            self.state = ViewTriggerState.EXHAUSTED
        return self.state

    async def run(self, clock: Clock | None = None) -> ViewTriggerState:
        clock = clock or MonotonicClock()
        while not self.step().terminal:
            await clock.sleep(self.config.retry_delay)
        return self.state


async def trigger_target_view(
    ctx: PageContext,
    view_name: str,
    data: dict[str, Any] | None = None,
    config: TargetRetryConfig | None = None,
    clock: Clock | None = None,
) -> TriggerOutcome:
    """Trigger a Target view for an SPA navigation.

    Never raises; the outcome only reports what happened.
    """
    if not ctx.available or not view_name:
        return TriggerOutcome.SKIPPED
    data = data or {}

    helper_trigger = _helper_method(ctx, "trigger_view")
    if helper_trigger is not None:
        try:
            helper_trigger(view_name, data)
        except Exception as e:
            logger.error("target helper trigger failed", view_name=view_name, error=str(e))
            return TriggerOutcome.FAILED
        return TriggerOutcome.DELEGATED

    state = await ViewTrigger(ctx, view_name, data, config).run(clock)
    return TriggerOutcome(state.value)


def schedule_target_view(
    ctx: PageContext,
    view_name: str,
    data: dict[str, Any] | None = None,
    config: TargetRetryConfig | None = None,
    clock: Clock | None = None,
) -> asyncio.Task[TriggerOutcome]:
    """Start trigger_target_view in the background.

    Must be called from a running event loop. The context keeps the task
    alive until it completes.
    """
    task = asyncio.get_running_loop().create_task(
        trigger_target_view(ctx, view_name, data, config, clock)
    )
    ctx.track_task(task)
    return task


async def sync_target_for_view(
    ctx: PageContext,
    view_name: str,
    params: dict[str, Any] | None = None,
    view_data: dict[str, Any] | None = None,
    config: TargetRetryConfig | None = None,
    clock: Clock | None = None,
) -> TriggerOutcome:
    """Set page params, make sure the callback exists, then trigger the view."""
    set_target_page_params(ctx, params)
    ensure_target_page_params_callback(ctx)
    return await trigger_target_view(ctx, view_name, view_data, config, clock)
