"""Runtime configuration and result types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass
class WaitConfig:
    """How long to wait for the page to create the data layer."""

    timeout: float = 5.0
    check_interval: float = 0.05


@dataclass
class TargetRetryConfig:
    """Fixed-delay retry policy for triggering a Target view."""

    max_attempts: int = 10
    retry_delay: float = 0.4


class ViewTriggerState(str, Enum):
    """Lifecycle of a single view trigger."""

    IDLE = "idle"
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (
            ViewTriggerState.SUCCEEDED,
            ViewTriggerState.EXHAUSTED,
            ViewTriggerState.FAILED,
        )


class TriggerOutcome(str, Enum):
    """What trigger_target_view ended up doing."""

    SKIPPED = "skipped"
    DELEGATED = "delegated"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
    FAILED = "failed"
