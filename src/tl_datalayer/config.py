"""Settings models and the YAML settings loader."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import DataLayerError, DataLayerErrorCodes
from .models import TargetRetryConfig, WaitConfig
from .products import AncillaryPricing


class WaitSection(BaseModel):
    """Data layer readiness wait."""

    timeout_seconds: float = Field(default=5.0, ge=0.0)
    check_interval_seconds: float = Field(default=0.05, gt=0.0)

    def to_config(self) -> WaitConfig:
        return WaitConfig(
            timeout=self.timeout_seconds,
            check_interval=self.check_interval_seconds,
        )


class TargetSection(BaseModel):
    """Target view trigger retry."""

    max_attempts: int = Field(default=10, ge=1)
    retry_delay_seconds: float = Field(default=0.4, ge=0.0)

    def to_config(self) -> TargetRetryConfig:
        return TargetRetryConfig(
            max_attempts=self.max_attempts,
            retry_delay=self.retry_delay_seconds,
        )


class CommerceSection(BaseModel):
    """Ancillary price tables."""

    currency: str = "INR"
    baggage_prices: dict[int, float] = Field(
        default_factory=lambda: {5: 1500, 10: 2800, 15: 4000, 20: 5000}
    )
    default_baggage_price: float = 1000
    seat_prices: dict[str, float] = Field(
        default_factory=lambda: AncillaryPricing().seat_prices
    )
    priority_boarding_price: float = 500
    lounge_access_price: float = 1500

    def to_pricing(self) -> AncillaryPricing:
        return AncillaryPricing(
            currency=self.currency,
            baggage_prices=dict(self.baggage_prices),
            default_baggage_price=self.default_baggage_price,
            seat_prices=dict(self.seat_prices),
            priority_boarding_price=self.priority_boarding_price,
            lounge_access_price=self.lounge_access_price,
        )


class LogSection(BaseModel):
    """Log level and renderer, applied by configure_logging."""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class DataLayerSettings(BaseModel):
    """All tl_datalayer settings."""

    wait: WaitSection = Field(default_factory=WaitSection)
    target: TargetSection = Field(default_factory=TargetSection)
    commerce: CommerceSection = Field(default_factory=CommerceSection)
    log: LogSection = Field(default_factory=LogSection)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict with override merged into base.

    Nested dicts merge recursively; any other override value, lists included,
    replaces the base value.
    """
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DataLayerError(
            code=DataLayerErrorCodes.READ_FILE,
            message=f"Failed to read settings file: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise DataLayerError(
            code=DataLayerErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise DataLayerError(
            code=DataLayerErrorCodes.PARSE_YAML,
            message=f"Settings root must be a mapping: {path}",
        )
    return data


def load_settings(base_path: Path, env_path: Path | None = None) -> DataLayerSettings:
    """Load DataLayerSettings from base_path.

    env_path, when given and present on disk, is deep-merged over the base.
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = deep_merge(data, _read_yaml(env_path))
    try:
        return DataLayerSettings.model_validate(data)
    except ValidationError as e:
        raise DataLayerError(
            code=DataLayerErrorCodes.VALIDATION,
            message=f"Settings validation failed: {e}",
            cause=e,
        ) from e
