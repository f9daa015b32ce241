"""settings loader unit tests"""

from pathlib import Path

import pytest
from tl_datalayer import (
    AncillaryPricing,
    DataLayerError,
    DataLayerErrorCodes,
    DataLayerSettings,
    TargetRetryConfig,
    WaitConfig,
    build_purchase_products,
    deep_merge,
    load_settings,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_match_runtime_configs() -> None:
    settings = DataLayerSettings()
    assert settings.wait.to_config() == WaitConfig()
    assert settings.target.to_config() == TargetRetryConfig()
    assert settings.commerce.to_pricing().baggage_prices[20] == 5000
    assert settings.commerce.to_pricing().seat_prices == AncillaryPricing().seat_prices
    assert settings.log.format == "json"


def test_load_with_env_override(tmp_path: Path) -> None:
    base = _write(
        tmp_path / "config.yaml",
        "wait:\n  timeout_seconds: 3\n  check_interval_seconds: 0.1\n"
        "target:\n  max_attempts: 5\n",
    )
    env = _write(tmp_path / "config.prod.yaml", "wait:\n  timeout_seconds: 8\nlog:\n  level: WARNING\n")

    settings = load_settings(base, env)

    assert settings.wait.to_config() == WaitConfig(timeout=8.0, check_interval=0.1)
    assert settings.target.max_attempts == 5
    assert settings.target.retry_delay_seconds == pytest.approx(0.4)
    assert settings.log.level == "WARNING"


def test_seat_prices_from_yaml(tmp_path: Path) -> None:
    base = _write(
        tmp_path / "config.yaml",
        "commerce:\n  seat_prices:\n    window: 650\n    extra_legroom: 1200\n",
    )
    pricing = load_settings(base).commerce.to_pricing()
    assert pricing.seat_prices == {"window": 650, "extra_legroom": 1200}

    products = build_purchase_products(
        None, None, {"onward": [{"seatNumber": "1A", "seatType": "window"}]}, [{}], {}, pricing
    )
    assert products[0]["price"] == 650


def test_missing_env_file_is_ignored(tmp_path: Path) -> None:
    base = _write(tmp_path / "config.yaml", "commerce:\n  currency: USD\n")
    settings = load_settings(base, tmp_path / "missing.yaml")
    assert settings.commerce.to_pricing().currency == "USD"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    base = _write(tmp_path / "config.yaml", "")
    assert load_settings(base) == DataLayerSettings()


def test_read_error(tmp_path: Path) -> None:
    with pytest.raises(DataLayerError) as exc_info:
        load_settings(tmp_path / "nope.yaml")
    assert exc_info.value.code == DataLayerErrorCodes.READ_FILE
    assert isinstance(exc_info.value.__cause__, OSError)


def test_parse_error(tmp_path: Path) -> None:
    base = _write(tmp_path / "config.yaml", "wait: [unclosed\n")
    with pytest.raises(DataLayerError) as exc_info:
        load_settings(base)
    assert exc_info.value.code == DataLayerErrorCodes.PARSE_YAML


def test_non_mapping_root(tmp_path: Path) -> None:
    base = _write(tmp_path / "config.yaml", "- a\n- b\n")
    with pytest.raises(DataLayerError) as exc_info:
        load_settings(base)
    assert exc_info.value.code == DataLayerErrorCodes.PARSE_YAML


def test_validation_error(tmp_path: Path) -> None:
    base = _write(tmp_path / "config.yaml", "target:\n  max_attempts: 0\n")
    with pytest.raises(DataLayerError) as exc_info:
        load_settings(base)
    assert exc_info.value.code == DataLayerErrorCodes.VALIDATION
    assert str(exc_info.value).startswith("VALIDATION_ERROR: ")


def test_deep_merge_replaces_lists() -> None:
    base = {"a": {"b": 1, "c": [1, 2]}, "d": 1}
    override = {"a": {"c": [3]}, "e": 2}
    assert deep_merge(base, override) == {"a": {"b": 1, "c": [3]}, "d": 1, "e": 2}
    assert base == {"a": {"b": 1, "c": [1, 2]}, "d": 1}
