"""logger module unit tests"""

import logging

import pytest
import structlog
from tl_datalayer import DataLayerSettings, configure_logging, new_logger
from tl_datalayer.config import LogSection


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_new_logger_json_format() -> None:
    logger = new_logger(level="INFO", format="json")
    assert logger is not None


def test_new_logger_text_format() -> None:
    logger = new_logger(level="DEBUG", format="text")
    assert logger is not None


def test_new_logger_bind() -> None:
    """A bound logger keeps its context and can emit."""
    logger = new_logger().bind(page="home")
    logger.info("page view pushed", event_name="pageView")


def test_configure_logging_applies_log_section() -> None:
    """The log section's level reaches the package's stdlib logger."""
    settings = DataLayerSettings(log=LogSection(level="WARNING", format="text"))
    logger = configure_logging(settings)
    assert logger is not None
    assert logging.getLogger("tl_datalayer").level == logging.WARNING


def test_configure_logging_defaults() -> None:
    configure_logging(DataLayerSettings())
    assert logging.getLogger("tl_datalayer").level == logging.INFO
