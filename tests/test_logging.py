"""Tests for structlog configuration."""

import logging
from collections.abc import Iterator
from decimal import Decimal

import pytest
import structlog

from marketpulse.logging import _renderer, _stringify_decimals, get_logger, setup_logging


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Undo global logging configuration after the test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestStringifyDecimals:
    """Tests for the Decimal rendering processor."""

    def test_decimals_rendered_exactly(self) -> None:
        """Decimal values keep every digit as strings."""
        event = {"event": "rotation_point", "rs_ratio": Decimal("101.261829652997"), "count": 3}

        result = _stringify_decimals(None, "info", event)

        assert result["rs_ratio"] == "101.261829652997"
        assert result["count"] == 3


class TestRenderer:
    """Tests for renderer selection."""

    def test_json(self) -> None:
        """The json format selects the JSON renderer."""
        assert isinstance(_renderer("json"), structlog.processors.JSONRenderer)

    def test_anything_else_is_console(self) -> None:
        """Other format names fall back to the console renderer."""
        assert isinstance(_renderer("console"), structlog.dev.ConsoleRenderer)
        assert isinstance(_renderer("xml"), structlog.dev.ConsoleRenderer)


class TestSetupLogging:
    """Tests for logger setup."""

    def test_sets_root_level(self, restore_logging: None) -> None:
        """The requested level is applied to the root logger."""
        setup_logging("WARNING", log_format="json")

        assert logging.getLogger().level == logging.WARNING
        assert structlog.is_configured()

    def test_unknown_level_falls_back_to_info(self, restore_logging: None) -> None:
        """An unrecognised level name does not raise."""
        setup_logging("chatty", log_format="console")

        assert logging.getLogger().level == logging.INFO

    def test_logger_accepts_decimal_context(self, restore_logging: None) -> None:
        """Loggers returned by get_logger take Decimal key/value context."""
        setup_logging("CRITICAL", log_format="json")

        get_logger("marketpulse.test").info("configured", value=Decimal("1.5"))

    def test_single_root_handler(self, restore_logging: None) -> None:
        """Repeated setup replaces the root handler instead of stacking them."""
        setup_logging("INFO", log_format="json")
        setup_logging("INFO", log_format="console")

        assert len(logging.getLogger().handlers) == 1
