"""Shared test fixtures for the marketpulse analytics core."""

from collections.abc import Callable, Sequence
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from marketpulse.config import AppSettings, BreadthSettings, RotationSettings
from marketpulse.models import Candle


def _candles(
    closes: Sequence[Decimal | int | str],
    start: date = date(2024, 1, 1),
) -> list[Candle]:
    candles = []
    for offset, close in enumerate(closes):
        day = start + timedelta(days=offset)
        value = Decimal(str(close))
        candles.append(
            Candle(
                date=int(
                    datetime(day.year, day.month, day.day, tzinfo=timezone.utc).timestamp()
                    * 1000
                ),
                date_str=day.isoformat(),
                open=value,
                high=value,
                low=value,
                close=value,
                volume=1_000,
            )
        )
    return candles


def _dates(count: int, start: date = date(2024, 1, 1)) -> list[str]:
    return [(start + timedelta(days=offset)).isoformat() for offset in range(count)]


@pytest.fixture
def make_candles() -> Callable[..., list[Candle]]:
    """Return a builder of consecutive daily candles from a list of closes."""
    return _candles


@pytest.fixture
def trading_dates() -> Callable[..., list[str]]:
    """Return a builder of consecutive ISO date strings."""
    return _dates


@pytest.fixture
def rotation_settings() -> RotationSettings:
    """Return short rotation periods so hand-computed trails stay small."""
    return RotationSettings(
        period=5,
        momentum_period=3,
        smoothing_period=0,
        trail_length=3,
    )


@pytest.fixture
def app_settings(rotation_settings: RotationSettings) -> AppSettings:
    """Return AppSettings with test defaults."""
    return AppSettings(
        log_level="DEBUG",
        rotation=rotation_settings,
        breadth=BreadthSettings(),
    )
