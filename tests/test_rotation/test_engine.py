"""Tests for RotationEngine graph building."""

from decimal import Decimal

import pytest

from marketpulse.config import RotationSettings
from marketpulse.exceptions import InsufficientDataError
from marketpulse.models import PeriodSettings
from marketpulse.rotation.engine import RotationEngine
from marketpulse.rotation.models import Quadrant


@pytest.fixture
def candles_by_ticker(make_candles) -> dict:
    return {
        "SPY": make_candles([100] * 12),
        "XLK": make_candles(range(100, 112)),
        "TWIN": make_candles([100] * 12),
        "NEW": make_candles([100, 101, 102]),
    }


class TestBuildGraph:
    """Tests for multi-symbol graph construction."""

    def test_one_rotation_per_non_benchmark_ticker(
        self, rotation_settings: RotationSettings, candles_by_ticker: dict
    ) -> None:
        """The benchmark is excluded and input order is preserved."""
        graph = RotationEngine(rotation_settings).build_graph(candles_by_ticker, "SPY")

        assert [r.ticker for r in graph] == ["XLK", "TWIN", "NEW"]

    def test_trail_length_from_settings(
        self, rotation_settings: RotationSettings, candles_by_ticker: dict
    ) -> None:
        """Without an override, trails have the configured length."""
        graph = RotationEngine(rotation_settings).build_graph(candles_by_ticker, "SPY")

        assert len(graph[0].trail) == 3
        assert graph[0].latest == graph[0].trail[0]

    def test_rising_symbol_is_weakening(
        self, rotation_settings: RotationSettings, candles_by_ticker: dict
    ) -> None:
        """Linear outperformance is above 100 on ratio with fading momentum."""
        xlk = RotationEngine(rotation_settings).build_graph(candles_by_ticker, "SPY")[0]

        assert xlk.latest is not None
        assert xlk.latest.rs_ratio > Decimal("100")
        assert xlk.latest.rs_momentum < Decimal("100")
        assert xlk.quadrant is Quadrant.WEAKENING

    def test_benchmark_twin_is_at_centre(
        self, rotation_settings: RotationSettings, candles_by_ticker: dict
    ) -> None:
        """A symbol moving exactly with the benchmark sits at 100/100."""
        twin = RotationEngine(rotation_settings).build_graph(candles_by_ticker, "SPY")[1]

        assert twin.latest is not None
        assert twin.latest.rs_ratio == Decimal("100")
        assert twin.quadrant is Quadrant.LEADING

    def test_short_history_gets_empty_rotation(
        self, rotation_settings: RotationSettings, candles_by_ticker: dict
    ) -> None:
        """A symbol too new for one point degrades to an empty rotation."""
        new = RotationEngine(rotation_settings).build_graph(candles_by_ticker, "SPY")[2]

        assert new.trail == ()
        assert new.latest is None
        assert new.quadrant is None

    def test_overrides_take_precedence(
        self, rotation_settings: RotationSettings, candles_by_ticker: dict
    ) -> None:
        """Explicit period settings and trail length override configuration."""
        graph = RotationEngine(rotation_settings).build_graph(
            candles_by_ticker,
            "SPY",
            period_settings=PeriodSettings(period=3, momentum_period=2),
            trail_length=5,
        )

        assert len(graph[0].trail) == 5

    def test_missing_benchmark_raises(
        self, rotation_settings: RotationSettings, candles_by_ticker: dict
    ) -> None:
        """A graph cannot be built without benchmark candles."""
        with pytest.raises(InsufficientDataError):
            RotationEngine(rotation_settings).build_graph(candles_by_ticker, "QQQ")


class TestEngineCache:
    """Tests for trail reuse across graph builds."""

    def test_repeat_build_served_from_cache(
        self, rotation_settings: RotationSettings, candles_by_ticker: dict
    ) -> None:
        """Rebuilding with unchanged inputs hits the cache for every ticker."""
        engine = RotationEngine(rotation_settings)
        first = engine.build_graph(candles_by_ticker, "SPY")
        second = engine.build_graph(candles_by_ticker, "SPY")

        assert engine.cache is not None
        assert engine.cache.hits == 3
        assert first == second

    def test_new_candle_recomputes(
        self, rotation_settings: RotationSettings, candles_by_ticker: dict, make_candles
    ) -> None:
        """Appending a candle changes the key, so the trail is rebuilt."""
        engine = RotationEngine(rotation_settings)
        engine.build_graph(candles_by_ticker, "SPY")

        updated = dict(candles_by_ticker)
        updated["SPY"] = make_candles([100] * 13)
        updated["XLK"] = make_candles(range(100, 113))
        graph = engine.build_graph(updated, "SPY")

        assert graph[0].trail[0].date_str == updated["XLK"][-1].date_str

    def test_cache_disabled(self) -> None:
        """With caching disabled the engine holds no cache."""
        settings = RotationSettings(period=5, momentum_period=3, cache_enabled=False)

        assert RotationEngine(settings).cache is None
