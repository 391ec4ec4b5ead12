"""Tests for the rotation trail cache."""

from decimal import Decimal

import pytest

from marketpulse.models import PeriodSettings
from marketpulse.rotation.cache import TrailCache, TrailKey, candle_fingerprint
from marketpulse.rotation.models import RotationPoint


def _key(ticker: str = "XLK", benchmark: str = "SPY", fingerprint: int = 1) -> TrailKey:
    return TrailKey(
        ticker=ticker,
        benchmark=benchmark,
        settings=PeriodSettings(period=5, momentum_period=3),
        trail_length=3,
        symbol_fingerprint=fingerprint,
        benchmark_fingerprint=0,
    )


def _point(ticker: str = "XLK") -> RotationPoint:
    return RotationPoint(
        symbol=ticker,
        date=0,
        date_str="2024-01-01",
        price=Decimal("101"),
        benchmark_price=Decimal("100"),
        rs_value=Decimal("1.01"),
        rs_ratio=Decimal("100.5"),
        rs_momentum=Decimal("99.5"),
    )


class TestCandleFingerprint:
    """Tests for candle data fingerprints."""

    def test_same_data_same_fingerprint(self, make_candles) -> None:
        """Equal candle histories hash equally."""
        assert candle_fingerprint(make_candles([1, 2, 3])) == candle_fingerprint(
            make_candles([1, 2, 3])
        )

    def test_revised_close_changes_fingerprint(self, make_candles) -> None:
        """A revised close produces a different key."""
        assert candle_fingerprint(make_candles([1, 2, 3])) != candle_fingerprint(
            make_candles([1, 2, 4])
        )


class TestTrailCache:
    """Tests for LRU trail caching."""

    def test_get_or_compute_computes_once(self) -> None:
        """A second lookup with the same key is served from cache."""
        cache = TrailCache()
        calls = []

        def compute() -> list[RotationPoint]:
            calls.append(1)
            return [_point()]

        first = cache.get_or_compute(_key(), compute)
        second = cache.get_or_compute(_key(), compute)

        assert first == second == (_point(),)
        assert len(calls) == 1
        assert cache.hits == 1
        assert cache.misses == 1

    def test_changed_data_misses(self) -> None:
        """A different fingerprint is a different entry."""
        cache = TrailCache()
        cache.put(_key(fingerprint=1), [_point()])

        assert cache.get(_key(fingerprint=2)) is None

    def test_least_recently_used_evicted(self) -> None:
        """Beyond max_entries the least recently used key is dropped."""
        cache = TrailCache(max_entries=2)
        cache.put(_key("A"), [_point("A")])
        cache.put(_key("B"), [_point("B")])
        cache.get(_key("A"))
        cache.put(_key("C"), [_point("C")])

        assert len(cache) == 2
        assert cache.get(_key("B")) is None
        assert cache.get(_key("A")) is not None

    def test_invalidate_matches_symbol_and_benchmark(self) -> None:
        """Invalidating a ticker drops entries using it on either side."""
        cache = TrailCache()
        cache.put(_key("XLK", "SPY"), [])
        cache.put(_key("XLE", "SPY"), [])
        cache.put(_key("SPY", "QQQ"), [])
        cache.put(_key("XLK", "QQQ"), [])

        removed = cache.invalidate("SPY")

        assert removed == 3
        assert len(cache) == 1

    def test_invalidate_all(self) -> None:
        """Invalidating without a ticker clears the cache."""
        cache = TrailCache()
        cache.put(_key("A"), [])
        cache.put(_key("B"), [])

        assert cache.invalidate() == 2
        assert len(cache) == 0

    def test_empty_trail_is_cached(self) -> None:
        """An empty trail is a valid cached result, not a miss."""
        cache = TrailCache()
        cache.put(_key(), [])

        assert cache.get(_key()) == ()

    def test_non_positive_size_rejected(self) -> None:
        """max_entries must be at least 1."""
        with pytest.raises(ValueError):
            TrailCache(max_entries=0)
