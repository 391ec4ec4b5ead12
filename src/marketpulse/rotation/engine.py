"""Rotation engine building one RRG trail per tracked symbol.

The RotationEngine is the entry point the rotation page uses whenever the
period settings or the symbol set change:
1. Resolve period settings and trail length (explicit, else configured)
2. Build (or reuse from cache) each symbol's trail against the benchmark
3. Classify the latest point of each trail into its quadrant
4. Log the latest coordinates at INFO level
5. Return SecurityRotation objects in input order

Graceful degradation: a symbol whose history is too short gets an empty
trail with no quadrant rather than failing the whole graph.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from marketpulse.config import RotationSettings
from marketpulse.exceptions import InsufficientDataError
from marketpulse.logging import get_logger
from marketpulse.models import Candle, PeriodSettings
from marketpulse.rotation.cache import TrailCache, TrailKey, candle_fingerprint
from marketpulse.rotation.models import RotationPoint, SecurityRotation
from marketpulse.rotation.rrg import build_rotation_trail, classify_quadrant

logger = get_logger(__name__)


class RotationEngine:
    """Computes rotation trails for a set of symbols versus one benchmark.

    Args:
        settings: Default periods, trail length and cache sizing.
        cache: Trail cache to use. None builds one from ``settings`` when
            caching is enabled, otherwise every call recomputes.
    """

    def __init__(
        self,
        settings: RotationSettings,
        cache: TrailCache | None = None,
    ) -> None:
        self._settings = settings
        if cache is None and settings.cache_enabled:
            cache = TrailCache(max_entries=settings.cache_max_entries)
        self._cache = cache

    @property
    def cache(self) -> TrailCache | None:
        return self._cache

    def build_graph(
        self,
        candles_by_ticker: Mapping[str, Sequence[Candle]],
        benchmark: str,
        period_settings: PeriodSettings | None = None,
        trail_length: int | None = None,
    ) -> list[SecurityRotation]:
        """Build rotation trails for every ticker except the benchmark.

        Args:
            candles_by_ticker: Candle history per ticker, each ordered
                oldest-first. Must include the benchmark.
            benchmark: Ticker all others are measured against.
            period_settings: Overrides the configured periods.
            trail_length: Overrides the configured observation count.

        Returns:
            One SecurityRotation per non-benchmark ticker, in mapping order.

        Raises:
            InsufficientDataError: If the benchmark has no candles.
        """
        benchmark_candles = candles_by_ticker.get(benchmark)
        if not benchmark_candles:
            raise InsufficientDataError(
                required=1, available=0, context=f"benchmark {benchmark} has no candles"
            )

        results = [
            self.security_rotation(
                ticker,
                candles,
                benchmark,
                benchmark_candles,
                period_settings=period_settings,
                trail_length=trail_length,
            )
            for ticker, candles in candles_by_ticker.items()
            if ticker != benchmark
        ]

        logger.debug(
            "rotation_graph_built",
            benchmark=benchmark,
            securities=len(results),
            empty_trails=sum(1 for r in results if not r.trail),
        )
        return results

    def security_rotation(
        self,
        ticker: str,
        symbol_candles: Sequence[Candle],
        benchmark: str,
        benchmark_candles: Sequence[Candle],
        period_settings: PeriodSettings | None = None,
        trail_length: int | None = None,
    ) -> SecurityRotation:
        """Build one symbol's trail and classify its latest point."""
        settings = period_settings or self._settings.period_settings()
        length = trail_length if trail_length is not None else self._settings.trail_length

        trail = self._trail(
            ticker, symbol_candles, benchmark, benchmark_candles, settings, length
        )
        if not trail:
            return SecurityRotation(ticker=ticker)

        latest = trail[0]
        quadrant = classify_quadrant(latest.rs_ratio, latest.rs_momentum)

        logger.info(
            "rotation_point",
            ticker=ticker,
            benchmark=benchmark,
            date=latest.date_str,
            rs_value=latest.rs_value,
            rs_ratio=latest.rs_ratio,
            rs_momentum=latest.rs_momentum,
            quadrant=quadrant.value,
            trail_points=len(trail),
        )
        return SecurityRotation(ticker=ticker, trail=trail, latest=latest, quadrant=quadrant)

    def _trail(
        self,
        ticker: str,
        symbol_candles: Sequence[Candle],
        benchmark: str,
        benchmark_candles: Sequence[Candle],
        settings: PeriodSettings,
        trail_length: int,
    ) -> tuple[RotationPoint, ...]:
        def compute() -> list[RotationPoint]:
            return build_rotation_trail(
                ticker,
                symbol_candles,
                benchmark_candles,
                rs_period=settings.period,
                observation_count=trail_length,
                momentum_period=settings.momentum_period,
                smoothing_period=settings.smoothing_period,
            )

        if self._cache is None:
            return tuple(compute())

        key = TrailKey(
            ticker=ticker,
            benchmark=benchmark,
            settings=settings,
            trail_length=trail_length,
            symbol_fingerprint=candle_fingerprint(symbol_candles),
            benchmark_fingerprint=candle_fingerprint(benchmark_candles),
        )
        return self._cache.get_or_compute(key, compute)
