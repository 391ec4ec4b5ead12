"""Relative Rotation Graph coordinates for a symbol versus a benchmark.

For each window of aligned candles:
1. RS     = symbol close / benchmark close, per date
2. RS'    = SMA(smoothing_period) of RS when smoothing_period > 1, else RS
3. Ratio  = 100 * RS'[i] / WMA(period) of RS' ending at i
4. Mom    = 100 * Ratio[i] / WMA(momentum_period) of Ratio ending at i

Both coordinates sit near 100 when the symbol moves in line with the
benchmark, independent of absolute price levels.

A trail recomputes every observation from its own window rather than
sliding one buffer. That costs O(observations * total_period) but stays
correct for any combination of periods; trails are at most a trading year.

CRITICAL: All computations use Decimal. Never use float.
"""

from collections.abc import Sequence
from decimal import Decimal, DivisionByZero, InvalidOperation

from marketpulse.exceptions import (
    ComputationError,
    InsufficientDataError,
    LengthMismatchError,
)
from marketpulse.logging import get_logger
from marketpulse.models import Candle, PeriodSettings
from marketpulse.rotation.models import Quadrant, RotationCoordinates, RotationPoint
from marketpulse.timeseries.alignment import align_on_dates, index_by_date
from marketpulse.timeseries.moving_average import sma_series, wma

logger = get_logger(__name__)

_HUNDRED = Decimal("100")

#: Precision of published RS-Ratio / RS-Momentum values (12 decimal places).
_RRG_QUANTIZE = Decimal("0.000000000001")


def compute_rotation_point(
    symbol_window: Sequence[Candle],
    benchmark_window: Sequence[Candle],
    rs_period: int,
    momentum_period: int,
    smoothing_period: int = 0,
) -> RotationCoordinates:
    """Compute RS-Ratio and RS-Momentum for the most recent candle of a window.

    Args:
        symbol_window: Symbol candles ordered oldest-first.
        benchmark_window: Benchmark candles for the same dates, same order.
        rs_period: WMA window for RS-Ratio.
        momentum_period: WMA window for RS-Momentum.
        smoothing_period: SMA window applied to raw RS (0 or 1 = none).

    Returns:
        RotationCoordinates for the last candle, quantized to 12 places.

    Raises:
        InsufficientDataError: Either window is shorter than
            smoothing_period + rs_period + momentum_period.
        LengthMismatchError: The two windows differ in length.
        ComputationError: The arithmetic produced no valid value (zero or
            NaN prices).
    """
    settings = PeriodSettings(
        period=rs_period,
        momentum_period=momentum_period,
        smoothing_period=smoothing_period,
    )
    required = settings.total_period
    available = min(len(symbol_window), len(benchmark_window))
    if available < required:
        raise InsufficientDataError(
            required=required,
            available=available,
            context=(
                f"smoothing={smoothing_period}, rs_period={rs_period}, "
                f"momentum_period={momentum_period}"
            ),
        )
    if len(symbol_window) != len(benchmark_window):
        raise LengthMismatchError(len(symbol_window), len(benchmark_window))
    if any(c.close.is_nan() for c in (*symbol_window, *benchmark_window)):
        raise ComputationError("Window contains a NaN close")

    try:
        rs = [
            s.close / b.close
            for s, b in zip(symbol_window, benchmark_window, strict=True)
        ]

        if smoothing_period > 1:
            smoothed = [v for v in sma_series(smoothing_period, rs) if v is not None]
        else:
            smoothed = rs

        rs_ratios = [
            _HUNDRED * smoothed[i] / wma(rs_period, smoothed[i - rs_period + 1 : i + 1])
            for i in range(rs_period - 1, len(smoothed))
        ]
        rs_momentums = [
            _HUNDRED
            * rs_ratios[i]
            / wma(momentum_period, rs_ratios[i - momentum_period + 1 : i + 1])
            for i in range(momentum_period, len(rs_ratios))
        ]
    except (DivisionByZero, InvalidOperation) as e:
        raise ComputationError(f"Relative strength arithmetic failed: {e!r}") from e

    if not rs_ratios or not rs_momentums:
        raise ComputationError("Failed to calculate a valid rotation point")

    return RotationCoordinates(
        rs_ratio=rs_ratios[-1].quantize(_RRG_QUANTIZE),
        rs_momentum=rs_momentums[-1].quantize(_RRG_QUANTIZE),
    )


def build_rotation_trail(
    ticker: str,
    symbol_candles: Sequence[Candle],
    benchmark_candles: Sequence[Candle],
    rs_period: int = 125,
    observation_count: int = 10,
    momentum_period: int = 10,
    smoothing_period: int = 0,
) -> list[RotationPoint]:
    """Build a trail of rotation points, most recent observation first.

    Observation ``i`` uses the ``total_period`` symbol candles ending ``i``
    candles before the latest one, with the benchmark aligned on
    ``date_str`` (unmatched dates dropped).

    Graceful degradation: the first time a window cannot be filled, or its
    computation fails, the loop stops and the points produced so far are
    returned. Symbols with short histories get a shorter trail, never an
    exception.

    Args:
        ticker: Symbol stamped on each point.
        symbol_candles: Symbol history ordered oldest-first.
        benchmark_candles: Benchmark history ordered oldest-first.
        rs_period: WMA window for RS-Ratio.
        observation_count: Maximum number of points to produce.
        momentum_period: WMA window for RS-Momentum.
        smoothing_period: SMA window applied to raw RS (0 or 1 = none).

    Returns:
        Up to ``observation_count`` RotationPoints, newest first.
    """
    total_period = PeriodSettings(
        period=rs_period,
        momentum_period=momentum_period,
        smoothing_period=smoothing_period,
    ).total_period
    benchmark_index = index_by_date(benchmark_candles)
    points: list[RotationPoint] = []

    for i in range(observation_count):
        start = len(symbol_candles) - (total_period + i)
        if start < 0:
            _log_truncation(ticker, points, observation_count, "symbol_history_exhausted")
            break

        window = symbol_candles[start : start + total_period]
        benchmark_window = align_on_dates(window, benchmark_index)
        if len(benchmark_window) < total_period:
            _log_truncation(ticker, points, observation_count, "benchmark_dates_missing")
            break

        try:
            coordinates = compute_rotation_point(
                window,
                benchmark_window,
                rs_period,
                momentum_period,
                smoothing_period,
            )
        except (InsufficientDataError, ComputationError) as e:
            _log_truncation(ticker, points, observation_count, str(e))
            break

        last = window[-1]
        benchmark_last = benchmark_window[-1]
        points.append(
            RotationPoint(
                symbol=ticker,
                date=last.date,
                date_str=last.date_str,
                price=last.close,
                benchmark_price=benchmark_last.close,
                rs_value=last.close / benchmark_last.close,
                rs_ratio=coordinates.rs_ratio,
                rs_momentum=coordinates.rs_momentum,
            )
        )

    return points


def classify_quadrant(
    rs_ratio: Decimal,
    rs_momentum: Decimal,
    centre: Decimal = _HUNDRED,
) -> Quadrant:
    """Place a coordinate in its RRG quadrant.

    Values exactly on the centre line count as the stronger side.
    """
    if rs_ratio >= centre:
        return Quadrant.LEADING if rs_momentum >= centre else Quadrant.WEAKENING
    return Quadrant.IMPROVING if rs_momentum >= centre else Quadrant.LAGGING


def _log_truncation(
    ticker: str,
    points: list[RotationPoint],
    requested: int,
    reason: str,
) -> None:
    logger.debug(
        "rotation_trail_truncated",
        ticker=ticker,
        produced=len(points),
        requested=requested,
        reason=reason,
    )
