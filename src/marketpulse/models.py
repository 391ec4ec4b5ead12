"""Shared input models for price history and breadth primitives.

CRITICAL: All prices use Decimal. Never use float for prices or ratios.
Counts are plain ints.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Candle:
    """A single daily OHLCV candle.

    A candle sequence is sorted ascending by ``date`` and ``date_str`` is
    unique within it. ``date_str`` is the join key used to align a symbol
    against its benchmark.
    """

    date: int  # Unix milliseconds
    date_str: str  # Calendar date, e.g. "2024-03-15"
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int = 0


@dataclass(frozen=True)
class DateCount:
    """A breadth primitive: how many stocks met a condition on a date.

    Examples are stocks up more than 4% on the day, or stocks up 25% over
    the trailing month.
    """

    date_str: str
    count: int


@dataclass(frozen=True)
class PeriodSettings:
    """Lookback periods for one rotation computation.

    Immutable and hashable so it can take part in cache keys.

    Args:
        period: RS-Ratio lookback (WMA window over relative strength).
        momentum_period: RS-Momentum lookback (WMA window over RS-Ratio).
        smoothing_period: SMA window applied to raw relative strength.
            0 or 1 disables smoothing.
    """

    period: int = 125
    momentum_period: int = 10
    smoothing_period: int = 0

    def __post_init__(self) -> None:
        if self.period < 1:
            raise ValueError(f"period must be positive, got {self.period}")
        if self.momentum_period < 1:
            raise ValueError(
                f"momentum_period must be positive, got {self.momentum_period}"
            )
        if self.smoothing_period < 0:
            raise ValueError(
                f"smoothing_period must be non-negative, got {self.smoothing_period}"
            )

    @property
    def total_period(self) -> int:
        """Candles needed to produce a single rotation point."""
        return self.period + self.momentum_period + self.smoothing_period
