"""Time-series primitives shared by the rotation and breadth modules.

Provides windowed moving averages (SMA, WMA, EMA) and date-keyed alignment
helpers used to join benchmark candles and parallel breadth lines.
"""

from marketpulse.timeseries.alignment import (
    align_on_dates,
    index_by_date,
    join_on_dates,
    lookup_count,
    one_year_before,
    trailing_window,
)
from marketpulse.timeseries.moving_average import ema, sma, sma_series, wma

__all__ = [
    "align_on_dates",
    "ema",
    "index_by_date",
    "join_on_dates",
    "lookup_count",
    "one_year_before",
    "sma",
    "sma_series",
    "trailing_window",
    "wma",
]
