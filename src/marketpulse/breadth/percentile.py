"""Signed percentile rank of global daily breadth within its history.

Positive and negative readings are ranked separately by magnitude, so a
day's rank says how strong it was among days of the same sign:
- value > 0:  rank =  100 * (1 + position among positives) / count(positives)
- value < 0:  rank = -100 * (1 + position among |negatives|) / count(negatives)
- value == 0: rank = 0

Tied magnitudes share the position of their first occurrence in sorted
order (stable first match, not average rank).
"""

from bisect import bisect_left
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from marketpulse.breadth.models import DailyBreadthScore, GlobalDailyBreadthPoint
from marketpulse.timeseries.alignment import one_year_before, trailing_window

_HUNDRED = Decimal("100")
_ZERO = Decimal("0")


def _partition(series: Sequence[DailyBreadthScore]) -> tuple[list[Decimal], list[Decimal]]:
    positives = sorted(p.global_daily_breadth for p in series if p.global_daily_breadth > 0)
    negatives = sorted(-p.global_daily_breadth for p in series if p.global_daily_breadth < 0)
    return positives, negatives


def _rank(value: Decimal, positives: list[Decimal], negatives: list[Decimal]) -> Decimal:
    if value > 0:
        position = bisect_left(positives, value)
        return _HUNDRED * Decimal(position + 1) / Decimal(len(positives))
    if value < 0:
        position = bisect_left(negatives, -value)
        return -_HUNDRED * Decimal(position + 1) / Decimal(len(negatives))
    return _ZERO


def percentile_rank(series: Sequence[DailyBreadthScore], target_date: str) -> Decimal:
    """Rank the value recorded on ``target_date`` within ``series``.

    Args:
        series: Breadth readings to rank against.
        target_date: ``date_str`` of the reading to rank. A date not in the
            series is ranked as a zero reading.

    Returns:
        Rank in [-100, 100].
    """
    value = next(
        (p.global_daily_breadth for p in series if p.date_str == target_date),
        _ZERO,
    )
    positives, negatives = _partition(series)
    return _rank(value, positives, negatives)


def add_percentile_ranks(series: Sequence[DailyBreadthScore]) -> list[GlobalDailyBreadthPoint]:
    """Rank every reading of ``series`` against the whole series.

    The sorted populations are built once, so ranking n readings is
    O(n log n) rather than one sort per reading.
    """
    positives, negatives = _partition(series)
    return [
        GlobalDailyBreadthPoint(
            date_str=p.date_str,
            global_daily_breadth=p.global_daily_breadth,
            global_daily_breadth_percentile_rank=_rank(
                p.global_daily_breadth, positives, negatives
            ),
        )
        for p in series
    ]


def rank_trailing_year(
    series: Sequence[DailyBreadthScore],
    as_of: date,
) -> list[GlobalDailyBreadthPoint]:
    """Rank the readings dated within one year of ``as_of`` against each other."""
    return add_percentile_ranks(trailing_window(series, one_year_before(as_of)))
