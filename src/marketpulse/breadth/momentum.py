"""Breadth momentum aggregation: one momentum row per date.

This is the only place momentum rows are built. The dashboard, the
short-term momentum chart and the breadth snapshot table all call
``build_momentum_rows`` (directly or through
``build_momentum_rows_from_overview``).

For each date of the 4% up line, once ``lookback`` earlier observations
exist:
- day_ratio      = up / max(floor, down)
- five_day_ratio = sum(up) / max(floor, sum(down)) over the last ``short_window`` dates
- ten_day_ratio  = sum(up) / max(floor, sum(down)) over the last ``lookback`` dates
- daily_momo     = 100 * up / (advances + declines), 0 without traded issues
- mt / lt ratio  = 25% up / max(floor, 25% down) over 1 and 3 months

The ``max(floor, ...)`` is a divide-by-zero guard, not a statistical
adjustment: on a zero-down day the ratio equals the up count exactly.

Missing dates never raise. A date absent from a line counts as zero and
every row whose windows read that date is flagged ``complete=False``.

CRITICAL: All ratios use Decimal. Never use float.
"""

from collections.abc import Mapping, Sequence
from decimal import Decimal

from marketpulse.breadth.models import (
    AdvanceDeclinePoint,
    BreadthOverview,
    MomentumRow,
    MTLTMomentumRow,
    STMomentumRow,
    UpAndDown,
)
from marketpulse.config import BreadthSettings
from marketpulse.logging import get_logger
from marketpulse.models import DateCount
from marketpulse.timeseries.alignment import index_by_date, lookup_count

logger = get_logger(__name__)

_HUNDRED = Decimal("100")


def floored_ratio(up: int, down: int, floor: int = 1) -> Decimal:
    """Return ``up / max(floor, down)`` as Decimal."""
    return Decimal(up) / Decimal(max(floor, down))


def build_up_down_window(
    dates: Sequence[DateCount],
    up_index: Mapping[str, DateCount],
    down_index: Mapping[str, DateCount],
) -> list[UpAndDown]:
    """Pair up and down counts for each date, keeping missing dates as None."""
    return [
        UpAndDown(
            date_str=d.date_str,
            up_count=lookup_count(up_index, d.date_str),
            down_count=lookup_count(down_index, d.date_str),
        )
        for d in dates
    ]


def _window_ratio(window: Sequence[UpAndDown], floor: int) -> Decimal:
    ups = sum(entry.up_or_zero for entry in window)
    downs = sum(entry.down_or_zero for entry in window)
    return floored_ratio(ups, downs, floor)


def _twenty_five_percent_row(
    date_str: str,
    up_index: Mapping[str, DateCount],
    down_index: Mapping[str, DateCount],
    floor: int,
) -> MTLTMomentumRow:
    up = lookup_count(up_index, date_str)
    down = lookup_count(down_index, date_str)
    up_count = up if up is not None else 0
    down_count = down if down is not None else 0
    return MTLTMomentumRow(
        date_str=date_str,
        up_twenty_five_percent=up_count,
        down_twenty_five_percent=down_count,
        ratio=floored_ratio(up_count, down_count, floor),
        complete=up is not None and down is not None,
    )


def build_momentum_rows(
    advance_decline_line: Sequence[AdvanceDeclinePoint],
    up_four_percent_line: Sequence[DateCount],
    down_four_percent_line: Sequence[DateCount],
    one_month_up: Sequence[DateCount],
    one_month_down: Sequence[DateCount],
    three_month_up: Sequence[DateCount],
    three_month_down: Sequence[DateCount],
    *,
    lookback: int = 10,
    short_window: int = 5,
    ratio_floor: int = 1,
) -> list[MomentumRow]:
    """Build short, medium and long-term momentum rows.

    Each line is indexed by date once up front, so the whole build is O(n)
    in the length of the 4% up line.

    Args:
        advance_decline_line: Advances/declines per date (daily_momo denominator).
        up_four_percent_line: Stocks up 4%+ per date. Drives the row dates.
        down_four_percent_line: Stocks down 4%+ per date.
        one_month_up: Stocks up 25%+ over one month.
        one_month_down: Stocks down 25%+ over one month.
        three_month_up: Stocks up 25%+ over three months.
        three_month_down: Stocks down 25%+ over three months.
        lookback: Trailing dates in the long window; rows start at this index.
        short_window: Trailing dates in the short window.
        ratio_floor: Minimum denominator for every up/down ratio.

    Returns:
        One MomentumRow per date from index ``lookback`` onward, oldest first.
    """
    up_index = index_by_date(up_four_percent_line)
    down_index = index_by_date(down_four_percent_line)
    adl_index = index_by_date(advance_decline_line)
    one_month_up_index = index_by_date(one_month_up)
    one_month_down_index = index_by_date(one_month_down)
    three_month_up_index = index_by_date(three_month_up)
    three_month_down_index = index_by_date(three_month_down)

    rows: list[MomentumRow] = []
    for i in range(lookback, len(up_four_percent_line)):
        up = up_four_percent_line[i]
        down_count = lookup_count(down_index, up.date_str)
        adl = adl_index.get(up.date_str)
        adl_sum = adl.advances + adl.declines if adl is not None else 0

        long_window = build_up_down_window(
            up_four_percent_line[i - lookback + 1 : i + 1], up_index, down_index
        )
        short = long_window[-short_window:]

        short_term = STMomentumRow(
            date_str=up.date_str,
            up_four_percent=up.count,
            down_four_percent=down_count if down_count is not None else 0,
            day_ratio=floored_ratio(
                up.count, down_count if down_count is not None else 0, ratio_floor
            ),
            five_day_ratio=_window_ratio(short, ratio_floor),
            ten_day_ratio=_window_ratio(long_window, ratio_floor),
            daily_momo=(
                _HUNDRED * Decimal(up.count) / Decimal(adl_sum)
                if adl_sum > 0
                else Decimal("0")
            ),
            complete=(
                adl is not None and all(entry.is_complete for entry in long_window)
            ),
        )

        rows.append(
            MomentumRow(
                st_momentum_row=short_term,
                mt_momentum_row=_twenty_five_percent_row(
                    up.date_str, one_month_up_index, one_month_down_index, ratio_floor
                ),
                lt_momentum_row=_twenty_five_percent_row(
                    up.date_str, three_month_up_index, three_month_down_index, ratio_floor
                ),
            )
        )

    logger.debug(
        "momentum_rows_built",
        rows=len(rows),
        incomplete=sum(1 for r in rows if not r.st_momentum_row.complete),
    )
    return rows


def build_momentum_rows_from_overview(
    overview: BreadthOverview,
    settings: BreadthSettings | None = None,
) -> list[MomentumRow]:
    """Build momentum rows from a full breadth overview.

    Entry point shared by every presentation path.
    """
    settings = settings or BreadthSettings()
    return build_momentum_rows(
        overview.advance_decline_line,
        overview.up_four_percent_line,
        overview.down_four_percent_line,
        overview.one_month_up_twenty_five_percent_line,
        overview.one_month_down_twenty_five_percent_line,
        overview.three_months_up_twenty_five_percent_line,
        overview.three_months_down_twenty_five_percent_line,
        lookback=settings.momentum_lookback,
        short_window=settings.short_window,
        ratio_floor=settings.ratio_floor,
    )
