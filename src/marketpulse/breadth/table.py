"""Market breadth snapshot table: one joined row per recent trading day.

Rows are keyed by the advance/decline line. For each of its last
``table_rows`` dates (newest first) the row joins:
1. Advance/decline net and net ratio
2. New 52-week highs/lows net, relative to the stock count
3. Up/down volume ratio
4. Percent of stocks above each moving average
5. Global daily breadth, percentile-ranked over the trailing year
6. The momentum row from the shared momentum aggregator

A date missing any joined line other than the stock count is skipped.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from marketpulse.breadth.models import (
    AdvanceDeclinePoint,
    AdvanceDeclineRow,
    BreadthOverview,
    HighsLowsPoint,
    MarketBreadthRow,
    NewHighLowRow,
    PercentAboveMARow,
    UpDownVolumePoint,
    UpDownVolumeRow,
)
from marketpulse.breadth.momentum import build_momentum_rows_from_overview
from marketpulse.breadth.percentile import rank_trailing_year
from marketpulse.config import BreadthSettings
from marketpulse.logging import get_logger
from marketpulse.timeseries.alignment import index_by_date, join_on_dates, lookup_count

logger = get_logger(__name__)

_HUNDRED = Decimal("100")
_TWO_PLACES = Decimal("0.01")


def _round2(value: Decimal) -> Decimal:
    return value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def advance_decline_row(point: AdvanceDeclinePoint) -> AdvanceDeclineRow:
    """Net advancers and their share of issues traded, in percent."""
    net = point.advances - point.declines
    total = point.advances + point.declines
    net_ratio = _round2(_HUNDRED * Decimal(net) / Decimal(total)) if total else Decimal("0.00")
    return AdvanceDeclineRow(point=point, net=net, net_ratio=net_ratio)


def new_high_low_row(point: HighsLowsPoint, stock_count: int | None) -> NewHighLowRow:
    """Net new highs as a percentage of the universe (stock count defaults to 1)."""
    count = stock_count or 1
    net = point.fifty_two_week_highs - point.fifty_two_week_lows
    return NewHighLowRow(
        point=point,
        stock_count=count,
        net=net,
        net_ratio=_round2(_HUNDRED * Decimal(net) / Decimal(count)),
    )


def up_down_volume_row(point: UpDownVolumePoint) -> UpDownVolumeRow:
    """Up volume over down volume, or None when no down volume traded."""
    if point.down_volume == 0:
        return UpDownVolumeRow(point=point, up_down_ratio=None)
    return UpDownVolumeRow(
        point=point,
        up_down_ratio=_round2(point.up_volume / point.down_volume),
    )


def build_breadth_table(
    overview: BreadthOverview,
    as_of: date,
    settings: BreadthSettings | None = None,
) -> list[MarketBreadthRow]:
    """Build the breadth snapshot table for ``overview``.

    Args:
        overview: Every breadth line for the dataset, oldest first.
        as_of: Day the trailing-year percentile ranking is anchored on.
        settings: Row count and momentum parameters. Defaults apply if None.

    Returns:
        Up to ``settings.table_rows`` rows, newest first.
    """
    settings = settings or BreadthSettings()

    recent = list(reversed(overview.advance_decline_line[-settings.table_rows :]))
    momentum_index = index_by_date(build_momentum_rows_from_overview(overview, settings))
    gdb_index = index_by_date(rank_trailing_year(overview.global_daily_breadth_line, as_of))
    stock_count_index = index_by_date(overview.stock_count_line)
    ad_index = index_by_date(recent)

    joined = join_on_dates(
        (p.date_str for p in recent),
        index_by_date(overview.fifty_two_week_highs_lows_line),
        index_by_date(overview.up_down_volume_line),
        index_by_date(overview.percent_above_five_sma),
        index_by_date(overview.percent_above_ten_ema),
        index_by_date(overview.percent_above_twenty_one_ema),
        index_by_date(overview.percent_above_fifty_sma),
        index_by_date(overview.percent_above_two_hundred_sma),
        gdb_index,
        momentum_index,
    )

    rows: list[MarketBreadthRow] = []
    for date_str, matches in joined:
        if any(m is None for m in matches):
            continue
        hl, volume, five, ten, twenty_one, fifty, two_hundred, gdb, momentum = matches
        rows.append(
            MarketBreadthRow(
                date_str=date_str,
                advance_decline=advance_decline_row(ad_index[date_str]),
                new_highs_lows=new_high_low_row(hl, lookup_count(stock_count_index, date_str)),
                up_down_volume=up_down_volume_row(volume),
                percent_above_ma=PercentAboveMARow(
                    percent_above_five_sma=five.percent_above_ma,
                    percent_above_ten_ema=ten.percent_above_ma,
                    percent_above_twenty_one_ema=twenty_one.percent_above_ma,
                    percent_above_fifty_sma=fifty.percent_above_ma,
                    percent_above_two_hundred_sma=two_hundred.percent_above_ma,
                ),
                global_daily_breadth=gdb,
                momentum=momentum,
            )
        )

    logger.debug(
        "breadth_table_built",
        requested=len(recent),
        rows=len(rows),
        skipped=len(recent) - len(rows),
    )
    return rows
