"""Market breadth data models.

Input series arrive from the external breadth service as date-keyed lines;
output rows are built fresh per date and never updated in place.

CRITICAL: All ratios, percentages and scores use Decimal. Counts are ints.
"""

from dataclasses import dataclass
from decimal import Decimal

from marketpulse.models import DateCount


# ---------------------------------------------------------------------------
# Input series
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AdvanceDeclinePoint:
    """Advancing and declining issue counts for one date."""

    date_str: str
    advances: int
    declines: int
    cumulative: int = 0  # running advances - declines


@dataclass(frozen=True)
class UpDownVolumePoint:
    """Volume traded in advancing versus declining issues."""

    date_str: str
    up_volume: Decimal
    down_volume: Decimal


@dataclass(frozen=True)
class HighsLowsPoint:
    """New 52-week highs and lows for one date."""

    date_str: str
    fifty_two_week_highs: int
    fifty_two_week_lows: int


@dataclass(frozen=True)
class PercentAboveMAPoint:
    """Percentage of the universe trading above a moving average."""

    date_str: str
    percent_above_ma: Decimal


@dataclass(frozen=True)
class DailyBreadthScore:
    """Global daily breadth composite for one trading day, before ranking."""

    date_str: str
    global_daily_breadth: Decimal
    cumulative: Decimal = Decimal("0")


@dataclass(frozen=True)
class BreadthOverview:
    """Every breadth line the dashboard receives for one dataset.

    All lines are ordered oldest-first. Lines the caller does not have may
    be left empty; consumers treat their dates as missing.
    """

    advance_decline_line: tuple[AdvanceDeclinePoint, ...] = ()
    up_down_volume_line: tuple[UpDownVolumePoint, ...] = ()
    fifty_two_week_highs_lows_line: tuple[HighsLowsPoint, ...] = ()
    stock_count_line: tuple[DateCount, ...] = ()
    percent_above_five_sma: tuple[PercentAboveMAPoint, ...] = ()
    percent_above_ten_ema: tuple[PercentAboveMAPoint, ...] = ()
    percent_above_twenty_one_ema: tuple[PercentAboveMAPoint, ...] = ()
    percent_above_fifty_sma: tuple[PercentAboveMAPoint, ...] = ()
    percent_above_two_hundred_sma: tuple[PercentAboveMAPoint, ...] = ()
    up_four_percent_line: tuple[DateCount, ...] = ()
    down_four_percent_line: tuple[DateCount, ...] = ()
    one_month_up_twenty_five_percent_line: tuple[DateCount, ...] = ()
    one_month_down_twenty_five_percent_line: tuple[DateCount, ...] = ()
    three_months_up_twenty_five_percent_line: tuple[DateCount, ...] = ()
    three_months_down_twenty_five_percent_line: tuple[DateCount, ...] = ()
    global_daily_breadth_line: tuple[DailyBreadthScore, ...] = ()


# ---------------------------------------------------------------------------
# Momentum rows
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UpAndDown:
    """Up and down counts for one date; None means the date was absent from that line.

    Missing and zero stay distinct here. They collapse to zero only when a
    ratio is computed, via ``up_or_zero`` / ``down_or_zero``.
    """

    date_str: str
    up_count: int | None
    down_count: int | None

    @property
    def up_or_zero(self) -> int:
        return self.up_count if self.up_count is not None else 0

    @property
    def down_or_zero(self) -> int:
        return self.down_count if self.down_count is not None else 0

    @property
    def is_complete(self) -> bool:
        return self.up_count is not None and self.down_count is not None


@dataclass(frozen=True)
class STMomentumRow:
    """Short-term momentum from stocks moving 4% or more in a day.

    ``complete`` is False when zero was substituted anywhere the row reads:
    the down count or advance/decline totals for this date, or an up or
    down count on any date of the trailing windows.
    """

    date_str: str
    up_four_percent: int
    down_four_percent: int
    day_ratio: Decimal
    five_day_ratio: Decimal
    ten_day_ratio: Decimal
    daily_momo: Decimal  # 4% advancers as a percentage of issues traded
    complete: bool = True


@dataclass(frozen=True)
class MTLTMomentumRow:
    """Medium- or long-term momentum from stocks up/down 25% over 1 or 3 months."""

    date_str: str
    up_twenty_five_percent: int
    down_twenty_five_percent: int
    ratio: Decimal
    complete: bool = True


@dataclass(frozen=True)
class MomentumRow:
    """Short, medium and long-term momentum for one date."""

    st_momentum_row: STMomentumRow
    mt_momentum_row: MTLTMomentumRow
    lt_momentum_row: MTLTMomentumRow

    @property
    def date_str(self) -> str:
        return self.st_momentum_row.date_str


# ---------------------------------------------------------------------------
# Ranked global daily breadth
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GlobalDailyBreadthPoint:
    """Global daily breadth with its signed percentile rank in [-100, 100]."""

    date_str: str
    global_daily_breadth: Decimal
    global_daily_breadth_percentile_rank: Decimal


# ---------------------------------------------------------------------------
# Breadth snapshot table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AdvanceDeclineRow:
    point: AdvanceDeclinePoint
    net: int
    net_ratio: Decimal  # percent of issues traded, 2 dp


@dataclass(frozen=True)
class NewHighLowRow:
    point: HighsLowsPoint
    stock_count: int
    net: int
    net_ratio: Decimal  # percent of universe, 2 dp


@dataclass(frozen=True)
class UpDownVolumeRow:
    point: UpDownVolumePoint
    up_down_ratio: Decimal | None  # None when no down volume traded


@dataclass(frozen=True)
class PercentAboveMARow:
    percent_above_five_sma: Decimal
    percent_above_ten_ema: Decimal
    percent_above_twenty_one_ema: Decimal
    percent_above_fifty_sma: Decimal
    percent_above_two_hundred_sma: Decimal


@dataclass(frozen=True)
class MarketBreadthRow:
    """One dated row of the breadth snapshot table."""

    date_str: str
    advance_decline: AdvanceDeclineRow
    new_highs_lows: NewHighLowRow
    up_down_volume: UpDownVolumeRow
    percent_above_ma: PercentAboveMARow
    global_daily_breadth: GlobalDailyBreadthPoint
    momentum: MomentumRow
