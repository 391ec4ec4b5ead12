"""Market breadth module.

Provides the single momentum-row aggregator shared by every breadth view,
the signed percentile rank of global daily breadth, and the breadth
snapshot table that joins all breadth lines per date.
"""

from marketpulse.breadth.models import (
    AdvanceDeclinePoint,
    AdvanceDeclineRow,
    BreadthOverview,
    DailyBreadthScore,
    GlobalDailyBreadthPoint,
    HighsLowsPoint,
    MarketBreadthRow,
    MomentumRow,
    MTLTMomentumRow,
    NewHighLowRow,
    PercentAboveMAPoint,
    PercentAboveMARow,
    STMomentumRow,
    UpAndDown,
    UpDownVolumePoint,
    UpDownVolumeRow,
)
from marketpulse.breadth.momentum import (
    build_momentum_rows,
    build_momentum_rows_from_overview,
    build_up_down_window,
    floored_ratio,
)
from marketpulse.breadth.percentile import (
    add_percentile_ranks,
    percentile_rank,
    rank_trailing_year,
)
from marketpulse.breadth.table import build_breadth_table

__all__ = [
    "AdvanceDeclinePoint",
    "AdvanceDeclineRow",
    "BreadthOverview",
    "DailyBreadthScore",
    "GlobalDailyBreadthPoint",
    "HighsLowsPoint",
    "MTLTMomentumRow",
    "MarketBreadthRow",
    "MomentumRow",
    "NewHighLowRow",
    "PercentAboveMAPoint",
    "PercentAboveMARow",
    "STMomentumRow",
    "UpAndDown",
    "UpDownVolumePoint",
    "UpDownVolumeRow",
    "add_percentile_ranks",
    "build_breadth_table",
    "build_momentum_rows",
    "build_momentum_rows_from_overview",
    "build_up_down_window",
    "floored_ratio",
    "percentile_rank",
    "rank_trailing_year",
]
