"""Relative rotation graph data models.

CRITICAL: All price and coordinate values use Decimal. Never use float.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class Quadrant(str, Enum):
    """RRG quadrant for an (RS-Ratio, RS-Momentum) coordinate around the 100/100 centre."""

    LEADING = "leading"  # strong and strengthening
    WEAKENING = "weakening"  # strong but losing momentum
    LAGGING = "lagging"  # weak and weakening
    IMPROVING = "improving"  # weak but gaining momentum


@dataclass(frozen=True)
class RotationCoordinates:
    """RS-Ratio / RS-Momentum pair for the most recent sample of a window."""

    rs_ratio: Decimal
    rs_momentum: Decimal


@dataclass(frozen=True)
class RotationPoint:
    """One observation on a symbol's rotation trail.

    Keyed to the most recent candle of the window it was computed from.
    ``rs_value`` is the raw price ratio; ``rs_ratio`` and ``rs_momentum``
    are centred on 100 (parity with the benchmark).
    """

    symbol: str
    date: int  # Unix milliseconds
    date_str: str
    price: Decimal
    benchmark_price: Decimal
    rs_value: Decimal
    rs_ratio: Decimal
    rs_momentum: Decimal


@dataclass(frozen=True)
class SecurityRotation:
    """A tracked symbol's trail plus its current placement on the graph.

    ``trail`` is ordered most-recent-first; ``latest`` is ``trail[0]`` and
    ``quadrant`` classifies it. Both are None for an empty trail (history
    too short for a single observation).
    """

    ticker: str
    trail: tuple[RotationPoint, ...] = field(default_factory=tuple)
    latest: RotationPoint | None = None
    quadrant: Quadrant | None = None
