"""Date-keyed alignment of parallel series.

Every breadth line and candle sequence is keyed by a calendar ``date_str``.
Instead of scanning a series for each date (O(n^2) joins), each series is
indexed once into a ``date_str -> item`` mapping and lookups are O(1).

Missing dates surface as None here. Collapsing None to zero is the
caller's decision, made at the ratio-computation boundary.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import date
from typing import Protocol, TypeVar


class _Dated(Protocol):
    @property
    def date_str(self) -> str: ...


class _Counted(_Dated, Protocol):
    @property
    def count(self) -> int: ...


T = TypeVar("T", bound=_Dated)


def index_by_date(items: Iterable[T]) -> dict[str, T]:
    """Index a series by ``date_str``.

    If a date occurs more than once the first occurrence wins, matching a
    front-to-back scan.
    """
    index: dict[str, T] = {}
    for item in items:
        index.setdefault(item.date_str, item)
    return index


def lookup_count(index: Mapping[str, _Counted], date_str: str) -> int | None:
    """Return the count recorded for ``date_str``, or None if the date is absent."""
    item = index.get(date_str)
    return item.count if item is not None else None


def align_on_dates(anchor: Sequence[_Dated], other: Mapping[str, T]) -> list[T]:
    """Return the items of ``other`` whose dates appear in ``anchor``, in anchor order.

    Anchor dates without a counterpart are dropped, so the result can be
    shorter than ``anchor``.
    """
    return [other[a.date_str] for a in anchor if a.date_str in other]


def join_on_dates(
    dates: Iterable[str],
    *indexes: Mapping[str, T],
) -> list[tuple[str, tuple[T | None, ...]]]:
    """Join several indexed series on a shared list of dates.

    Args:
        dates: The dates to emit, in output order.
        *indexes: Series indexed with ``index_by_date``.

    Returns:
        One ``(date_str, (item_or_None, ...))`` tuple per date, with one slot
        per index in argument order.
    """
    return [(d, tuple(index.get(d) for index in indexes)) for d in dates]


def one_year_before(as_of: date) -> date:
    """Return the same calendar day one year earlier (Feb 29 maps to Feb 28)."""
    try:
        return as_of.replace(year=as_of.year - 1)
    except ValueError:
        return as_of.replace(year=as_of.year - 1, day=28)


def trailing_window(
    items: Iterable[T],
    start: date,
    parse: Callable[[str], date] = date.fromisoformat,
) -> list[T]:
    """Keep the items dated on or after ``start``, preserving order."""
    return [item for item in items if parse(item.date_str) >= start]
