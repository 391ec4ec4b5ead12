"""Tests for date-keyed alignment helpers."""

from datetime import date

from marketpulse.models import DateCount
from marketpulse.timeseries.alignment import (
    align_on_dates,
    index_by_date,
    join_on_dates,
    lookup_count,
    one_year_before,
    trailing_window,
)


class TestIndexByDate:
    """Tests for building a date index."""

    def test_first_occurrence_wins(self) -> None:
        """Duplicate dates keep the first entry, like a front-to-back scan."""
        index = index_by_date([DateCount("2024-01-02", 5), DateCount("2024-01-02", 9)])

        assert index["2024-01-02"].count == 5

    def test_lookup_distinguishes_missing_from_zero(self) -> None:
        """An absent date is None; a recorded zero stays zero."""
        index = index_by_date([DateCount("2024-01-02", 0)])

        assert lookup_count(index, "2024-01-02") == 0
        assert lookup_count(index, "2024-01-03") is None


class TestAlignOnDates:
    """Tests for aligning one series onto another's dates."""

    def test_unmatched_dates_dropped(self, make_candles) -> None:
        """Anchor dates missing from the other series are dropped."""
        symbol = make_candles([1, 2, 3, 4])
        benchmark = [c for c in make_candles([10, 20, 30, 40]) if c.date_str != "2024-01-02"]

        aligned = align_on_dates(symbol, index_by_date(benchmark))

        assert [c.date_str for c in aligned] == ["2024-01-01", "2024-01-03", "2024-01-04"]

    def test_join_yields_none_for_missing(self) -> None:
        """Each joined slot is None where that series lacks the date."""
        ups = index_by_date([DateCount("d1", 1), DateCount("d2", 2)])
        downs = index_by_date([DateCount("d2", 3)])

        joined = join_on_dates(["d1", "d2"], ups, downs)

        assert joined[0] == ("d1", (DateCount("d1", 1), None))
        assert joined[1] == ("d2", (DateCount("d2", 2), DateCount("d2", 3)))


class TestTrailingYear:
    """Tests for the one-year trailing window."""

    def test_same_day_previous_year(self) -> None:
        """An ordinary date maps to the same calendar day a year earlier."""
        assert one_year_before(date(2024, 3, 15)) == date(2023, 3, 15)

    def test_leap_day_maps_to_feb_28(self) -> None:
        """Feb 29 has no counterpart and maps to Feb 28."""
        assert one_year_before(date(2024, 2, 29)) == date(2023, 2, 28)

    def test_window_is_inclusive_of_start(self) -> None:
        """Items dated on the start day are kept."""
        items = [
            DateCount("2023-03-14", 1),
            DateCount("2023-03-15", 2),
            DateCount("2024-01-10", 3),
        ]

        kept = trailing_window(items, date(2023, 3, 15))

        assert [i.count for i in kept] == [2, 3]
