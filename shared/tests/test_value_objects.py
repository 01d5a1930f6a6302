"""Tests for shared value objects."""

from datetime import date

import pytest

from shared.domain.value_objects import DateRange


def test_rejects_end_before_start():
    with pytest.raises(ValueError):
        DateRange(date(2025, 5, 10), date(2025, 5, 9))


def test_single_day_range_is_valid_and_counts_zero_days():
    dates = DateRange(date(2025, 5, 10), date(2025, 5, 10))
    assert dates.total_days == 0


def test_total_days_is_difference_between_midnights():
    assert DateRange(date(2025, 5, 1), date(2025, 5, 4)).total_days == 3


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ((date(2025, 5, 1), date(2025, 5, 5)), (date(2025, 5, 3), date(2025, 5, 8)), True),
        ((date(2025, 5, 1), date(2025, 5, 5)), (date(2025, 5, 5), date(2025, 5, 8)), True),
        ((date(2025, 5, 5), date(2025, 5, 8)), (date(2025, 5, 1), date(2025, 5, 5)), True),
        ((date(2025, 5, 1), date(2025, 5, 5)), (date(2025, 5, 6), date(2025, 5, 8)), False),
        ((date(2025, 5, 1), date(2025, 5, 10)), (date(2025, 5, 3), date(2025, 5, 4)), True),
    ],
)
def test_overlap_is_inclusive_on_both_ends(first, second, expected):
    assert DateRange(*first).overlaps_with(DateRange(*second)) is expected
    assert DateRange(*second).overlaps_with(DateRange(*first)) is expected


def test_overlap_requires_date_range():
    with pytest.raises(TypeError):
        DateRange(date(2025, 5, 1), date(2025, 5, 2)).overlaps_with((date(2025, 5, 1), date(2025, 5, 2)))


def test_contains_includes_both_ends():
    dates = DateRange(date(2025, 5, 1), date(2025, 5, 3))
    assert dates.contains(date(2025, 5, 1))
    assert dates.contains(date(2025, 5, 3))
    assert not dates.contains(date(2025, 5, 4))


def test_str_uses_finnish_date_format():
    assert str(DateRange(date(2025, 5, 1), date(2025, 5, 3))) == "01.05.2025 - 03.05.2025"
