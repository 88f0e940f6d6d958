from __future__ import annotations

from datetime import date

import pytest

from src.timekeeper.timekeeper.common.datetime_utils import month_bounds, weekday_name
from src.timekeeper.timekeeper.common.pagination import paginate
from src.timekeeper.timekeeper.common.validators import (
    require_date,
    require_date_range,
    require_non_empty,
)
from src.timekeeper.timekeeper.core.exceptions import InvalidRangeError, ValidationError


def test_month_bounds_handles_leap_years():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2026, 2) == (date(2026, 2, 1), date(2026, 2, 28))
    assert month_bounds(2026, 12) == (date(2026, 12, 1), date(2026, 12, 31))


def test_weekday_name():
    assert weekday_name(date(2026, 2, 10)) == "Tuesday"


def test_require_date_accepts_iso_and_date_objects():
    assert require_date("2026-02-10", "Date") == date(2026, 2, 10)
    assert require_date(date(2026, 2, 10), "Date") == date(2026, 2, 10)


@pytest.mark.parametrize("value", ["", None, "10/02/2026", "2026-13-01"])
def test_require_date_rejects_bad_input(value):
    with pytest.raises(InvalidRangeError):
        require_date(value, "Date")


def test_require_date_range():
    assert require_date_range("2026-02-01", "2026-02-01") == (date(2026, 2, 1), date(2026, 2, 1))

    with pytest.raises(InvalidRangeError, match="required"):
        require_date_range("2026-02-01", None)
    with pytest.raises(InvalidRangeError, match="before"):
        require_date_range("2026-02-10", "2026-02-01")


def test_require_non_empty():
    assert require_non_empty("  flu  ", "Reason") == "flu"
    with pytest.raises(ValidationError, match="Reason is required"):
        require_non_empty("   ", "Reason")


def test_paginate_slices_and_counts():
    page = paginate(list(range(25)), 3, 10)

    assert page.items == [20, 21, 22, 23, 24]
    assert page.total == 25
    assert page.total_pages == 3
    assert page.current_page == 3


def test_paginate_past_the_end_is_empty():
    page = paginate(list(range(5)), 4, 10)

    assert page.items == []
    assert page.total == 5
    assert page.total_pages == 1


def test_paginate_empty_sequence():
    page = paginate([], 1, 10)
    assert page.items == [] and page.total_pages == 0


@pytest.mark.parametrize("page, size", [(0, 10), (1, 0), ("x", 10), (-1, 5)])
def test_paginate_rejects_non_positive(page, size):
    with pytest.raises(InvalidRangeError):
        paginate([1, 2, 3], page, size)
