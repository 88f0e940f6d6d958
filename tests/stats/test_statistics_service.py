from __future__ import annotations

from datetime import date

import pytest

from src.timekeeper.timekeeper.core.exceptions import AuthorizationError, InvalidRangeError
from src.timekeeper.timekeeper.stats.service import attendance_rate


@pytest.fixture
def february(attendance_repo):
    attendance_repo.seed(1, date(2026, 2, 2), "09:00:00", "17:00:00")
    attendance_repo.seed(1, date(2026, 2, 3), "09:00:00", "16:30:00")
    attendance_repo.seed(1, date(2026, 2, 4), "09:00:00")
    attendance_repo.seed(1, date(2026, 1, 30), "09:00:00", "18:00:00")
    attendance_repo.seed(2, date(2026, 2, 2), "09:00:00", "18:00:00")


def test_monthly_stats_for_current_month(container, identity, february):
    stats = container.statistics_service.monthly_stats(identity(1))

    assert (stats.year, stats.month) == (2026, 2)
    assert stats.total_days == 3
    assert stats.present_days == 3
    assert stats.total_hours == 15.5
    assert stats.average_hours == 5.17
    assert stats.late_count == 0


def test_monthly_stats_explicit_month(container, identity, february):
    stats = container.statistics_service.monthly_stats(identity(1), year=2026, month=1)

    assert stats.total_days == 1
    assert stats.total_hours == 9.0
    assert stats.average_hours == 9.0


def test_monthly_stats_empty_month(container, identity):
    stats = container.statistics_service.monthly_stats(identity(3), year=2024, month=2)

    assert (stats.total_days, stats.present_days, stats.total_hours, stats.average_hours) == (0, 0, 0.0, 0.0)


@pytest.mark.parametrize("month", [0, 13, "abc"])
def test_monthly_stats_rejects_bad_month(container, identity, month):
    with pytest.raises(InvalidRangeError):
        container.statistics_service.monthly_stats(identity(1), year=2026, month=month)


@pytest.mark.parametrize(
    "present, total, expected",
    [(4, 10, 40), (2, 3, 67), (1, 3, 33), (0, 0, 0), (12, 10, 100), (1, 8, 13)],
)
def test_attendance_rate(present, total, expected):
    assert attendance_rate(present, total) == expected


def test_org_snapshot(container, identity, attendance_repo):
    day = date(2026, 2, 10)
    attendance_repo.seed(1, day, "08:50:00")
    attendance_repo.seed(2, day, "09:10:00")
    attendance_repo.seed(3, day, "09:20:00", "17:00:00")
    attendance_repo.seed(4, day)
    attendance_repo.seed(5, date(2026, 2, 9), "09:00:00")

    snap = container.statistics_service.org_snapshot(identity(6))

    assert snap.day == day
    assert snap.total_employees == 6
    assert snap.present_today == 3
    assert snap.absent_today == 3
    assert snap.attendance_rate == 50
    assert [(d.department, d.count) for d in snap.department_breakdown] == [
        ("Engineering", 3),
        ("Administration", 1),
        ("Human Resources", 1),
        ("Sales", 1),
    ]


def test_org_snapshot_for_other_day(container, identity, attendance_repo):
    attendance_repo.seed(5, date(2026, 2, 9), "09:00:00")

    snap = container.statistics_service.org_snapshot(identity(4), day="2026-02-09")

    assert snap.present_today == 1
    assert snap.attendance_rate == 17


def test_org_snapshot_requires_supervisor(container, identity):
    with pytest.raises(AuthorizationError):
        container.statistics_service.org_snapshot(identity(1))


@pytest.mark.parametrize("year", [0, 10000])
def test_monthly_stats_rejects_out_of_range_year(container, identity, year):
    with pytest.raises(InvalidRangeError, match="Year"):
        container.statistics_service.monthly_stats(identity(1), year=year, month=1)
