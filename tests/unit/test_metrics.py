from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from swing_admin.dashboard import metrics


def test_percentage_is_null_when_previous_is_zero():
    m = metrics.period_metric(12, 0)
    assert m.delta == 12
    assert m.previous == 0
    assert m.delta_percentage is None


@pytest.mark.parametrize(
    "current, previous, delta, pct",
    [
        (15, 10, 5, 50.0),
        (5, 10, -5, -50.0),
        (10, 10, 0, 0.0),
    ],
)
def test_period_metric_delta_and_percentage(current, previous, delta, pct):
    m = metrics.period_metric(current, previous)
    assert m.current == current
    assert m.delta == delta
    assert m.delta_percentage == pytest.approx(pct)


def test_total_users_compares_with_total_before_period():
    m = metrics.total_users_metric(100, 20)
    assert m.previous == 80
    assert m.delta == 20
    assert m.delta_percentage == pytest.approx(25.0)


def test_total_users_previous_never_negative():
    # Counts come from separate queries and can disagree.
    m = metrics.total_users_metric(5, 10)
    assert m.previous == 0
    assert m.delta_percentage is None


def test_rate_metric():
    assert metrics.rate_metric(1, 4).rate == pytest.approx(25.0)
    empty = metrics.rate_metric(0, 0)
    assert empty.rate == 0.0
    assert empty.total == 0


def test_daily_series_buckets_by_local_day():
    paris = ZoneInfo("Europe/Paris")
    days = [date(2024, 3, 9) + timedelta(days=i) for i in range(3)]
    timestamps = [
        "2024-03-09T10:00:00Z",
        datetime(2024, 3, 9, 23, 30, tzinfo=timezone.utc),  # 00:30 on the 10th in Paris
        datetime(2024, 3, 11, 12, 0),  # naive -> UTC
        "not-a-date",
        None,
        datetime(2024, 3, 20, 12, 0, tzinfo=timezone.utc),  # outside the window
    ]

    series = metrics.daily_series(timestamps, days, paris)

    assert [p.name for p in series] == ["sam. 09", "dim. 10", "lun. 11"]
    assert [p.value for p in series] == [1, 1, 1]


def test_daily_series_fills_empty_days_with_zero():
    days = [date(2024, 3, 4) + timedelta(days=i) for i in range(7)]
    series = metrics.daily_series([], days, ZoneInfo("Europe/Paris"))
    assert len(series) == 7
    assert all(p.value == 0 for p in series)
    assert series[0].name == "lun. 04"
