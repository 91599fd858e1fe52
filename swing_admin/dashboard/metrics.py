"""
Dashboard arithmetic: deltas, opt-in rates and per-day series.

Everything here is pure; the service layer feeds it backend counts.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Iterable

from . import schemas

# date-fns `EEE` in the fr locale.
FR_WEEKDAYS = ("lun.", "mar.", "mer.", "jeu.", "ven.", "sam.", "dim.")


def percentage_delta(delta: int, previous: int) -> float | None:
    if previous <= 0:
        return None
    return (delta / previous) * 100


def period_metric(current: int, previous: int) -> schemas.MetricData:
    delta = current - previous
    return schemas.MetricData(
        current=current,
        previous=previous,
        delta=delta,
        delta_percentage=percentage_delta(delta, previous),
    )


def total_users_metric(total: int, period_signups: int) -> schemas.MetricData:
    """
    Running total vs. the total before this period's signups.
    """
    previous = max(total - period_signups, 0)
    return period_metric(total, previous)


def rate_metric(opted_in: int, total: int) -> schemas.RateMetricData:
    rate = (opted_in / total) * 100 if total > 0 else 0.0
    return schemas.RateMetricData(opted_in=opted_in, total=total, rate=rate)


def day_label(day: date) -> str:
    return f"{FR_WEEKDAYS[day.weekday()]} {day:%d}"


def _to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        # timestamp without time zone columns are stored in UTC
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def daily_series(
    timestamps: Iterable[Any],
    days: list[date],
    tz: tzinfo,
) -> list[schemas.ChartPoint]:
    """
    Count `timestamps` per calendar day (in `tz`) for every day in `days`.
    """
    counts: Counter[date] = Counter()
    for value in timestamps:
        dt = _to_datetime(value)
        if dt is None:
            continue
        counts[dt.astimezone(tz).date()] += 1

    return [schemas.ChartPoint(name=day_label(day), value=counts.get(day, 0)) for day in days]
