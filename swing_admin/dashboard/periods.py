"""
Dashboard period windows.

A period selector maps to the current window and the comparison window that
precedes it. Windows are whole calendar days in the dashboard timezone; query
bounds are half-open: [first day 00:00, day after last day 00:00).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_PERIOD = "7d"
PERIODS = ("7d", "30d", "month", "last_month")

# Short labels shown in the segmented control.
PERIOD_LABELS = {
    "7d": "7j",
    "30d": "30j",
    "month": "Mois",
    "last_month": "M-1",
}

DEFAULT_TIMEZONE = "Europe/Paris"


def dashboard_timezone() -> ZoneInfo:
    name = os.environ.get("DASHBOARD_TIMEZONE", DEFAULT_TIMEZONE).strip() or DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(DEFAULT_TIMEZONE)


def normalize_period(period: str | None) -> str:
    value = (period or "").strip().lower()
    return value if value in PERIODS else DEFAULT_PERIOD


def _first_of_month(day: date) -> date:
    return day.replace(day=1)


def _shift_months(first: date, months: int) -> date:
    index = first.year * 12 + (first.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def _last_of_month(first: date) -> date:
    return _shift_months(first, 1) - timedelta(days=1)


@dataclass(frozen=True)
class PeriodWindow:
    period: str
    start: date
    end: date
    previous_start: date
    previous_end: date
    tz: ZoneInfo

    def _start_of(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self.tz)

    @property
    def since(self) -> datetime:
        return self._start_of(self.start)

    @property
    def until(self) -> datetime:
        return self._start_of(self.end + timedelta(days=1))

    @property
    def previous_since(self) -> datetime:
        return self._start_of(self.previous_start)

    @property
    def previous_until(self) -> datetime:
        return self._start_of(self.previous_end + timedelta(days=1))

    def days(self) -> list[date]:
        count = (self.end - self.start).days + 1
        return [self.start + timedelta(days=i) for i in range(count)]


def resolve_period(
    period: str | None,
    now: datetime | None = None,
    *,
    tz: ZoneInfo | None = None,
) -> PeriodWindow:
    """
    Build the window for `period` relative to `now`.

    - 7d / 30d: the last N days including today, compared with the N days before.
    - month: month-to-date, compared with the whole previous month.
    - last_month: the whole previous month, compared with the month before it.
    """
    tz = tz or dashboard_timezone()
    now = now or datetime.now(tz)
    if now.tzinfo is None:
        now = now.replace(tzinfo=tz)
    today = now.astimezone(tz).date()
    period = normalize_period(period)

    if period == "30d":
        start = today - timedelta(days=29)
        end = today
        previous_start = start - timedelta(days=30)
        previous_end = end - timedelta(days=30)
    elif period == "month":
        start = _first_of_month(today)
        end = today
        previous_start = _shift_months(start, -1)
        previous_end = _last_of_month(previous_start)
    elif period == "last_month":
        start = _shift_months(_first_of_month(today), -1)
        end = _last_of_month(start)
        previous_start = _shift_months(start, -1)
        previous_end = _last_of_month(previous_start)
    else:
        start = today - timedelta(days=6)
        end = today
        previous_start = start - timedelta(days=7)
        previous_end = end - timedelta(days=7)

    return PeriodWindow(
        period=period,
        start=start,
        end=end,
        previous_start=previous_start,
        previous_end=previous_end,
        tz=tz,
    )
