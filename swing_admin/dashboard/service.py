"""
Dashboard business logic.

One dashboard render issues every backend query concurrently and waits for all
of them. The dashboard is best-effort: a failed count is logged and shown as 0,
a failed series as an empty chart.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable

from . import metrics, periods, repository, schemas

logger = logging.getLogger(__name__)


async def _count_or_zero(query: Awaitable[int], label: str) -> int:
    try:
        return int(await query)
    except Exception:
        logger.exception("count_failed label=%s", label)
        return 0


async def _rows_or_empty(query: Awaitable[list[Any]], label: str) -> list[Any]:
    try:
        return list(await query)
    except Exception:
        logger.exception("series_failed label=%s", label)
        return []


async def get_dashboard_metrics(
    period: str | None,
    *,
    now: datetime | None = None,
) -> schemas.DashboardMetrics:
    window = periods.resolve_period(period, now)
    generated_at = now or datetime.now(window.tz)

    (
        total_users,
        period_users,
        previous_period_users,
        period_analyses,
        previous_period_analyses,
        consent_total,
        consent_marketing,
        consent_improvement,
        waitlist_period,
        waitlist_previous_period,
        profile_dates,
        analysis_dates,
        waitlist_dates,
    ) = await asyncio.gather(
        _count_or_zero(repository.count_rows("profiles"), "profiles (total)"),
        _count_or_zero(
            repository.count_rows("profiles", since=window.since, until=window.until),
            "profiles (period)",
        ),
        _count_or_zero(
            repository.count_rows("profiles", since=window.previous_since, until=window.previous_until),
            "profiles (previous period)",
        ),
        _count_or_zero(
            repository.count_rows("analyses", since=window.since, until=window.until),
            "analyses (period)",
        ),
        _count_or_zero(
            repository.count_rows("analyses", since=window.previous_since, until=window.previous_until),
            "analyses (previous period)",
        ),
        _count_or_zero(repository.count_consent(), "consent (total)"),
        _count_or_zero(repository.count_consent(flag="marketing"), "consent (marketing true)"),
        _count_or_zero(repository.count_consent(flag="improvement"), "consent (improvement true)"),
        _count_or_zero(
            repository.count_rows("waitlist", since=window.since, until=window.until),
            "waitlist (period)",
        ),
        _count_or_zero(
            repository.count_rows("waitlist", since=window.previous_since, until=window.previous_until),
            "waitlist (previous period)",
        ),
        _rows_or_empty(
            repository.list_created_at("profiles", since=window.since, until=window.until),
            "profiles (chart)",
        ),
        _rows_or_empty(
            repository.list_created_at("analyses", since=window.since, until=window.until),
            "analyses (chart)",
        ),
        _rows_or_empty(
            repository.list_created_at("waitlist", since=window.since, until=window.until),
            "waitlist (chart)",
        ),
    )

    days = window.days()
    return schemas.DashboardMetrics(
        generated_at=generated_at,
        period=window.period,
        window=schemas.PeriodRange(
            start=window.start,
            end=window.end,
            previous_start=window.previous_start,
            previous_end=window.previous_end,
            timezone=window.tz.key,
        ),
        total_users=metrics.total_users_metric(total_users, period_users),
        weekly_signups=metrics.period_metric(period_users, previous_period_users),
        analyses=metrics.period_metric(period_analyses, previous_period_analyses),
        waitlist=metrics.period_metric(waitlist_period, waitlist_previous_period),
        consent=schemas.ConsentMetrics(
            marketing=metrics.rate_metric(consent_marketing, consent_total),
            improvement=metrics.rate_metric(consent_improvement, consent_total),
        ),
        user_growth_data=metrics.daily_series(profile_dates, days, window.tz),
        analysis_activity_data=metrics.daily_series(analysis_dates, days, window.tz),
        waitlist_growth_data=metrics.daily_series(waitlist_dates, days, window.tz),
    )
