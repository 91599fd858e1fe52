"""
Dashboard API schemas (response models).
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel


class MetricData(BaseModel):
    current: int
    previous: int | None
    delta: int
    delta_percentage: float | None


class RateMetricData(BaseModel):
    opted_in: int
    total: int
    rate: float


class ConsentMetrics(BaseModel):
    marketing: RateMetricData
    improvement: RateMetricData


class ChartPoint(BaseModel):
    name: str
    value: int


class PeriodRange(BaseModel):
    start: date
    end: date
    previous_start: date
    previous_end: date
    timezone: str


class DashboardMetrics(BaseModel):
    generated_at: datetime
    period: str
    window: PeriodRange
    total_users: MetricData
    weekly_signups: MetricData
    analyses: MetricData
    waitlist: MetricData
    consent: ConsentMetrics
    user_growth_data: list[ChartPoint]
    analysis_activity_data: list[ChartPoint]
    waitlist_growth_data: list[ChartPoint]
