"""
Dashboard API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from swing_admin.auth import dependencies as auth_dependencies
from swing_admin.auth.schemas import AdminUser

from . import schemas, service

router = APIRouter()


@router.get("/api/dashboard", response_model=schemas.DashboardMetrics)
async def get_dashboard(
    period: str = Query(default="7d", max_length=20),
    _: AdminUser = Depends(auth_dependencies.get_current_admin),
) -> schemas.DashboardMetrics:
    """
    Aggregate metrics for the selected period (7d, 30d, month, last_month).

    Unknown periods fall back to 7d; the resolved value is echoed in `period`.
    """
    return await service.get_dashboard_metrics(period)
