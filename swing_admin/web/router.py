"""
Server-rendered admin pages (Jinja2).

Pages are for signed-in admins only; anyone else is sent to the login page.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from swing_admin.auth import dependencies as auth_dependencies
from swing_admin.auth.schemas import AdminUser
from swing_admin.dashboard import charts, periods
from swing_admin.dashboard import service as dashboard_service
from swing_admin.messages import service as messages_service

from . import formatting

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
STATIC_DIR = Path(__file__).resolve().parent / "static"

COMPARISON_LABEL = "vs période préc."

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["number"] = formatting.format_number
templates.env.filters["percent"] = formatting.format_percent
templates.env.filters["datetime"] = formatting.format_datetime

router = APIRouter()


def login_url() -> str:
    return os.environ.get("LOGIN_URL", "/login").strip() or "/login"


def _nav_items(current_path: str) -> list[dict]:
    items = [
        {"label": "Tableau de bord", "href": "/"},
        {"label": "Messages", "href": "/messages"},
    ]
    for item in items:
        href = item["href"]
        item["active"] = current_path == href or (href != "/" and current_path.startswith(href + "/"))
    return items


def _redirect_to_login() -> RedirectResponse:
    return RedirectResponse(url=login_url(), status_code=303)


@router.get("/", include_in_schema=False)
async def dashboard_page(
    request: Request,
    period: str = Query(default="7d", max_length=20),
    admin: AdminUser | None = Depends(auth_dependencies.get_optional_admin),
) -> Response:
    if admin is None:
        return _redirect_to_login()

    dashboard, message_stats = await asyncio.gather(
        dashboard_service.get_dashboard_metrics(period),
        messages_service.get_message_stats(),
    )

    metric_cards = [
        {
            "label": label,
            "value": formatting.format_number(metric.current),
            "trend": formatting.format_trend(metric, COMPARISON_LABEL),
        }
        for label, metric in (
            ("Utilisateurs totaux", dashboard.total_users),
            ("Nouveaux comptes", dashboard.weekly_signups),
            ("Analyses effectuées", dashboard.analyses),
            ("Inscriptions waitlist", dashboard.waitlist),
        )
    ]

    consent_cards = [
        {
            "label": "Opt-in marketing",
            "description": "Communications marketing",
            "metric": dashboard.consent.marketing,
            "width": formatting.clamp_rate(dashboard.consent.marketing.rate),
            "variant": "marketing",
        },
        {
            "label": "Opt-in amélioration produit",
            "description": "Partage pour améliorer My Swing",
            "metric": dashboard.consent.improvement,
            "width": formatting.clamp_rate(dashboard.consent.improvement.rate),
            "variant": "improvement",
        },
    ]

    message_metrics = [
        {"label": "Messages actifs", "value": message_stats.active},
        {"label": "Messages totaux", "value": message_stats.total},
        {"label": "Campagnes ciblées", "value": message_stats.targeted},
        {"label": "Débuts à venir", "value": message_stats.upcoming},
    ]

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "title": "Tableau de bord",
            "description": "Visualisez les indicateurs clés actualisés pour piloter My Swing.",
            "nav_items": _nav_items(request.url.path),
            "admin": admin,
            "periods": [{"value": p, "label": periods.PERIOD_LABELS[p]} for p in periods.PERIODS],
            "selected_period": dashboard.period,
            "dashboard": dashboard,
            "metric_cards": metric_cards,
            "consent_cards": consent_cards,
            "charts": charts.dashboard_charts(dashboard),
            "message_stats": message_stats,
            "tz": periods.dashboard_timezone(),
            "message_metrics": message_metrics,
        },
    )


@router.get("/messages", include_in_schema=False)
async def messages_page(
    request: Request,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    admin: AdminUser | None = Depends(auth_dependencies.get_optional_admin),
) -> Response:
    if admin is None:
        return _redirect_to_login()

    listing = await messages_service.list_messages(limit=limit, offset=offset)
    return templates.TemplateResponse(
        request,
        "messages.html",
        {
            "title": "Messages In-App",
            "description": "Campagnes et notifications envoyées dans l'application.",
            "nav_items": _nav_items(request.url.path),
            "admin": admin,
            "breadcrumbs": [{"label": "Tableau de bord", "href": "/"}, {"label": "Messages"}],
            "listing": listing,
            "tz": periods.dashboard_timezone(),
        },
    )
