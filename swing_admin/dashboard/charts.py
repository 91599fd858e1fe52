"""
Growth chart specs (Altair -> Vega-Lite spec dict).

The page embeds the specs and renders them client-side with vega-embed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal

import altair as alt

from . import schemas

ChartType = Literal["area", "bar"]

PRIMARY_COLOR = "#4f46e5"
SECONDARY_COLOR = "#0ea5e9"
WAITLIST_COLOR = "#F59E0B"

DEFAULT_HEIGHT = 300


@dataclass(frozen=True)
class ChartView:
    """A titled chart card: what the template needs to render one chart."""

    key: str
    title: str
    description: str
    spec: Dict[str, Any]


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def growth_chart(
    points: list[schemas.ChartPoint],
    *,
    chart_type: ChartType = "area",
    color: str = PRIMARY_COLOR,
    height: int = DEFAULT_HEIGHT,
) -> Dict[str, Any]:
    values = [{"name": p.name, "value": p.value} for p in points]
    base = alt.Chart(alt.Data(values=values)).encode(
        # sort=None keeps the chronological order of the series
        x=alt.X("name:N", sort=None, title=None, axis=alt.Axis(labelAngle=0, domain=False, ticks=False)),
        y=alt.Y("value:Q", title=None, axis=alt.Axis(domain=False, ticks=False, tickMinStep=1)),
        tooltip=[alt.Tooltip("name:N", title="Jour"), alt.Tooltip("value:Q", title="Total")],
    )

    if chart_type == "bar":
        chart = base.mark_bar(color=color, cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
    else:
        chart = base.mark_area(
            color=color,
            fillOpacity=0.2,
            interpolate="monotone",
            line={"color": color, "strokeWidth": 2},
        )

    chart = chart.properties(width="container", height=height).configure_view(strokeWidth=0)
    return to_vega_spec(chart)


def dashboard_charts(dashboard: schemas.DashboardMetrics) -> list[ChartView]:
    return [
        ChartView(
            key="user-growth",
            title="Nouveaux Utilisateurs",
            description="Évolution des inscriptions sur la période",
            spec=growth_chart(dashboard.user_growth_data, chart_type="area", color=PRIMARY_COLOR),
        ),
        ChartView(
            key="analysis-activity",
            title="Vidéos Analysées",
            description="Nombre de vidéos traitées par jour",
            spec=growth_chart(dashboard.analysis_activity_data, chart_type="bar", color=SECONDARY_COLOR),
        ),
        ChartView(
            key="waitlist-growth",
            title="Inscriptions Waitlist",
            description="Évolution de la waitlist sur la période",
            spec=growth_chart(dashboard.waitlist_growth_data, chart_type="area", color=WAITLIST_COLOR),
        ),
    ]
