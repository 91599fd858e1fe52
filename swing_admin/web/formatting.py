"""
Display formatting for the French admin UI (fr-FR number conventions).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Literal

from swing_admin.dashboard import schemas as dashboard_schemas

TrendVariant = Literal["positive", "negative", "neutral"]

# fr-FR groups thousands with a narrow no-break space.
GROUP_SEPARATOR = "\u202f"


@dataclass(frozen=True)
class Trend:
    text: str
    variant: TrendVariant


def format_number(value: int | float) -> str:
    """`1234567` -> `1 234 567` (rounded to an integer)."""
    rounded = int(round(value))
    grouped = f"{abs(rounded):,}".replace(",", GROUP_SEPARATOR)
    return f"-{grouped}" if rounded < 0 else grouped


def format_percent(value: float) -> str:
    """One decimal with a comma separator: `12.345` -> `12,3`."""
    text = f"{value:,.1f}"
    integer, _, decimals = text.partition(".")
    return f"{integer.replace(',', GROUP_SEPARATOR)},{decimals}"


def _sign(delta: int) -> str:
    if delta > 0:
        return "+"
    if delta < 0:
        return "-"
    return ""


def format_trend(metric: dashboard_schemas.MetricData, comparison_label: str) -> Trend:
    if metric.previous is None:
        return Trend(text=f"— {comparison_label}", variant="neutral")

    if metric.delta > 0:
        variant: TrendVariant = "positive"
    elif metric.delta < 0:
        variant = "negative"
    else:
        variant = "neutral"

    if metric.delta_percentage is not None:
        return Trend(
            text=f"{_sign(metric.delta)}{format_percent(abs(metric.delta_percentage))} % {comparison_label}",
            variant=variant,
        )

    return Trend(
        text=f"{_sign(metric.delta)}{format_number(abs(metric.delta))} {comparison_label}",
        variant=variant,
    )


def clamp_rate(rate: float) -> float:
    return max(0.0, min(rate, 100.0))


def format_datetime(value: datetime | None, tz: tzinfo | None = None) -> str:
    if value is None:
        return "—"
    if tz is not None and value.tzinfo is not None:
        value = value.astimezone(tz)
    return value.strftime("%d/%m/%Y %H:%M")
