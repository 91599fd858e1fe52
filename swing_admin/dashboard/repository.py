"""
Dashboard SQL (raw, read-only).

Table and column names cannot be bound as parameters, so they come from
fixed allowlists; every value is a positional parameter.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from swing_admin.core import db

DATED_TABLES = frozenset({"profiles", "analyses", "waitlist"})
CONSENT_FLAGS = frozenset({"marketing", "improvement"})


def _dated_table(table: str) -> str:
    if table not in DATED_TABLES:
        raise ValueError(f"Unsupported table: {table!r}")
    return table


async def count_rows(
    table: str,
    *,
    since: datetime | None = None,
    until: datetime | None = None,
) -> int:
    """
    count(*) over `table`, optionally limited to since <= created_at < until.
    """
    table = _dated_table(table)
    if since is None and until is None:
        value = await db.fetch_val(f"SELECT count(*) FROM {table}")
        return int(value or 0)

    value = await db.fetch_val(
        f"""
        SELECT count(*)
        FROM {table}
        WHERE ($1::timestamptz IS NULL OR created_at >= $1)
          AND ($2::timestamptz IS NULL OR created_at < $2)
        """,
        since,
        until,
    )
    return int(value or 0)


async def count_consent(*, flag: str | None = None) -> int:
    """
    count(*) over `consent`, optionally only rows where `flag` is true.
    """
    if flag is None:
        value = await db.fetch_val("SELECT count(*) FROM consent")
        return int(value or 0)

    if flag not in CONSENT_FLAGS:
        raise ValueError(f"Unsupported consent flag: {flag!r}")
    value = await db.fetch_val(f"SELECT count(*) FROM consent WHERE {flag} = $1", True)
    return int(value or 0)


async def list_created_at(table: str, *, since: datetime, until: datetime) -> list[Any]:
    """
    created_at of every row in the window, for per-day charting.
    """
    table = _dated_table(table)
    rows = await db.fetch_all(
        f"""
        SELECT created_at
        FROM {table}
        WHERE created_at >= $1
          AND created_at < $2
        ORDER BY created_at
        """,
        since,
        until,
    )
    return [row["created_at"] for row in rows]
