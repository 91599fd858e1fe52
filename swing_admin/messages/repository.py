"""
In-app message persistence (read-only).
"""

from __future__ import annotations

from typing import Any

from swing_admin.core import db


async def list_messages(*, limit: int | None = None, offset: int = 0) -> list[dict[str, Any]]:
    """
    In-app messages, most recently updated first (never-updated rows sort first,
    as Postgres does for DESC). `limit=None` returns all rows.
    """
    return await db.fetch_all(
        """
        SELECT id, title, is_active, start_date, target_user_ids, updated_at, created_at
        FROM in_app_messages
        ORDER BY updated_at DESC, id DESC
        LIMIT $1
        OFFSET $2
        """,
        limit,
        offset,
    )
