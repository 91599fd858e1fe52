"""
In-app message business logic.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable

from . import repository, schemas

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def _target_count(row: dict[str, Any]) -> int:
    targets = row.get("target_user_ids")
    return len(targets) if isinstance(targets, (list, tuple)) else 0


def _is_upcoming(row: dict[str, Any], now: datetime) -> bool:
    start = _as_datetime(row.get("start_date"))
    return start is not None and start > now


def compute_message_stats(rows: Iterable[dict[str, Any]], now: datetime) -> schemas.MessageStats:
    """
    Summarize messages ordered by updated_at DESC (first row = last edited).
    """
    messages = list(rows)
    first = messages[0] if messages else {}
    return schemas.MessageStats(
        total=len(messages),
        active=sum(1 for m in messages if bool(m.get("is_active"))),
        targeted=sum(1 for m in messages if _target_count(m) > 0),
        upcoming=sum(1 for m in messages if _is_upcoming(m, now)),
        last_message_title=first.get("title"),
        last_message_updated_at=_as_datetime(first.get("updated_at")) or _as_datetime(first.get("created_at")),
        generated_at=now,
    )


async def get_message_stats(*, now: datetime | None = None) -> schemas.MessageStats:
    now = now or _utc_now()
    try:
        rows = await repository.list_messages()
    except Exception:
        logger.exception("message_stats_failed")
        return schemas.MessageStats(generated_at=now)
    return compute_message_stats(rows, now)


def _to_summary(row: dict[str, Any]) -> schemas.MessageSummary:
    return schemas.MessageSummary(
        id=row.get("id"),
        title=row.get("title"),
        is_active=bool(row.get("is_active")),
        start_date=_as_datetime(row.get("start_date")),
        target_user_count=_target_count(row),
        updated_at=_as_datetime(row.get("updated_at")),
        created_at=_as_datetime(row.get("created_at")),
    )


async def list_messages(*, limit: int = 50, offset: int = 0) -> schemas.MessageListResponse:
    rows = await repository.list_messages(limit=limit, offset=offset)
    messages = [_to_summary(row) for row in rows]
    return schemas.MessageListResponse(
        messages=messages,
        limit=limit,
        offset=offset,
        count=len(messages),
    )
