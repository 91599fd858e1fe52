from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from swing_admin.core import db
from swing_admin.messages import repository, service

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def _rows():
    return [
        {
            "id": 3,
            "title": "Nouveau drill putting",
            "is_active": True,
            "start_date": datetime(2024, 3, 20, tzinfo=timezone.utc),
            "target_user_ids": ["u1", "u2"],
            "updated_at": datetime(2024, 3, 14, 9, 0, tzinfo=timezone.utc),
            "created_at": datetime(2024, 3, 1, tzinfo=timezone.utc),
        },
        {
            "id": 2,
            "title": "Bienvenue",
            "is_active": True,
            "start_date": "2024-03-01T00:00:00Z",
            "target_user_ids": [],
            "updated_at": None,
            "created_at": datetime(2024, 2, 1, tzinfo=timezone.utc),
        },
        {
            "id": 1,
            "title": "Ancienne promo",
            "is_active": False,
            "start_date": None,
            "target_user_ids": None,
            "updated_at": None,
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        },
    ]


def test_message_stats_counts():
    stats = service.compute_message_stats(_rows(), NOW)

    assert stats.total == 3
    assert stats.active == 2
    assert stats.targeted == 1
    assert stats.upcoming == 1
    assert stats.last_message_title == "Nouveau drill putting"
    assert stats.last_message_updated_at == datetime(2024, 3, 14, 9, 0, tzinfo=timezone.utc)
    assert stats.generated_at == NOW


def test_last_update_falls_back_to_created_at():
    rows = _rows()[1:]
    stats = service.compute_message_stats(rows, NOW)
    assert stats.last_message_updated_at == datetime(2024, 2, 1, tzinfo=timezone.utc)


def test_empty_message_list():
    stats = service.compute_message_stats([], NOW)
    assert stats.total == 0
    assert stats.last_message_title is None
    assert stats.last_message_updated_at is None


def test_backend_error_returns_zeroed_stats(monkeypatch, caplog):
    async def boom(**_kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(repository, "list_messages", boom)

    with caplog.at_level(logging.ERROR, logger="swing_admin.messages.service"):
        stats = asyncio.run(service.get_message_stats(now=NOW))

    assert stats.total == 0
    assert stats.active == 0
    assert stats.generated_at == NOW
    assert "message_stats_failed" in caplog.text


def test_list_messages_summaries(monkeypatch):
    seen = {}

    async def fake_list(*, limit=None, offset=0):
        seen.update(limit=limit, offset=offset)
        return _rows()

    monkeypatch.setattr(repository, "list_messages", fake_list)

    listing = asyncio.run(service.list_messages(limit=10, offset=20))

    assert seen == {"limit": 10, "offset": 20}
    assert listing.count == 3
    assert listing.messages[0].target_user_count == 2
    assert listing.messages[2].target_user_count == 0
    assert listing.messages[1].start_date == datetime(2024, 3, 1, tzinfo=timezone.utc)


def test_never_updated_messages_sort_first(monkeypatch):
    seen = {}

    async def fetch_all(sql, *args):
        seen["sql"] = " ".join(sql.split())
        return []

    monkeypatch.setattr(db, "fetch_all", fetch_all)

    asyncio.run(repository.list_messages())

    assert "ORDER BY updated_at DESC, id DESC" in seen["sql"]
    assert "NULLS LAST" not in seen["sql"]


def test_first_row_without_update_feeds_last_message():
    rows = [_rows()[2], _rows()[0]]
    stats = service.compute_message_stats(rows, NOW)
    assert stats.last_message_title == "Ancienne promo"
    assert stats.last_message_updated_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
