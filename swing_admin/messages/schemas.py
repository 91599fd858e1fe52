"""
In-app message schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class MessageStats(BaseModel):
    total: int = 0
    active: int = 0
    targeted: int = 0
    upcoming: int = 0
    last_message_title: str | None = None
    last_message_updated_at: datetime | None = None
    generated_at: datetime


class MessageSummary(BaseModel):
    id: Any
    title: str | None = None
    is_active: bool = False
    start_date: datetime | None = None
    target_user_count: int = 0
    updated_at: datetime | None = None
    created_at: datetime | None = None


class MessageListResponse(BaseModel):
    messages: list[MessageSummary] = Field(default_factory=list)
    limit: int
    offset: int
    count: int
