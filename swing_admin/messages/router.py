"""
In-app message API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from swing_admin.auth import dependencies as auth_dependencies
from swing_admin.auth.schemas import AdminUser

from . import schemas, service

router = APIRouter()


@router.get("/api/messages", response_model=schemas.MessageListResponse)
async def list_messages(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    _: AdminUser = Depends(auth_dependencies.get_current_admin),
) -> schemas.MessageListResponse:
    return await service.list_messages(limit=limit, offset=offset)


@router.get("/api/messages/stats", response_model=schemas.MessageStats)
async def message_stats(
    _: AdminUser = Depends(auth_dependencies.get_current_admin),
) -> schemas.MessageStats:
    return await service.get_message_stats()
