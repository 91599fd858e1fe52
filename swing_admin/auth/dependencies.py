"""
Auth dependencies for admin-only FastAPI routes.

API callers send `Authorization: Bearer <token>`; browser pages rely on the
session cookie set by the backend's auth client.
"""

from __future__ import annotations

import os

from fastapi import Depends, HTTPException, Request, status

from . import schemas, service


def session_cookie_name() -> str:
    return os.environ.get("ADMIN_SESSION_COOKIE", "sb-access-token").strip() or "sb-access-token"


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header.",
        )

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Authorization header format.",
        )

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization must be: Bearer <token>.",
        )
    return token


async def get_access_token(request: Request) -> str:
    authorization = request.headers.get("authorization")
    if authorization:
        return _extract_bearer_token(authorization)

    cookie_token = (request.cookies.get(session_cookie_name()) or "").strip()
    if cookie_token:
        return cookie_token

    return _extract_bearer_token(None)


async def get_current_admin(access_token: str = Depends(get_access_token)) -> schemas.AdminUser:
    return service.get_admin_from_access_token(access_token)


async def get_optional_admin(request: Request) -> schemas.AdminUser | None:
    """
    Page variant: returns None instead of raising so the page can redirect.
    """
    try:
        token = await get_access_token(request)
        return service.get_admin_from_access_token(token)
    except HTTPException:
        return None
