"""
Auth business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from . import schemas, security

logger = logging.getLogger(__name__)


def get_admin_from_access_token(access_token: str) -> schemas.AdminUser:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token subject.",
        )

    if not security.is_admin(payload):
        logger.warning("admin_denied sub=%s", subject)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required.",
        )

    email = payload.get("email")
    return schemas.AdminUser(
        id=subject,
        email=str(email) if email else None,
        role=security.claims_role(payload) or "admin",
    )
