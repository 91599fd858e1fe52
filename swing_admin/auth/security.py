"""
Auth security helpers.

Access tokens are issued by the hosted backend (Supabase Auth); this app only
verifies them and decides whether the caller is an admin.
"""

from __future__ import annotations

import os
from typing import Any

import jwt


class AuthSecurityError(RuntimeError):
    pass


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set SUPABASE_JWT_SECRET in environment.
    return os.environ.get("SUPABASE_JWT_SECRET", "dev-change-this-secret").strip() or "dev-change-this-secret"


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "HS256").strip() or "HS256"


def jwt_audience() -> str:
    return os.environ.get("JWT_AUDIENCE", "authenticated").strip() or "authenticated"


def admin_emails() -> set[str]:
    raw = os.environ.get("ADMIN_EMAILS", "")
    return {part.strip().lower() for part in raw.split(",") if part.strip()}


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(
            raw,
            jwt_secret(),
            algorithms=[jwt_algorithm()],
            audience=jwt_audience(),
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token is expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    return payload


def claims_role(payload: dict[str, Any]) -> str:
    # Supabase keeps server-managed roles in app_metadata; user_metadata is
    # writable by the user and is ignored here.
    app_metadata = payload.get("app_metadata")
    if not isinstance(app_metadata, dict):
        return ""
    return str(app_metadata.get("role") or "").strip().lower()


def is_admin(payload: dict[str, Any]) -> bool:
    if claims_role(payload) == "admin":
        return True
    email = str(payload.get("email") or "").strip().lower()
    return bool(email) and email in admin_emails()
