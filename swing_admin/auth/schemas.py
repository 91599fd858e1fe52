"""
Auth schemas.
"""

from __future__ import annotations

from pydantic import BaseModel


class AdminUser(BaseModel):
    id: str
    email: str | None = None
    role: str = "admin"
