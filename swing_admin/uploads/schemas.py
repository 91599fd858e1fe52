"""
Upload API schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ImageUploadRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Missing fields are reported by the route as a 400, not a 422.
    file: str | None = None
    file_name: str | None = Field(default=None, alias="fileName")


class ImageUploadResponse(BaseModel):
    url: str
    path: str
