"""
Image upload "service layer".

This file contains logic that is independent of FastAPI's routing layer:
- Decode the base64 payload sent by the message editor
- Pick a MIME type and a storage key for the file
- Relay the bytes to managed object storage
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
import re
import time
from dataclasses import dataclass

from fastapi import HTTPException

from swing_admin.core import storage

logger = logging.getLogger(__name__)

MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
}
DEFAULT_MIME_TYPE = "image/jpeg"

KEY_PREFIX = "messages"
DEFAULT_BUCKET = "Images"

# Matches the JSON body limit the editor was built against.
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB

_DATA_URI_PREFIX = re.compile(r"^data:image/[\w.+-]+;base64,", re.IGNORECASE)
_UNSAFE_KEY_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


@dataclass(frozen=True)
class UploadResult:
    url: str
    path: str


def storage_bucket() -> str:
    return os.environ.get("STORAGE_BUCKET", DEFAULT_BUCKET).strip() or DEFAULT_BUCKET


def max_upload_bytes_from_env() -> int:
    """
    Read MAX_UPLOAD_BYTES from env, falling back to a sane default.
    """
    raw = os.environ.get("MAX_UPLOAD_BYTES", "")
    if not raw:
        return DEFAULT_MAX_UPLOAD_BYTES

    try:
        value = int(raw)
    except ValueError:
        raise HTTPException(
            status_code=500,
            detail="Invalid MAX_UPLOAD_BYTES. It must be an integer.",
        )

    if value <= 0:
        raise HTTPException(
            status_code=500,
            detail="Invalid MAX_UPLOAD_BYTES. It must be > 0.",
        )

    return value


def content_type_for(file_name: str) -> str:
    """
    MIME type from the file extension; unknown or missing extensions are JPEG.
    """
    ext = (file_name or "").rsplit(".", 1)[-1].strip().lower()
    return MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)


def sanitize_file_name(file_name: str) -> str:
    return _UNSAFE_KEY_CHARS.sub("_", file_name or "")


def build_object_path(file_name: str, *, timestamp_ms: int | None = None) -> str:
    """
    `messages/<epoch-ms>-<sanitized name>`; the timestamp keeps keys unique.
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{KEY_PREFIX}/{timestamp_ms}-{sanitize_file_name(file_name)}"


def decode_image(file: str, *, max_bytes: int) -> bytes:
    """
    Decode a data URI (`data:image/png;base64,...`) or bare base64 string.
    """
    payload = _DATA_URI_PREFIX.sub("", (file or "").strip(), count=1)
    compact = "".join(payload.split())
    # Decoded size is ~3/4 of the encoded size; reject before decoding.
    if len(compact) * 3 // 4 > max_bytes + 3:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Max is {max_bytes} bytes.",
        )

    try:
        data = base64.b64decode(compact + "=" * (-len(compact) % 4), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=400, detail="File is not valid base64 data.") from exc

    if not data:
        raise HTTPException(status_code=400, detail="File is empty.")
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Max is {max_bytes} bytes.",
        )
    return data


async def upload_image(file: str | None, file_name: str | None) -> UploadResult:
    """
    High-level upload step for one image. This is what the router calls.
    """
    if not file or not file_name:
        raise HTTPException(status_code=400, detail="File and file name are required.")

    data = decode_image(file, max_bytes=max_upload_bytes_from_env())
    path = build_object_path(file_name)
    content_type = content_type_for(file_name)
    bucket = storage_bucket()

    try:
        await storage.upload_object(
            bucket=bucket,
            path=path,
            data=data,
            content_type=content_type,
            upsert=False,
        )
    except storage.StorageError as exc:
        logger.error("upload_failed bucket=%s path=%s error=%s", bucket, path, exc)
        raise HTTPException(status_code=500, detail=f"Upload failed: {exc}") from exc

    url = storage.public_url(bucket=bucket, path=path)
    if not url:
        raise HTTPException(status_code=500, detail="Could not resolve the public URL.")

    logger.info("upload_complete bucket=%s path=%s size_bytes=%s", bucket, path, len(data))
    return UploadResult(url=url, path=path)
