"""
Managed object storage (Supabase Storage) HTTP client helpers.

Used endpoints:
- POST /storage/v1/object/{bucket}/{path}   -> {"Key": "{bucket}/{path}", ...}
- GET  /storage/v1/object/public/{bucket}/{path}  (public URL, never fetched here)
"""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import quote

import httpx


# Storage failures are explicit and separable from other runtime errors.
class StorageError(RuntimeError):
    pass


def supabase_url() -> str:
    return os.environ.get("SUPABASE_URL", "").strip()


def service_role_key() -> str:
    return os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "").strip()


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise StorageError("SUPABASE_URL is empty.")
    return base_url.rstrip("/") + "/storage/v1"


def _object_path(bucket: str, path: str) -> str:
    bucket = (bucket or "").strip()
    path = (path or "").strip().lstrip("/")
    if not bucket:
        raise StorageError("Storage bucket name is empty.")
    if not path:
        raise StorageError("Storage object path is empty.")
    return f"{quote(bucket)}/{quote(path)}"


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ("message", "error"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    # Avoid dumping huge bodies; include a small snippet.
    return resp.text[:500] or f"HTTP {resp.status_code}"


async def upload_object(
    *,
    bucket: str,
    path: str,
    data: bytes,
    content_type: str,
    upsert: bool = False,
    base_url: str | None = None,
    api_key: str | None = None,
    timeout_s: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """
    Upload `data` to `bucket/path`. Fails if the object exists unless `upsert`.
    """
    root = _normalize_base_url(base_url if base_url is not None else supabase_url())
    key = api_key if api_key is not None else service_role_key()
    if not key:
        raise StorageError("SUPABASE_SERVICE_ROLE_KEY is empty.")
    object_path = _object_path(bucket, path)

    headers = {
        "Authorization": f"Bearer {key}",
        "apikey": key,
        "Content-Type": content_type,
        "cache-control": "max-age=3600",
        "x-upsert": "true" if upsert else "false",
    }

    async with httpx.AsyncClient(base_url=root, timeout=timeout_s, transport=transport) as client:
        try:
            resp = await client.post(f"/object/{object_path}", content=data, headers=headers)
        except httpx.HTTPError as exc:
            raise StorageError(f"Storage request failed: {exc}") from exc

    if resp.status_code != 200:
        raise StorageError(_error_message(resp))

    try:
        payload: dict[str, Any] = resp.json()
    except ValueError:
        payload = {}
    return payload if isinstance(payload, dict) else {}


def public_url(*, bucket: str, path: str, base_url: str | None = None) -> str | None:
    """
    Public URL for an object in a public bucket, or None when unresolvable.
    """
    root = (base_url if base_url is not None else supabase_url()).strip()
    if not root:
        return None
    try:
        object_path = _object_path(bucket, path)
    except StorageError:
        return None
    return f"{root.rstrip('/')}/storage/v1/object/public/{object_path}"
