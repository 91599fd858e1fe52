"""
FastAPI router for image uploads used by the in-app message editor.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from swing_admin.auth import dependencies as auth_dependencies
from swing_admin.auth.schemas import AdminUser

from . import schemas, service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/upload/image", response_model=schemas.ImageUploadResponse)
async def upload_image(
    request: schemas.ImageUploadRequest,
    _: AdminUser = Depends(auth_dependencies.get_current_admin),
) -> schemas.ImageUploadResponse:
    """
    Upload a base64 image to storage and return its public URL.
    """
    try:
        result = await service.upload_image(request.file, request.file_name)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("upload_handler_failed file_name=%s", request.file_name)
        raise HTTPException(status_code=500, detail=str(exc) or "Unknown upload error.") from exc

    return schemas.ImageUploadResponse(url=result.url, path=result.path)


@router.api_route(
    "/api/upload/image",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def upload_image_method_not_allowed(
    _: AdminUser = Depends(auth_dependencies.get_current_admin),
) -> None:
    # Auth runs first so anonymous callers get 401 rather than 405.
    raise HTTPException(status_code=405, detail="Method Not Allowed", headers={"Allow": "POST"})
