"""File upload API routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import ValidationError
from ...database import get_db
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, MessageResponse
from . import services
from .schemas import (
    ConnectionTestResult,
    DeleteFileRequest,
    FileCategory,
    PresignedUrlResponse,
    UploadResponse,
)
from .storage import S3StorageService, get_storage

router = APIRouter(prefix="/upload", tags=["Uploads"])

Storage = Annotated[S3StorageService, Depends(get_storage)]


@router.post("/file", response_model=BaseResponse[UploadResponse], status_code=201)
async def upload_file(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    storage: Storage,
    category: FileCategory = Form(...),
    file: UploadFile | None = File(None),
    property_id: UUID | None = Form(None),
    description: str | None = Form(None),
):
    """Upload a file, attaching it to a property when one is given."""
    if file is None:
        raise ValidationError("No file provided")

    result = await services.upload_file(
        db,
        storage,
        content=await file.read(),
        content_type=file.content_type or "",
        filename=file.filename or "file",
        category=category,
        user_id=current_user.id,
        property_id=property_id,
        description=description,
    )
    return BaseResponse(success=True, message=result.message, data=result)


@router.post("/image", response_model=BaseResponse[UploadResponse], status_code=201)
async def upload_image(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    storage: Storage,
    file: UploadFile | None = File(None),
    property_id: UUID | None = Form(None),
):
    """Upload an image, adding it to a property's photos when one is given."""
    if file is None:
        raise ValidationError("No file provided")

    result = await services.upload_image(
        db,
        storage,
        content=await file.read(),
        content_type=file.content_type or "",
        filename=file.filename or "image",
        user_id=current_user.id,
        property_id=property_id,
    )
    return BaseResponse(success=True, message=result.message, data=result)


@router.delete("/file", response_model=BaseResponse[MessageResponse])
async def delete_file(
    data: DeleteFileRequest,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    storage: Storage,
):
    """Delete a file attached to one of the caller's properties."""
    result = await services.delete_file(db, storage, data.file_url, current_user.id)
    return BaseResponse(
        success=True, message=result["message"], data=MessageResponse(**result)
    )


@router.get("/test-connection", response_model=BaseResponse[ConnectionTestResult])
async def test_connection(current_user: CurrentUser, storage: Storage):
    """Check that the bucket is reachable and writable."""
    result = await storage.test_connection()
    if not result.success:
        raise ValidationError(result.message, details=result.details)
    return BaseResponse(success=True, message=result.message, data=result)


@router.get("/presigned-url", response_model=BaseResponse[PresignedUrlResponse])
async def get_presigned_url(
    current_user: CurrentUser,
    storage: Storage,
    key: str = Query(..., min_length=1),
    expires_in: int | None = Query(None, ge=1, le=604800),
):
    """Get a temporary download URL for an object key."""
    expires_in = expires_in or storage.presigned_url_expiry
    url = await storage.get_presigned_url(key, expires_in)
    return BaseResponse(
        success=True,
        data=PresignedUrlResponse(url=url, key=key, expires_in=expires_in),
    )
