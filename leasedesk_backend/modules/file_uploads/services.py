"""Upload orchestration: size limits, ownership checks and DB records."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import (
    LeaseDeskException,
    NotFoundError,
    PermissionError,
    ValidationError,
)
from ..property_management import crud as property_crud
from ..property_management.models import FileType
from ..property_management.schemas import (
    PropertyAttachmentResponse,
    PropertyPhotoResponse,
)
from .schemas import FileCategory, UploadResponse
from .storage import S3StorageService, object_key

logger = logging.getLogger(__name__)

MB = 1024 * 1024

MAX_FILE_SIZES = {
    FileCategory.IMAGE: 10 * MB,
    FileCategory.VIDEO: 100 * MB,
    FileCategory.DOCUMENT: 50 * MB,
}

DOCUMENT_FILE_TYPES = {
    "pdf": FileType.PDF,
    "doc": FileType.DOC,
    "docx": FileType.DOCX,
    "xls": FileType.XLS,
    "xlsx": FileType.XLSX,
}

DELETE_DENIED_MESSAGE = (
    "File not found or you do not have permission to delete this file"
)


def attachment_file_type(category: FileCategory, filename: str) -> FileType:
    """Attachment type for an upload: IMAGE, a document type by extension, or OTHER."""
    if category == FileCategory.IMAGE:
        return FileType.IMAGE
    if category == FileCategory.DOCUMENT:
        extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        return DOCUMENT_FILE_TYPES.get(extension, FileType.OTHER)
    return FileType.OTHER


def check_file_size(size: int, category: FileCategory) -> None:
    """Raises ValidationError when ``size`` exceeds the category's limit."""
    if size > MAX_FILE_SIZES[category]:
        raise ValidationError(
            f"File size exceeds maximum allowed size for {category.value}"
        )


async def _require_managed_property(
    db: AsyncSession, property_id: UUID, user_id: UUID
) -> None:
    property_obj = await property_crud.get_property_by_id(db, property_id)
    if not property_obj:
        raise NotFoundError(f"Property with ID {property_id} not found")
    if property_obj.manager_id != user_id:
        raise PermissionError(
            "You do not have permission to upload files for this property"
        )


async def _discard_upload(
    db: AsyncSession, storage: S3StorageService, file_url: str, property_id: UUID
) -> None:
    """Roll back a failed upload record and remove the stored object."""
    await db.rollback()
    logger.exception("Recording upload failed", extra={"property_id": str(property_id)})
    try:
        await storage.delete_file(file_url)
    except LeaseDeskException as exc:
        logger.warning("Could not remove orphaned upload %s: %s", file_url, exc.message)


async def upload_file(
    db: AsyncSession,
    storage: S3StorageService,
    content: bytes,
    content_type: str,
    filename: str,
    category: FileCategory,
    user_id: UUID,
    property_id: UUID | None = None,
    description: str | None = None,
) -> UploadResponse:
    """Store a file and, for a property, record it as an attachment.

    Args:
        db: Database session
        storage: Object storage service
        content: File bytes
        content_type: MIME type reported by the client
        filename: Original file name
        category: Upload category
        user_id: Uploading user
        property_id: Property to attach the file to
        description: Attachment description

    Returns:
        URL and key of the stored object, plus the attachment if one was created

    Raises:
        ValidationError: If the file is too large or of a disallowed type
        NotFoundError: If the property does not exist
        PermissionError: If the caller does not manage the property
        ExternalServiceError: If the object store fails
    """
    check_file_size(len(content), category)
    if property_id is not None:
        await _require_managed_property(db, property_id, user_id)

    stored = await storage.upload_file(
        content, content_type, filename, category, user_id, property_id
    )

    if property_id is None:
        return UploadResponse(message="File uploaded successfully", **stored.model_dump())

    try:
        attachment = await property_crud.create_property_attachment(
            db,
            property_id=property_id,
            file_url=stored.url,
            file_type=attachment_file_type(category, filename),
            description=description or None,
        )
        await db.commit()
    except Exception:
        await _discard_upload(db, storage, stored.url, property_id)
        raise
    await db.refresh(attachment)

    return UploadResponse(
        message="File uploaded successfully",
        attachment=PropertyAttachmentResponse.model_validate(attachment),
        **stored.model_dump(),
    )


async def upload_image(
    db: AsyncSession,
    storage: S3StorageService,
    content: bytes,
    content_type: str,
    filename: str,
    user_id: UUID,
    property_id: UUID | None = None,
) -> UploadResponse:
    """Store an image and, for a property, record it as a (non-primary) photo."""
    if len(content) > MAX_FILE_SIZES[FileCategory.IMAGE]:
        raise ValidationError(
            "File size exceeds maximum allowed size of 10MB for images"
        )
    if property_id is not None:
        await _require_managed_property(db, property_id, user_id)

    stored = await storage.upload_file(
        content, content_type, filename, FileCategory.IMAGE, user_id, property_id
    )

    if property_id is None:
        return UploadResponse(message="Image uploaded successfully", **stored.model_dump())

    try:
        photo = await property_crud.create_property_photo(
            db, property_id=property_id, photo_url=stored.url, is_primary=False
        )
        await db.commit()
    except Exception:
        await _discard_upload(db, storage, stored.url, property_id)
        raise
    await db.refresh(photo)

    return UploadResponse(
        message="Image uploaded successfully",
        photo=PropertyPhotoResponse.model_validate(photo),
        **stored.model_dump(),
    )


async def delete_file(
    db: AsyncSession,
    storage: S3StorageService,
    file_url: str,
    user_id: UUID,
) -> dict[str, str]:
    """Delete a file the caller owns through one of their properties.

    A URL nobody references and a URL referenced by another manager's
    property are rejected with the same message.

    Raises:
        PermissionError: If no row references the URL or the caller does not
            manage the referencing property
        ValidationError: If the URL is not an S3 object URL
        ExternalServiceError: If the object store fails after the records
            were removed
    """
    attachment = await property_crud.get_attachment_by_url(db, file_url)
    photo = await property_crud.get_photo_by_url(db, file_url)
    rows = [row for row in (attachment, photo) if row is not None]

    if not rows or any(row.property.manager_id != user_id for row in rows):
        logger.warning("File delete denied", extra={"user_id": str(user_id)})
        raise PermissionError(DELETE_DENIED_MESSAGE)

    object_key(file_url)

    # Records are committed before the object is removed
    try:
        for row in rows:
            await property_crud.delete_row(db, row)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    try:
        await storage.delete_file(file_url)
    except LeaseDeskException:
        logger.error("File records removed but object delete failed: %s", file_url)
        raise

    return {"message": "File deleted successfully"}
