"""CRUD operations for property management module."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .models import (
    Property,
    PropertyAttachment,
    PropertyPhoto,
    PropertyStatus,
)

# ----- Property CRUD -----


async def get_property_by_id(db: AsyncSession, property_id: UUID) -> Property | None:
    """Get a property by ID without relations."""
    result = await db.execute(select(Property).where(Property.id == property_id))
    return result.scalar_one_or_none()


async def get_property_for_listing(
    db: AsyncSession, property_id: UUID
) -> Property | None:
    """Get a property with the leasing terms and units a listing is built from."""
    result = await db.execute(
        select(Property)
        .options(selectinload(Property.leasing), selectinload(Property.units))
        .where(Property.id == property_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def set_property_status(
    db: AsyncSession, property_obj: Property, status: PropertyStatus
) -> Property:
    """Change a property's status (flushed, not committed)."""
    property_obj.status = status
    await db.flush()
    return property_obj


# ----- Photo / Attachment CRUD -----


async def create_property_photo(
    db: AsyncSession,
    property_id: UUID,
    photo_url: str,
    is_primary: bool = False,
) -> PropertyPhoto:
    """Create a photo row for an uploaded image."""
    photo = PropertyPhoto(
        property_id=property_id, photo_url=photo_url, is_primary=is_primary
    )
    db.add(photo)
    await db.flush()
    return photo


async def create_property_attachment(
    db: AsyncSession,
    property_id: UUID,
    file_url: str,
    file_type: str,
    description: str | None = None,
) -> PropertyAttachment:
    """Create an attachment row for an uploaded document."""
    attachment = PropertyAttachment(
        property_id=property_id,
        file_url=file_url,
        file_type=file_type,
        description=description,
    )
    db.add(attachment)
    await db.flush()
    return attachment


async def get_attachment_by_url(
    db: AsyncSession, file_url: str
) -> PropertyAttachment | None:
    """First attachment referencing ``file_url``, with its property loaded."""
    result = await db.execute(
        select(PropertyAttachment)
        .options(selectinload(PropertyAttachment.property))
        .where(PropertyAttachment.file_url == file_url)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_photo_by_url(db: AsyncSession, photo_url: str) -> PropertyPhoto | None:
    """First photo referencing ``photo_url``, with its property loaded."""
    result = await db.execute(
        select(PropertyPhoto)
        .options(selectinload(PropertyPhoto.property))
        .where(PropertyPhoto.photo_url == photo_url)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def delete_row(db: AsyncSession, row) -> None:
    """Delete a photo or attachment row (flushed, not committed)."""
    await db.delete(row)
    await db.flush()
