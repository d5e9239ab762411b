"""CRUD operations for listing management module."""

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..property_management.models import Property, Unit
from .models import Listing

# Everything a ListingResponse renders; async sessions cannot lazy-load.
LISTING_LOAD_OPTIONS = (
    selectinload(Listing.property).selectinload(Property.manager),
    selectinload(Listing.property).selectinload(Property.leasing),
    selectinload(Listing.property).selectinload(Property.amenities),
    selectinload(Listing.property).selectinload(Property.photos),
    selectinload(Listing.unit).selectinload(Unit.amenities),
)


async def create_listing(db: AsyncSession, **kwargs: Any) -> Listing:
    """Insert a listing row (flushed, not committed)."""
    listing = Listing(**kwargs)
    db.add(listing)
    await db.flush()
    return listing


async def get_listing_by_id(db: AsyncSession, listing_id: UUID) -> Listing | None:
    """Get a listing with its property and unit loaded."""
    result = await db.execute(
        select(Listing)
        .options(*LISTING_LOAD_OPTIONS)
        .where(Listing.id == listing_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_listings(
    db: AsyncSession,
    manager_id: UUID | None = None,
    property_id: UUID | None = None,
) -> list[Listing]:
    """Get listings, newest first.

    Args:
        db: Database session
        manager_id: Only listings whose property is managed by this user
        property_id: Only listings of this property

    Returns:
        List of listings with relations loaded
    """
    query = select(Listing).options(*LISTING_LOAD_OPTIONS)

    if manager_id is not None:
        query = query.join(Property, Listing.property_id == Property.id).where(
            Property.manager_id == manager_id
        )
    if property_id is not None:
        query = query.where(Listing.property_id == property_id)

    query = query.order_by(Listing.created_at.desc(), Listing.listed_at.desc())
    result = await db.execute(query)
    return list(result.scalars().all())


async def update_listing(db: AsyncSession, listing: Listing, **kwargs: Any) -> Listing:
    """Apply the given columns to a listing (flushed, not committed)."""
    for key, value in kwargs.items():
        if hasattr(listing, key):
            setattr(listing, key, value)
    await db.flush()
    return listing


async def delete_listing(db: AsyncSession, listing: Listing) -> None:
    await db.delete(listing)
    await db.flush()
