"""Listing management API routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from . import services
from .schemas import (
    ListingCreate,
    ListingDeleteResponse,
    ListingResponse,
    ListingUpdate,
)

router = APIRouter(prefix="/listings", tags=["Listings"])


@router.post("", response_model=BaseResponse[ListingResponse], status_code=201)
async def create_listing(
    data: ListingCreate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Publish a listing from a property's leasing terms."""
    listing = await services.create_listing(db, data, user_id=current_user.id)
    return BaseResponse(
        success=True,
        message="Listing created successfully",
        data=ListingResponse.model_validate(listing),
    )


@router.get("", response_model=BaseResponse[list[ListingResponse]])
async def list_listings(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get the caller's listings."""
    listings = await services.get_listings(db, user_id=current_user.id)
    return BaseResponse(
        success=True,
        data=[ListingResponse.model_validate(item) for item in listings],
    )


@router.get(
    "/property/{property_id}", response_model=BaseResponse[list[ListingResponse]]
)
async def list_property_listings(
    property_id: UUID,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get the listings of one property."""
    listings = await services.get_listings_by_property(
        db, property_id, user_id=current_user.id
    )
    return BaseResponse(
        success=True,
        data=[ListingResponse.model_validate(item) for item in listings],
    )


@router.get("/{listing_id}", response_model=BaseResponse[ListingResponse])
async def get_listing(
    listing_id: UUID,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get a listing by ID."""
    listing = await services.get_listing(db, listing_id, user_id=current_user.id)
    return BaseResponse(success=True, data=ListingResponse.model_validate(listing))


@router.patch("/{listing_id}", response_model=BaseResponse[ListingResponse])
async def update_listing(
    listing_id: UUID,
    data: ListingUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a listing."""
    listing = await services.update_listing(
        db, listing_id, data, user_id=current_user.id
    )
    return BaseResponse(
        success=True,
        message="Listing updated successfully",
        data=ListingResponse.model_validate(listing),
    )


@router.delete("/{listing_id}", response_model=BaseResponse[ListingDeleteResponse])
async def delete_listing(
    listing_id: UUID,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a listing."""
    result = await services.remove_listing(db, listing_id, user_id=current_user.id)
    return BaseResponse(
        success=True,
        message=result["message"],
        data=ListingDeleteResponse(
            message=result["message"],
            listing=ListingResponse.model_validate(result["listing"]),
        ),
    )
