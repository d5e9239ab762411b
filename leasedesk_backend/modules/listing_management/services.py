"""Listing management business logic services.

A listing is derived from a property and its leasing terms: every field the
caller does not send is inherited from the leasing row (or defaulted), and
publishing a listing flips the property to ACTIVE in the same transaction.
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, PermissionError, ValidationError
from ..property_management import crud as property_crud
from ..property_management.models import (
    Property,
    PropertyLeasing,
    PropertyStatus,
    PropertyType,
)
from . import crud
from .models import (
    Listing,
    ListingStatus,
    ListingType,
    ListingVisibility,
    OccupancyStatus,
)
from .schemas import ListingCreate, ListingUpdate

logger = logging.getLogger(__name__)

# Columns an explicit null cannot clear
NON_NULLABLE_FIELDS = (
    "listing_type",
    "listing_status",
    "occupancy_status",
    "visibility",
    "is_active",
)


def _resolve_unit_id(property_obj: Property, unit_id: UUID | None) -> UUID | None:
    """Pick the unit a listing of this property refers to.

    Raises:
        ValidationError: If a MULTI property has no units, several units and
            no selection, or the given unit belongs to another property
    """
    if property_obj.property_type != PropertyType.MULTI:
        return unit_id

    units = property_obj.units
    if unit_id is None:
        if len(units) == 1:
            return units[0].id
        if not units:
            raise ValidationError(
                "Property has no units. Please create a unit before creating a listing."
            )
        raise ValidationError(
            "Property has multiple units. Please specify which unit to list by providing unit_id."
        )

    if not any(unit.id == unit_id for unit in units):
        raise ValidationError("Unit does not belong to the specified property")
    return unit_id


def _derive_listing_values(
    data: ListingCreate,
    property_obj: Property,
    leasing: PropertyLeasing,
    unit_id: UUID | None,
) -> dict[str, Any]:
    """Build listing column values from the request and the leasing terms.

    ``sent`` holds the fields present in the request body, so an explicit
    ``null`` can be told apart from an omitted field.
    """
    sent = data.model_fields_set

    def sent_or_leasing(field: str, leasing_value: Any) -> Any:
        # explicit null is kept
        return getattr(data, field) if field in sent else leasing_value

    def value_or_leasing(field: str, leasing_value: Any) -> Any:
        # null falls back to leasing
        value = getattr(data, field)
        return value if value is not None else leasing_value

    if data.listing_type is not None:
        listing_type = data.listing_type
    elif property_obj.property_type == PropertyType.MULTI:
        listing_type = ListingType.UNIT
    else:
        listing_type = ListingType.ENTIRE_PROPERTY

    if data.pet_category:
        pet_category = list(data.pet_category)
    else:
        pet_category = list(leasing.pet_category or [])

    return {
        "property_id": property_obj.id,
        "unit_id": unit_id,
        "listing_type": listing_type,
        "listing_status": data.listing_status or ListingStatus.ACTIVE,
        "occupancy_status": data.occupancy_status or OccupancyStatus.VACANT,
        "visibility": data.visibility or ListingVisibility.PUBLIC,
        "listing_price": data.listing_price,
        "monthly_rent": value_or_leasing("monthly_rent", leasing.monthly_rent),
        "security_deposit": sent_or_leasing(
            "security_deposit", leasing.security_deposit
        ),
        "amount_refundable": sent_or_leasing(
            "amount_refundable", leasing.amount_refundable
        ),
        "application_fee": sent_or_leasing("application_fee", leasing.application_fee),
        "min_lease_duration": value_or_leasing(
            "min_lease_duration", leasing.min_lease_duration
        ),
        "max_lease_duration": value_or_leasing(
            "max_lease_duration", leasing.max_lease_duration
        ),
        "available_from": value_or_leasing("available_from", leasing.date_available),
        "expires_at": data.expires_at,
        "is_active": value_or_leasing("is_active", True),
        "pets_allowed": value_or_leasing("pets_allowed", leasing.pets_allowed),
        "pet_category": pet_category,
        "online_application_available": value_or_leasing(
            "online_application_available", leasing.online_rental_application
        ),
        "external_listing_url": data.external_listing_url,
        "source": data.source,
        "title": data.title or property_obj.property_name,
        "description": (
            data.description or property_obj.description or leasing.description
        ),
    }


def _check_manager(property_obj: Property, user_id: UUID | None, action: str) -> None:
    if user_id is not None and property_obj.manager_id != user_id:
        raise PermissionError(f"You do not have permission to {action} this listing")


async def _check_unit_change(
    db: AsyncSession, listing: Listing, changes: dict[str, Any]
) -> None:
    """Validate a requested unit against the listing's own property.

    A null unit is dropped for MULTI properties, whose listings always
    point at a unit.
    """
    property_obj = await property_crud.get_property_for_listing(db, listing.property_id)
    unit_id = changes["unit_id"]

    if unit_id is None:
        if property_obj.property_type == PropertyType.MULTI:
            del changes["unit_id"]
        return

    if not any(unit.id == unit_id for unit in property_obj.units):
        raise ValidationError("Unit does not belong to the specified property")


async def create_listing(
    db: AsyncSession,
    data: ListingCreate,
    user_id: UUID | None = None,
) -> Listing:
    """Publish a listing for a property and mark the property ACTIVE.

    Args:
        db: Database session
        data: Listing creation data
        user_id: Caller; must manage the property when given

    Returns:
        Created listing with relations loaded

    Raises:
        NotFoundError: If the property does not exist
        PermissionError: If the caller does not manage the property
        ValidationError: If leasing terms are missing or the unit is invalid
    """
    property_obj = await property_crud.get_property_for_listing(db, data.property_id)
    if not property_obj:
        raise NotFoundError(f"Property with ID {data.property_id} not found")

    if user_id is not None and property_obj.manager_id != user_id:
        raise PermissionError(
            "You do not have permission to create a listing for this property"
        )

    leasing = property_obj.leasing
    if leasing is None:
        raise ValidationError(
            f"Property with ID {data.property_id} does not have leasing information. "
            "Please add leasing details before creating a listing."
        )

    unit_id = _resolve_unit_id(property_obj, data.unit_id)
    values = _derive_listing_values(data, property_obj, leasing, unit_id)

    try:
        listing = await crud.create_listing(db, **values)
        await property_crud.set_property_status(
            db, property_obj, PropertyStatus.ACTIVE
        )
        await db.commit()
    except Exception:
        await db.rollback()
        logger.exception(
            "Listing creation failed", extra={"property_id": str(data.property_id)}
        )
        raise

    logger.info(
        "Listing created",
        extra={"listing_id": str(listing.id), "property_id": str(property_obj.id)},
    )
    return await crud.get_listing_by_id(db, listing.id)


async def get_listings(db: AsyncSession, user_id: UUID | None = None) -> list[Listing]:
    """Get all listings, scoped to the caller's properties when given."""
    return await crud.get_listings(db, manager_id=user_id)


async def get_listing(
    db: AsyncSession, listing_id: UUID, user_id: UUID | None = None
) -> Listing:
    """Get a single listing.

    Raises:
        NotFoundError: If the listing does not exist
        PermissionError: If the caller does not manage its property
    """
    listing = await crud.get_listing_by_id(db, listing_id)
    if not listing:
        raise NotFoundError(f"Listing with ID {listing_id} not found")
    _check_manager(listing.property, user_id, "view")
    return listing


async def get_listings_by_property(
    db: AsyncSession, property_id: UUID, user_id: UUID | None = None
) -> list[Listing]:
    """Get the listings of one property.

    A property without listings yields an empty list.

    Raises:
        PermissionError: If the caller does not manage the property
    """
    listings = await crud.get_listings(db, property_id=property_id)
    if user_id is not None:
        property_obj = await property_crud.get_property_by_id(db, property_id)
        if property_obj is not None and property_obj.manager_id != user_id:
            raise PermissionError(
                "You do not have permission to view listings for this property"
            )
    return listings


async def update_listing(
    db: AsyncSession,
    listing_id: UUID,
    data: ListingUpdate,
    user_id: UUID | None = None,
) -> Listing:
    """Update a listing with the fields present in the request.

    Raises:
        NotFoundError: If the listing does not exist
        PermissionError: If the caller does not manage its property
        ValidationError: If the new unit belongs to another property
    """
    listing = await crud.get_listing_by_id(db, listing_id)
    if not listing:
        raise NotFoundError(f"Listing with ID {listing_id} not found")
    _check_manager(listing.property, user_id, "update")

    changes = data.model_dump(exclude_unset=True)
    for field in NON_NULLABLE_FIELDS:
        if field in changes and changes[field] is None:
            del changes[field]
    if "pet_category" in changes and changes["pet_category"] is None:
        changes["pet_category"] = []
    if "unit_id" in changes:
        await _check_unit_change(db, listing, changes)

    await crud.update_listing(db, listing, **changes)
    await db.commit()

    return await crud.get_listing_by_id(db, listing_id)


async def remove_listing(
    db: AsyncSession, listing_id: UUID, user_id: UUID | None = None
) -> dict[str, Any]:
    """Delete a listing.

    Returns:
        Confirmation message and the deleted listing

    Raises:
        NotFoundError: If the listing does not exist
        PermissionError: If the caller does not manage its property
    """
    listing = await crud.get_listing_by_id(db, listing_id)
    if not listing:
        raise NotFoundError(f"Listing with ID {listing_id} not found")
    _check_manager(listing.property, user_id, "delete")

    await crud.delete_listing(db, listing)
    await db.commit()

    logger.info("Listing deleted", extra={"listing_id": str(listing_id)})
    return {"message": "Listing deleted successfully", "listing": listing}
