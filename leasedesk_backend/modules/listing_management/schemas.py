"""Listing schemas for LeaseDesk.

Optional create/update fields distinguish "not sent" from an explicit
``null`` through ``model_fields_set``.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from ..property_management.models import LeaseDuration
from ..property_management.schemas import PropertyDetailResponse, UnitResponse
from .models import ListingStatus, ListingType, ListingVisibility, OccupancyStatus


class ListingFields(BaseModel):
    """Fields a caller may set on a listing."""

    listing_type: ListingType | None = None
    listing_status: ListingStatus | None = None
    occupancy_status: OccupancyStatus | None = None
    visibility: ListingVisibility | None = None
    listing_price: Decimal | None = Field(None, ge=0)
    monthly_rent: Decimal | None = Field(None, ge=0)
    security_deposit: Decimal | None = Field(None, ge=0)
    amount_refundable: Decimal | None = Field(None, ge=0)
    min_lease_duration: LeaseDuration | None = None
    max_lease_duration: LeaseDuration | None = None
    available_from: datetime | None = None
    expires_at: datetime | None = None
    is_active: bool | None = None
    pets_allowed: bool | None = None
    pet_category: list[str] | None = None
    application_fee: Decimal | None = Field(None, ge=0)
    online_application_available: bool | None = None
    external_listing_url: str | None = Field(None, max_length=1024)
    source: str | None = Field(None, max_length=120)
    title: str | None = Field(None, max_length=255)
    description: str | None = None


class ListingCreate(ListingFields):
    """Schema for publishing a listing from a property's leasing terms."""

    property_id: UUID
    unit_id: UUID | None = None


class ListingUpdate(ListingFields):
    """Schema for updating a listing. Only fields sent are applied."""

    unit_id: UUID | None = None
    archived_at: datetime | None = None


class ListingResponse(BaseModel):
    """Listing with its property and unit."""

    id: UUID
    property_id: UUID
    unit_id: UUID | None = None
    listing_type: ListingType
    listing_status: ListingStatus
    occupancy_status: OccupancyStatus
    visibility: ListingVisibility
    listing_price: Decimal | None = None
    monthly_rent: Decimal | None = None
    security_deposit: Decimal | None = None
    amount_refundable: Decimal | None = None
    application_fee: Decimal | None = None
    min_lease_duration: LeaseDuration | None = None
    max_lease_duration: LeaseDuration | None = None
    listed_at: datetime | None = None
    available_from: datetime | None = None
    expires_at: datetime | None = None
    archived_at: datetime | None = None
    is_active: bool
    pets_allowed: bool | None = None
    pet_category: list[str] = []
    online_application_available: bool | None = None
    external_listing_url: str | None = None
    source: str | None = None
    title: str | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    property: PropertyDetailResponse
    unit: UnitResponse | None = None

    class Config:
        from_attributes = True


class ListingDeleteResponse(BaseModel):
    message: str
    listing: ListingResponse
