"""Property management schemas for LeaseDesk.

Read-side shapes embedded in listing and upload responses.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ..auth.schemas import UserSummary
from .models import (
    AirConditioningType,
    FileType,
    LaundryType,
    LeaseDuration,
    ParkingType,
    PropertyStatus,
    PropertyType,
)


class AmenityResponse(BaseModel):
    id: UUID
    parking: ParkingType
    laundry: LaundryType
    air_conditioning: AirConditioningType
    property_features: list[str] = []
    property_amenities: list[str] = []

    class Config:
        from_attributes = True


class PropertyPhotoResponse(BaseModel):
    id: UUID
    property_id: UUID
    photo_url: str
    is_primary: bool
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class PropertyAttachmentResponse(BaseModel):
    id: UUID
    property_id: UUID
    file_url: str
    file_type: FileType
    description: str | None = None
    uploaded_at: datetime | None = None

    class Config:
        from_attributes = True


class LeasingResponse(BaseModel):
    """Default leasing terms of a property."""

    id: UUID
    unit_id: UUID | None = None
    monthly_rent: float
    security_deposit: float | None = None
    amount_refundable: float | None = None
    date_available: datetime
    min_lease_duration: LeaseDuration
    max_lease_duration: LeaseDuration
    description: str | None = None
    pets_allowed: bool
    pet_category: list[str] = []
    online_rental_application: bool
    require_application_fee: bool
    application_fee: float | None = None

    class Config:
        from_attributes = True


class UnitResponse(BaseModel):
    id: UUID
    property_id: UUID
    unit_name: str
    apartment_type: str | None = None
    size_sqft: float | None = None
    beds: int | None = None
    baths: float | None = None
    rent: float | None = None
    amenities: list[AmenityResponse] = []

    class Config:
        from_attributes = True


class PropertyDetailResponse(BaseModel):
    """Property with the relations shown alongside a listing."""

    id: UUID
    manager_id: UUID
    property_name: str
    property_type: PropertyType
    status: PropertyStatus
    year_built: int | None = None
    market_rent: float | None = None
    deposit_amount: float | None = None
    description: str | None = None
    manager: UserSummary
    leasing: LeasingResponse | None = None
    amenities: list[AmenityResponse] = []
    photos: list[PropertyPhotoResponse] = []

    class Config:
        from_attributes = True
