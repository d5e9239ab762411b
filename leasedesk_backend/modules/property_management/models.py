"""Property management models for LeaseDesk.

- Properties owned by a manager, either SINGLE or MULTI (several units)
- Default leasing terms used to seed listings
- Amenities, photos and file attachments hanging off a property
"""

import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from ...core.database_types import UUID as UUID_DB
from ...database import Base, TimestampMixin, UUIDPrimaryKey
from ..auth.models import User


class PropertyType(str, enum.Enum):
    """Whether a property is leased whole or as separate units."""

    SINGLE = "SINGLE"
    MULTI = "MULTI"


class PropertyStatus(str, enum.Enum):
    """Property status values."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ARCHIVED = "ARCHIVED"


class LeaseDuration(str, enum.Enum):
    """Lease length options offered on leasing terms and listings."""

    ONE_MONTH = "ONE_MONTH"
    TWO_MONTHS = "TWO_MONTHS"
    THREE_MONTHS = "THREE_MONTHS"
    FOUR_MONTHS = "FOUR_MONTHS"
    FIVE_MONTHS = "FIVE_MONTHS"
    SIX_MONTHS = "SIX_MONTHS"
    SEVEN_MONTHS = "SEVEN_MONTHS"
    EIGHT_MONTHS = "EIGHT_MONTHS"
    NINE_MONTHS = "NINE_MONTHS"
    TEN_MONTHS = "TEN_MONTHS"
    ELEVEN_MONTHS = "ELEVEN_MONTHS"
    TWELVE_MONTHS = "TWELVE_MONTHS"
    THIRTEEN_MONTHS = "THIRTEEN_MONTHS"
    FOURTEEN_MONTHS = "FOURTEEN_MONTHS"
    FIFTEEN_MONTHS = "FIFTEEN_MONTHS"
    SIXTEEN_MONTHS = "SIXTEEN_MONTHS"
    SEVENTEEN_MONTHS = "SEVENTEEN_MONTHS"
    EIGHTEEN_MONTHS = "EIGHTEEN_MONTHS"
    NINETEEN_MONTHS = "NINETEEN_MONTHS"
    TWENTY_MONTHS = "TWENTY_MONTHS"
    TWENTY_ONE_MONTHS = "TWENTY_ONE_MONTHS"
    TWENTY_TWO_MONTHS = "TWENTY_TWO_MONTHS"
    TWENTY_THREE_MONTHS = "TWENTY_THREE_MONTHS"
    TWENTY_FOUR_MONTHS = "TWENTY_FOUR_MONTHS"
    THIRTY_SIX_PLUS_MONTHS = "THIRTY_SIX_PLUS_MONTHS"
    CONTACT_FOR_DETAILS = "CONTACT_FOR_DETAILS"


class ParkingType(str, enum.Enum):
    NONE = "NONE"
    STREET = "STREET"
    GARAGE = "GARAGE"
    DRIVEWAY = "DRIVEWAY"
    DEDICATED_SPOT = "DEDICATED_SPOT"
    PRIVATE_LOT = "PRIVATE_LOT"
    ASSIGNED = "ASSIGNED"


class LaundryType(str, enum.Enum):
    NONE = "NONE"
    IN_UNIT = "IN_UNIT"
    ON_SITE = "ON_SITE"
    HOOKUPS = "HOOKUPS"


class AirConditioningType(str, enum.Enum):
    NONE = "NONE"
    CENTRAL = "CENTRAL"
    WINDOW = "WINDOW"
    PORTABLE = "PORTABLE"
    COOLER = "COOLER"


class FileType(str, enum.Enum):
    """Attachment file types."""

    PDF = "PDF"
    DOC = "DOC"
    DOCX = "DOCX"
    XLS = "XLS"
    XLSX = "XLSX"
    IMAGE = "IMAGE"
    OTHER = "OTHER"


class Property(UUIDPrimaryKey, TimestampMixin, Base):
    """A managed property.

    A MULTI property is leased unit by unit; a SINGLE property is leased whole.
    The status flips to ACTIVE once a listing is published for it.
    """

    __tablename__ = "properties"

    manager_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    property_name: Mapped[str] = mapped_column(String(255), nullable=False)
    property_type: Mapped[PropertyType] = mapped_column(
        Enum(PropertyType), nullable=False
    )
    status: Mapped[PropertyStatus] = mapped_column(
        Enum(PropertyStatus), nullable=False, default=PropertyStatus.INACTIVE
    )
    year_built: Mapped[int | None] = mapped_column(Integer, nullable=True)
    market_rent: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    deposit_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    manager: Mapped[User] = relationship(User)
    units: Mapped[list["Unit"]] = relationship(
        "Unit", back_populates="property", cascade="all, delete-orphan"
    )
    leasing: Mapped[Optional["PropertyLeasing"]] = relationship(
        "PropertyLeasing",
        back_populates="property",
        uselist=False,
        cascade="all, delete-orphan",
    )
    amenities: Mapped[list["Amenity"]] = relationship(
        "Amenity",
        foreign_keys="Amenity.property_id",
        passive_deletes=True,
    )
    photos: Mapped[list["PropertyPhoto"]] = relationship(
        "PropertyPhoto", back_populates="property", cascade="all, delete-orphan"
    )
    attachments: Mapped[list["PropertyAttachment"]] = relationship(
        "PropertyAttachment", back_populates="property", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("ix_properties_manager", "manager_id"),)

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, name={self.property_name})>"


class Unit(UUIDPrimaryKey, TimestampMixin, Base):
    """An independently leasable unit of a MULTI property."""

    __tablename__ = "units"

    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    unit_name: Mapped[str] = mapped_column(String(120), nullable=False)
    apartment_type: Mapped[str | None] = mapped_column(String(120), nullable=True)
    size_sqft: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    beds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    baths: Mapped[Decimal | None] = mapped_column(Numeric(4, 1), nullable=True)
    rent: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)

    property: Mapped["Property"] = relationship("Property", back_populates="units")
    amenities: Mapped[list["Amenity"]] = relationship(
        "Amenity",
        foreign_keys="Amenity.unit_id",
        passive_deletes=True,
    )

    __table_args__ = (Index("ix_units_property", "property_id"),)

    def __repr__(self) -> str:
        return f"<Unit(id={self.id}, name={self.unit_name})>"


class PropertyLeasing(UUIDPrimaryKey, TimestampMixin, Base):
    """Default leasing terms of a property, used to seed new listings."""

    __tablename__ = "property_leasing"

    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(),
        ForeignKey("properties.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    unit_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID_DB(), ForeignKey("units.id", ondelete="SET NULL"), nullable=True
    )
    monthly_rent: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    security_deposit: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    amount_refundable: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    date_available: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    min_lease_duration: Mapped[LeaseDuration] = mapped_column(
        Enum(LeaseDuration), nullable=False
    )
    max_lease_duration: Mapped[LeaseDuration] = mapped_column(
        Enum(LeaseDuration), nullable=False
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    pets_allowed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    pet_category: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    pet_deposit: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    pet_fee: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    pet_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    online_rental_application: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    require_application_fee: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    application_fee: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )

    property: Mapped["Property"] = relationship("Property", back_populates="leasing")

    def __repr__(self) -> str:
        return f"<PropertyLeasing(property_id={self.property_id}, rent={self.monthly_rent})>"


class Amenity(UUIDPrimaryKey, Base):
    """Amenities of a whole property or of a single unit."""

    __tablename__ = "amenities"

    property_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID_DB(), ForeignKey("properties.id", ondelete="CASCADE"), nullable=True
    )
    unit_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID_DB(), ForeignKey("units.id", ondelete="CASCADE"), nullable=True
    )
    parking: Mapped[ParkingType] = mapped_column(
        Enum(ParkingType), nullable=False, default=ParkingType.NONE
    )
    laundry: Mapped[LaundryType] = mapped_column(
        Enum(LaundryType), nullable=False, default=LaundryType.NONE
    )
    air_conditioning: Mapped[AirConditioningType] = mapped_column(
        Enum(AirConditioningType), nullable=False, default=AirConditioningType.NONE
    )
    property_features: Mapped[list[str]] = mapped_column(
        JSON, default=list, nullable=False
    )
    property_amenities: Mapped[list[str]] = mapped_column(
        JSON, default=list, nullable=False
    )


class PropertyPhoto(UUIDPrimaryKey, Base):
    """An uploaded photo of a property."""

    __tablename__ = "property_photos"

    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    photo_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    property: Mapped["Property"] = relationship("Property", back_populates="photos")

    __table_args__ = (Index("ix_property_photos_url", "photo_url", mysql_length=255),)


class PropertyAttachment(UUIDPrimaryKey, Base):
    """An uploaded document attached to a property."""

    __tablename__ = "property_attachments"

    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    file_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    file_type: Mapped[FileType] = mapped_column(Enum(FileType), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    property: Mapped["Property"] = relationship(
        "Property", back_populates="attachments"
    )

    __table_args__ = (
        Index("ix_property_attachments_url", "file_url", mysql_length=255),
    )
