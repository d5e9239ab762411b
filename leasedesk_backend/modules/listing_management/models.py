"""Listing models for LeaseDesk.

A listing publishes a property (or one unit of a MULTI property) for rent.
Listings are not unique per property/unit.
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
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from ...core.database_types import UUID as UUID_DB
from ...database import Base, TimestampMixin, UUIDPrimaryKey
from ..property_management.models import LeaseDuration, Property, Unit


class ListingType(str, enum.Enum):
    ENTIRE_PROPERTY = "ENTIRE_PROPERTY"
    UNIT = "UNIT"


class ListingStatus(str, enum.Enum):
    """Listing lifecycle status."""

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    EXPIRED = "EXPIRED"
    ARCHIVED = "ARCHIVED"
    REMOVED = "REMOVED"


class OccupancyStatus(str, enum.Enum):
    VACANT = "VACANT"
    OCCUPIED = "OCCUPIED"
    PARTIALLY_OCCUPIED = "PARTIALLY_OCCUPIED"


class ListingVisibility(str, enum.Enum):
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
    UNLISTED = "UNLISTED"


class Listing(UUIDPrimaryKey, TimestampMixin, Base):
    """A published rental listing."""

    __tablename__ = "listings"

    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    unit_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID_DB(), ForeignKey("units.id", ondelete="SET NULL"), nullable=True
    )

    listing_type: Mapped[ListingType] = mapped_column(
        Enum(ListingType), nullable=False
    )
    listing_status: Mapped[ListingStatus] = mapped_column(
        Enum(ListingStatus), nullable=False, default=ListingStatus.ACTIVE
    )
    occupancy_status: Mapped[OccupancyStatus] = mapped_column(
        Enum(OccupancyStatus), nullable=False, default=OccupancyStatus.VACANT
    )
    visibility: Mapped[ListingVisibility] = mapped_column(
        Enum(ListingVisibility), nullable=False, default=ListingVisibility.PUBLIC
    )

    # Pricing
    listing_price: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    monthly_rent: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    security_deposit: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    amount_refundable: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    application_fee: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )

    # Lease terms
    min_lease_duration: Mapped[LeaseDuration | None] = mapped_column(
        Enum(LeaseDuration), nullable=True
    )
    max_lease_duration: Mapped[LeaseDuration | None] = mapped_column(
        Enum(LeaseDuration), nullable=True
    )

    # Dates
    listed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    available_from: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    archived_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    pets_allowed: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    pet_category: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    online_application_available: Mapped[bool | None] = mapped_column(
        Boolean, nullable=True
    )

    external_listing_url: Mapped[str | None] = mapped_column(
        String(1024), nullable=True
    )
    source: Mapped[str | None] = mapped_column(String(120), nullable=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    property: Mapped[Property] = relationship(Property)
    unit: Mapped[Optional[Unit]] = relationship(Unit)

    __table_args__ = (
        Index("ix_listings_property", "property_id"),
        Index("ix_listings_unit", "unit_id"),
        Index("ix_listings_status", "listing_status"),
    )

    def __repr__(self) -> str:
        return f"<Listing(id={self.id}, property_id={self.property_id})>"
