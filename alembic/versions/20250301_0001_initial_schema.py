"""Initial schema for LeaseDesk

Revision ID: 0001
Revises:
Create Date: 2025-03-01

Creates all tables for:
- Auth (users)
- Property Management (properties, units, property_leasing, amenities,
  property_photos, property_attachments)
- Listings (listings)
- Tasks (tasks)
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LEASE_DURATIONS = (
    "ONE_MONTH",
    "TWO_MONTHS",
    "THREE_MONTHS",
    "FOUR_MONTHS",
    "FIVE_MONTHS",
    "SIX_MONTHS",
    "SEVEN_MONTHS",
    "EIGHT_MONTHS",
    "NINE_MONTHS",
    "TEN_MONTHS",
    "ELEVEN_MONTHS",
    "TWELVE_MONTHS",
    "THIRTEEN_MONTHS",
    "FOURTEEN_MONTHS",
    "FIFTEEN_MONTHS",
    "SIXTEEN_MONTHS",
    "SEVENTEEN_MONTHS",
    "EIGHTEEN_MONTHS",
    "NINETEEN_MONTHS",
    "TWENTY_MONTHS",
    "TWENTY_ONE_MONTHS",
    "TWENTY_TWO_MONTHS",
    "TWENTY_THREE_MONTHS",
    "TWENTY_FOUR_MONTHS",
    "THIRTY_SIX_PLUS_MONTHS",
    "CONTACT_FOR_DETAILS",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now(), onupdate=sa.func.now()),
    ]


def _money(name: str, nullable: bool = True) -> sa.Column:
    return sa.Column(name, sa.Numeric(12, 2), nullable=nullable)


def upgrade() -> None:
    """Create all tables."""

    # users
    op.create_table(
        "users",
        sa.Column("id", sa.CHAR(36), nullable=False),
        sa.Column("role", sa.Enum("PROPERTY_MANAGER", "TENANT", "SERVICE_PRO", name="userrole"), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("phone_number", sa.String(32), nullable=True),
        sa.Column("is_email_verified", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    # properties
    op.create_table(
        "properties",
        sa.Column("id", sa.CHAR(36), nullable=False),
        sa.Column("manager_id", sa.CHAR(36), nullable=False),
        sa.Column("property_name", sa.String(255), nullable=False),
        sa.Column("property_type", sa.Enum("SINGLE", "MULTI", name="propertytype"), nullable=False),
        sa.Column("status", sa.Enum("ACTIVE", "INACTIVE", "ARCHIVED", name="propertystatus"), nullable=False, server_default="INACTIVE"),
        sa.Column("year_built", sa.Integer(), nullable=True),
        _money("market_rent"),
        _money("deposit_amount"),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["manager_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_properties_manager", "properties", ["manager_id"])

    # units
    op.create_table(
        "units",
        sa.Column("id", sa.CHAR(36), nullable=False),
        sa.Column("property_id", sa.CHAR(36), nullable=False),
        sa.Column("unit_name", sa.String(120), nullable=False),
        sa.Column("apartment_type", sa.String(120), nullable=True),
        sa.Column("size_sqft", sa.Numeric(10, 2), nullable=True),
        sa.Column("beds", sa.Integer(), nullable=True),
        sa.Column("baths", sa.Numeric(4, 1), nullable=True),
        _money("rent"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_units_property", "units", ["property_id"])

    # property_leasing - default terms a listing is derived from
    op.create_table(
        "property_leasing",
        sa.Column("id", sa.CHAR(36), nullable=False),
        sa.Column("property_id", sa.CHAR(36), nullable=False),
        sa.Column("unit_id", sa.CHAR(36), nullable=True),
        _money("monthly_rent", nullable=False),
        _money("security_deposit"),
        _money("amount_refundable"),
        sa.Column("date_available", sa.DateTime(timezone=True), nullable=False),
        sa.Column("min_lease_duration", sa.Enum(*LEASE_DURATIONS, name="leaseduration"), nullable=False),
        sa.Column("max_lease_duration", sa.Enum(*LEASE_DURATIONS, name="leaseduration"), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("pets_allowed", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("pet_category", sa.JSON(), nullable=False),
        _money("pet_deposit"),
        _money("pet_fee"),
        sa.Column("pet_description", sa.Text(), nullable=True),
        sa.Column("online_rental_application", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("require_application_fee", sa.Boolean(), nullable=False, server_default="0"),
        _money("application_fee"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("property_id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["unit_id"], ["units.id"], ondelete="SET NULL"),
    )

    # amenities - of a property or of a unit
    op.create_table(
        "amenities",
        sa.Column("id", sa.CHAR(36), nullable=False),
        sa.Column("property_id", sa.CHAR(36), nullable=True),
        sa.Column("unit_id", sa.CHAR(36), nullable=True),
        sa.Column(
            "parking",
            sa.Enum("NONE", "STREET", "GARAGE", "DRIVEWAY", "DEDICATED_SPOT", "PRIVATE_LOT", "ASSIGNED", name="parkingtype"),
            nullable=False,
            server_default="NONE",
        ),
        sa.Column("laundry", sa.Enum("NONE", "IN_UNIT", "ON_SITE", "HOOKUPS", name="laundrytype"), nullable=False, server_default="NONE"),
        sa.Column(
            "air_conditioning",
            sa.Enum("NONE", "CENTRAL", "WINDOW", "PORTABLE", "COOLER", name="airconditioningtype"),
            nullable=False,
            server_default="NONE",
        ),
        sa.Column("property_features", sa.JSON(), nullable=False),
        sa.Column("property_amenities", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["unit_id"], ["units.id"], ondelete="CASCADE"),
    )

    # property_photos
    op.create_table(
        "property_photos",
        sa.Column("id", sa.CHAR(36), nullable=False),
        sa.Column("property_id", sa.CHAR(36), nullable=False),
        sa.Column("photo_url", sa.String(1024), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_property_photos_url", "property_photos", ["photo_url"], mysql_length=255)

    # property_attachments
    op.create_table(
        "property_attachments",
        sa.Column("id", sa.CHAR(36), nullable=False),
        sa.Column("property_id", sa.CHAR(36), nullable=False),
        sa.Column("file_url", sa.String(1024), nullable=False),
        sa.Column("file_type", sa.Enum("PDF", "DOC", "DOCX", "XLS", "XLSX", "IMAGE", "OTHER", name="filetype"), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_property_attachments_url", "property_attachments", ["file_url"], mysql_length=255)

    # listings
    op.create_table(
        "listings",
        sa.Column("id", sa.CHAR(36), nullable=False),
        sa.Column("property_id", sa.CHAR(36), nullable=False),
        sa.Column("unit_id", sa.CHAR(36), nullable=True),
        sa.Column("listing_type", sa.Enum("ENTIRE_PROPERTY", "UNIT", name="listingtype"), nullable=False),
        sa.Column(
            "listing_status",
            sa.Enum("DRAFT", "ACTIVE", "PAUSED", "EXPIRED", "ARCHIVED", "REMOVED", name="listingstatus"),
            nullable=False,
            server_default="ACTIVE",
        ),
        sa.Column(
            "occupancy_status",
            sa.Enum("VACANT", "OCCUPIED", "PARTIALLY_OCCUPIED", name="occupancystatus"),
            nullable=False,
            server_default="VACANT",
        ),
        sa.Column("visibility", sa.Enum("PUBLIC", "PRIVATE", "UNLISTED", name="listingvisibility"), nullable=False, server_default="PUBLIC"),
        _money("listing_price"),
        _money("monthly_rent"),
        _money("security_deposit"),
        _money("amount_refundable"),
        _money("application_fee"),
        sa.Column("min_lease_duration", sa.Enum(*LEASE_DURATIONS, name="leaseduration"), nullable=True),
        sa.Column("max_lease_duration", sa.Enum(*LEASE_DURATIONS, name="leaseduration"), nullable=True),
        sa.Column("listed_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("available_from", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("archived_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("pets_allowed", sa.Boolean(), nullable=True),
        sa.Column("pet_category", sa.JSON(), nullable=False),
        sa.Column("online_application_available", sa.Boolean(), nullable=True),
        sa.Column("external_listing_url", sa.String(1024), nullable=True),
        sa.Column("source", sa.String(120), nullable=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["unit_id"], ["units.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_listings_property", "listings", ["property_id"])
    op.create_index("ix_listings_unit", "listings", ["unit_id"])
    op.create_index("ix_listings_status", "listings", ["listing_status"])

    # tasks
    op.create_table(
        "tasks",
        sa.Column("id", sa.CHAR(36), nullable=False),
        sa.Column("user_id", sa.CHAR(36), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("status", sa.Enum("OPEN", "RESOLVED", name="taskstatus"), nullable=False, server_default="OPEN"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("time", sa.String(20), nullable=True),
        sa.Column("assignee", sa.String(255), nullable=True),
        sa.Column("property_id", sa.CHAR(36), nullable=True),
        sa.Column("recurring", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column(
            "frequency",
            sa.Enum("DAILY", "WEEKLY", "EVERY_TWO_WEEKS", "MONTHLY", "QUARTERLY", "EVERY_SIX_MONTHS", "YEARLY", name="taskfrequency"),
            nullable=True,
        ),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_tasks_user", "tasks", ["user_id"])
    op.create_index("ix_tasks_property", "tasks", ["property_id"])
    op.create_index("ix_tasks_status", "tasks", ["status"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("tasks")
    op.drop_table("listings")
    op.drop_table("property_attachments")
    op.drop_table("property_photos")
    op.drop_table("amenities")
    op.drop_table("property_leasing")
    op.drop_table("units")
    op.drop_table("properties")
    op.drop_table("users")
