from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from leasedesk_backend.core.exceptions import (
    NotFoundError,
    PermissionError,
    ValidationError,
)
from leasedesk_backend.modules.listing_management import services
from leasedesk_backend.modules.listing_management.models import (
    Listing,
    ListingStatus,
    ListingType,
    ListingVisibility,
    OccupancyStatus,
)
from leasedesk_backend.modules.listing_management.schemas import (
    ListingCreate,
    ListingUpdate,
)
from leasedesk_backend.modules.property_management import crud as property_crud
from leasedesk_backend.modules.property_management.models import (
    LeaseDuration,
    Property,
    PropertyStatus,
    PropertyType,
    Unit,
)


async def _listing_count(db_session) -> int:
    return await db_session.scalar(select(func.count()).select_from(Listing))


async def _unit_ids(db_session, property_id) -> list:
    result = await db_session.execute(
        select(Unit.id).where(Unit.property_id == property_id)
    )
    return list(result.scalars().all())


async def test_create_inherits_leasing_terms(db_session, make_user, make_property):
    manager = await make_user()
    prop = await make_property(manager)

    listing = await services.create_listing(
        db_session, ListingCreate(property_id=prop.id), user_id=manager.id
    )

    assert listing.listing_type == ListingType.ENTIRE_PROPERTY
    assert listing.listing_status == ListingStatus.ACTIVE
    assert listing.occupancy_status == OccupancyStatus.VACANT
    assert listing.visibility == ListingVisibility.PUBLIC
    assert listing.listing_price is None
    assert listing.monthly_rent == Decimal("1500")
    assert listing.security_deposit == Decimal("1500")
    assert listing.amount_refundable == Decimal("1000")
    assert listing.application_fee == Decimal("50")
    assert listing.min_lease_duration == LeaseDuration.TWELVE_MONTHS
    assert listing.max_lease_duration == LeaseDuration.TWENTY_FOUR_MONTHS
    assert listing.pets_allowed is True
    assert listing.pet_category == ["dogs", "cats"]
    assert listing.online_application_available is True
    assert listing.is_active is True
    assert listing.title == "Maple Court"
    assert listing.description == "Bright two-bedroom near the park"
    assert listing.unit_id is None
    assert listing.property.leasing is not None


async def test_create_marks_property_active(db_session, make_user, make_property):
    manager = await make_user()
    prop = await make_property(manager)

    await services.create_listing(
        db_session, ListingCreate(property_id=prop.id), user_id=manager.id
    )

    status = await db_session.scalar(
        select(Property.status).where(Property.id == prop.id)
    )
    assert status == PropertyStatus.ACTIVE
    assert await _listing_count(db_session) == 1


async def test_overrides_take_precedence(db_session, make_user, make_property):
    manager = await make_user()
    prop = await make_property(manager)

    data = ListingCreate(
        property_id=prop.id,
        monthly_rent=Decimal("1750"),
        listing_price=Decimal("1800"),
        pets_allowed=False,
        pet_category=["birds"],
        title="Sunny flat",
        description="Custom description",
        visibility=ListingVisibility.UNLISTED,
        source="website",
        is_active=False,
    )
    listing = await services.create_listing(db_session, data, user_id=manager.id)

    assert listing.monthly_rent == Decimal("1750")
    assert listing.listing_price == Decimal("1800")
    assert listing.pets_allowed is False
    assert listing.pet_category == ["birds"]
    assert listing.title == "Sunny flat"
    assert listing.description == "Custom description"
    assert listing.visibility == ListingVisibility.UNLISTED
    assert listing.source == "website"
    assert listing.is_active is False


async def test_explicit_null_security_deposit_is_kept(
    db_session, make_user, make_property
):
    manager = await make_user()
    prop = await make_property(manager)

    data = ListingCreate.model_validate(
        {"property_id": str(prop.id), "security_deposit": None}
    )
    listing = await services.create_listing(db_session, data, user_id=manager.id)

    assert listing.security_deposit is None
    # omitted fields still inherit
    assert listing.amount_refundable == Decimal("1000")


async def test_explicit_null_monthly_rent_falls_back_to_leasing(
    db_session, make_user, make_property
):
    manager = await make_user()
    prop = await make_property(manager)

    data = ListingCreate.model_validate(
        {"property_id": str(prop.id), "monthly_rent": None}
    )
    listing = await services.create_listing(db_session, data, user_id=manager.id)

    assert listing.monthly_rent == Decimal("1500")


async def test_zero_monthly_rent_is_honoured(db_session, make_user, make_property):
    manager = await make_user()
    prop = await make_property(manager)

    listing = await services.create_listing(
        db_session,
        ListingCreate(property_id=prop.id, monthly_rent=Decimal("0")),
        user_id=manager.id,
    )

    assert listing.monthly_rent == Decimal("0")


async def test_empty_pet_category_falls_back_to_leasing(
    db_session, make_user, make_property
):
    manager = await make_user()
    prop = await make_property(manager)

    listing = await services.create_listing(
        db_session,
        ListingCreate(property_id=prop.id, pet_category=[]),
        user_id=manager.id,
    )

    assert listing.pet_category == ["dogs", "cats"]


async def test_description_falls_back_to_leasing(db_session, make_user, make_property):
    manager = await make_user()
    prop = await make_property(manager, description=None)

    listing = await services.create_listing(
        db_session, ListingCreate(property_id=prop.id), user_id=manager.id
    )

    assert listing.description == "Leasing terms description"


async def test_multi_property_with_one_unit_is_auto_assigned(
    db_session, make_user, make_property
):
    manager = await make_user()
    prop = await make_property(manager, property_type=PropertyType.MULTI, unit_count=1)
    [unit_id] = await _unit_ids(db_session, prop.id)

    listing = await services.create_listing(
        db_session, ListingCreate(property_id=prop.id), user_id=manager.id
    )

    assert listing.unit_id == unit_id
    assert listing.listing_type == ListingType.UNIT
    assert listing.unit is not None


async def test_multi_property_without_units_is_rejected(
    db_session, make_user, make_property
):
    manager = await make_user()
    prop = await make_property(manager, property_type=PropertyType.MULTI)

    with pytest.raises(ValidationError, match="no units"):
        await services.create_listing(
            db_session, ListingCreate(property_id=prop.id), user_id=manager.id
        )
    assert await _listing_count(db_session) == 0


async def test_multi_property_with_several_units_requires_selection(
    db_session, make_user, make_property
):
    manager = await make_user()
    prop = await make_property(manager, property_type=PropertyType.MULTI, unit_count=2)

    with pytest.raises(ValidationError, match="multiple units"):
        await services.create_listing(
            db_session, ListingCreate(property_id=prop.id), user_id=manager.id
        )


async def test_multi_property_with_selected_unit(db_session, make_user, make_property):
    manager = await make_user()
    prop = await make_property(manager, property_type=PropertyType.MULTI, unit_count=2)
    unit_ids = await _unit_ids(db_session, prop.id)

    listing = await services.create_listing(
        db_session,
        ListingCreate(property_id=prop.id, unit_id=unit_ids[1]),
        user_id=manager.id,
    )

    assert listing.unit_id == unit_ids[1]


async def test_unit_from_another_property_is_rejected(
    db_session, make_user, make_property
):
    manager = await make_user()
    prop = await make_property(manager, property_type=PropertyType.MULTI, unit_count=2)
    other = await make_property(manager, property_type=PropertyType.MULTI, unit_count=1)
    [foreign_unit] = await _unit_ids(db_session, other.id)

    with pytest.raises(ValidationError, match="does not belong"):
        await services.create_listing(
            db_session,
            ListingCreate(property_id=prop.id, unit_id=foreign_unit),
            user_id=manager.id,
        )


async def test_missing_leasing_names_the_property(db_session, make_user, make_property):
    manager = await make_user()
    prop = await make_property(manager, with_leasing=False)

    with pytest.raises(ValidationError) as exc_info:
        await services.create_listing(
            db_session, ListingCreate(property_id=prop.id), user_id=manager.id
        )
    assert str(prop.id) in exc_info.value.message


async def test_missing_property(db_session, make_user):
    manager = await make_user()

    with pytest.raises(NotFoundError):
        await services.create_listing(
            db_session, ListingCreate(property_id=uuid4()), user_id=manager.id
        )


async def test_other_manager_cannot_create(db_session, make_user, make_property):
    owner = await make_user()
    stranger = await make_user()
    prop = await make_property(owner)

    with pytest.raises(PermissionError):
        await services.create_listing(
            db_session, ListingCreate(property_id=prop.id), user_id=stranger.id
        )


async def test_failed_status_update_leaves_no_listing(
    db_session, make_user, make_property, monkeypatch
):
    manager = await make_user()
    prop = await make_property(manager)
    prop_id = prop.id

    async def broken_status_update(*args, **kwargs):
        raise RuntimeError("database went away")

    monkeypatch.setattr(property_crud, "set_property_status", broken_status_update)

    with pytest.raises(RuntimeError):
        await services.create_listing(
            db_session, ListingCreate(property_id=prop.id), user_id=manager.id
        )

    assert await _listing_count(db_session) == 0
    status = await db_session.scalar(
        select(Property.status).where(Property.id == prop_id)
    )
    assert status == PropertyStatus.INACTIVE


async def test_update_changes_only_sent_fields(db_session, make_user, make_property):
    manager = await make_user()
    prop = await make_property(manager)
    listing = await services.create_listing(
        db_session,
        ListingCreate(property_id=prop.id, source="website"),
        user_id=manager.id,
    )

    updated = await services.update_listing(
        db_session,
        listing.id,
        ListingUpdate.model_validate({"title": "Renamed", "source": None}),
        user_id=manager.id,
    )

    assert updated.title == "Renamed"
    assert updated.source is None
    assert updated.monthly_rent == Decimal("1500")
    assert updated.description == "Bright two-bedroom near the park"
    assert updated.listing_status == ListingStatus.ACTIVE


async def test_update_ignores_null_for_required_columns(
    db_session, make_user, make_property
):
    manager = await make_user()
    prop = await make_property(manager)
    listing = await services.create_listing(
        db_session, ListingCreate(property_id=prop.id), user_id=manager.id
    )

    updated = await services.update_listing(
        db_session,
        listing.id,
        ListingUpdate.model_validate({"listing_status": None, "is_active": None}),
        user_id=manager.id,
    )

    assert updated.listing_status == ListingStatus.ACTIVE
    assert updated.is_active is True


async def test_update_by_other_manager_is_denied(db_session, make_user, make_property):
    owner = await make_user()
    stranger = await make_user()
    prop = await make_property(owner)
    listing = await services.create_listing(
        db_session, ListingCreate(property_id=prop.id), user_id=owner.id
    )

    with pytest.raises(PermissionError):
        await services.update_listing(
            db_session, listing.id, ListingUpdate(title="Mine now"), user_id=stranger.id
        )


async def test_update_rejects_unit_of_another_property(
    db_session, make_user, make_property
):
    manager = await make_user()
    other_manager = await make_user()
    prop = await make_property(manager, property_type=PropertyType.MULTI, unit_count=1)
    other = await make_property(
        other_manager, property_type=PropertyType.MULTI, unit_count=1
    )
    [own_unit] = await _unit_ids(db_session, prop.id)
    [foreign_unit] = await _unit_ids(db_session, other.id)
    listing = await services.create_listing(
        db_session, ListingCreate(property_id=prop.id), user_id=manager.id
    )

    with pytest.raises(ValidationError, match="does not belong"):
        await services.update_listing(
            db_session, listing.id, ListingUpdate(unit_id=foreign_unit), user_id=manager.id
        )

    reloaded = await services.get_listing(db_session, listing.id, user_id=manager.id)
    assert reloaded.unit_id == own_unit


async def test_update_moves_listing_to_sibling_unit(
    db_session, make_user, make_property
):
    manager = await make_user()
    prop = await make_property(manager, property_type=PropertyType.MULTI, unit_count=2)
    first, second = await _unit_ids(db_session, prop.id)
    listing = await services.create_listing(
        db_session, ListingCreate(property_id=prop.id, unit_id=first), user_id=manager.id
    )

    moved = await services.update_listing(
        db_session, listing.id, ListingUpdate(unit_id=second), user_id=manager.id
    )
    kept = await services.update_listing(
        db_session,
        listing.id,
        ListingUpdate.model_validate({"unit_id": None}),
        user_id=manager.id,
    )

    assert moved.unit_id == second
    assert kept.unit_id == second


async def test_remove_returns_message_and_listing(db_session, make_user, make_property):
    manager = await make_user()
    prop = await make_property(manager)
    listing = await services.create_listing(
        db_session, ListingCreate(property_id=prop.id), user_id=manager.id
    )

    result = await services.remove_listing(db_session, listing.id, user_id=manager.id)

    assert result["message"] == "Listing deleted successfully"
    assert result["listing"].id == listing.id
    assert await _listing_count(db_session) == 0


async def test_remove_missing_listing(db_session, make_user):
    manager = await make_user()

    with pytest.raises(NotFoundError):
        await services.remove_listing(db_session, uuid4(), user_id=manager.id)


async def test_find_all_is_scoped_to_manager(db_session, make_user, make_property):
    owner = await make_user()
    other = await make_user()
    await services.create_listing(
        db_session,
        ListingCreate(property_id=(await make_property(owner)).id),
        user_id=owner.id,
    )
    await services.create_listing(
        db_session,
        ListingCreate(property_id=(await make_property(other)).id),
        user_id=other.id,
    )

    mine = await services.get_listings(db_session, user_id=owner.id)
    everything = await services.get_listings(db_session)

    assert len(mine) == 1
    assert mine[0].property.manager_id == owner.id
    assert len(everything) == 2


async def test_find_one_checks_ownership(db_session, make_user, make_property):
    owner = await make_user()
    stranger = await make_user()
    prop = await make_property(owner)
    listing = await services.create_listing(
        db_session, ListingCreate(property_id=prop.id), user_id=owner.id
    )

    found = await services.get_listing(db_session, listing.id, user_id=owner.id)
    assert found.id == listing.id

    with pytest.raises(PermissionError):
        await services.get_listing(db_session, listing.id, user_id=stranger.id)

    with pytest.raises(NotFoundError):
        await services.get_listing(db_session, uuid4(), user_id=owner.id)


async def test_find_by_property(db_session, make_user, make_property):
    owner = await make_user()
    stranger = await make_user()
    prop = await make_property(owner)
    empty_prop = await make_property(owner)
    await services.create_listing(
        db_session, ListingCreate(property_id=prop.id), user_id=owner.id
    )
    await services.create_listing(
        db_session, ListingCreate(property_id=prop.id), user_id=owner.id
    )

    listings = await services.get_listings_by_property(
        db_session, prop.id, user_id=owner.id
    )
    assert len(listings) == 2

    assert (
        await services.get_listings_by_property(
            db_session, empty_prop.id, user_id=owner.id
        )
        == []
    )

    with pytest.raises(PermissionError):
        await services.get_listings_by_property(
            db_session, prop.id, user_id=stranger.id
        )
