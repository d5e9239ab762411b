"""Shared fixtures: in-memory database, data factories, HTTP client."""

import os
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock
from uuid import uuid4

os.environ["CONFIG"] = str(Path(__file__).parent / "resources" / "test.yaml")

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from leasedesk_backend.database import Base, get_db  # noqa: E402
from leasedesk_backend.main import app  # noqa: E402
from leasedesk_backend.modules.auth.jwt_service import create_access_token  # noqa: E402
from leasedesk_backend.modules.auth.models import User, UserRole  # noqa: E402
from leasedesk_backend.modules.file_uploads.storage import (  # noqa: E402
    S3StorageService,
    get_storage,
)
from leasedesk_backend.modules.property_management.models import (  # noqa: E402
    LeaseDuration,
    Property,
    PropertyLeasing,
    PropertyType,
    Unit,
)

# Registers the remaining tables on Base.metadata
from leasedesk_backend.modules.listing_management import models as _listing_models  # noqa: E402, F401
from leasedesk_backend.modules.task_management import models as _task_models  # noqa: E402, F401


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(engine):
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(db_session):
    async def _make(email: str | None = None, full_name: str = "Pat Manager") -> User:
        user = User(
            email=email or f"{uuid4().hex[:10]}@leasedesk.io",
            full_name=full_name,
            role=UserRole.PROPERTY_MANAGER,
            is_email_verified=True,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make


@pytest.fixture
def make_property(db_session):
    async def _make(
        manager: User,
        property_type: PropertyType = PropertyType.SINGLE,
        with_leasing: bool = True,
        unit_count: int = 0,
        description: str | None = "Bright two-bedroom near the park",
        **leasing_fields,
    ) -> Property:
        property_obj = Property(
            manager_id=manager.id,
            property_name="Maple Court",
            property_type=property_type,
            description=description,
        )
        db_session.add(property_obj)
        await db_session.flush()

        for index in range(unit_count):
            db_session.add(
                Unit(property_id=property_obj.id, unit_name=f"Unit {index + 1}")
            )

        if with_leasing:
            values = {
                "monthly_rent": Decimal("1500.00"),
                "security_deposit": Decimal("1500.00"),
                "amount_refundable": Decimal("1000.00"),
                "date_available": datetime(2025, 1, 1, tzinfo=timezone.utc),
                "min_lease_duration": LeaseDuration.TWELVE_MONTHS,
                "max_lease_duration": LeaseDuration.TWENTY_FOUR_MONTHS,
                "description": "Leasing terms description",
                "pets_allowed": True,
                "pet_category": ["dogs", "cats"],
                "online_rental_application": True,
                "require_application_fee": True,
                "application_fee": Decimal("50.00"),
            }
            values.update(leasing_fields)
            db_session.add(PropertyLeasing(property_id=property_obj.id, **values))

        await db_session.commit()
        return property_obj

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict[str, str]:
        token = create_access_token(
            user_id=user.id,
            email=user.email,
            role=UserRole.PROPERTY_MANAGER.value,
            full_name=user.full_name,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def s3_client():
    """boto3 S3 client double; every call succeeds unless configured otherwise."""
    client = MagicMock(name="s3_client")
    client.list_buckets.return_value = {"Buckets": [{"Name": "leasedesk-test-bucket"}]}
    client.generate_presigned_url.return_value = (
        "https://leasedesk-test-bucket.s3.ap-south-1.amazonaws.com/signed?X-Amz-Signature=abc"
    )
    return client


@pytest.fixture
def storage(s3_client):
    return S3StorageService(
        region="ap-south-1",
        bucket_name="leasedesk-test-bucket",
        access_key_id="test-access-key",
        secret_access_key="test-secret-key",
        client_factory=lambda *args, **kwargs: s3_client,
    )


@pytest.fixture
async def client(db_session, storage):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http

    app.dependency_overrides.clear()
