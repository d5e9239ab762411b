import pytest
from botocore.exceptions import ClientError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from leasedesk_backend.core.exceptions import ExternalServiceError, ValidationError
from leasedesk_backend.modules.file_uploads import services
from leasedesk_backend.modules.file_uploads.schemas import FileCategory
from leasedesk_backend.modules.property_management import crud as property_crud
from leasedesk_backend.modules.property_management.models import (
    FileType,
    PropertyAttachment,
    PropertyPhoto,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
BUCKET = "leasedesk-test-bucket"


def client_error(code: str, status: int, operation: str) -> ClientError:
    return ClientError(
        {"Error": {"Code": code}, "ResponseMetadata": {"HTTPStatusCode": status}},
        operation,
    )


async def _count(db_session, model) -> int:
    return await db_session.scalar(select(func.count()).select_from(model))


async def _fail(*args, **kwargs):
    raise RuntimeError("database unavailable")


async def _upload_lease(db_session, storage, manager_id, property_id) -> str:
    result = await services.upload_file(
        db_session,
        storage,
        content=b"%PDF-1.7",
        content_type="application/pdf",
        filename="lease.pdf",
        category=FileCategory.DOCUMENT,
        user_id=manager_id,
        property_id=property_id,
    )
    return result.url


async def test_failed_photo_record_removes_stored_object(
    db_session, storage, s3_client, make_user, make_property, monkeypatch
):
    manager = await make_user()
    prop = await make_property(manager)
    manager_id, prop_id = manager.id, prop.id
    monkeypatch.setattr(property_crud, "create_property_photo", _fail)

    with pytest.raises(RuntimeError):
        await services.upload_image(
            db_session,
            storage,
            PNG_BYTES,
            "image/png",
            "porch.png",
            user_id=manager_id,
            property_id=prop_id,
        )

    key = s3_client.put_object.call_args.kwargs["Key"]
    s3_client.delete_object.assert_called_once_with(Bucket=BUCKET, Key=key)
    assert await _count(db_session, PropertyPhoto) == 0


async def test_failed_attachment_commit_rolls_back_and_cleans_up(
    db_session, storage, s3_client, make_user, make_property, monkeypatch
):
    manager = await make_user()
    prop = await make_property(manager)
    manager_id, prop_id = manager.id, prop.id
    monkeypatch.setattr(AsyncSession, "commit", _fail)

    with pytest.raises(RuntimeError):
        await _upload_lease(db_session, storage, manager_id, prop_id)

    monkeypatch.undo()
    s3_client.delete_object.assert_called_once()
    assert await _count(db_session, PropertyAttachment) == 0


async def test_cleanup_failure_keeps_original_error(
    db_session, storage, s3_client, make_user, make_property, monkeypatch
):
    manager = await make_user()
    prop = await make_property(manager)
    manager_id, prop_id = manager.id, prop.id
    monkeypatch.setattr(property_crud, "create_property_attachment", _fail)
    s3_client.delete_object.side_effect = client_error("AccessDenied", 403, "DeleteObject")

    with pytest.raises(RuntimeError, match="database unavailable"):
        await _upload_lease(db_session, storage, manager_id, prop_id)


async def test_failed_delete_commit_keeps_object(
    db_session, storage, s3_client, make_user, make_property, monkeypatch
):
    manager = await make_user()
    prop = await make_property(manager)
    manager_id = manager.id
    file_url = await _upload_lease(db_session, storage, manager_id, prop.id)
    monkeypatch.setattr(AsyncSession, "commit", _fail)

    with pytest.raises(RuntimeError):
        await services.delete_file(db_session, storage, file_url, manager_id)

    monkeypatch.undo()
    s3_client.delete_object.assert_not_called()
    assert await _count(db_session, PropertyAttachment) == 1


async def test_records_removed_before_object_delete(
    db_session, storage, s3_client, make_user, make_property
):
    manager = await make_user()
    prop = await make_property(manager)
    manager_id = manager.id
    file_url = await _upload_lease(db_session, storage, manager_id, prop.id)
    s3_client.delete_object.side_effect = client_error("InternalError", 500, "DeleteObject")

    with pytest.raises(ExternalServiceError):
        await services.delete_file(db_session, storage, file_url, manager_id)

    assert await _count(db_session, PropertyAttachment) == 0


async def test_malformed_url_leaves_records(
    db_session, storage, s3_client, make_user, make_property
):
    manager = await make_user()
    prop = await make_property(manager)
    manager_id = manager.id
    await property_crud.create_property_attachment(
        db_session,
        property_id=prop.id,
        file_url="https://cdn.leasedesk.io/lease.pdf",
        file_type=FileType.PDF,
        description=None,
    )
    await db_session.commit()

    with pytest.raises(ValidationError, match="Invalid S3 file URL"):
        await services.delete_file(
            db_session, storage, "https://cdn.leasedesk.io/lease.pdf", manager_id
        )

    s3_client.delete_object.assert_not_called()
    assert await _count(db_session, PropertyAttachment) == 1
