from datetime import datetime, timezone
from uuid import uuid4

import pytest

from leasedesk_backend.core.exceptions import NotFoundError, PermissionError
from leasedesk_backend.modules.task_management import services
from leasedesk_backend.modules.task_management.models import TaskFrequency, TaskStatus
from leasedesk_backend.modules.task_management.schemas import TaskCreate, TaskUpdate


async def test_create_applies_defaults(db_session, make_user):
    owner = await make_user()

    task = await services.create_task(
        db_session, TaskCreate(title="Replace smoke detector"), user_id=owner.id
    )

    assert task.status == TaskStatus.OPEN
    assert task.recurring is False
    assert task.user_id == owner.id
    assert task.user.email == owner.email


async def test_create_recurring_task(db_session, make_user, make_property):
    owner = await make_user()
    prop = await make_property(owner)

    task = await services.create_task(
        db_session,
        TaskCreate(
            title="Inspect HVAC",
            property_id=prop.id,
            recurring=True,
            frequency=TaskFrequency.QUARTERLY,
            date=datetime(2025, 3, 1, tzinfo=timezone.utc),
            time="09:30",
            assignee="Sam",
        ),
        user_id=owner.id,
    )

    assert task.recurring is True
    assert task.frequency == TaskFrequency.QUARTERLY
    assert task.property_id == prop.id
    assert task.time == "09:30"


async def test_find_all_filters(db_session, make_user, make_property):
    owner = await make_user()
    other = await make_user()
    prop = await make_property(owner)
    await services.create_task(
        db_session, TaskCreate(title="Open task", property_id=prop.id), user_id=owner.id
    )
    await services.create_task(
        db_session,
        TaskCreate(title="Done task", status=TaskStatus.RESOLVED),
        user_id=owner.id,
    )
    await services.create_task(db_session, TaskCreate(title="Not mine"), user_id=other.id)

    mine = await services.get_tasks(db_session, user_id=owner.id)
    resolved = await services.get_tasks(
        db_session, user_id=owner.id, status=TaskStatus.RESOLVED
    )
    for_property = await services.get_tasks_by_property(
        db_session, prop.id, user_id=owner.id
    )

    assert {t.title for t in mine} == {"Open task", "Done task"}
    assert [t.title for t in resolved] == ["Done task"]
    assert [t.title for t in for_property] == ["Open task"]


async def test_update_applies_only_sent_fields(db_session, make_user):
    owner = await make_user()
    task = await services.create_task(
        db_session,
        TaskCreate(title="Paint fence", description="White paint", assignee="Lee"),
        user_id=owner.id,
    )

    updated = await services.update_task(
        db_session,
        task.id,
        TaskUpdate.model_validate({"status": "RESOLVED", "assignee": None}),
        user_id=owner.id,
    )

    assert updated.status == TaskStatus.RESOLVED
    assert updated.assignee is None
    assert updated.title == "Paint fence"
    assert updated.description == "White paint"


async def test_other_user_cannot_touch_task(db_session, make_user):
    owner = await make_user()
    stranger = await make_user()
    task = await services.create_task(
        db_session, TaskCreate(title="Private"), user_id=owner.id
    )

    with pytest.raises(PermissionError):
        await services.get_task(db_session, task.id, user_id=stranger.id)
    with pytest.raises(PermissionError):
        await services.update_task(
            db_session, task.id, TaskUpdate(title="Mine"), user_id=stranger.id
        )
    with pytest.raises(PermissionError):
        await services.remove_task(db_session, task.id, user_id=stranger.id)


async def test_remove_task(db_session, make_user):
    owner = await make_user()
    task = await services.create_task(
        db_session, TaskCreate(title="Temporary"), user_id=owner.id
    )

    result = await services.remove_task(db_session, task.id, user_id=owner.id)

    assert result == {"message": "Task deleted successfully"}
    with pytest.raises(NotFoundError):
        await services.get_task(db_session, task.id, user_id=owner.id)


async def test_missing_task(db_session, make_user):
    owner = await make_user()

    with pytest.raises(NotFoundError):
        await services.update_task(
            db_session, uuid4(), TaskUpdate(title="x"), user_id=owner.id
        )


async def test_task_routes(client, make_user, auth_headers):
    owner = await make_user()
    headers = auth_headers(owner)

    created = await client.post(
        "/api/tasks", json={"title": "Fix gutter", "frequency": "MONTHLY"}, headers=headers
    )
    assert created.status_code == 201
    task_id = created.json()["data"]["id"]
    assert created.json()["data"]["status"] == "OPEN"

    listed = await client.get("/api/tasks", params={"status": "OPEN"}, headers=headers)
    assert [t["id"] for t in listed.json()["data"]] == [task_id]

    patched = await client.patch(
        f"/api/tasks/{task_id}", json={"status": "RESOLVED"}, headers=headers
    )
    assert patched.json()["data"]["status"] == "RESOLVED"

    deleted = await client.delete(f"/api/tasks/{task_id}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Task deleted successfully"

    missing = await client.get(f"/api/tasks/{task_id}", headers=headers)
    assert missing.status_code == 404


async def test_invalid_frequency_is_rejected(client, make_user, auth_headers):
    owner = await make_user()

    response = await client.post(
        "/api/tasks",
        json={"title": "Bad", "frequency": "HOURLY"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 422
