"""Task Entity Logic — validation, owner-scoped updates and deletes.

Invariants checked:
    - status defaults to Pending; unknown status rejected before any write
    - update_fields touches only supplied fields; foreign tasks are NotFound
    - delete_by_folder removes only the owner's tasks in that folder
"""

from typing import get_type_hints
from uuid import uuid4

import pytest

from app.core.domain_types import FolderId, TaskId
from app.core.errors import ResourceNotFoundError, ValidationError
from app.services.folder_logic import FolderService
from app.services.task_logic import TaskService
from tests.identities import OTHER_OWNER, OWNER


async def test_create_defaults_status_to_pending(task_service):
    task = await task_service.create(OWNER, task_service.validate("Write report"))
    assert task.status == "Pending"
    assert task.folder_id is None
    assert task.owner_id == OWNER


def test_validate_rejects_unknown_status(task_service):
    with pytest.raises(ValidationError):
        task_service.validate("Write report", status="Done")


def test_validate_parses_due_date(task_service):
    fields = task_service.validate("Pay rent", due_date="2026-11-01")
    assert fields["due_date"].year == 2026
    assert fields["status"] == "Pending"


async def test_update_fields_applies_only_patch(task_service):
    task = await task_service.create(
        OWNER, task_service.validate("Draft", status="Working"),
    )
    updated = await task_service.update_fields(OWNER, task.id, {"title": "Final"})
    assert updated.title == "Final"
    assert updated.status == "Working"


async def test_update_fields_ignores_owner_in_patch(task_service):
    task = await task_service.create(OWNER, task_service.validate("Mine"))
    updated = await task_service.update_fields(
        OWNER, task.id, {"owner_id": OTHER_OWNER, "status": "Completed"},
    )
    assert updated.owner_id == OWNER
    assert updated.status == "Completed"


async def test_update_fields_foreign_task_is_not_found(task_service):
    task = await task_service.create(OWNER, task_service.validate("Mine"))
    with pytest.raises(ResourceNotFoundError):
        await task_service.update_fields(OTHER_OWNER, task.id, {"title": "Stolen"})


async def test_update_fields_missing_task_is_not_found(task_service):
    with pytest.raises(ResourceNotFoundError):
        await task_service.update_fields(OWNER, uuid4(), {"title": "x"})


async def test_try_update_miss_does_not_raise(task_service):
    result = await task_service.try_update(OWNER, uuid4(), {"title": "x"})
    assert not result.found


async def test_delete_by_id_then_not_found(task_service):
    task = await task_service.create(OWNER, task_service.validate("Once"))
    await task_service.delete_by_id(OWNER, task.id)
    with pytest.raises(ResourceNotFoundError):
        await task_service.delete_by_id(OWNER, task.id)


async def test_delete_by_folder_scoped_to_owner(task_service, folder_service):
    folder = await folder_service.create(OWNER, "Home")
    await task_service.create(OWNER, task_service.validate("a"), folder_id=folder.id)
    await task_service.create(OWNER, task_service.validate("b"), folder_id=folder.id)
    await task_service.create(OWNER, task_service.validate("loose"))

    assert await task_service.delete_by_folder(OTHER_OWNER, folder.id) == 0
    assert await task_service.delete_by_folder(OWNER, folder.id) == 2
    remaining = await task_service.list_for_owner(OWNER)
    assert [t.title for t in remaining] == ["loose"]


async def test_list_unfiled_excludes_filed_tasks(task_service, folder_service):
    folder = await folder_service.create(OWNER, "Work")
    await task_service.create(OWNER, task_service.validate("filed"), folder_id=folder.id)
    await task_service.create(OWNER, task_service.validate("unfiled"))
    await task_service.create(OTHER_OWNER, task_service.validate("theirs"))

    unfiled = await task_service.list_unfiled(OWNER)
    assert [t.title for t in unfiled] == ["unfiled"]


def test_service_ids_are_typed_by_kind():
    hints = get_type_hints(TaskService.try_update)
    assert hints["task_id"] is TaskId
    assert get_type_hints(TaskService.list_by_folder)["folder_id"] is FolderId
    ref_hints = get_type_hints(FolderService.append_task_ref)
    assert ref_hints["folder_id"] is FolderId
    assert ref_hints["task_id"] is TaskId
