"""Task Entity Logic — validates and mutates individual task records.

Invariants:
    - status defaults to Pending when absent; otherwise must be a TaskStatus value
    - owner_id is written once at insert and never appears in an update patch
    - folder_id is only set by callers that already checked folder ownership
    - Every read and write is filtered by owner

Design Decisions:
    - try_* variants return LookupResult instead of raising: the orchestrator
      needs "no task matched" as a value to fall back to folders
    - Raising variants (update_fields, delete_by_id) wrap the try_* ones
"""

import logging
from typing import Sequence

from app.core.domain_types import (
    DEFAULT_TASK_STATUS, EntityKind, FolderId, OwnerId, TaskId, TaskStatus,
)
from app.core.entity_lookup import LookupResult
from app.core.errors import ErrorContext, ResourceNotFoundError
from app.core.repository_protocols import RecordFilter, RecordRepository
from app.core.validate_fields import parse_due_date, parse_status, validate_title

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = frozenset({"id", "owner_id", "created_at"})


class TaskService:
    """Task persistence rules over a RecordRepository."""

    def __init__(self, tasks: RecordRepository):
        self.tasks = tasks

    @staticmethod
    def validate(
        title: object, status: object = None, due_date: object = None,
    ) -> dict:
        """Normalize task input. Raises ValidationError on the first bad field."""
        parsed_status = parse_status(status) or DEFAULT_TASK_STATUS
        return {
            "title": validate_title(title),
            "status": parsed_status.value,
            "due_date": parse_due_date(due_date),
        }

    async def create(
        self, owner: OwnerId, fields: dict, folder_id: FolderId | None = None,
    ):
        """Insert a validated task. folder_id must already be ownership-checked."""
        task = await self.tasks.insert({
            "title": fields["title"],
            "status": fields.get("status") or DEFAULT_TASK_STATUS.value,
            "due_date": fields.get("due_date"),
            "folder_id": folder_id,
            "owner_id": owner,
        })
        logger.info(
            f"Task created: {task.id}",
            extra={"owner_id": owner, "entity_id": str(task.id)},
        )
        return task

    async def find(self, owner: OwnerId, task_id: TaskId) -> LookupResult:
        record = await self.tasks.find_one(RecordFilter(id=task_id, owner=owner))
        return LookupResult.hit(EntityKind.TASK, record)

    async def try_update(
        self,
        owner: OwnerId,
        task_id: TaskId,
        patch: dict,
        folder_id: FolderId | None = None,
    ) -> LookupResult:
        """Apply only the supplied fields. Miss when no owned task matched."""
        clean = {k: v for k, v in patch.items() if k not in _IMMUTABLE_FIELDS}
        record = await self.tasks.update_one(
            RecordFilter(id=task_id, owner=owner, folder_id=folder_id), clean,
        )
        if record is not None:
            logger.info(
                f"Task updated: {task_id} ({', '.join(sorted(clean))})",
                extra={"owner_id": owner, "entity_id": str(task_id)},
            )
        return LookupResult.hit(EntityKind.TASK, record)

    async def update_fields(
        self,
        owner: OwnerId,
        task_id: TaskId,
        patch: dict,
        folder_id: FolderId | None = None,
    ):
        result = await self.try_update(owner, task_id, patch, folder_id)
        if not result.found:
            raise ResourceNotFoundError(
                "Task", str(task_id),
                ErrorContext(entity_kind=EntityKind.TASK.value, operation="update"),
            )
        return result.record

    async def try_delete(
        self, owner: OwnerId, task_id: TaskId, folder_id: FolderId | None = None,
    ) -> LookupResult:
        record = await self.tasks.delete_one(
            RecordFilter(id=task_id, owner=owner, folder_id=folder_id),
        )
        if record is not None:
            logger.info(
                f"Task deleted: {task_id}",
                extra={"owner_id": owner, "entity_id": str(task_id)},
            )
        return LookupResult.hit(EntityKind.TASK, record)

    async def delete_by_id(
        self, owner: OwnerId, task_id: TaskId, folder_id: FolderId | None = None,
    ):
        result = await self.try_delete(owner, task_id, folder_id)
        if not result.found:
            raise ResourceNotFoundError(
                "Task", str(task_id),
                ErrorContext(entity_kind=EntityKind.TASK.value, operation="delete"),
            )
        return result.record

    async def delete_by_folder(self, owner: OwnerId, folder_id: FolderId) -> int:
        """Bulk delete for folder cascade and clear-progress."""
        count = await self.tasks.delete_many(
            RecordFilter(owner=owner, folder_id=folder_id),
        )
        logger.info(
            f"Deleted {count} task(s) in folder {folder_id}",
            extra={"owner_id": owner, "entity_id": str(folder_id)},
        )
        return count

    async def set_status_in_folder(
        self, owner: OwnerId, folder_id: FolderId, status: TaskStatus,
    ) -> int:
        return await self.tasks.update_many(
            RecordFilter(owner=owner, folder_id=folder_id),
            {"status": status.value},
        )

    async def list_for_owner(self, owner: OwnerId) -> Sequence:
        return await self.tasks.find_many(RecordFilter(owner=owner))

    async def list_by_folder(self, owner: OwnerId, folder_id: FolderId) -> Sequence:
        return await self.tasks.find_many(
            RecordFilter(owner=owner, folder_id=folder_id),
        )

    async def list_unfiled(self, owner: OwnerId) -> Sequence:
        return await self.tasks.find_many(RecordFilter(owner=owner, unfiled=True))
