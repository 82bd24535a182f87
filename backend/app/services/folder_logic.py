"""Folder Entity Logic — folder records, their task membership, and progress.

Invariants:
    - A folder is visible only to its owner; absent and foreign are both 404
    - task_refs is a cache: reads resolve membership through Task.folder_id
    - reset_progress only rewrites task status; task_refs and task count unchanged
    - clear_progress deletes every task in the folder and empties task_refs
    - delete_cascade removes tasks BEFORE the folder, even if the folder lookup fails

Design Decisions:
    - Multi-record operations are best-effort (one commit per record): a crash
      between writes can leave task_refs stale, which readers tolerate
    - append_task_ref/remove_task_ref are read-modify-write, not atomic: two
      concurrent writers on one folder can drop a ref. Reads do not depend
      on task_refs, so a lost ref only affects the cached order
    - task_refs rewritten as a new list (append/pull): JSON columns do not
      track in-place mutation
"""

import logging
from typing import Sequence

from app.core.domain_types import EntityKind, FolderId, OwnerId, TaskId, TaskStatus
from app.core.entity_lookup import LookupResult
from app.core.errors import ErrorContext, ResourceNotFoundError
from app.core.repository_protocols import RecordFilter, RecordRepository
from app.core.validate_fields import validate_title
from app.services.task_logic import TaskService

logger = logging.getLogger(__name__)


def _not_found(folder_id: FolderId, operation: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Folder", str(folder_id),
        ErrorContext(entity_kind=EntityKind.FOLDER.value, operation=operation),
    )


class FolderService:
    """Folder persistence rules; task writes delegated to TaskService."""

    def __init__(self, folders: RecordRepository, task_service: TaskService):
        self.folders = folders
        self.task_service = task_service

    async def create(self, owner: OwnerId, name: object):
        folder = await self.folders.insert({
            "name": validate_title(name, field="name"),
            "owner_id": owner,
            "task_refs": [],
        })
        logger.info(
            f"Folder created: {folder.id}",
            extra={"owner_id": owner, "entity_id": str(folder.id)},
        )
        return folder

    async def find(self, owner: OwnerId, folder_id: FolderId) -> LookupResult:
        record = await self.folders.find_one(
            RecordFilter(id=folder_id, owner=owner),
        )
        return LookupResult.hit(EntityKind.FOLDER, record)

    async def require(
        self, owner: OwnerId, folder_id: FolderId, operation: str = "get",
    ):
        """Existence-and-ownership check. Raises ResourceNotFoundError."""
        result = await self.find(owner, folder_id)
        if not result.found:
            raise _not_found(folder_id, operation)
        return result.record

    async def try_rename(
        self, owner: OwnerId, folder_id: FolderId, name: object,
    ) -> LookupResult:
        record = await self.folders.update_one(
            RecordFilter(id=folder_id, owner=owner),
            {"name": validate_title(name, field="name")},
        )
        if record is not None:
            logger.info(
                f"Folder renamed: {folder_id}",
                extra={"owner_id": owner, "entity_id": str(folder_id)},
            )
        return LookupResult.hit(EntityKind.FOLDER, record)

    async def list_for_owner(self, owner: OwnerId) -> Sequence:
        return await self.folders.find_many(RecordFilter(owner=owner))

    async def get_with_tasks(self, owner: OwnerId, folder_id: FolderId) -> tuple:
        """Folder plus its tasks, in task_refs order.

        Refs that no longer point at an owned task in this folder are skipped.
        Tasks filed here but missing from task_refs are appended after them.
        """
        folder = await self.require(owner, folder_id)
        members = await self.task_service.list_by_folder(owner, folder_id)
        by_id = {str(t.id): t for t in members}
        ordered = [by_id.pop(ref) for ref in folder.task_refs if ref in by_id]
        ordered.extend(t for t in members if str(t.id) in by_id)
        return folder, ordered

    async def list_tasks(self, owner: OwnerId, folder_id: FolderId) -> Sequence:
        return await self.task_service.list_by_folder(owner, folder_id)

    async def add_task(
        self, owner: OwnerId, folder_id: FolderId, fields: dict,
    ):
        """Create a task filed in this folder, then append it to task_refs."""
        await self.require(owner, folder_id, "add_task")
        task = await self.task_service.create(owner, fields, folder_id=folder_id)
        await self.append_task_ref(folder_id, TaskId(task.id))
        return task

    async def append_task_ref(self, folder_id: FolderId, task_id: TaskId) -> None:
        folder = await self.folders.find_one(RecordFilter(id=folder_id))
        if folder is None:
            logger.warning(f"Folder {folder_id} vanished before task_refs append")
            return
        ref = str(task_id)
        if ref in folder.task_refs:
            return
        await self.folders.update_one(
            RecordFilter(id=folder_id), {"task_refs": [*folder.task_refs, ref]},
        )

    async def remove_task_ref(self, folder_id: FolderId, task_id: TaskId) -> None:
        """Pull task_id from task_refs. Absent id or folder is a no-op."""
        folder = await self.folders.find_one(RecordFilter(id=folder_id))
        if folder is None:
            return
        ref = str(task_id)
        if ref not in folder.task_refs:
            return
        await self.folders.update_one(
            RecordFilter(id=folder_id),
            {"task_refs": [r for r in folder.task_refs if r != ref]},
        )

    async def update_task(
        self, owner: OwnerId, folder_id: FolderId, task_id: TaskId, patch: dict,
    ):
        """Update a task scoped to both this folder and the owner."""
        return await self.task_service.update_fields(
            owner, task_id, patch, folder_id=folder_id,
        )

    async def delete_task(
        self, owner: OwnerId, folder_id: FolderId, task_id: TaskId,
    ) -> None:
        task = await self.task_service.delete_by_id(
            owner, task_id, folder_id=folder_id,
        )
        await self.remove_task_ref(folder_id, TaskId(task.id))

    async def reset_progress(self, owner: OwnerId, folder_id: FolderId) -> int:
        """Every task in the folder back to Pending. Membership untouched."""
        await self.require(owner, folder_id, "reset_progress")
        count = await self.task_service.set_status_in_folder(
            owner, folder_id, TaskStatus.PENDING,
        )
        logger.info(
            f"Folder progress reset: {folder_id} ({count} task(s))",
            extra={"owner_id": owner, "entity_id": str(folder_id)},
        )
        return count

    async def clear_progress(self, owner: OwnerId, folder_id: FolderId) -> int:
        """Destructive: delete every task in the folder and empty task_refs."""
        await self.require(owner, folder_id, "clear_progress")
        count = await self.task_service.delete_by_folder(owner, folder_id)
        await self.folders.update_one(
            RecordFilter(id=folder_id, owner=owner), {"task_refs": []},
        )
        logger.info(
            f"Folder progress cleared: {folder_id} ({count} task(s))",
            extra={"owner_id": owner, "entity_id": str(folder_id)},
        )
        return count

    async def try_delete_cascade(
        self, owner: OwnerId, folder_id: FolderId,
    ) -> LookupResult:
        """Delete child tasks, then the folder. Miss when the folder was absent."""
        await self.task_service.delete_by_folder(owner, folder_id)
        record = await self.folders.delete_one(
            RecordFilter(id=folder_id, owner=owner),
        )
        if record is not None:
            logger.info(
                f"Folder deleted: {folder_id}",
                extra={"owner_id": owner, "entity_id": str(folder_id)},
            )
        return LookupResult.hit(EntityKind.FOLDER, record)

    async def delete_cascade(self, owner: OwnerId, folder_id: FolderId):
        result = await self.try_delete_cascade(owner, folder_id)
        if not result.found:
            raise _not_found(folder_id, "delete")
        return result.record
