"""Task/Folder Orchestrator — operations whose target may be a task or a folder.

Invariants:
    - Every operation is scoped to the owner handed in by the identity layer
    - Untyped ids are probed in PROBE_ORDER (task, then folder); first hit wins
    - A task's folder reference is format-checked, then ownership-checked,
      before any write happens
    - NotFound for absent and for foreign records alike (no existence leak)

Design Decisions:
    - No id-to-kind registry: a lookup costs one query per kind (two today)
    - Folder fallback on update is a rename from title alone; status is ignored
    - Deleting a task directly also pulls it from its folder's task_refs so the
      membership cache does not keep dead ids
"""

import logging
from typing import Sequence

from app.core.domain_types import PROBE_ORDER, EntityKind, FolderId, OwnerId, TaskId
from app.core.entity_lookup import LookupResult, resolve_first
from app.core.errors import ErrorContext, ResourceNotFoundError, ValidationError
from app.core.validate_fields import (
    build_task_patch, parse_entity_id,
)
from app.schemas.task import EntityCreate, EntityUpdate
from app.services.folder_logic import FolderService
from app.services.task_logic import TaskService

logger = logging.getLogger(__name__)

TASK_DELETED = "Task deleted successfully."
FOLDER_DELETED = "Folder and its tasks deleted successfully."


def _parse_kind(raw: object) -> EntityKind:
    try:
        return EntityKind(str(raw).strip().lower())
    except ValueError:
        raise ValidationError(
            f"Invalid type '{raw}'. Allowed: task, folder.", "type",
        )


def resolve_delete_target(
    first: str | None, second: str | None = None,
) -> tuple[EntityKind | None, str]:
    """Unify the delete call shapes into (type_hint, raw_id).

    - (type, id): explicit hint
    - (segment,) where segment is a valid id: no hint
    - (id,): bare id, no hint
    """
    if second is None:
        # Raises "Missing" for a blank segment, "Invalid" for a malformed one
        parse_entity_id(first)
        return None, first
    if first is None or not str(first).strip():
        return None, second
    return _parse_kind(first), second


class EntityOrchestrator:
    """Dispatches create/get/update/delete across task and folder logic."""

    def __init__(self, task_service: TaskService, folder_service: FolderService):
        self.task_service = task_service
        self.folder_service = folder_service

    # ─── Create ──────────────────────────────────────────────────

    async def create_entity(self, owner: OwnerId, payload: EntityCreate) -> LookupResult:
        if payload.title is None or payload.type is None:
            raise ValidationError("Title and type are required.", "body")
        kind = _parse_kind(payload.type)

        if kind is EntityKind.FOLDER:
            folder = await self.folder_service.create(owner, payload.title)
            return LookupResult.hit(EntityKind.FOLDER, folder)

        fields = self.task_service.validate(
            payload.title, payload.status, payload.due_date,
        )
        folder_id = None
        if payload.folder:
            # Format first: malformed ids never reach storage
            folder_id = FolderId(parse_entity_id(payload.folder, "folder"))
            await self.folder_service.require(owner, folder_id, "create_task")

        task = await self.task_service.create(owner, fields, folder_id=folder_id)
        if folder_id is not None:
            await self.folder_service.append_task_ref(folder_id, TaskId(task.id))
        return LookupResult.hit(EntityKind.TASK, task)

    # ─── Read ────────────────────────────────────────────────────

    async def list_all(self, owner: OwnerId) -> dict:
        return {
            "tasks": await self.task_service.list_for_owner(owner),
            "folders": await self.folder_service.list_for_owner(owner),
        }

    async def list_by_folder(self, owner: OwnerId, raw_folder_id: object) -> Sequence:
        folder_id = FolderId(parse_entity_id(raw_folder_id, "folderId"))
        return await self.task_service.list_by_folder(owner, folder_id)

    async def list_unfiled(self, owner: OwnerId) -> Sequence:
        return await self.task_service.list_unfiled(owner)

    async def _probe(self, owner: OwnerId, entity_id, kind: EntityKind) -> LookupResult:
        if kind is EntityKind.TASK:
            return await self.task_service.find(owner, TaskId(entity_id))
        return await self.folder_service.find(owner, FolderId(entity_id))

    async def get_by_id(self, owner: OwnerId, raw_id: object) -> LookupResult:
        entity_id = parse_entity_id(raw_id)
        for kind in PROBE_ORDER:
            result = await self._probe(owner, entity_id, kind)
            if result.found:
                return result
        raise ResourceNotFoundError(
            "Task or folder", str(entity_id), ErrorContext(operation="get"),
        )

    # ─── Update ──────────────────────────────────────────────────

    async def update_by_id(
        self, owner: OwnerId, raw_id: object, payload: EntityUpdate,
    ) -> LookupResult:
        entity_id = parse_entity_id(raw_id)
        patch = build_task_patch(title=payload.title, status=payload.status)

        result = await self.task_service.try_update(owner, TaskId(entity_id), patch)
        if not result.found:
            logger.info(
                f"No task {entity_id}; trying folder rename",
                extra={"owner_id": owner, "entity_id": str(entity_id)},
            )
            result = await self._rename_folder(
                owner, FolderId(entity_id), patch.get("title"),
            )
        if not result.found:
            raise ResourceNotFoundError(
                "Task or folder", str(entity_id), ErrorContext(operation="update"),
            )
        return result

    async def _rename_folder(self, owner: OwnerId, folder_id, title) -> LookupResult:
        if title is None:
            return await self.folder_service.find(owner, folder_id)
        return await self.folder_service.try_rename(owner, folder_id, title)

    # ─── Delete ──────────────────────────────────────────────────

    async def delete_by_id(
        self, owner: OwnerId, type_hint: EntityKind | None, raw_id: object,
    ) -> str:
        entity_id = parse_entity_id(raw_id)
        kinds = (type_hint,) if type_hint is not None else PROBE_ORDER

        results = []
        for kind in kinds:
            result = await self._delete(owner, entity_id, kind)
            results.append(result)
            if result.found:
                break
        result = resolve_first(results)

        if not result.found:
            resource = type_hint.value.capitalize() if type_hint else "Task or folder"
            raise ResourceNotFoundError(
                resource, str(entity_id), ErrorContext(operation="delete"),
            )
        return TASK_DELETED if result.kind is EntityKind.TASK else FOLDER_DELETED

    async def _delete(self, owner: OwnerId, entity_id, kind: EntityKind) -> LookupResult:
        if kind is EntityKind.FOLDER:
            return await self.folder_service.try_delete_cascade(
                owner, FolderId(entity_id),
            )
        result = await self.task_service.try_delete(owner, TaskId(entity_id))
        if result.found and result.record.folder_id is not None:
            await self.folder_service.remove_task_ref(
                FolderId(result.record.folder_id), TaskId(entity_id),
            )
        return result
