"""Task Routes — kind-ambiguous CRUD over tasks and folders (/api/v1/task).

Invariants:
    - Every route depends on get_current_user; no anonymous access
    - Routes only translate HTTP <-> orchestrator calls, no business rules
    - Static paths (/nofolder, /folder/{id}) registered before /{entity_id}

Design Decisions:
    - Two DELETE shapes (/{type}/{id} and /{id}) share one handler path through
      resolve_delete_target
"""

import logging

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_current_user, get_orchestrator
from app.core.domain_types import EntityKind, OwnerId
from app.schemas.base import MessageResponse
from app.schemas.entity import (
    EntityEnvelope, OverviewResponse, entity_response,
)
from app.schemas.folder import FolderResponse
from app.schemas.task import EntityCreate, EntityUpdate, TaskResponse
from app.services.entity_orchestrator import EntityOrchestrator, resolve_delete_target

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/task", tags=["tasks"])


@router.get("", response_model=OverviewResponse)
async def list_all(
    owner: OwnerId = Depends(get_current_user),
    orchestrator: EntityOrchestrator = Depends(get_orchestrator),
):
    """All tasks (newest first) and folders (by name) of the caller."""
    listing = await orchestrator.list_all(owner)
    return OverviewResponse(
        tasks=[TaskResponse.from_record(t) for t in listing["tasks"]],
        folders=[FolderResponse.from_record(f) for f in listing["folders"]],
    )


@router.get("/folder/{folder_id}", response_model=list[TaskResponse])
async def list_by_folder(
    folder_id: str,
    owner: OwnerId = Depends(get_current_user),
    orchestrator: EntityOrchestrator = Depends(get_orchestrator),
):
    tasks = await orchestrator.list_by_folder(owner, folder_id)
    return [TaskResponse.from_record(t) for t in tasks]


@router.get("/nofolder", response_model=list[TaskResponse])
async def list_unfiled(
    owner: OwnerId = Depends(get_current_user),
    orchestrator: EntityOrchestrator = Depends(get_orchestrator),
):
    tasks = await orchestrator.list_unfiled(owner)
    return [TaskResponse.from_record(t) for t in tasks]


@router.post(
    "", response_model=EntityEnvelope, status_code=status.HTTP_201_CREATED,
)
async def create_entity(
    body: EntityCreate,
    owner: OwnerId = Depends(get_current_user),
    orchestrator: EntityOrchestrator = Depends(get_orchestrator),
):
    """Create a task or a folder depending on body.type."""
    result = await orchestrator.create_entity(owner, body)
    label = "Folder" if result.kind is EntityKind.FOLDER else "Task"
    return EntityEnvelope(
        message=f"{label} created successfully", data=entity_response(result),
    )


@router.get("/{entity_id}", response_model=TaskResponse | FolderResponse)
async def get_entity(
    entity_id: str,
    owner: OwnerId = Depends(get_current_user),
    orchestrator: EntityOrchestrator = Depends(get_orchestrator),
):
    """Task by id, falling back to a folder with that id."""
    result = await orchestrator.get_by_id(owner, entity_id)
    return entity_response(result)


@router.patch("/{entity_id}", response_model=EntityEnvelope)
async def update_entity(
    entity_id: str,
    body: EntityUpdate,
    owner: OwnerId = Depends(get_current_user),
    orchestrator: EntityOrchestrator = Depends(get_orchestrator),
):
    """Update task title/status, or rename a folder from title."""
    result = await orchestrator.update_by_id(owner, entity_id, body)
    return EntityEnvelope(
        message="Task or folder updated.", data=entity_response(result),
    )


@router.delete("/{type_hint}/{entity_id}", response_model=MessageResponse)
async def delete_typed_entity(
    type_hint: str,
    entity_id: str,
    owner: OwnerId = Depends(get_current_user),
    orchestrator: EntityOrchestrator = Depends(get_orchestrator),
):
    kind, raw_id = resolve_delete_target(type_hint, entity_id)
    message = await orchestrator.delete_by_id(owner, kind, raw_id)
    return MessageResponse(message=message)


@router.delete("/{entity_id}", response_model=MessageResponse)
async def delete_entity(
    entity_id: str,
    owner: OwnerId = Depends(get_current_user),
    orchestrator: EntityOrchestrator = Depends(get_orchestrator),
):
    """Delete by bare id: task first, then folder (with its tasks)."""
    kind, raw_id = resolve_delete_target(entity_id)
    message = await orchestrator.delete_by_id(owner, kind, raw_id)
    return MessageResponse(message=message)
