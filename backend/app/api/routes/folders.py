"""Folder Routes — folder detail, folder-scoped tasks, and progress (/api/v1/folders).

Invariants:
    - Every route depends on get_current_user; no anonymous access
    - Path ids are format-checked before any lookup (ValidationError -> 400)
    - reset progress is a PATCH (non-destructive); clear progress is a DELETE

Design Decisions:
    - Folder-scoped task updates go through FolderService so the folder id in
      the path is part of the ownership filter
"""

import logging

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_current_user, get_folder_service
from app.core.domain_types import OwnerId
from app.core.validate_fields import build_task_patch, parse_entity_id
from app.schemas.base import MessageResponse
from app.schemas.folder import (
    FolderCreate, FolderDetailResponse, FolderResponse, FolderTaskCreate,
    FolderTaskUpdate, StatusUpdate,
)
from app.schemas.task import TaskResponse
from app.services.folder_logic import FolderService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/folders", tags=["folders"])


@router.post(
    "", response_model=FolderResponse, status_code=status.HTTP_201_CREATED,
)
async def create_folder(
    body: FolderCreate,
    owner: OwnerId = Depends(get_current_user),
    folders: FolderService = Depends(get_folder_service),
):
    folder = await folders.create(owner, body.name)
    return FolderResponse.from_record(folder)


@router.get("/{folder_id}", response_model=FolderDetailResponse)
async def get_folder(
    folder_id: str,
    owner: OwnerId = Depends(get_current_user),
    folders: FolderService = Depends(get_folder_service),
):
    """Folder with its member tasks resolved."""
    folder, tasks = await folders.get_with_tasks(
        owner, parse_entity_id(folder_id, "folderId"),
    )
    return FolderDetailResponse.from_records(folder, tasks)


@router.get("/{folder_id}/tasks", response_model=list[TaskResponse])
async def list_folder_tasks(
    folder_id: str,
    owner: OwnerId = Depends(get_current_user),
    folders: FolderService = Depends(get_folder_service),
):
    tasks = await folders.list_tasks(owner, parse_entity_id(folder_id, "folderId"))
    return [TaskResponse.from_record(t) for t in tasks]


@router.post(
    "/{folder_id}/tasks", response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_task_to_folder(
    folder_id: str,
    body: FolderTaskCreate,
    owner: OwnerId = Depends(get_current_user),
    folders: FolderService = Depends(get_folder_service),
):
    parsed_id = parse_entity_id(folder_id, "folderId")
    fields = folders.task_service.validate(body.title, due_date=body.due_date)
    task = await folders.add_task(owner, parsed_id, fields)
    return TaskResponse.from_record(task)


@router.patch("/{folder_id}/tasks/{task_id}", response_model=TaskResponse)
async def update_task_in_folder(
    folder_id: str,
    task_id: str,
    body: FolderTaskUpdate,
    owner: OwnerId = Depends(get_current_user),
    folders: FolderService = Depends(get_folder_service),
):
    task = await folders.update_task(
        owner,
        parse_entity_id(folder_id, "folderId"),
        parse_entity_id(task_id, "taskId"),
        build_task_patch(body.title, body.status, body.due_date),
    )
    return TaskResponse.from_record(task)


@router.patch("/{folder_id}/tasks/{task_id}/status", response_model=TaskResponse)
async def update_task_status_in_folder(
    folder_id: str,
    task_id: str,
    body: StatusUpdate,
    owner: OwnerId = Depends(get_current_user),
    folders: FolderService = Depends(get_folder_service),
):
    task = await folders.update_task(
        owner,
        parse_entity_id(folder_id, "folderId"),
        parse_entity_id(task_id, "taskId"),
        build_task_patch(status=body.status),
    )
    return TaskResponse.from_record(task)


@router.delete("/{folder_id}/tasks/{task_id}", response_model=MessageResponse)
async def delete_task_in_folder(
    folder_id: str,
    task_id: str,
    owner: OwnerId = Depends(get_current_user),
    folders: FolderService = Depends(get_folder_service),
):
    await folders.delete_task(
        owner,
        parse_entity_id(folder_id, "folderId"),
        parse_entity_id(task_id, "taskId"),
    )
    return MessageResponse(message="Task deleted")


@router.patch("/{folder_id}/progress/reset", response_model=MessageResponse)
async def reset_progress(
    folder_id: str,
    owner: OwnerId = Depends(get_current_user),
    folders: FolderService = Depends(get_folder_service),
):
    """Every task in the folder back to Pending."""
    await folders.reset_progress(owner, parse_entity_id(folder_id, "folderId"))
    return MessageResponse(message="Folder progress reset")


@router.delete("/{folder_id}/progress", response_model=MessageResponse)
async def clear_progress(
    folder_id: str,
    owner: OwnerId = Depends(get_current_user),
    folders: FolderService = Depends(get_folder_service),
):
    """Delete every task in the folder and empty its membership list."""
    await folders.clear_progress(owner, parse_entity_id(folder_id, "folderId"))
    return MessageResponse(message="Folder progress cleared")
