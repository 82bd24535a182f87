"""Folder Schemas — payloads and responses for /api/v1/folders."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.core.domain_types import EntityKind
from app.core.repository_protocols import FolderLike, TaskLike
from app.schemas.base import ApiModel
from app.schemas.task import TaskResponse


class FolderCreate(ApiModel):
    name: str | None = None


class FolderTaskCreate(ApiModel):
    """POST /folders/{folderId}/tasks body."""
    title: str | None = None
    due_date: str | None = None


class FolderTaskUpdate(ApiModel):
    """PATCH /folders/{folderId}/tasks/{taskId} body."""
    title: str | None = None
    status: str | None = None
    due_date: str | None = None


class StatusUpdate(ApiModel):
    status: str | None = None


class FolderResponse(ApiModel):
    """Public folder shape. taskRefs is the membership cache as stored."""
    kind: EntityKind = EntityKind.FOLDER
    id: UUID
    name: str
    owner: str
    task_refs: list[str] = Field(default_factory=list)
    created_at: datetime

    @classmethod
    def from_record(cls, folder: FolderLike) -> "FolderResponse":
        return cls(
            id=folder.id,
            name=folder.name,
            owner=folder.owner_id,
            task_refs=list(folder.task_refs or []),
            created_at=folder.created_at,
        )


class FolderDetailResponse(FolderResponse):
    """Folder with resolved member tasks."""
    tasks: list[TaskResponse] = Field(default_factory=list)

    @classmethod
    def from_records(
        cls, folder: FolderLike, tasks: list[TaskLike],
    ) -> "FolderDetailResponse":
        return cls(
            id=folder.id,
            name=folder.name,
            owner=folder.owner_id,
            task_refs=list(folder.task_refs or []),
            created_at=folder.created_at,
            tasks=[TaskResponse.from_record(t) for t in tasks],
        )
