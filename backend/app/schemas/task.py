"""Task Schemas — create/update payloads and task responses for /api/v1/task.

Invariants:
    - EntityCreate.type discriminates task vs folder; folder requests ignore
      status, dueDate and folder
    - Fields stay loosely typed (str | None): the orchestrator owns validation
      so the same rules apply to HTTP and in-process callers
"""

from datetime import datetime
from uuid import UUID

from app.core.domain_types import EntityKind
from app.core.repository_protocols import TaskLike
from app.schemas.base import ApiModel


class EntityCreate(ApiModel):
    """POST /api/v1/task body."""
    type: str | None = None
    title: str | None = None
    status: str | None = None
    due_date: str | None = None
    folder: str | None = None


class EntityUpdate(ApiModel):
    """PATCH /api/v1/task/{id} body. Folders only honour title."""
    title: str | None = None
    status: str | None = None


class TaskResponse(ApiModel):
    """Public task shape."""
    kind: EntityKind = EntityKind.TASK
    id: UUID
    title: str
    due_date: datetime | None = None
    status: str
    folder: UUID | None = None
    owner: str
    created_at: datetime

    @classmethod
    def from_record(cls, task: TaskLike) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            due_date=task.due_date,
            status=task.status,
            folder=task.folder_id,
            owner=task.owner_id,
            created_at=task.created_at,
        )
