"""Entity Schemas — responses that may carry either a task or a folder.

Design Decisions:
    - entity_response maps a LookupResult to the kind-specific schema so
      routes never branch on ORM types
"""

from app.core.domain_types import EntityKind
from app.core.entity_lookup import LookupResult
from app.schemas.base import ApiModel
from app.schemas.folder import FolderResponse
from app.schemas.task import TaskResponse


class EntityEnvelope(ApiModel):
    """Write confirmation carrying the affected record."""
    message: str
    data: TaskResponse | FolderResponse


class OverviewResponse(ApiModel):
    """GET /api/v1/task — everything the caller owns."""
    tasks: list[TaskResponse]
    folders: list[FolderResponse]


def entity_response(result: LookupResult) -> TaskResponse | FolderResponse:
    if result.kind is EntityKind.TASK:
        return TaskResponse.from_record(result.record)
    return FolderResponse.from_record(result.record)
