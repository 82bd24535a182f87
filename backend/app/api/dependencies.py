"""Request Dependencies — identity context and service wiring for routes.

Invariants:
    - get_current_user runs once per request, before any domain logic
    - The identity value is opaque: trimmed, never parsed or verified here
    - Services are built per request around the request's DB session

Design Decisions:
    - Identity read from a configurable header: token issuance and verification
      live upstream (gateway or auth service), the core only consumes the result
    - Plain constructor wiring over a DI container: three objects, one graph
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.domain_types import OwnerId
from app.core.errors import AuthenticationError
from app.infrastructure.database import get_db
from app.infrastructure.repositories import SqlFolderRepository, SqlTaskRepository
from app.services.entity_orchestrator import EntityOrchestrator
from app.services.folder_logic import FolderService
from app.services.task_logic import TaskService


async def get_current_user(request: Request) -> OwnerId:
    """Identity Context: the verified user id handed over by upstream auth."""
    raw = request.headers.get(get_settings().identity_header, "")
    owner = raw.strip()
    if not owner:
        raise AuthenticationError()
    return OwnerId(owner)


def build_services(db: AsyncSession) -> tuple[TaskService, FolderService]:
    task_service = TaskService(SqlTaskRepository(db))
    folder_service = FolderService(SqlFolderRepository(db), task_service)
    return task_service, folder_service


async def get_folder_service(db: AsyncSession = Depends(get_db)) -> FolderService:
    _, folder_service = build_services(db)
    return folder_service


async def get_orchestrator(db: AsyncSession = Depends(get_db)) -> EntityOrchestrator:
    task_service, folder_service = build_services(db)
    return EntityOrchestrator(task_service, folder_service)
