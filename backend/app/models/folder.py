"""Folder ORM — persists a named group of tasks owned by one user.

Invariants:
    - id is UUID primary key (client-side default)
    - name is non-nullable text; owner_id is immutable after creation
    - task_refs is an ordered list of task id strings (membership cache)

Design Decisions:
    - JSON column for task_refs: keeps the folder payload shape without a join table
    - No ORM relationship to Task: membership is resolved through Task.folder_id,
      task_refs can drift and is never trusted for authorization
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Folder(Base):
    """Folder entity — flat, no nesting."""
    __tablename__ = "folders"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    owner_id: Mapped[str] = mapped_column(
        String(128), nullable=False, index=True,
    )
    task_refs: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
