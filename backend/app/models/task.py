"""Task ORM — persists a single to-do item owned by one user.

Invariants:
    - id is UUID primary key (client-side default)
    - title is non-nullable text; status is one of TaskStatus values
    - owner_id is set at creation and never updated
    - folder_id, when set, points to a Folder with the same owner_id
      (checked by the service layer before insert)

Design Decisions:
    - folder_id is the authoritative membership link; Folder.task_refs is a cache
    - status stored as String(20) over a DB enum: migrations stay trivial
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.core.domain_types import DEFAULT_TASK_STATUS
from app.db.base import Base


class Task(Base):
    """Task entity — optionally filed into a Folder."""
    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DEFAULT_TASK_STATUS.value,
    )
    folder_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("folders.id", ondelete="CASCADE"),
        nullable=True, index=True,
    )
    owner_id: Mapped[str] = mapped_column(
        String(128), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
