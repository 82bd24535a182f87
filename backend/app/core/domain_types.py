"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TaskId, FolderId wrap UUIDs; never use bare UUID in domain logic
    - OwnerId wraps the opaque upstream user identifier (a string)
    - All valid states encoded as Enums; no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - TaskStatus is three-valued (Pending/Working/Completed) everywhere, including
      folder-scoped status updates (ADR: one enum for every write path)
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", UUID)
FolderId = NewType("FolderId", UUID)
OwnerId = NewType("OwnerId", str)


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task progress states. Any value may be set directly; no transition rules."""
    PENDING = "Pending"
    WORKING = "Working"
    COMPLETED = "Completed"


class EntityKind(str, Enum):
    """Target kinds an ambiguous id can resolve to."""
    TASK = "task"
    FOLDER = "folder"


# Order in which an untyped id is probed. Cost is one lookup per kind.
PROBE_ORDER: tuple[EntityKind, ...] = (EntityKind.TASK, EntityKind.FOLDER)

DEFAULT_TASK_STATUS = TaskStatus.PENDING
