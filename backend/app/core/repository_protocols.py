"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Filters are conjunctions over {id, owner, folder}; unset fields do not filter
    - Each write is atomic for a single record; nothing spans records

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - One protocol shape for both collections: the storage contract is the same,
      only the record type differs
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, Sequence
from uuid import UUID

from app.core.domain_types import OwnerId


class TaskLike(Protocol):
    """Structural contract for Task records returned by storage."""
    id: UUID
    title: str
    due_date: datetime | None
    status: str
    folder_id: UUID | None
    owner_id: str
    created_at: datetime


class FolderLike(Protocol):
    """Structural contract for Folder records returned by storage."""
    id: UUID
    name: str
    owner_id: str
    task_refs: list
    created_at: datetime


@dataclass(frozen=True)
class RecordFilter:
    """Conjunctive filter. unfiled=True matches records with no folder."""
    id: UUID | None = None
    owner: OwnerId | None = None
    folder_id: UUID | None = None
    unfiled: bool = False


@dataclass(frozen=True)
class SortOrder:
    """Single-column sort for find_many."""
    field: str
    descending: bool = False


class RecordRepository(Protocol):
    """Contract for one record collection, implemented by the shell."""
    async def insert(self, values: dict) -> object: ...
    async def find_one(self, where: RecordFilter) -> object | None: ...
    async def find_many(
        self, where: RecordFilter, order: SortOrder | None = None,
    ) -> Sequence[object]: ...
    async def update_one(self, where: RecordFilter, patch: dict) -> object | None: ...
    async def update_many(self, where: RecordFilter, patch: dict) -> int: ...
    async def delete_one(self, where: RecordFilter) -> object | None: ...
    async def delete_many(self, where: RecordFilter) -> int: ...
