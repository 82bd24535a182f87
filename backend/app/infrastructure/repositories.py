"""SQL Repositories — SQLAlchemy implementation of the record storage contract.

Invariants:
    - Every write commits on its own: atomic per record, never across records
    - Every SQLAlchemyError rolls back and surfaces as DatabaseError (no retries)
    - Filters are conjunctions; an empty RecordFilter matches everything

Design Decisions:
    - One generic SqlRepository parameterized by ORM model: tasks and folders share
      the contract, subclasses only pin the model and default ordering
    - update_one/delete_one load the row first so the caller gets the record back
      (mirrors find-and-modify semantics of document stores)
"""

import functools
import logging
from typing import Sequence

from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DatabaseError
from app.core.repository_protocols import RecordFilter, SortOrder
from app.models.folder import Folder
from app.models.task import Task

logger = logging.getLogger(__name__)


def storage_operation(operation: str):
    """Map driver failures of one repository call to DatabaseError."""
    def decorator(fn):
        @functools.wraps(fn)
        async def wrapper(self, *args, **kwargs):
            try:
                return await fn(self, *args, **kwargs)
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error(
                    f"Storage {operation} failed on {self.collection}: {e}",
                    extra={"operation": operation},
                )
                raise DatabaseError("Storage operation failed", operation) from e
        return wrapper
    return decorator


class SqlRepository:
    """Record storage over one ORM model."""

    model: type = None
    collection: str = ""
    default_order: SortOrder | None = None

    def __init__(self, db: AsyncSession):
        self.db = db

    def _conditions(self, where: RecordFilter) -> list:
        conditions = []
        if where.id is not None:
            conditions.append(self.model.id == where.id)
        if where.owner is not None:
            conditions.append(self.model.owner_id == where.owner)
        if where.folder_id is not None:
            conditions.append(self.model.folder_id == where.folder_id)
        if where.unfiled:
            conditions.append(self.model.folder_id.is_(None))
        return conditions

    async def _load(self, where: RecordFilter):
        result = await self.db.execute(
            select(self.model)
            .where(*self._conditions(where))
            .limit(1)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    @storage_operation("insert")
    async def insert(self, values: dict):
        record = self.model(**values)
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    @storage_operation("find_one")
    async def find_one(self, where: RecordFilter):
        return await self._load(where)

    @storage_operation("find_many")
    async def find_many(
        self, where: RecordFilter, order: SortOrder | None = None,
    ) -> Sequence:
        query = (
            select(self.model)
            .where(*self._conditions(where))
            .execution_options(populate_existing=True)
        )
        order = order or self.default_order
        if order is not None:
            column = getattr(self.model, order.field)
            query = query.order_by(column.desc() if order.descending else column.asc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    @storage_operation("update_one")
    async def update_one(self, where: RecordFilter, patch: dict):
        record = await self._load(where)
        if record is None:
            return None
        for key, value in patch.items():
            setattr(record, key, value)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    @storage_operation("update_many")
    async def update_many(self, where: RecordFilter, patch: dict) -> int:
        result = await self.db.execute(
            update(self.model)
            .where(*self._conditions(where))
            .values(**patch),
        )
        await self.db.commit()
        return result.rowcount or 0

    @storage_operation("delete_one")
    async def delete_one(self, where: RecordFilter):
        record = await self._load(where)
        if record is None:
            return None
        await self.db.delete(record)
        await self.db.commit()
        return record

    @storage_operation("delete_many")
    async def delete_many(self, where: RecordFilter) -> int:
        result = await self.db.execute(
            delete(self.model)
            .where(*self._conditions(where)),
        )
        await self.db.commit()
        return result.rowcount or 0


class SqlTaskRepository(SqlRepository):
    """Tasks collection. Newest first by default."""
    model = Task
    collection = "tasks"
    default_order = SortOrder("created_at", descending=True)


class SqlFolderRepository(SqlRepository):
    """Folders collection. Ordered by name by default."""
    model = Folder
    collection = "folders"
    default_order = SortOrder("name")

    def _conditions(self, where: RecordFilter) -> list:
        if where.folder_id is not None or where.unfiled:
            raise ValueError("folders cannot be filtered by folder reference")
        return super()._conditions(where)
