"""SQL Repositories — storage contract over SQLite and failure mapping.

Tests cover:
    - Filters are conjunctions over id / owner / folder / unfiled
    - update_one and delete_one return None when nothing matched
    - update_many / delete_many report affected row counts
    - Driver failures roll back and surface as DatabaseError
"""

from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import DatabaseError
from app.core.repository_protocols import RecordFilter, SortOrder
from app.infrastructure.repositories import SqlFolderRepository, SqlTaskRepository
from tests.identities import OTHER_OWNER, OWNER


@pytest.fixture
def tasks(test_db):
    return SqlTaskRepository(test_db)


@pytest.fixture
def folders(test_db):
    return SqlFolderRepository(test_db)


async def test_insert_assigns_id_and_defaults(tasks):
    task = await tasks.insert({"title": "a", "owner_id": OWNER})
    assert task.id is not None
    assert task.status == "Pending"
    assert task.created_at is not None


async def test_find_one_filters_by_owner(tasks):
    task = await tasks.insert({"title": "a", "owner_id": OWNER})
    assert await tasks.find_one(RecordFilter(id=task.id, owner=OWNER)) is not None
    assert await tasks.find_one(RecordFilter(id=task.id, owner=OTHER_OWNER)) is None


async def test_find_many_sorts(folders):
    for name in ("beta", "alpha"):
        await folders.insert({"name": name, "owner_id": OWNER, "task_refs": []})
    by_name = await folders.find_many(RecordFilter(owner=OWNER))
    assert [f.name for f in by_name] == ["alpha", "beta"]
    reverse = await folders.find_many(
        RecordFilter(owner=OWNER), SortOrder("name", descending=True),
    )
    assert [f.name for f in reverse] == ["beta", "alpha"]


async def test_update_one_miss_returns_none(tasks):
    assert await tasks.update_one(RecordFilter(id=uuid4()), {"title": "x"}) is None


async def test_update_many_counts_rows(tasks, folders):
    folder = await folders.insert({"name": "f", "owner_id": OWNER, "task_refs": []})
    for title in ("a", "b"):
        await tasks.insert({
            "title": title, "owner_id": OWNER, "folder_id": folder.id,
            "status": "Completed",
        })
    count = await tasks.update_many(
        RecordFilter(owner=OWNER, folder_id=folder.id), {"status": "Pending"},
    )
    assert count == 2


async def test_delete_one_returns_record_then_none(tasks):
    task = await tasks.insert({"title": "a", "owner_id": OWNER})
    deleted = await tasks.delete_one(RecordFilter(id=task.id, owner=OWNER))
    assert deleted.id == task.id
    assert await tasks.delete_one(RecordFilter(id=task.id, owner=OWNER)) is None


async def test_delete_many_unfiled_only(tasks, folders):
    folder = await folders.insert({"name": "f", "owner_id": OWNER, "task_refs": []})
    await tasks.insert({"title": "filed", "owner_id": OWNER, "folder_id": folder.id})
    await tasks.insert({"title": "loose", "owner_id": OWNER})
    assert await tasks.delete_many(RecordFilter(owner=OWNER, unfiled=True)) == 1
    remaining = await tasks.find_many(RecordFilter(owner=OWNER))
    assert [t.title for t in remaining] == ["filed"]


async def test_folders_reject_folder_filter(folders):
    with pytest.raises(ValueError):
        await folders.find_many(RecordFilter(folder_id=uuid4()))


class _BrokenSession:
    def __init__(self):
        self.rolled_back = False

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    async def rollback(self):
        self.rolled_back = True


async def test_driver_failure_becomes_database_error():
    session = _BrokenSession()
    repo = SqlTaskRepository(session)
    with pytest.raises(DatabaseError) as exc:
        await repo.find_one(RecordFilter(owner=OWNER))
    assert exc.value.operation == "find_one"
    assert exc.value.http_status == 503
    assert session.rolled_back
