"""Folder Routes — HTTP contract of /api/v1/folders.

Invariants checked:
    - Folder detail includes resolved tasks
    - Folder-scoped task routes require the task to live in that folder
    - progress/reset keeps tasks; progress (DELETE) removes them
"""

from uuid import uuid4

from tests.identities import OTHER_HEADERS

BASE = "/api/v1/folders"


async def _folder(client, name="Sprint"):
    res = await client.post(BASE, json={"name": name})
    assert res.status_code == 201, res.text
    return res.json()


async def _add(client, folder_id, title, **extra):
    res = await client.post(
        f"{BASE}/{folder_id}/tasks", json={"title": title, **extra},
    )
    assert res.status_code == 201, res.text
    return res.json()


async def test_create_folder_requires_name(client):
    res = await client.post(BASE, json={})
    assert res.status_code == 400


async def test_get_folder_with_tasks(client):
    folder = await _folder(client)
    first = await _add(client, folder["id"], "one")
    second = await _add(client, folder["id"], "two", dueDate="2026-11-30")

    res = await client.get(f"{BASE}/{folder['id']}")
    assert res.status_code == 200
    body = res.json()
    assert body["taskRefs"] == [first["id"], second["id"]]
    assert [t["title"] for t in body["tasks"]] == ["one", "two"]
    assert second["folder"] == folder["id"]


async def test_get_folder_invalid_id_is_400(client):
    res = await client.get(f"{BASE}/nope")
    assert res.status_code == 400


async def test_get_foreign_folder_is_404(client):
    folder = await _folder(client)
    res = await client.get(f"{BASE}/{folder['id']}", headers=OTHER_HEADERS)
    assert res.status_code == 404


async def test_add_task_requires_title(client):
    folder = await _folder(client)
    res = await client.post(f"{BASE}/{folder['id']}/tasks", json={})
    assert res.status_code == 400


async def test_add_task_to_missing_folder_is_404(client):
    res = await client.post(f"{BASE}/{uuid4()}/tasks", json={"title": "x"})
    assert res.status_code == 404


async def test_list_folder_tasks(client):
    folder = await _folder(client)
    await _add(client, folder["id"], "one")
    res = await client.get(f"{BASE}/{folder['id']}/tasks")
    assert [t["title"] for t in res.json()] == ["one"]


async def test_update_task_in_folder(client):
    folder = await _folder(client)
    task = await _add(client, folder["id"], "one")
    res = await client.patch(
        f"{BASE}/{folder['id']}/tasks/{task['id']}",
        json={"title": "renamed", "status": "Working"},
    )
    assert res.status_code == 200
    assert res.json()["title"] == "renamed"
    assert res.json()["status"] == "Working"


async def test_update_task_status_in_folder(client):
    folder = await _folder(client)
    task = await _add(client, folder["id"], "one")
    res = await client.patch(
        f"{BASE}/{folder['id']}/tasks/{task['id']}/status",
        json={"status": "Completed"},
    )
    assert res.status_code == 200
    assert res.json()["status"] == "Completed"


async def test_update_task_status_rejects_unknown(client):
    folder = await _folder(client)
    task = await _add(client, folder["id"], "one")
    res = await client.patch(
        f"{BASE}/{folder['id']}/tasks/{task['id']}/status", json={"status": "Nah"},
    )
    assert res.status_code == 400


async def test_update_task_through_wrong_folder_is_404(client):
    folder = await _folder(client)
    other = await _folder(client, "Other")
    task = await _add(client, folder["id"], "one")
    res = await client.patch(
        f"{BASE}/{other['id']}/tasks/{task['id']}/status",
        json={"status": "Completed"},
    )
    assert res.status_code == 404


async def test_delete_task_in_folder(client):
    folder = await _folder(client)
    task = await _add(client, folder["id"], "one")
    res = await client.delete(f"{BASE}/{folder['id']}/tasks/{task['id']}")
    assert res.status_code == 200
    assert res.json() == {"message": "Task deleted"}

    detail = (await client.get(f"{BASE}/{folder['id']}")).json()
    assert detail["taskRefs"] == []
    assert detail["tasks"] == []


async def test_reset_progress(client):
    folder = await _folder(client)
    for title in ("a", "b"):
        task = await _add(client, folder["id"], title)
        await client.patch(
            f"{BASE}/{folder['id']}/tasks/{task['id']}/status",
            json={"status": "Completed"},
        )

    res = await client.patch(f"{BASE}/{folder['id']}/progress/reset")
    assert res.status_code == 200
    assert res.json() == {"message": "Folder progress reset"}

    detail = (await client.get(f"{BASE}/{folder['id']}")).json()
    assert len(detail["tasks"]) == 2
    assert len(detail["taskRefs"]) == 2
    assert {t["status"] for t in detail["tasks"]} == {"Pending"}


async def test_clear_progress(client):
    folder = await _folder(client)
    await _add(client, folder["id"], "a")
    await _add(client, folder["id"], "b")

    res = await client.delete(f"{BASE}/{folder['id']}/progress")
    assert res.status_code == 200
    assert res.json() == {"message": "Folder progress cleared"}

    assert (await client.get(f"{BASE}/{folder['id']}/tasks")).json() == []
    assert (await client.get(f"/api/v1/task/folder/{folder['id']}")).json() == []
    detail = (await client.get(f"{BASE}/{folder['id']}")).json()
    assert detail["taskRefs"] == []


async def test_progress_on_foreign_folder_is_404(client):
    folder = await _folder(client)
    res = await client.patch(
        f"{BASE}/{folder['id']}/progress/reset", headers=OTHER_HEADERS,
    )
    assert res.status_code == 404
    res = await client.delete(f"{BASE}/{folder['id']}/progress", headers=OTHER_HEADERS)
    assert res.status_code == 404
