"""Task API tests — nested task routes, completion, filters."""

import pytest


@pytest.fixture
async def project(alice):
    r = await alice.post("/api/v1/projects", json={"title": "Roadmap"})
    assert r.status_code == 201, r.text
    return r.json()


def _tasks_url(project_id: int) -> str:
    return f"/api/v1/projects/{project_id}/tasks"


async def _create_task(ac, project_id, title, **fields):
    r = await ac.post(_tasks_url(project_id), json={"title": title, **fields})
    assert r.status_code == 201, r.text
    return r.json()


# ═══════════════════════════════════════════════════════════
# Progress scenario
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_four_tasks_one_done_then_delete_project(alice, project):
    pid = project["id"]
    tasks = [await _create_task(alice, pid, f"Task {i}") for i in range(4)]
    r = await alice.patch(f"{_tasks_url(pid)}/{tasks[0]['id']}/complete")
    assert r.status_code == 200

    progress = (await alice.get(f"/api/v1/projects/{pid}/progress")).json()
    assert (
        progress["total_tasks"],
        progress["completed_tasks"],
        progress["progress_percentage"],
    ) == (4, 1, 25)

    assert (await alice.delete(f"/api/v1/projects/{pid}")).status_code == 204

    r = await alice.get(_tasks_url(pid))
    assert r.status_code == 404
    assert r.json()["error"] == "PROJECT_NOT_FOUND"


# ═══════════════════════════════════════════════════════════
# CRUD
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_task(alice, project):
    body = await _create_task(
        alice, project["id"], "Ship it", description="v1", due_date="2026-12-31"
    )

    assert body["title"] == "Ship it"
    assert body["description"] == "v1"
    assert body["due_date"] == "2026-12-31"
    assert body["completed"] is False


@pytest.mark.asyncio
async def test_create_task_ignores_completed_in_body(alice, project):
    body = await _create_task(alice, project["id"], "Sneaky", completed=True)
    assert body["completed"] is False


@pytest.mark.asyncio
async def test_create_task_invalid_date(alice, project):
    r = await alice.post(
        _tasks_url(project["id"]), json={"title": "Bad", "due_date": "tomorrow"}
    )
    assert r.status_code == 400
    assert r.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_get_task(alice, project):
    task = await _create_task(alice, project["id"], "Read me")

    r = await alice.get(f"{_tasks_url(project['id'])}/{task['id']}")

    assert r.status_code == 200
    assert r.json() == task


@pytest.mark.asyncio
async def test_missing_task_is_404(alice, project):
    r = await alice.get(f"{_tasks_url(project['id'])}/9999")

    assert r.status_code == 404
    assert r.json()["error"] == "TASK_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_task(alice, project):
    task = await _create_task(alice, project["id"], "Draft", due_date="2026-01-01")

    r = await alice.put(
        f"{_tasks_url(project['id'])}/{task['id']}",
        json={"title": "Final", "description": "done right"},
    )

    assert r.status_code == 200
    body = r.json()
    assert body["title"] == "Final"
    assert body["description"] == "done right"
    assert body["due_date"] is None
    assert body["completed"] is False


@pytest.mark.asyncio
async def test_delete_task(alice, project):
    task = await _create_task(alice, project["id"], "Temp")
    url = f"{_tasks_url(project['id'])}/{task['id']}"

    assert (await alice.delete(url)).status_code == 204
    assert (await alice.get(url)).status_code == 404


# ═══════════════════════════════════════════════════════════
# Completion
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_mark_complete(alice, project):
    task = await _create_task(alice, project["id"], "Finish")

    r = await alice.patch(f"{_tasks_url(project['id'])}/{task['id']}/complete")

    assert r.status_code == 200
    assert r.json()["completed"] is True


@pytest.mark.asyncio
async def test_set_completion_both_ways(alice, project):
    task = await _create_task(alice, project["id"], "Toggle")
    url = f"{_tasks_url(project['id'])}/{task['id']}/completion"

    r = await alice.patch(url, params={"completed": "true"})
    assert r.json()["completed"] is True

    r = await alice.patch(url, params={"completed": "false"})
    assert r.json()["completed"] is False


@pytest.mark.asyncio
async def test_set_completion_requires_flag(alice, project):
    task = await _create_task(alice, project["id"], "Toggle")
    r = await alice.patch(f"{_tasks_url(project['id'])}/{task['id']}/completion")
    assert r.status_code == 400


# ═══════════════════════════════════════════════════════════
# Ownership
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_other_user_cannot_touch_tasks(alice, bob, project):
    task = await _create_task(alice, project["id"], "Private")
    base = _tasks_url(project["id"])

    assert (await bob.get(base)).status_code == 403
    assert (await bob.post(base, json={"title": "Injected"})).status_code == 403
    assert (await bob.get(f"{base}/{task['id']}")).status_code == 403
    assert (await bob.patch(f"{base}/{task['id']}/complete")).status_code == 403
    assert (await bob.delete(f"{base}/{task['id']}")).status_code == 403

    r = await alice.get(f"{base}/{task['id']}")
    assert r.json()["completed"] is False


@pytest.mark.asyncio
async def test_task_through_wrong_project_is_denied(alice, project):
    other = (await alice.post("/api/v1/projects", json={"title": "Other"})).json()
    task = await _create_task(alice, other["id"], "Elsewhere")

    r = await alice.get(f"{_tasks_url(project['id'])}/{task['id']}")

    assert r.status_code == 403
    assert r.json()["message"] == "This task does not belong to the specified project"


# ═══════════════════════════════════════════════════════════
# Listing
# ═══════════════════════════════════════════════════════════


@pytest.fixture
async def seeded(alice, project):
    pid = project["id"]
    for title, done in [
        ("Write report", True),
        ("Review REPORT draft", False),
        ("Buy milk", False),
    ]:
        task = await _create_task(alice, pid, title)
        if done:
            await alice.patch(f"{_tasks_url(pid)}/{task['id']}/complete")
    return pid


@pytest.mark.asyncio
async def test_list_tasks_defaults(alice, seeded):
    r = await alice.get(_tasks_url(seeded))

    assert r.status_code == 200
    body = r.json()
    assert body["total_elements"] == 3
    assert body["size"] == 20
    assert [t["title"] for t in body["content"]] == [
        "Write report",
        "Review REPORT draft",
        "Buy milk",
    ]


@pytest.mark.asyncio
async def test_list_tasks_filters(alice, seeded):
    r = await alice.get(
        _tasks_url(seeded), params={"completed": "false", "search": "report"}
    )

    titles = [t["title"] for t in r.json()["content"]]
    assert titles == ["Review REPORT draft"]


@pytest.mark.asyncio
async def test_list_tasks_sorted_by_title(alice, seeded):
    r = await alice.get(_tasks_url(seeded), params={"sort": "title,asc"})

    titles = [t["title"] for t in r.json()["content"]]
    assert titles == ["Buy milk", "Review REPORT draft", "Write report"]
