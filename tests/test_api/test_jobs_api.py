"""
API integration tests for /jobs endpoints.

Jobs are created through POST /components/html and run on real worker
threads against the fake Storybook client, so tests poll until a job
reaches the state they want.
"""

import asyncio

import pytest


async def _submit(client, component_id="button", **extra):
    response = await client.post("/components/html", json={"componentId": component_id, **extra})
    assert response.status_code == 202
    return response.json()["job_id"]


async def _wait_for_status(client, job_id, wanted, timeout=5.0):
    deadline = asyncio.get_running_loop().time() + timeout
    while True:
        data = (await client.get(f"/jobs/{job_id}")).json()
        if data["status"] in wanted or asyncio.get_running_loop().time() > deadline:
            return data
        await asyncio.sleep(0.02)


@pytest.mark.asyncio
async def test_get_completed_job(client):
    job_id = await _submit(client, "button", includeStyles=True)

    data = await _wait_for_status(client, job_id, {"completed", "failed"})

    assert data["status"] == "completed"
    assert data["message"] == "Job completed successfully"
    assert data["job_id"] == job_id
    assert data["error"] is None
    assert data["result"] == {
        "storyId": "button--default",
        "html": '<div class="button">button--default</div>',
        "classes": ["button"],
        "styles": [".button { padding: 4px; }"],
    }
    assert data["started_at"] is not None
    assert data["completed_at"] is not None


@pytest.mark.asyncio
async def test_get_failed_job(client):
    job_id = await _submit(client, "nope")

    data = await _wait_for_status(client, job_id, {"completed", "failed"})

    assert data["status"] == "failed"
    assert data["error"] == "No stories found for component: nope"
    assert data["message"] == "Job failed"
    assert data["result"] is None


@pytest.mark.asyncio
async def test_get_unknown_job(client):
    response = await client.get("/jobs/does-not-exist")

    assert response.status_code == 404
    assert response.json()["detail"] == "Job not found: does-not-exist"


@pytest.mark.asyncio
async def test_list_jobs_with_filter_and_stats(client, fake_client, engine):
    done = await _submit(client, "card")
    await _wait_for_status(client, done, {"completed"})
    while engine.in_flight_count():
        await asyncio.sleep(0.01)

    fake_client.gate.clear()
    running = [await _submit(client, f"modal--v{i}") for i in range(2)]
    queued = await _submit(client, "modal--v2")

    all_jobs = (await client.get("/jobs/")).json()
    assert [j["job_id"] for j in all_jobs["jobs"]] == [done, *running, queued]
    assert all_jobs["jobs"][0]["component_id"] == "card"
    assert all_jobs["stats"] == {"queued": 1, "running": 2, "completed": 1, "failed": 0}

    active = (await client.get("/jobs/", params={"status": "active"})).json()
    assert {j["job_id"] for j in active["jobs"]} == {*running, queued}

    finished = (await client.get("/jobs/", params={"status": "completed"})).json()
    assert [j["job_id"] for j in finished["jobs"]] == [done]

    fake_client.gate.set()


@pytest.mark.asyncio
async def test_list_jobs_invalid_filter(client):
    response = await client.get("/jobs/", params={"status": "everything"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_cancel_queued_job(client, fake_client):
    fake_client.gate.clear()
    await _submit(client, "button--a")
    await _submit(client, "button--b")
    queued = await _submit(client, "button--c")

    response = await client.delete(f"/jobs/{queued}")

    assert response.status_code == 200
    assert response.json() == {"job_id": queued, "cancelled": True}
    fake_client.gate.set()

    data = (await client.get(f"/jobs/{queued}")).json()
    assert data["status"] == "cancelled"
    assert data["message"] == "Job was cancelled"
    assert data["started_at"] is None


@pytest.mark.asyncio
async def test_cancel_running_job_discards_result(client, fake_client, engine):
    fake_client.gate.clear()
    job_id = await _submit(client, "button--default")
    assert (await client.get(f"/jobs/{job_id}")).json()["status"] == "running"

    assert (await client.delete(f"/jobs/{job_id}")).json()["cancelled"] is True

    fake_client.gate.set()
    for _ in range(250):
        if engine.in_flight_count() == 0:
            break
        await asyncio.sleep(0.02)

    data = (await client.get(f"/jobs/{job_id}")).json()
    assert data["status"] == "cancelled"
    assert data["result"] is None
    assert data["error"] is None


@pytest.mark.asyncio
async def test_cancel_finished_or_unknown_job(client):
    job_id = await _submit(client, "card")
    await _wait_for_status(client, job_id, {"completed"})

    assert (await client.delete(f"/jobs/{job_id}")).json()["cancelled"] is False
    assert (await client.delete("/jobs/nope")).json() == {"job_id": "nope", "cancelled": False}


@pytest.mark.asyncio
async def test_status_message_for_active_jobs(client, fake_client):
    fake_client.gate.clear()
    running = await _submit(client, "card--v0")
    await _submit(client, "card--v1")
    queued = await _submit(client, "card--v2")

    assert (await client.get(f"/jobs/{running}")).json()["message"] == "Job is currently processing"
    assert (await client.get(f"/jobs/{queued}")).json()["message"] == "Job is waiting in queue"
    fake_client.gate.set()
