"""
Tests for JobExecutor.

execute() is called directly here, with the job already moved to RUNNING
the way the scheduler would leave it.
"""

import pytest

from models.enums import JobStatus
from models.exceptions import StoryNotFoundError


def _admitted(registry, operation="get_component_html", **payload):
    job_id = registry.create(operation, payload)
    registry.pop_next_admissible()
    registry.mark_running(job_id)
    return job_id


def test_successful_job_is_completed(executor, registry):
    job_id = _admitted(registry, componentId="button")

    outcome = executor.execute(job_id)

    assert outcome == {"status": "completed", "job_id": job_id}
    job = registry.get(job_id)
    assert job.status == JobStatus.COMPLETED
    assert job.result["storyId"] == "button--default"


def test_operation_error_is_recorded_not_raised(executor, registry):
    job_id = _admitted(registry, componentId="nope")

    outcome = executor.execute(job_id)

    assert outcome["status"] == "failed"
    job = registry.get(job_id)
    assert job.status == JobStatus.FAILED
    assert job.error == "No stories found for component: nope"


def test_timeout_is_recorded_as_failure(executor, registry, fake_client):
    fake_client.hang.add("button--slow")
    job_id = _admitted(registry, componentId="button--slow", timeout=100)

    executor.execute(job_id)

    job = registry.get(job_id)
    assert job.status == JobStatus.FAILED
    assert job.error == "Operation timed out after 100ms"


def test_error_without_message_uses_class_name(executor, registry, fake_client):
    fake_client.errors["button--odd"] = KeyError()
    job_id = _admitted(registry, componentId="button--odd")

    executor.execute(job_id)

    assert registry.get(job_id).error == "KeyError"


def test_cancelled_job_result_is_discarded(executor, registry):
    job_id = _admitted(registry, componentId="button")
    registry.cancel(job_id)

    assert executor.execute(job_id)["status"] == "discarded"
    job = registry.get(job_id)
    assert job.status == JobStatus.CANCELLED
    assert job.result is None


def test_missing_job_is_skipped(executor):
    assert executor.execute("gone") == {"status": "skipped", "job_id": "gone"}


def test_run_sync_returns_result(executor, registry):
    result = executor.run_sync("get_component_html", {"componentId": "card--outlined"})

    assert result["storyId"] == "card--outlined"
    assert len(registry) == 0


def test_run_sync_propagates_errors(executor):
    with pytest.raises(StoryNotFoundError):
        executor.run_sync("get_component_html", {"componentId": "nope"})
