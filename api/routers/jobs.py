"""
Job query endpoints.

GET    /jobs/          → List jobs (filter: all | active | completed) + stats
GET    /jobs/{job_id}  → Status of one job, result/error included
DELETE /jobs/{job_id}  → Cancel a queued or running job

Jobs are created by POST /components/html (see components.py).

The API layer is intentionally thin: every call is a registry read or a
single registry transition. Nothing here waits on a running job.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_registry
from api.schemas.job import (
    JobCancelResponse,
    JobListResponse,
    JobStats,
    JobStatusResponse,
    JobSummary,
)
from models.enums import JobListFilter
from scheduler.registry import JobRegistry

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/", response_model=JobListResponse)
async def list_jobs(
    status: JobListFilter = Query(
        JobListFilter.ALL,
        description='"active" = queued/running, "completed" = completed/failed/cancelled',
    ),
    registry: JobRegistry = Depends(get_registry),
) -> JobListResponse:
    jobs, stats = registry.list_with_stats(status)
    return JobListResponse(
        jobs=[JobSummary.from_view(j) for j in jobs],
        stats=JobStats(**stats),
    )


@router.get("/{job_id}", response_model=JobStatusResponse)
async def get_job(
    job_id: str,
    registry: JobRegistry = Depends(get_registry),
) -> JobStatusResponse:
    """
    Get a single job.

    404 means "unknown or expired": an id that never existed and a job the
    reaper already removed look exactly the same.
    """
    job = registry.get(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail=f"Job not found: {job_id}")
    return JobStatusResponse.from_view(job)


@router.delete("/{job_id}", response_model=JobCancelResponse)
async def cancel_job(
    job_id: str,
    registry: JobRegistry = Depends(get_registry),
) -> JobCancelResponse:
    """
    Cancel a job.

    QUEUED jobs never start. RUNNING jobs are marked CANCELLED immediately,
    but their fetch is not interrupted; when it finishes its outcome is
    dropped. Finished or unknown jobs return cancelled=false.
    """
    return JobCancelResponse(job_id=job_id, cancelled=registry.cancel(job_id))
