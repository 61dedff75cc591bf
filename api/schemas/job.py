"""
Pydantic schemas for the /jobs endpoints.

These are NOT the registry's records — they define the HTTP API contract:
- JobSubmitted: what POST /components/html returns in async mode
- JobStatusResponse: a single job, result/error included
- JobListResponse: job summaries plus per-status counts
- JobCancelResponse: whether a cancel request took effect
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from models.enums import JobStatus
from models.job import JobView


class JobSubmitted(BaseModel):
    job_id: str
    status: JobStatus = JobStatus.QUEUED
    component_id: str


STATUS_MESSAGES: dict[JobStatus, str] = {
    JobStatus.QUEUED: "Job is waiting in queue",
    JobStatus.RUNNING: "Job is currently processing",
    JobStatus.COMPLETED: "Job completed successfully",
    JobStatus.FAILED: "Job failed",
    JobStatus.CANCELLED: "Job was cancelled",
}


class JobStatusResponse(BaseModel):
    """Response body for GET /jobs/{job_id}."""

    job_id: str
    status: JobStatus
    message: str
    result: Optional[Any] = None
    error: Optional[str] = None
    created_at: datetime
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @classmethod
    def from_view(cls, job: JobView) -> "JobStatusResponse":
        return cls(
            job_id=job.id,
            status=job.status,
            message=STATUS_MESSAGES[job.status],
            result=job.result,
            error=job.error,
            created_at=job.created_at,
            started_at=job.started_at,
            completed_at=job.completed_at,
        )


class JobSummary(BaseModel):
    job_id: str
    status: JobStatus
    component_id: str
    created_at: datetime
    started_at: Optional[datetime] = None

    @classmethod
    def from_view(cls, job: JobView) -> "JobSummary":
        return cls(
            job_id=job.id,
            status=job.status,
            component_id=job.subject_id,
            created_at=job.created_at,
            started_at=job.started_at,
        )


class JobStats(BaseModel):
    """Per-bucket counts. Cancelled jobs are counted as failed."""

    queued: int
    running: int
    completed: int
    failed: int


class JobListResponse(BaseModel):
    """Response body for GET /jobs/."""

    jobs: list[JobSummary]
    stats: JobStats


class JobCancelResponse(BaseModel):
    job_id: str
    cancelled: bool
