"""
Job record — the in-memory representation of one unit of background work.

Key design decisions:
- UUID identifiers: unguessable, no sequential IDs to enumerate
- `input` is deep-copied at enqueue time, so a caller mutating its dict
  afterwards cannot change what the job runs
- Timestamps at every lifecycle stage (created → started → completed);
  completed_at is stamped on every terminal transition, cancellation included
- Exactly one of result/error is ever set, and only together with the
  matching terminal status

Job is mutable and owned by JobRegistry. Everything outside the registry
sees JobView, a frozen snapshot, so nobody can change a job behind the
registry's lock.
"""

import copy
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from models.enums import JobStatus


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_job_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Job:
    operation: str
    input: dict
    id: str = field(default_factory=new_job_id)
    status: JobStatus = JobStatus.QUEUED

    # ── Outcome (at most one is ever set) ───────────────────────
    result: Optional[dict] = None
    error: Optional[str] = None

    # ── Lifecycle timestamps ────────────────────────────────────
    created_at: datetime = field(default_factory=utcnow)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def subject_id(self) -> str:
        """What the job is working on, for listings."""
        return (self.input or {}).get("componentId") or "unknown"

    def snapshot(self) -> "JobView":
        return JobView(
            id=self.id,
            status=self.status,
            operation=self.operation,
            input=copy.deepcopy(self.input),
            subject_id=self.subject_id,
            result=copy.deepcopy(self.result),
            error=self.error,
            created_at=self.created_at,
            started_at=self.started_at,
            completed_at=self.completed_at,
        )

    def __repr__(self) -> str:
        return f"<Job {self.id} [{self.operation}] {self.status.value}>"


@dataclass(frozen=True)
class JobView:
    """Read-only copy of a Job at one point in time."""
    id: str
    status: JobStatus
    operation: str
    input: dict
    subject_id: str
    result: Optional[Any]
    error: Optional[str]
    created_at: datetime
    started_at: Optional[datetime]
    completed_at: Optional[datetime]
