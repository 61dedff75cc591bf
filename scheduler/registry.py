"""
Job registry — the single owner of every Job record and of the pending queue.

All state transitions go through here:

    create()          → QUEUED  (id appended to the FCFS pending queue)
    mark_running()    QUEUED  → RUNNING
    mark_completed()  RUNNING → COMPLETED  (stores result)
    mark_failed()     RUNNING → FAILED     (stores error)
    cancel()          QUEUED | RUNNING → CANCELLED
    remove()          deletes a record (reaper only)

Terminal states are sinks: every mark_* call checks the current status first
and refuses to move a job that already left the expected state. That check
is what makes cancellation of a RUNNING job stick: when the pipeline
finishes late, mark_completed()/mark_failed() see CANCELLED and return False.

Thread safety:
- One re-entrant lock guards the job map and the pending queue
- SchedulerEngine takes the same lock (via `registry.lock`) while it admits
  work, so the in-flight set is covered by it too
- Reads return JobView snapshots, never the live Job
"""

import copy
import logging
import threading
from typing import Optional

from models.enums import JobStatus, JobListFilter, ACTIVE_STATUSES, TERMINAL_STATUSES
from models.job import Job, JobView, utcnow
from scheduler.fcfs import FCFSQueue

logger = logging.getLogger(__name__)


class JobRegistry:

    def __init__(self):
        self._jobs: dict[str, Job] = {}
        self._pending = FCFSQueue()
        self.lock = threading.RLock()

    # ── Creation / lookup / deletion ────────────────────────────

    def create(self, operation: str, input: dict) -> str:
        """Store a new QUEUED job and append it to the pending queue."""
        job = Job(operation=operation, input=copy.deepcopy(input or {}))
        with self.lock:
            self._jobs[job.id] = job
            self._pending.enqueue(job.id)
        logger.debug(f"Job {job.id} [{operation}] queued")
        return job.id

    def get(self, job_id: str) -> Optional[JobView]:
        with self.lock:
            job = self._jobs.get(job_id)
            return job.snapshot() if job else None

    def remove(self, job_id: str) -> bool:
        with self.lock:
            job = self._jobs.pop(job_id, None)
            if job is None:
                return False
            self._pending.remove(job_id)
            return True

    def __len__(self) -> int:
        with self.lock:
            return len(self._jobs)

    # ── Pending queue ───────────────────────────────────────────

    def pending_count(self) -> int:
        with self.lock:
            return self._pending.size()

    def pop_next_admissible(self) -> Optional[str]:
        """
        Pop the oldest pending job that can still run.

        Ids whose job is gone or no longer QUEUED are discarded on the way.
        Cancel removes ids from the queue already, so this is a second guard.
        """
        with self.lock:
            while (job_id := self._pending.dequeue()) is not None:
                job = self._jobs.get(job_id)
                if job is not None and job.status == JobStatus.QUEUED:
                    return job_id
                logger.debug(f"Skipping pending id {job_id} (cancelled or gone)")
            return None

    # ── Transitions ─────────────────────────────────────────────

    def mark_running(self, job_id: str) -> bool:
        with self.lock:
            job = self._jobs.get(job_id)
            if job is None or job.status != JobStatus.QUEUED:
                return False
            job.status = JobStatus.RUNNING
            job.started_at = utcnow()
            return True

    def mark_completed(self, job_id: str, result: dict) -> bool:
        with self.lock:
            job = self._jobs.get(job_id)
            if job is None or job.status != JobStatus.RUNNING:
                return False
            job.result = result
            job.status = JobStatus.COMPLETED
            job.completed_at = utcnow()
            return True

    def mark_failed(self, job_id: str, error: str) -> bool:
        with self.lock:
            job = self._jobs.get(job_id)
            if job is None or job.status != JobStatus.RUNNING:
                return False
            job.error = error
            job.status = JobStatus.FAILED
            job.completed_at = utcnow()
            return True

    def cancel(self, job_id: str) -> bool:
        """
        Cancel a QUEUED or RUNNING job.

        QUEUED:  removed from the pending queue, it will never run.
        RUNNING: flagged only. The pipeline keeps going until its fetch
                 returns, then discards the outcome (see mark_completed).
        Anything else (terminal, unknown) → False, nothing changes.
        """
        with self.lock:
            job = self._jobs.get(job_id)
            if job is None or job.status.is_terminal:
                return False
            if job.status == JobStatus.QUEUED:
                self._pending.remove(job_id)
            job.status = JobStatus.CANCELLED
            job.completed_at = utcnow()
            return True

    # ── Queries ─────────────────────────────────────────────────

    def list_jobs(self, status_filter: JobListFilter = JobListFilter.ALL) -> list[JobView]:
        """Snapshots of matching jobs, oldest first."""
        with self.lock:
            jobs = list(self._jobs.values())
            if status_filter == JobListFilter.ACTIVE:
                jobs = [j for j in jobs if j.status in ACTIVE_STATUSES]
            elif status_filter == JobListFilter.COMPLETED:
                jobs = [j for j in jobs if j.status in TERMINAL_STATUSES]
            return [j.snapshot() for j in jobs]

    def stats(self) -> dict[str, int]:
        """
        Count jobs per bucket. CANCELLED is reported under "failed", the
        listing response only has four buckets.
        """
        counts = {"queued": 0, "running": 0, "completed": 0, "failed": 0}
        with self.lock:
            for job in self._jobs.values():
                if job.status == JobStatus.CANCELLED:
                    counts["failed"] += 1
                else:
                    counts[job.status.value] += 1
        return counts

    def list_with_stats(
        self, status_filter: JobListFilter = JobListFilter.ALL
    ) -> tuple[list[JobView], dict[str, int]]:
        """list_jobs() and stats() taken from the same moment."""
        with self.lock:
            return self.list_jobs(status_filter), self.stats()
