"""
Reaper — deletes finished jobs once they are older than the retention window.

Every REAPER_INTERVAL seconds (default 5 minutes) it removes each job that is
COMPLETED, FAILED or CANCELLED and whose completed_at is more than
JOB_RETENTION_SECONDS (default 1 hour) in the past. Queued and running jobs
are never touched.

This is the only code path that deletes jobs. A status lookup for a reaped
job gets None, exactly like a lookup for an id that never existed.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Optional

from config.settings import settings
from models.enums import JobListFilter
from models.job import utcnow
from scheduler.registry import JobRegistry

logger = logging.getLogger(__name__)


class JobReaper:

    def __init__(
        self,
        registry: JobRegistry,
        retention_seconds: Optional[float] = None,
        interval: Optional[float] = None,
    ):
        self._registry = registry
        if retention_seconds is None:
            retention_seconds = settings.JOB_RETENTION_SECONDS
        self.retention = timedelta(seconds=retention_seconds)
        self.interval = settings.REAPER_INTERVAL if interval is None else interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def reap(self, now: Optional[datetime] = None) -> int:
        """Remove expired terminal jobs. Returns how many were removed."""
        cutoff = (now or utcnow()) - self.retention
        removed = 0
        for job in self._registry.list_jobs(JobListFilter.COMPLETED):
            # terminal jobs never change again, so the snapshot is still accurate
            if job.completed_at is not None and job.completed_at < cutoff:
                if self._registry.remove(job.id):
                    removed += 1
        if removed:
            logger.info(f"Reaped {removed} expired jobs")
        return removed

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name="job-reaper", daemon=True)
        self._thread.start()
        logger.info(
            f"Reaper started (interval={self.interval}s, "
            f"retention={self.retention.total_seconds():.0f}s)"
        )

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None

    def _run_loop(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.reap()
            except Exception as e:
                logger.error(f"Reaper error: {e}", exc_info=True)
