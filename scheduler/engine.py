"""
Scheduler Engine — admits queued jobs into execution, never more than the
concurrency cap at once.

         JobRegistry                 SchedulerEngine                WorkerPool
    ┌──────────────────┐       ┌──────────────────────┐      ┌──────────────┐
    │ FCFS pending ids │──────>│ admit_ready_work()   │─────>│ execute(id)  │
    │                  │  pop  │ in-flight set ≤ cap  │submit│              │
    └──────────────────┘       └──────────────────────┘      └──────┬───────┘
                                          ▲                          │
                                          └──── _on_job_done() ──────┘
                                             free slot, admit again

admit_ready_work() is called:
- on every submit, so a job starts immediately when there is room
- from every completion callback, to cascade into the remaining backlog
- from a tick loop every SCHEDULER_TICK_INTERVAL seconds, as a safety net
  in case a cascade is ever missed

Admission happens under the registry lock, which also covers the in-flight
set: a slot is claimed before the pipeline is submitted, so the cap holds no
matter how many threads call admit_ready_work() at once. The lock is
re-entrant because a completion callback can fire on the admitting thread.
"""

import logging
import threading
from concurrent.futures import Future
from typing import Optional

from config.settings import settings
from scheduler.registry import JobRegistry
from worker.executor import JobExecutor
from worker.pool import WorkerPool

logger = logging.getLogger(__name__)


class SchedulerEngine:

    def __init__(
        self,
        registry: JobRegistry,
        executor: JobExecutor,
        max_concurrent: Optional[int] = None,
        tick_interval: Optional[float] = None,
    ):
        self._registry = registry
        self._executor = executor
        self.max_concurrent = settings.MAX_CONCURRENT_JOBS if max_concurrent is None else max_concurrent
        self.tick_interval = settings.SCHEDULER_TICK_INTERVAL if tick_interval is None else tick_interval
        self._pool = WorkerPool(self.max_concurrent)
        self._in_flight: set[str] = set()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._stopped = False

    @property
    def registry(self) -> JobRegistry:
        return self._registry

    def submit(self, operation: str, input: dict) -> str:
        """Queue a job and try to start it right away."""
        job_id = self._registry.create(operation, input)
        self.admit_ready_work()
        return job_id

    def admit_ready_work(self) -> int:
        """
        Move pending jobs into execution while there is spare capacity.

        Returns how many jobs were admitted by this call.
        """
        admitted = 0
        with self._registry.lock:
            while not self._stopped and len(self._in_flight) < self.max_concurrent:
                job_id = self._registry.pop_next_admissible()
                if job_id is None:
                    break
                if not self._registry.mark_running(job_id):
                    continue
                self._in_flight.add(job_id)
                admitted += 1
                self._pool.submit(
                    self._executor.execute,
                    job_id,
                    on_done=lambda future, jid=job_id: self._on_job_done(jid, future),
                )
        if admitted:
            logger.debug(f"Admitted {admitted} jobs ({self.in_flight_count()} in flight)")
        return admitted

    def _on_job_done(self, job_id: str, future: Future) -> None:
        """
        Fired when a pipeline finishes, whatever the outcome.

        JobExecutor.execute() handles its own failures; an exception here
        would be a bug in the executor, so it is only logged.
        """
        with self._registry.lock:
            self._in_flight.discard(job_id)
        if not future.cancelled():
            exc = future.exception()
            if exc:
                logger.error(f"Unhandled worker exception for job {job_id}: {exc}")
        self.admit_ready_work()

    def in_flight_count(self) -> int:
        with self._registry.lock:
            return len(self._in_flight)

    # ── Lifecycle ───────────────────────────────────────────────

    def start(self) -> None:
        """Start the tick loop in a daemon thread."""
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name="scheduler-tick", daemon=True)
        self._thread.start()
        logger.info(
            f"Scheduler engine started (max_concurrent={self.max_concurrent}, "
            f"tick={self.tick_interval}s)"
        )

    def stop(self, wait: bool = True) -> None:
        """Stop admitting work, stop the tick loop, shut the worker pool down."""
        with self._registry.lock:
            self._stopped = True
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=self.tick_interval + 1)
            self._thread = None
        self._pool.stop(wait=wait)
        logger.info("Scheduler engine stopped")

    def _run_loop(self) -> None:
        while not self._stop_event.wait(self.tick_interval):
            try:
                self.admit_ready_work()
            except Exception as e:
                logger.error(f"Scheduler tick error: {e}", exc_info=True)
