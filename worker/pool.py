"""
Worker pool — the threads that run job pipelines.

    SchedulerEngine.admit_ready_work()
            │ submit(execute, job_id)
            ▼
    ┌──────────────────────────────────────────┐
    │ ThreadPoolExecutor (MAX_CONCURRENT_JOBS) │
    │  ┌────────┐ ┌────────┐                   │
    │  │Thread 1│ │Thread 2│                   │
    │  │execute │ │execute │                   │
    │  └────────┘ └────────┘                   │
    └──────────────────────────────────────────┘
            │ done callback
            ▼
    SchedulerEngine._on_job_done()  → frees the slot, admits more work

The pool is sized to the concurrency cap, but the cap is enforced by the
engine's in-flight set before anything is submitted, so the pool never
queues work internally.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

logger = logging.getLogger(__name__)


class WorkerPool:

    def __init__(self, max_workers: int):
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="job-worker",
        )

    def submit(self, fn: Callable, *args, on_done: Callable[[Future], None]) -> Future:
        future = self._executor.submit(fn, *args)
        future.add_done_callback(on_done)
        return future

    def stop(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
        logger.info("Worker pool stopped")
