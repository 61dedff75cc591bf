"""
Job executor — runs a single job's pipeline inside a worker thread.

execute(job_id) handles everything after admission:

    1. Read the job snapshot from the registry (already RUNNING)
    2. Find the operation (UnknownOperationError if nobody registered it)
    3. Call operation.run(input) — resolve story, race fetch vs timeout
    4. On success: mark COMPLETED with the result
    5. On failure: mark FAILED with the error message

Steps 4 and 5 are the single commit point. If the job was cancelled while
step 3 was in flight, the registry refuses the transition and the outcome is
discarded, so a cancelled job never gets a result or an error.

Failures stay inside the job: execute() never raises, whatever the operation
does, so one bad job cannot break the worker or the scheduler.

run_sync() is the low-latency path: same operation body, no registry, no
scheduler, exceptions go straight back to the caller.
"""

import logging
import time

from jobs.registry import OperationRegistry
from scheduler.registry import JobRegistry

logger = logging.getLogger(__name__)


class JobExecutor:

    def __init__(self, registry: JobRegistry, operations: OperationRegistry):
        self._registry = registry
        self._operations = operations

    def execute(self, job_id: str) -> dict:
        """
        Execute a single admitted job. Called by WorkerPool from a thread.

        Returns:
            dict with execution status (for logging/debugging, not stored)
        """
        job = self._registry.get(job_id)
        if job is None:
            logger.warning(f"Job {job_id} not found in registry, skipping")
            return {"status": "skipped", "job_id": job_id}

        start_time = time.monotonic()
        try:
            operation = self._operations.get(job.operation)
            result = operation.run(job.input)
        except Exception as e:
            error = str(e) or e.__class__.__name__
            if self._registry.mark_failed(job_id, error):
                logger.error(f"Job {job_id} [{job.operation}] failed: {error}")
                return {"status": "failed", "job_id": job_id, "error": error}
            logger.info(f"Job {job_id} was cancelled while running, discarding error: {error}")
            return {"status": "discarded", "job_id": job_id}

        elapsed = time.monotonic() - start_time
        if self._registry.mark_completed(job_id, result):
            logger.info(f"Job {job_id} [{job.operation}] completed in {elapsed:.3f}s")
            return {"status": "completed", "job_id": job_id}

        logger.info(f"Job {job_id} was cancelled while running, discarding result")
        return {"status": "discarded", "job_id": job_id}

    def run_sync(self, operation: str, payload: dict) -> dict:
        """Run an operation inline and return its result. Exceptions propagate."""
        return self._operations.get(operation).run(payload)
