"""
Pydantic schemas for the /scheduler endpoints.

SchedulerStatus: response showing the live state of the scheduler.
"""

from pydantic import BaseModel


class SchedulerStatus(BaseModel):
    """Response body for GET /scheduler/status."""

    max_concurrent: int   # concurrency cap
    in_flight: int        # jobs currently holding a slot
    pending: int          # jobs waiting in the FCFS queue
    total_jobs: int       # jobs in the registry, finished ones included
    tick_interval: float  # seconds between safety-net admissions
