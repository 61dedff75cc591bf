"""
Scheduler inspection endpoint.

GET /scheduler/status → concurrency cap, slots in use, queue depth

Read-only: the cap and tick interval are fixed at startup from settings.
Useful when a job sits in "queued" and you want to know whether the
scheduler is saturated or stuck.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_engine
from api.schemas.scheduler import SchedulerStatus
from scheduler.engine import SchedulerEngine

router = APIRouter(prefix="/scheduler", tags=["scheduler"])


@router.get("/status", response_model=SchedulerStatus)
async def get_scheduler_status(
    engine: SchedulerEngine = Depends(get_engine),
) -> SchedulerStatus:
    return SchedulerStatus(
        max_concurrent=engine.max_concurrent,
        in_flight=engine.in_flight_count(),
        pending=engine.registry.pending_count(),
        total_jobs=len(engine.registry),
        tick_interval=engine.tick_interval,
    )
