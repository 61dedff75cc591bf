"""
Health check endpoint.

This is the first thing you hit to verify the service is up. It does not
call Storybook: a slow or broken catalog should fail jobs, not take the
service out of a load balancer.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_engine
from scheduler.engine import SchedulerEngine

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    engine: SchedulerEngine = Depends(get_engine),
) -> dict:
    return {
        "status": "healthy",
        "scheduler": {
            "in_flight": engine.in_flight_count(),
            "pending": engine.registry.pending_count(),
            "max_concurrent": engine.max_concurrent,
        },
    }
