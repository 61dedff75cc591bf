"""
FastAPI dependency injection.

How this works:
- The lifespan in api/main.py builds the job system once (registry,
  executor, scheduler engine, reaper, Storybook client) and stores it on
  app.state
- An endpoint declares `engine: SchedulerEngine = Depends(get_engine)`
- FastAPI calls get_engine() before the endpoint runs and passes the result in

Tests replace these with app.dependency_overrides, so endpoints can run
against an in-memory system with a fake Storybook client.
"""

from fastapi import Request

from scheduler.engine import SchedulerEngine
from scheduler.registry import JobRegistry
from storybook.client import StorybookClient
from worker.executor import JobExecutor


async def get_engine(request: Request) -> SchedulerEngine:
    return request.app.state.engine


async def get_registry(request: Request) -> JobRegistry:
    return request.app.state.registry


async def get_executor(request: Request) -> JobExecutor:
    return request.app.state.executor


async def get_storybook_client(request: Request) -> StorybookClient:
    return request.app.state.storybook_client
