"""
FastAPI application factory.

This file:
1. Creates the FastAPI app
2. Runs startup logic (build the job system, start scheduler + reaper loops)
3. Registers all routers (components, jobs, scheduler, health)
4. Maps domain errors to HTTP status codes
5. Runs shutdown logic (stop the loops, close the Storybook client)

Everything lives in one process: jobs are kept in memory and disappear on
restart. The job system is built here and stored on app.state instead of
living in module globals, so each app instance (and each test) owns its own.

To run:  uvicorn api.main:app --host 0.0.0.0 --port 8000
    or:  python -m api.main
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from jobs.registry import create_default_registry
from models.exceptions import (
    ExtractorError,
    OperationTimeoutError,
    StorybookFetchError,
    StoryNotFoundError,
    UnknownOperationError,
)
from api.routers import components, jobs, scheduler, health
from scheduler.engine import SchedulerEngine
from scheduler.reaper import JobReaper
from scheduler.registry import JobRegistry
from storybook.client import StorybookClient
from worker.executor import JobExecutor
from worker.timeout import TimeoutRunner

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[ExtractorError], int] = {
    StoryNotFoundError: 404,
    UnknownOperationError: 400,
    OperationTimeoutError: 504,
    StorybookFetchError: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Runs on startup (before yield) and shutdown (after yield).

    Startup:
    - Builds Storybook client → operations → registry → executor → engine
    - Starts the scheduler tick loop and the reaper loop

    Shutdown:
    - Stops both loops and waits for running pipelines
    - Releases the fetch pool and the HTTP connection pool
    """
    # ── Startup ─────────────────────────────────────────────────
    client = StorybookClient()
    timeout_runner = TimeoutRunner()
    registry = JobRegistry()
    executor = JobExecutor(registry, create_default_registry(client, timeout_runner))
    engine = SchedulerEngine(registry, executor)
    reaper = JobReaper(registry)

    app.state.storybook_client = client
    app.state.registry = registry
    app.state.executor = executor
    app.state.engine = engine

    engine.start()
    reaper.start()
    logger.info(f"API ready, Storybook at {client.base_url}")

    yield  # app is running and serving requests between startup and shutdown

    # ── Shutdown ────────────────────────────────────────────────
    reaper.stop()
    engine.stop(wait=False)
    timeout_runner.shutdown()
    client.close()
    logger.info("API shut down")


async def handle_extractor_error(request: Request, exc: ExtractorError) -> JSONResponse:
    status_code = 500
    for exc_type, code in ERROR_STATUS_CODES.items():
        if isinstance(exc, exc_type):
            status_code = code
            break
    logger.warning(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    app = FastAPI(
        title="Storybook Extractor",
        description="Extract rendered HTML/CSS from a Storybook design system, with background jobs for slow renders",
        version="1.1.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(ExtractorError, handle_extractor_error)

    # Register routers: each one adds its endpoints to the app
    app.include_router(health.router)
    app.include_router(components.router)
    app.include_router(jobs.router)
    app.include_router(scheduler.router)

    return app


# This is what uvicorn imports: `uvicorn api.main:app`
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
