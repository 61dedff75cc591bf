"""
Shared test fixtures.

These replace real infrastructure with lightweight in-memory alternatives:
- Storybook server → FakeStorybookClient (canned index, canned markup)
- HTTP server → httpx.AsyncClient with ASGI transport (no network)

The fake client can hold fetches open (`gate`) or hang them forever
(`hang`), which is how the concurrency, cancellation and timeout tests get
jobs to sit in RUNNING for as long as they need.

Settings are always built explicitly with CI=False / APP_ENV=production so a
CI runner's environment cannot scale the timeouts under test.
"""

import threading
import time

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.dependencies import get_engine, get_executor, get_registry, get_storybook_client
from api.main import create_app
from config.settings import Settings
from jobs.registry import create_default_registry
from scheduler.engine import SchedulerEngine
from scheduler.registry import JobRegistry
from storybook.client import ComponentHTML
from worker.executor import JobExecutor
from worker.timeout import TimeoutRunner

STORIES = {
    "button--default": {"id": "button--default", "title": "Actions/Button", "name": "Default"},
    "button--secondary": {"id": "button--secondary", "title": "Actions/Button", "name": "Secondary"},
    "card--elevated": {"id": "card--elevated", "title": "Data Display/Card", "name": "Elevated"},
    "card--outlined": {"id": "card--outlined", "title": "Data Display/Card", "name": "Outlined"},
    "modal--basic": {"id": "modal--basic", "title": "Feedback/Modal", "name": "Basic"},
    "textfield--default": {"id": "textfield--default", "title": "Forms/TextField", "name": "Default"},
}


class FakeStorybookClient:
    base_url = "http://storybook.test"

    def __init__(self, stories=None):
        self.stories = dict(STORIES if stories is None else stories)
        self.markup: dict[str, ComponentHTML] = {}
        self.errors: dict[str, Exception] = {}
        self.hang: set[str] = set()
        self.gate = threading.Event()
        self.gate.set()
        self._release = threading.Event()
        self._lock = threading.Lock()
        self.index_calls = 0
        self.fetched: list[str] = []
        self.active = 0
        self.max_active = 0

    def fetch_stories_index(self) -> dict:
        with self._lock:
            self.index_calls += 1
        return {"v": 4, "entries": self.stories}

    def fetch_component_html(self, story_id: str) -> ComponentHTML:
        with self._lock:
            self.fetched.append(story_id)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if story_id in self.hang:
                self._release.wait(timeout=30)
            self.gate.wait(timeout=30)
            if story_id in self.errors:
                raise self.errors[story_id]
            return self.markup.get(story_id) or ComponentHTML(
                story_id=story_id,
                html=f'<div class="{story_id.split("--")[0]}">{story_id}</div>',
                styles=[".sb-show-main { margin: 0; }", f".{story_id.split('--')[0]} {{ padding: 4px; }}"],
                classes=[story_id.split("--")[0]],
                elements=["div"],
            )
        finally:
            with self._lock:
                self.active -= 1

    def release_all(self) -> None:
        self._release.set()
        self.gate.set()

    def close(self) -> None:
        pass


def wait_until(predicate, timeout: float = 5.0, interval: float = 0.01) -> bool:
    """Poll predicate until it returns truthy or timeout seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return bool(predicate())


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, CI=False, APP_ENV="production", DEFAULT_FETCH_TIMEOUT_MS=10000)


@pytest.fixture
def fake_client():
    client = FakeStorybookClient()
    yield client
    client.release_all()


@pytest.fixture
def timeout_runner():
    runner = TimeoutRunner(max_workers=8)
    yield runner
    runner.shutdown()


@pytest.fixture
def operations(fake_client, timeout_runner, test_settings):
    return create_default_registry(fake_client, timeout_runner, test_settings)


@pytest.fixture
def registry():
    return JobRegistry()


@pytest.fixture
def executor(registry, operations):
    return JobExecutor(registry, operations)


@pytest.fixture
def engine(registry, executor, fake_client):
    """Engine with cap 2. The tick loop is NOT started; tests start it when they need it."""
    eng = SchedulerEngine(registry, executor, max_concurrent=2, tick_interval=0.05)
    yield eng
    fake_client.release_all()
    eng.stop()


@pytest_asyncio.fixture
async def client(engine, registry, executor, fake_client):
    """
    Create a test HTTP client that talks directly to the FastAPI app.

    dependency_overrides tells FastAPI: "instead of the job system the
    lifespan would build, use these test versions." ASGITransport does not
    run the lifespan, so no real Storybook client or background loop is
    created.
    """
    app = create_app()

    async def override_engine():
        return engine

    async def override_registry():
        return registry

    async def override_executor():
        return executor

    async def override_storybook_client():
        return fake_client

    app.dependency_overrides[get_engine] = override_engine
    app.dependency_overrides[get_registry] = override_registry
    app.dependency_overrides[get_executor] = override_executor
    app.dependency_overrides[get_storybook_client] = override_storybook_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
