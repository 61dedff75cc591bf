"""
Centralized configuration using pydantic-settings.

How it works:
- Reads environment variables automatically (e.g., MAX_CONCURRENT_JOBS env var → Settings.MAX_CONCURRENT_JOBS)
- Falls back to defaults defined here if env vars are not set
- Can also read from a .env file in the project root

Every module imports `settings` from here instead of hardcoding values.
Components that need different values in tests (the scheduler, the reaper)
take them as constructor arguments and only fall back to `settings`.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Storybook ───────────────────────────────────────────────
    STORYBOOK_URL: str = "http://localhost:6006"
    STORYBOOK_HTTP_TIMEOUT: float = 30.0   # seconds, transport-level guard

    # ── Scheduler ───────────────────────────────────────────────
    MAX_CONCURRENT_JOBS: int = 2           # jobs allowed in RUNNING at once
    SCHEDULER_TICK_INTERVAL: float = 1.0   # seconds between safety-net admissions
    FETCH_POOL_SIZE: int = 8               # threads available to in-flight fetches

    # ── Reaper ──────────────────────────────────────────────────
    REAPER_INTERVAL: float = 300.0         # seconds between sweeps
    JOB_RETENTION_SECONDS: float = 3600.0  # terminal jobs live this long

    # ── Timeouts ────────────────────────────────────────────────
    DEFAULT_FETCH_TIMEOUT_MS: int = 10000
    CI: bool = False
    APP_ENV: str = "production"
    CI_TIMEOUT_MULTIPLIER: float = 1.5
    DEV_TIMEOUT_MULTIPLIER: float = 1.2

    # ── App ─────────────────────────────────────────────────────
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# Singleton: import this everywhere
settings = Settings()
