"""
Timeout values for Storybook operations, in milliseconds.

CI runners and local development builds are slower than production, so every
timeout goes through get_environment_timeout() before it is used:

    CI=true              → base × CI_TIMEOUT_MULTIPLIER  (1.5)
    APP_ENV=development  → base × DEV_TIMEOUT_MULTIPLIER (1.2)
    otherwise            → base

CI wins when both are set. The base for component fetches is
settings.DEFAULT_FETCH_TIMEOUT_MS unless the caller supplies its own.
"""

from typing import Optional

from config.settings import Settings, settings as default_settings


def get_environment_timeout(base_timeout_ms: int, settings: Optional[Settings] = None) -> int:
    """Scale a base timeout for the current deployment environment."""
    cfg = settings or default_settings
    if cfg.CI:
        return int(base_timeout_ms * cfg.CI_TIMEOUT_MULTIPLIER)
    if cfg.APP_ENV == "development":
        return int(base_timeout_ms * cfg.DEV_TIMEOUT_MULTIPLIER)
    return base_timeout_ms
