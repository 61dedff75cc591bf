"""
Timeout race for blocking calls that cannot be cancelled.

The Storybook fetch is a plain blocking HTTP call with no cancellation hook.
To bound how long a job waits for it, the call runs on a separate thread
pool and the caller waits on its Future for at most timeout_ms:

    caller thread                    fetch pool thread
    ─────────────                    ─────────────────
    submit(fn) ───────────────────▶  fn() running...
    future.result(timeout)
      ├─ fn returns first  → result (or fn's exception) is returned/raised
      └─ timer fires first → OperationTimeoutError raised

When the timer wins and fn is still waiting for a pool thread, it is
cancelled and never runs. If it already started it is NOT stopped: it keeps
its pool thread until it returns on its own, and whatever it returns then is
logged and thrown away.
FETCH_POOL_SIZE bounds how many such stragglers can pile up.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Optional, TypeVar

from config.settings import settings
from models.exceptions import OperationTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TimeoutRunner:

    def __init__(self, max_workers: Optional[int] = None):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or settings.FETCH_POOL_SIZE,
            thread_name_prefix="storybook-fetch",
        )

    def run(self, fn: Callable[..., T], timeout_ms: int, *args) -> T:
        """Run fn(*args), giving up after timeout_ms. Raises OperationTimeoutError."""
        future = self._executor.submit(fn, *args)
        try:
            return future.result(timeout=timeout_ms / 1000)
        except FutureTimeoutError:
            # only succeeds if fn is still waiting for a pool thread
            if future.cancel():
                logger.debug("Timed-out call never started, cancelled it")
            future.add_done_callback(self._discard_late_result)
            raise OperationTimeoutError(timeout_ms) from None

    def shutdown(self) -> None:
        """Stop accepting work. Stragglers are not waited for."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    @staticmethod
    def _discard_late_result(future: Future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc:
            logger.debug(f"Discarding late failure of timed-out call: {exc}")
        else:
            logger.debug("Discarding late result of timed-out call")
