# ABOUTME: Per-source minimum-interval throttle for catalogs with usage policies.
# ABOUTME: Only sources given an interval are paced; all others pass straight through.

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Open Library asks clients to stay around one request per second.
DEFAULT_INTERVALS: dict[str, float] = {"openlibrary": 1.0}


class RateLimiter:
    """Keeps calls to each throttled source at least `interval` seconds apart.

    Lookups run one at a time, so no locking is needed: each call to
    `throttle` finishes waiting before the caller issues its request.
    The clock and sleep functions are injectable for tests.
    """

    def __init__(
        self,
        intervals: dict[str, float] | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._intervals = dict(DEFAULT_INTERVALS if intervals is None else intervals)
        self._clock = clock
        self._sleep = sleep
        self._last_call: dict[str, float] = {}

    def is_throttled(self, source: str) -> bool:
        return self._intervals.get(source, 0.0) > 0

    def throttle(self, source: str) -> None:
        """Block until the source's interval has passed since its previous call."""
        interval = self._intervals.get(source, 0.0)
        if interval <= 0:
            return
        last = self._last_call.get(source)
        if last is not None:
            elapsed = self._clock() - last
            if elapsed < interval:
                wait = interval - elapsed
                logger.debug("Throttling %s for %.3fs", source, wait)
                self._sleep(wait)
        self._last_call[source] = self._clock()
