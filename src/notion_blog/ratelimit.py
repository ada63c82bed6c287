# ABOUTME: Rate limiting for Notion API calls.
# ABOUTME: Provides RateLimiter to keep requests under the API's per-second limit.

import time


class RateLimiter:
    """Rate limiter using simple timing.

    Blocks the caller until enough time has passed since the last request.
    """

    def __init__(self, calls_per_second: float = 2.5):
        """Initialize rate limiter.

        Args:
            calls_per_second: Maximum requests per second. Default 2.5 leaves
                headroom below Notion's 3/sec limit.
        """
        if calls_per_second <= 0:
            raise ValueError(f"calls_per_second must be positive, got {calls_per_second}")
        self._min_interval = 1.0 / calls_per_second
        self._last_call = 0.0

    def acquire(self) -> None:
        """Block until a request slot is available."""
        now = time.monotonic()
        wait_time = self._last_call + self._min_interval - now
        if wait_time > 0:
            time.sleep(wait_time)
        self._last_call = time.monotonic()
