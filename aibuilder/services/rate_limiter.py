# FILE: aibuilder/services/rate_limiter.py
#
# Sliding-window request counter keyed by client address. In-process only:
# each worker counts its own requests.

import time
from collections import deque
from typing import Callable, Deque, Dict

from aibuilder.core.config import RATE_LIMIT_MAX, RATE_LIMIT_WINDOW_SECONDS


class RateLimiter:
    def __init__(
            self,
            max_requests: int = RATE_LIMIT_MAX,
            window_seconds: float = RATE_LIMIT_WINDOW_SECONDS,
            clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}

    def hit(self, key: str) -> bool:
        """Record a request for `key`; False when it is over the limit."""
        if self.max_requests <= 0:
            return True

        now = self._clock()
        bucket = self._hits.get(key)
        if bucket is None:
            bucket = deque()
            self._hits[key] = bucket
        while bucket and now - bucket[0] >= self.window_seconds:
            bucket.popleft()
        if len(bucket) >= self.max_requests:
            return False
        bucket.append(now)
        return True
