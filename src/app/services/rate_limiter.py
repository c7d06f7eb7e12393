"""
Fixed-window rate limiter.

Counts requests per key inside non-overlapping windows. The counter store owns
atomicity; the limiter owns the policy, including failing open when the store
is unavailable.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class RateCounterError(Exception):
    """Raised by a counter store when it cannot serve a request"""


class IRateCounterStore(ABC):
    """Atomic counter with a time-to-live, keyed by requester identity"""

    @abstractmethod
    async def hit(self, key: str, limit: int, window_seconds: int) -> int:
        """
        Atomically register one request for key.

        Returns the count seen before this request. When that value is already
        >= limit the counter is left untouched. The first hit in a window
        creates the counter with a TTL of window_seconds.

        Raises:
            RateCounterError: the store is unreachable or failed
        """
        pass


class RateLimiter:
    """
    Fixed window policy over an IRateCounterStore.

    Business Rules:
    - Default window is 3600 seconds with 5 requests allowed
    - Blocked requests do not grow the counter
    - Store faults let the request through (fail open) and are logged
    """

    KEY_PREFIX = "rate_limit:"

    def __init__(self, store: IRateCounterStore, limit: int = 5, window_seconds: int = 3600):
        self.store = store
        self.limit = limit
        self.window_seconds = window_seconds

    async def hit(self, identity: str) -> bool:
        """Return True if the request from identity is allowed"""
        key = f"{self.KEY_PREFIX}{identity}"
        try:
            previous = await self.store.hit(key, self.limit, self.window_seconds)
        except RateCounterError as e:
            logger.warning(f"Rate counter unavailable, allowing request: {e}")
            return True

        if previous >= self.limit:
            logger.info(f"Rate limit exceeded for {key}")
            return False
        return True
