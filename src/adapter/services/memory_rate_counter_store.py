import time
from typing import Callable, Dict, Tuple

from src.app.services.rate_limiter import IRateCounterStore


class MemoryRateCounterStore(IRateCounterStore):
    """
    In-process rate counter store for development and tests.

    hit() never awaits between reading and writing a counter, so it is atomic
    with respect to other coroutines on the same event loop. Counters are not
    shared between processes.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._counters: Dict[str, Tuple[int, float]] = {}

    async def hit(self, key: str, limit: int, window_seconds: int) -> int:
        now = self.clock()
        count, expires_at = self._counters.get(key, (0, 0.0))
        if expires_at <= now:
            count = 0

        if count >= limit:
            return count
        if count == 0:
            self._counters[key] = (1, now + window_seconds)
        else:
            self._counters[key] = (count + 1, expires_at)
        return count
