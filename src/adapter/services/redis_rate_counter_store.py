import asyncio

from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.app.services.rate_limiter import IRateCounterStore, RateCounterError

# GET, compare and SET EX / INCR run as one script so two concurrent requests
# can never both read the same pre-limit value.
HIT_SCRIPT = """
local current = tonumber(redis.call('GET', KEYS[1]) or '0')
if current >= tonumber(ARGV[1]) then
    return current
end
if current == 0 then
    redis.call('SET', KEYS[1], 1, 'EX', tonumber(ARGV[2]))
else
    redis.call('INCR', KEYS[1])
end
return current
"""


class RedisRateCounterStore(IRateCounterStore):
    """Rate counter store backed by Redis"""

    def __init__(self, client: Redis):
        self.client = client
        self._hit = client.register_script(HIT_SCRIPT)

    @classmethod
    def from_url(cls, url: str, timeout_seconds: float = 2.0) -> "RedisRateCounterStore":
        client = Redis.from_url(
            url,
            socket_timeout=timeout_seconds,
            socket_connect_timeout=timeout_seconds,
        )
        return cls(client)

    async def hit(self, key: str, limit: int, window_seconds: int) -> int:
        try:
            previous = await self._hit(keys=[key], args=[limit, window_seconds])
        except (RedisError, OSError, asyncio.TimeoutError) as e:
            raise RateCounterError(str(e)) from e
        return int(previous)
