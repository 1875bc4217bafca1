"""Redis storage backend."""

from __future__ import annotations

import logging
from typing import Final

from redis.asyncio import Redis
from redis.exceptions import RedisError

from wallet_auth.core.errors import StorageUnavailable
from wallet_auth.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

# KEYS[1] = key, ARGV = [expect_existing ("1"/"0"), expected value, new value]
_COMPARE_AND_SWAP_LUA: Final[str] = """
local current = redis.call('GET', KEYS[1])
if ARGV[1] == '1' then
  if current ~= ARGV[2] then
    return 0
  end
elseif current then
  return 0
end
redis.call('SET', KEYS[1], ARGV[3])
return 1
"""


class RedisKeyValueStore(KeyValueStore):
    """Store backed by a shared ``redis.asyncio`` client.

    Keys are stored as ``"{namespace}:{key}"``. Compare-and-swap runs as a
    server-side Lua script, so it is atomic across processes and nodes.
    """

    def __init__(self, client: Redis, namespace: str) -> None:
        super().__init__(namespace)
        self._redis = client
        self._compare_and_swap = client.register_script(_COMPARE_AND_SWAP_LUA)

    async def get(self, key: str) -> str | None:
        try:
            value = await self._redis.get(self.qualified_key(key))
        except RedisError as err:
            logger.error("Redis GET failed for %s: %s", self.qualified_key(key), err)
            raise StorageUnavailable(str(err)) from err
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def put(self, key: str, value: str) -> None:
        try:
            await self._redis.set(self.qualified_key(key), value)
        except RedisError as err:
            logger.error("Redis SET failed for %s: %s", self.qualified_key(key), err)
            raise StorageUnavailable(str(err)) from err

    async def compare_and_swap(self, key: str, expected: str | None, value: str) -> bool:
        args = ["0", "", value] if expected is None else ["1", expected, value]
        try:
            swapped = await self._compare_and_swap(keys=[self.qualified_key(key)], args=args)
        except RedisError as err:
            logger.error("Redis compare-and-swap failed for %s: %s", self.qualified_key(key), err)
            raise StorageUnavailable(str(err)) from err
        return int(swapped) == 1


def create_redis_client(redis_url: str) -> Redis:
    """Return a lazily connecting client for ``redis_url``."""
    return Redis.from_url(redis_url, decode_responses=True)
