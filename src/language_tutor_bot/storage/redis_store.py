"""Redis-backed key/value store.

One ``RedisStore`` is built per process (see ``app.Container``). The
underlying ``redis.asyncio`` client is created lazily on first use and reused
for the lifetime of the store.
"""

import redis.asyncio as aioredis
import structlog

from language_tutor_bot.storage.interfaces import KeyValueStore

logger = structlog.get_logger()


class StoreConfigurationError(RuntimeError):
    """Raised when no Redis endpoint is configured."""


class RedisStore(KeyValueStore):
    """KeyValueStore over a single shared Redis connection pool.

    Args:
        url: Redis connection URL, e.g. ``redis://localhost:6379/0``.

    Raises:
        StoreConfigurationError: If ``url`` is empty.
    """

    def __init__(self, url: str | None):
        if not url:
            raise StoreConfigurationError("REDIS_URL must be provided")
        self._url = url
        self._client: aioredis.Redis | None = None

    @property
    def client(self) -> aioredis.Redis:
        if self._client is None:
            self._client = aioredis.from_url(
                self._url,
                encoding="utf-8",
                decode_responses=True,
            )
            logger.info("redis_client_created")
        return self._client

    async def get(self, key: str) -> str | None:
        return await self.client.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        await self.client.set(key, value, ex=ttl_seconds)

    async def hash_increment(self, hash_key: str, field: str, delta: int = 1) -> int:
        return int(await self.client.hincrby(hash_key, field, delta))

    async def hash_get_all(self, hash_key: str) -> dict[str, str]:
        return await self.client.hgetall(hash_key)

    async def hash_set(self, hash_key: str, field: str, value: str) -> None:
        await self.client.hset(hash_key, field, value)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
