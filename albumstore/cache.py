"""
Album Store — Title Cache
=========================

What:  Key-value projection of album titles into Redis.
Why:   Kept for consumers outside this service; no route reads or writes it.
How:   One string key per album, `album:{id}` → title, no expiry. The only
       writer is the startup sync (services/cache_sync.py).

The projection is lossy (title only) and is never refreshed after startup,
so it drifts from MongoDB as soon as the first write request lands.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from albumstore.config import Settings
from albumstore.exceptions import StartupError

logger = logging.getLogger(__name__)

KEY_PREFIX = "album:"


def cache_key(album_id: int) -> str:
    """`cache_key(1)` → `"album:1"`."""
    return f"{KEY_PREFIX}{album_id}"


class AlbumCache(ABC):
    """Abstract key-value handle; values are plain strings."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def ping(self) -> None:
        ...

    async def close(self) -> None:
        pass


class RedisAlbumCache(AlbumCache):
    """AlbumCache backed by a `redis.asyncio.Redis` client."""

    def __init__(self, client: redis.Redis):
        self._client = client

    async def set(self, key: str, value: str) -> None:
        await self._client.set(key, value)

    async def get(self, key: str) -> Optional[str]:
        return await self._client.get(key)

    async def ping(self) -> None:
        await self._client.ping()

    async def close(self) -> None:
        await self._client.aclose()


async def connect_cache(settings: Settings) -> RedisAlbumCache:
    """
    Connect to Redis and verify the connection with PING.

    Raises:
        StartupError: Redis is unreachable.
    """
    timeout = settings.redis_timeout_ms / 1000
    client = redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_connect_timeout=timeout,
        socket_timeout=timeout,
    )
    cache = RedisAlbumCache(client)
    try:
        await cache.ping()
    except RedisError as e:
        await cache.close()
        raise StartupError(message=f"Could not connect to Redis: {e}") from e

    logger.info("Connected to Redis cache")
    return cache
