"""
Storage Module - Persistent key-value adapters for the cart.

Provides:
- KeyValueStore protocol (load / save / delete by key)
- InMemoryStore for local runs and tests
- RedisStore backed by the synchronous Upstash Redis client

Adapters never interpret payloads. Medium failures are logged and reported
as a missing value or a False result; they are never raised to the caller.
"""

from typing import Optional, Protocol, runtime_checkable

from upstash_redis import Redis

from cartsync import config
from cartsync.errors import ERROR_REDIS_NOT_CONFIGURED
from cartsync.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Synchronous key-value medium used to persist the cart."""

    def load(self, key: str) -> Optional[str]:
        ...

    def save(self, key: str, raw: str) -> bool:
        ...

    def delete(self, key: str) -> bool:
        ...


class InMemoryStore:
    """Dict-backed store. State lives as long as the instance."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, raw: str) -> bool:
        self._data[key] = raw
        return True

    def delete(self, key: str) -> bool:
        self._data.pop(key, None)
        return True

    def __contains__(self, key: str) -> bool:
        return key in self._data


class RedisStore:
    """
    Store backed by Upstash Redis.

    Usage:
        store = RedisStore()
        store.save("campgrounds-cart", "[]")
        raw = store.load("campgrounds-cart")
    """

    def __init__(self, redis: Optional[Redis] = None, ttl: Optional[int] = None):
        self._redis = redis  # Lazy initialization
        self.ttl = config.CART_TTL_SECONDS if ttl is None else ttl

    @property
    def redis(self) -> Redis:
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            self._redis = get_redis_sync()
        return self._redis

    def load(self, key: str) -> Optional[str]:
        try:
            data = self.redis.get(key)
        except Exception as e:
            logger.error(f"Failed to read {key} from Redis: {e}")
            return None
        if data is None:
            return None
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return str(data)

    def save(self, key: str, raw: str) -> bool:
        try:
            if self.ttl > 0:
                result = self.redis.set(key, raw, ex=self.ttl)
            else:
                result = self.redis.set(key, raw)
            return bool(result)
        except Exception as e:
            logger.error(f"Failed to save {key} to Redis: {e}")
            return False

    def delete(self, key: str) -> bool:
        try:
            self.redis.delete(key)
            return True
        except Exception as e:
            logger.error(f"Failed to delete {key} from Redis: {e}")
            return False


# Singleton instance
_sync_redis_client: Optional[Redis] = None


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        if not config.redis_configured():
            raise ValueError(ERROR_REDIS_NOT_CONFIGURED)
        _sync_redis_client = Redis(
            url=config.UPSTASH_REDIS_REST_URL,
            token=config.UPSTASH_REDIS_REST_TOKEN,
        )

    return _sync_redis_client


def get_store() -> KeyValueStore:
    """Pick the store for this process: Redis when configured, else memory."""
    if config.redis_configured():
        return RedisStore()
    logger.info("Upstash Redis not configured, cart will be kept in memory only")
    return InMemoryStore()


__all__ = ["KeyValueStore", "InMemoryStore", "RedisStore", "get_redis_sync", "get_store"]
