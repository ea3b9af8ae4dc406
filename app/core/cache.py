"""
Cache backends for computed read models (homepage statistics).

Two interchangeable backends share one interface:
- MemoryCache: in-process TTL dict guarded by a lock, clock injectable for tests
- RedisCache: pooled Redis client with retry logic and graceful degradation

The active instance is handed to request handlers through the ``get_cache``
dependency; nothing reads a module-level value directly.
"""

import json
import logging
import threading
import time
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

import redis
from fastapi.concurrency import run_in_threadpool
from redis.connection import ConnectionPool
from redis.exceptions import ConnectionError, RedisError, TimeoutError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.config import Settings

logger = logging.getLogger(__name__)

Factory = Callable[[], Awaitable[Any]]


class BaseCache:
    """Interface shared by all cache backends."""

    backend = "base"

    def __init__(self, default_ttl: int, key_prefix: str = "", enabled: bool = True):
        self.default_ttl = default_ttl
        self.key_prefix = key_prefix
        self.enabled = enabled

    def make_key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}" if self.key_prefix else key

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError

    def is_healthy(self) -> bool:
        return self.enabled

    def get_stats(self) -> dict:
        return {"backend": self.backend, "enabled": self.enabled}

    async def get_or_set(self, key: str, factory: Factory, ttl: Optional[int] = None) -> Any:
        """
        Get value from cache or compute and cache it if not present.

        Two concurrent misses may both run ``factory``; the last write wins.
        Errors raised by ``factory`` propagate to the caller. Backend calls run
        in the threadpool so a slow or retrying Redis never blocks the loop.
        """
        cached_value = await run_in_threadpool(self.get, key)
        if cached_value is not None:
            return cached_value

        value = await factory()
        if value is not None:
            await run_in_threadpool(self.set, key, value, ttl)
        return value


class MemoryCache(BaseCache):
    """Process-local TTL cache."""

    backend = "memory"

    def __init__(
        self,
        default_ttl: int,
        key_prefix: str = "",
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(default_ttl, key_prefix, enabled)
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None

        full_key = self.make_key(key)
        with self._lock:
            entry = self._entries.get(full_key)
            if entry is None:
                self._misses += 1
                logger.debug(f"Cache MISS: {full_key}")
                return None

            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[full_key]
                self._misses += 1
                logger.debug(f"Cache EXPIRED: {full_key}")
                return None

            self._hits += 1
            logger.debug(f"Cache HIT: {full_key}")
            return value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        if not self.enabled:
            return False

        ttl = ttl or self.default_ttl
        full_key = self.make_key(key)
        with self._lock:
            self._entries[full_key] = (self._clock() + ttl, value)
        logger.debug(f"Cache SET: {full_key} (TTL: {ttl}s)")
        return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(self.make_key(key), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get_stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "backend": self.backend,
                "enabled": self.enabled,
                "keys": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / total if total else 0,
            }


_redis_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((ConnectionError, TimeoutError)),
    reraise=True,
)


class RedisCache(BaseCache):
    """
    Redis cache with connection pooling and retry logic.

    Transient connection errors are retried with exponential backoff; once
    retries are exhausted the call degrades to a miss (or a no-op write) so
    the caller recomputes instead of failing.
    """

    backend = "redis"

    def __init__(self, settings: Settings, client: Optional[redis.Redis] = None):
        super().__init__(settings.CACHE_DEFAULT_TTL, settings.CACHE_KEY_PREFIX, settings.CACHE_ENABLED)
        self.settings = settings
        self._pool: Optional[ConnectionPool] = None
        self._client: Optional[redis.Redis] = client
        self._is_connected = client is not None

    def connect(self) -> None:
        """Establish Redis connection with connection pooling."""
        if not self.enabled:
            logger.info("Cache is disabled. Skipping Redis connection.")
            return

        try:
            self._pool = ConnectionPool(
                host=self.settings.REDIS_HOST,
                port=self.settings.REDIS_PORT,
                db=self.settings.REDIS_DB,
                password=self.settings.REDIS_PASSWORD or None,
                max_connections=self.settings.REDIS_MAX_CONNECTIONS,
                socket_keepalive=self.settings.REDIS_SOCKET_KEEPALIVE,
                socket_timeout=self.settings.REDIS_SOCKET_TIMEOUT,
                retry_on_timeout=self.settings.REDIS_RETRY_ON_TIMEOUT,
                health_check_interval=self.settings.REDIS_HEALTH_CHECK_INTERVAL,
                decode_responses=True,
            )
            self._client = redis.Redis(connection_pool=self._pool)
            self._client.ping()
            self._is_connected = True

            logger.info(
                f"Redis cache connected successfully to {self.settings.REDIS_HOST}:{self.settings.REDIS_PORT}"
            )

        except RedisError as e:
            logger.error(f"Failed to connect to Redis cache: {e}")
            logger.warning("Cache will operate in degraded mode (no caching)")
            self._is_connected = False
            self.enabled = False

    def disconnect(self) -> None:
        """Close Redis connection and cleanup resources."""
        if self._client:
            try:
                self._client.close()
                logger.info("Redis cache connection closed")
            except RedisError as e:
                logger.error(f"Error closing Redis connection: {e}")

        if self._pool:
            self._pool.disconnect()

        self._is_connected = False

    def is_healthy(self) -> bool:
        if not self.enabled or not self._client:
            return False

        try:
            return bool(self._client.ping())
        except RedisError:
            return False

    @_redis_retry
    def _get_raw(self, full_key: str) -> Optional[str]:
        return self._client.get(full_key)

    @_redis_retry
    def _setex_raw(self, full_key: str, ttl: int, payload: str) -> bool:
        return bool(self._client.setex(full_key, ttl, payload))

    def get(self, key: str) -> Optional[Any]:
        if not self.enabled or not self._client:
            return None

        full_key = self.make_key(key)
        try:
            value = self._get_raw(full_key)
        except RedisError as e:
            logger.warning(f"Redis error getting key '{full_key}': {e}. Continuing without cache.")
            return None

        if value is None:
            logger.debug(f"Cache MISS: {full_key}")
            return None

        try:
            logger.debug(f"Cache HIT: {full_key}")
            return json.loads(value)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to deserialize cached value for key '{full_key}': {e}")
            self.delete(key)
            return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        if not self.enabled or not self._client:
            return False

        ttl = ttl or self.default_ttl
        full_key = self.make_key(key)
        try:
            payload = json.dumps(value, default=str)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize value for key '{full_key}': {e}")
            return False

        try:
            result = self._setex_raw(full_key, ttl, payload)
        except RedisError as e:
            logger.warning(f"Redis error setting key '{full_key}': {e}. Continuing without cache.")
            return False

        logger.debug(f"Cache SET: {full_key} (TTL: {ttl}s)")
        return result

    def delete(self, key: str) -> bool:
        if not self.enabled or not self._client:
            return False

        try:
            return bool(self._client.delete(self.make_key(key)))
        except RedisError as e:
            logger.error(f"Redis error deleting key '{key}': {e}")
            return False

    def get_stats(self) -> dict:
        if not self.enabled or not self._client:
            return {"backend": self.backend, "enabled": False, "connected": False}

        try:
            info = self._client.info("stats")
        except RedisError as e:
            logger.error(f"Error getting cache stats: {e}")
            return {"backend": self.backend, "enabled": True, "connected": False, "error": str(e)}

        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "backend": self.backend,
            "enabled": True,
            "connected": self._is_connected,
            "hits": hits,
            "misses": misses,
            "hit_rate": hits / (hits + misses) if (hits + misses) > 0 else 0,
        }


def build_cache(settings: Settings) -> BaseCache:
    """Create the backend selected by ``CACHE_BACKEND``."""
    if settings.CACHE_BACKEND == "redis":
        cache = RedisCache(settings)
        cache.connect()
        return cache

    return MemoryCache(
        default_ttl=settings.CACHE_DEFAULT_TTL,
        key_prefix=settings.CACHE_KEY_PREFIX,
        enabled=settings.CACHE_ENABLED,
    )


# Instance installed by the application lifespan
_cache_instance: Optional[BaseCache] = None


def set_cache(cache: Optional[BaseCache]) -> None:
    """Install the cache instance served by ``get_cache``."""
    global _cache_instance
    _cache_instance = cache


def get_cache() -> BaseCache:
    """FastAPI dependency returning the active cache backend."""
    global _cache_instance
    if _cache_instance is None:
        from app.config import settings

        _cache_instance = build_cache(settings)
    return _cache_instance
