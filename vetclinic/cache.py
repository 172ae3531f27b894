"""
Namespaced caching for lookups and list pages
Values are stored as JSON so both backends behave the same way
"""
import json
import logging
from functools import wraps
from threading import Lock
from time import monotonic
from typing import Any, Callable, Optional

import redis
from pydantic import BaseModel

from .config import CACHE_BACKEND, CACHE_TTL_SECONDS, REDIS_URL

logger = logging.getLogger(__name__)

# Cache namespaces
CUSTOMER = "customer"
DOCTOR = "doctor"
DOCTOR_TIME_DETAILS = "doctorTimeDetails"
CUSTOMERS_PAGE = "customersPage"
DOCTORS_PAGE = "doctorsPage"
DOCTOR_APPOINTMENTS_PAGE = "doctorAppointmentsPage"

NAMESPACES = (
    CUSTOMER,
    DOCTOR,
    DOCTOR_TIME_DETAILS,
    CUSTOMERS_PAGE,
    DOCTORS_PAGE,
    DOCTOR_APPOINTMENTS_PAGE,
)

redis_client: Optional[redis.Redis] = None


def get_redis_client() -> redis.Redis:
    """Get or create the shared Redis client"""
    global redis_client

    if redis_client is None:
        if not REDIS_URL:
            raise RuntimeError("REDIS_URL is not set")

        # Mask password in URL for logging
        if "@" in REDIS_URL:
            url_parts = REDIS_URL.split("@")
            protocol = url_parts[0].split(":")[0]
            masked_url = f"{protocol}:****@{url_parts[1]}"
        else:
            masked_url = REDIS_URL
        logger.info(f"📡 Using Redis URL connection: {masked_url}")

        client = redis.from_url(
            REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30,
        )
        client.ping()
        redis_client = client
        logger.info("Redis connected successfully via URL")

    return redis_client


class MemoryCacheBackend:
    """In-process store shared by all worker threads"""

    name = "memory"

    def __init__(self):
        # Format: {key: (serialized_value, expires_at or None)}
        self._entries: dict[str, tuple[str, Optional[float]]] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and expires_at <= monotonic():
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: str, ttl: int) -> None:
        expires_at = monotonic() + ttl if ttl > 0 else None
        with self._lock:
            self._entries[key] = (value, expires_at)

    def delete(self, key: str) -> int:
        with self._lock:
            return 1 if self._entries.pop(key, None) is not None else 0

    def delete_prefix(self, prefix: str) -> int:
        with self._lock:
            keys = [k for k in self._entries if k.startswith(prefix)]
            for key in keys:
                del self._entries[key]
            return len(keys)

    def stats(self) -> dict:
        with self._lock:
            return {"available": True, "backend": self.name, "keys": len(self._entries)}


class RedisCacheBackend:
    """Redis store shared by all worker processes"""

    name = "redis"

    def __init__(self, client_factory: Callable[[], redis.Redis] = get_redis_client):
        self._client_factory = client_factory
        self._client: Optional[redis.Redis] = None

    def _get_client(self) -> redis.Redis:
        """Lazy load Redis client"""
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def get(self, key: str) -> Optional[str]:
        return self._get_client().get(key)

    def set(self, key: str, value: str, ttl: int) -> None:
        client = self._get_client()
        if ttl > 0:
            client.setex(key, ttl, value)
        else:
            client.set(key, value)

    def delete(self, key: str) -> int:
        return self._get_client().delete(key)

    def delete_prefix(self, prefix: str) -> int:
        client = self._get_client()
        keys = list(client.scan_iter(match=f"{prefix}*"))
        if keys:
            return client.delete(*keys)
        return 0

    def stats(self) -> dict:
        info = self._get_client().info()
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "available": True,
            "backend": self.name,
            "used_memory": info.get("used_memory_human"),
            "connected_clients": info.get("connected_clients"),
            "hit_rate": (hits / max(hits + misses, 1)) * 100,
        }


class Cache:
    """
    Namespaced cache with automatic JSON serialization

    Every namespace eviction bumps a generation counter; a value loaded
    under an older generation is not stored. A namespace whose eviction
    failed is bypassed until a later eviction succeeds.
    """

    def __init__(self, backend=None, ttl: int = CACHE_TTL_SECONDS):
        self.backend = backend or MemoryCacheBackend()
        self.ttl = ttl
        self._lock = Lock()
        self._generations: dict[str, int] = {}
        self._stale_namespaces: set[str] = set()

    @staticmethod
    def build_key(namespace: str, key: str) -> str:
        return f"{namespace}:{key}"

    def generation(self, namespace: str) -> int:
        with self._lock:
            return self._generations.get(namespace, 0)

    def is_stale(self, namespace: str) -> bool:
        with self._lock:
            return namespace in self._stale_namespaces

    def get(self, namespace: str, key: str) -> Optional[Any]:
        """Get value from cache, None on miss or backend failure"""
        full_key = self.build_key(namespace, key)
        if self.is_stale(namespace) and not self._drop_namespace(namespace):
            logger.debug(f"⏭️ Cache BYPASS: {full_key} (namespace not evicted)")
            return None
        try:
            value = self.backend.get(full_key)
        except Exception as e:
            logger.warning(f"⚠️ Cache get error for {full_key}: {e}")
            return None

        if value is None:
            logger.debug(f"❌ Cache MISS: {full_key}")
            return None
        logger.debug(f"✅ Cache HIT: {full_key}")
        return json.loads(value)

    def set(self, namespace: str, key: str, value: Any, generation: Optional[int] = None) -> bool:
        """
        Set a JSON-serializable value in cache

        Args:
            generation: Namespace generation the value was loaded under;
                the value is dropped if the namespace was evicted since
        """
        full_key = self.build_key(namespace, key)
        # Held across the write so an eviction cannot slip between check and set
        with self._lock:
            if namespace in self._stale_namespaces:
                logger.debug(f"⏭️ Cache SET skipped: {full_key} (namespace not evicted)")
                return False
            if generation is not None and generation != self._generations.get(namespace, 0):
                logger.debug(f"⏭️ Cache SET skipped: {full_key} (evicted while loading)")
                return False
            try:
                self.backend.set(full_key, json.dumps(value), self.ttl)
                logger.debug(f"✅ Cache SET: {full_key} (TTL: {self.ttl}s)")
                return True
            except Exception as e:
                logger.warning(f"⚠️ Cache set error for {full_key}: {e}")
                return False

    def evict(self, namespace: str, key: str) -> bool:
        full_key = self.build_key(namespace, key)
        try:
            self.backend.delete(full_key)
            logger.debug(f"✅ Cache DELETE: {full_key}")
            return True
        except Exception as e:
            logger.error(f"❌ Cache delete error for {full_key}: {e}")
            return False

    def evict_namespace(self, namespace: str) -> int:
        """
        Drop every entry of a namespace

        If the backend cannot delete the entries, the namespace is bypassed
        by `get` and `set` until a later eviction succeeds.
        """
        with self._lock:
            self._generations[namespace] = self._generations.get(namespace, 0) + 1
        try:
            deleted = self.backend.delete_prefix(f"{namespace}:")
        except Exception as e:
            with self._lock:
                self._stale_namespaces.add(namespace)
            logger.error(f"❌ Cache evict error for namespace '{namespace}', bypassing it until evicted: {e}")
            return 0

        with self._lock:
            self._stale_namespaces.discard(namespace)
        logger.info(f"🧹 Cache evicted namespace '{namespace}' ({deleted} keys)")
        return deleted

    def _drop_namespace(self, namespace: str) -> bool:
        """Retry a failed eviction; True once the namespace is clean"""
        self.evict_namespace(namespace)
        return not self.is_stale(namespace)

    def clear(self) -> int:
        return sum(self.evict_namespace(namespace) for namespace in NAMESPACES)

    def stats(self) -> dict:
        try:
            return self.backend.stats()
        except Exception as e:
            logger.error(f"❌ Failed to get cache stats: {e}")
            return {"available": False, "backend": self.backend.name, "error": str(e)}


def _default_key(*args, **kwargs) -> str:
    parts = [str(arg) for arg in args]
    parts.extend(f"{name}={value}" for name, value in sorted(kwargs.items()))
    return ":".join(parts) or "default"


def cached(namespace: str, model: Any, key_builder: Optional[Callable] = None):
    """
    Decorator to cache the result of a service method in `self.cache`

    Args:
        namespace: Cache namespace (e.g., 'customer')
        model: Pydantic model the cached JSON is validated back into
        key_builder: Optional function building the key from the method args

    Example:
        @cached(CUSTOMER, model=CustomerDTO)
        def get_customer(self, customer_id: int) -> CustomerDTO:
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            builder = key_builder or _default_key
            cache_key = builder(*args, **kwargs)

            generation = self.cache.generation(namespace)
            cached_value = self.cache.get(namespace, cache_key)
            if cached_value is not None:
                return model.model_validate(cached_value)

            result = func(self, *args, **kwargs)
            if result is not None:
                payload = result.model_dump(mode="json") if isinstance(result, BaseModel) else result
                self.cache.set(namespace, cache_key, payload, generation=generation)
            return result

        return wrapper

    return decorator


def create_cache() -> Cache:
    """Build the cache configured by CACHE_BACKEND"""
    if CACHE_BACKEND == "redis":
        logger.info("🔄 Using Redis cache backend")
        if CACHE_TTL_SECONDS <= 0:
            logger.warning(
                "⚠️ CACHE_TTL_SECONDS is 0: entries left behind by a failed eviction never expire"
            )
        return Cache(RedisCacheBackend())
    logger.info("🔄 Using in-memory cache backend")
    return Cache(MemoryCacheBackend())


# Global cache instance
cache = create_cache()


def get_cache() -> Cache:
    """Dependency injection for the process-wide cache"""
    return cache


def get_cache_stats() -> dict:
    """Get cache statistics for monitoring"""
    return cache.stats()
