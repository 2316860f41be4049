"""
TTL-based in-memory cache for upstream payloads.

Instances are created and owned by the caller (usually the player data
gateway); there is no module-level cache state.
"""

import threading
import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple
import structlog

logger = structlog.get_logger(__name__)


def default_key(*parts: Any) -> str:
    """Build a case-insensitive cache key from its parts."""
    return ":".join(str(part).lower() for part in parts)


class TTLCache:
    """Simple TTL cache with thread-safe operations."""

    def __init__(
        self,
        maxsize: int = 1000,
        ttl: float = 300,
        key_func: Callable[..., Hashable] = default_key,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize TTL cache.

        Args:
            maxsize: Maximum number of entries
            ttl: Time to live in seconds
            key_func: Builds the storage key from the parts passed to
                ``get``/``set``
            clock: Monotonic time source, injectable for tests
        """
        self.maxsize = maxsize
        self.ttl = ttl
        self.key_func = key_func
        self.clock = clock
        self.cache: Dict[Hashable, Tuple[Any, float]] = {}
        self.lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def make_key(self, *parts: Any) -> Hashable:
        return self.key_func(*parts)

    def get(self, *parts: Any) -> Optional[Any]:
        """
        Get value from cache if not expired.

        Args:
            parts: Key parts, combined by ``key_func``

        Returns:
            Cached value if exists and not expired, None otherwise
        """
        key = self.make_key(*parts)
        with self.lock:
            if key in self.cache:
                value, expiry = self.cache[key]
                if self.clock() < expiry:
                    self._hits += 1
                    logger.debug("Cache hit", key=key, hits=self._hits)
                    return value
                # Remove expired entry
                del self.cache[key]
                self._misses += 1
                logger.debug("Cache expired", key=key)
            else:
                self._misses += 1
            return None

    def set(self, *parts_and_value: Any) -> None:
        """
        Set value in cache with TTL.

        The last positional argument is the value; the preceding ones are
        the key parts.
        """
        if len(parts_and_value) < 2:
            raise TypeError("set() needs at least one key part and a value")
        *parts, value = parts_and_value
        key = self.make_key(*parts)
        with self.lock:
            # Simple FIFO eviction when full
            if len(self.cache) >= self.maxsize and key not in self.cache:
                oldest_key = next(iter(self.cache))
                del self.cache[oldest_key]
                logger.debug("Cache eviction", key=oldest_key, reason="full")

            self.cache[key] = (value, self.clock() + self.ttl)
            logger.debug("Cache set", key=key, ttl=self.ttl)

    def stats(self) -> Dict[str, float]:
        """Get cache statistics."""
        with self.lock:
            total = self._hits + self._misses
            return {
                "size": len(self.cache),
                "maxsize": self.maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / total if total > 0 else 0.0,
            }

    def __len__(self) -> int:
        """Get number of entries in cache."""
        return len(self.cache)
