"""
Tests for cache implementation.
"""

import pytest

from cheat_risk.core.cache import TTLCache, default_key


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


class TestTTLCache:
    """Test cases for TTLCache."""

    def test_initialization(self):
        """Test TTL cache initialization."""
        cache = TTLCache(maxsize=100, ttl=60)
        assert cache.maxsize == 100
        assert cache.ttl == 60
        assert len(cache) == 0

    def test_set_and_get(self, clock):
        """Test setting and getting cache entries."""
        cache = TTLCache(maxsize=10, ttl=60, clock=clock)

        cache.set("profile", "hikaru", {"joined": 1})

        assert cache.get("profile", "hikaru") == {"joined": 1}
        assert len(cache) == 1

    def test_keys_are_case_insensitive(self, clock):
        cache = TTLCache(maxsize=10, ttl=60, clock=clock)
        cache.set("profile", "Hikaru", "value")
        assert cache.get("profile", "hikaru") == "value"

    def test_get_nonexistent_key(self):
        """Test getting nonexistent key."""
        cache = TTLCache(maxsize=10, ttl=60)
        assert cache.get("profile", "nobody") is None

    def test_ttl_expiration(self, clock):
        """Test TTL expiration."""
        cache = TTLCache(maxsize=10, ttl=300, clock=clock)
        cache.set("stats", "hikaru", "value")

        clock.advance(299)
        assert cache.get("stats", "hikaru") == "value"

        clock.advance(1)
        assert cache.get("stats", "hikaru") is None
        assert len(cache) == 0

    def test_fifo_eviction(self, clock):
        """Test eviction of the oldest entry when cache is full."""
        cache = TTLCache(maxsize=2, ttl=60, clock=clock)

        cache.set("key1", "value1")
        cache.set("key2", "value2")
        cache.set("key3", "value3")

        assert len(cache) == 2
        assert cache.get("key1") is None
        assert cache.get("key2") == "value2"
        assert cache.get("key3") == "value3"

    def test_overwrite_does_not_evict(self, clock):
        cache = TTLCache(maxsize=2, ttl=60, clock=clock)
        cache.set("key1", "value1")
        cache.set("key2", "value2")
        cache.set("key2", "updated")
        assert cache.get("key1") == "value1"
        assert cache.get("key2") == "updated"

    def test_set_requires_key_and_value(self):
        with pytest.raises(TypeError):
            TTLCache().set("only-a-value")

    def test_stats(self, clock):
        cache = TTLCache(maxsize=10, ttl=60, clock=clock)
        cache.set("key1", "value1")
        cache.get("key1")
        cache.get("missing")

        stats = cache.stats()

        assert stats["size"] == 1
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 0.5

    def test_custom_key_function(self, clock):
        cache = TTLCache(key_func=lambda *parts: parts, clock=clock)
        cache.set("Profile", "X", 1)
        assert cache.get("Profile", "X") == 1
        assert cache.get("profile", "x") is None


def test_default_key():
    assert default_key("Games", "Hikaru", True) == "games:hikaru:true"
