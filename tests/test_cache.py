"""Tests for the TTL cache."""

import pytest

from tally.utils.cache import TTLCache


class FakeTimer:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def timer():
    return FakeTimer()


class TestTTLCache:
    """Tests for TTLCache."""

    def test_put_and_get(self, timer):
        """Test a stored value is returned."""
        cache = TTLCache(maxsize=10, ttl=60, timer=timer)
        cache.put("a", 1)

        assert cache.get("a") == 1
        assert "a" in cache
        assert len(cache) == 1

    def test_miss_returns_none(self, timer):
        """Test a missing key returns None and counts as a miss."""
        cache = TTLCache(maxsize=10, ttl=60, timer=timer)

        assert cache.get("a") is None
        assert cache.stats().misses == 1

    def test_entries_expire_after_write(self, timer):
        """Test entries expire ttl seconds after being written."""
        cache = TTLCache(maxsize=10, ttl=60, timer=timer)
        cache.put("a", 1)

        timer.advance(59)
        assert cache.get("a") == 1
        timer.advance(1)
        assert cache.get("a") is None
        assert "a" not in cache

    def test_least_recently_used_evicted(self, timer):
        """Test the least recently used entry is evicted when full."""
        cache = TTLCache(maxsize=2, ttl=60, timer=timer)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")
        cache.put("c", 3)

        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.get("c") == 3
        assert cache.stats().evictions == 1

    def test_evict(self, timer):
        """Test evicting a single key."""
        cache = TTLCache(maxsize=10, ttl=60, timer=timer)
        cache.put("a", 1)

        assert cache.evict("a") is True
        assert cache.evict("a") is False
        assert cache.get("a") is None

    def test_add_keeps_existing_entry(self, timer):
        """Test add does not overwrite a live entry."""
        cache = TTLCache(maxsize=10, ttl=60, timer=timer)
        cache.put("a", "new")

        assert cache.add("a", "old") is False
        assert cache.get("a") == "new"
        assert cache.add("b", "value") is True

    def test_clear_starts_new_generation(self, timer):
        """Test clear empties the cache and bumps the generation."""
        cache = TTLCache(maxsize=10, ttl=60, timer=timer)
        cache.put("a", 1)
        generation = cache.generation

        cache.clear()
        assert len(cache) == 0
        assert cache.generation == generation + 1

    def test_stale_generation_put_dropped(self, timer):
        """Test a put tagged with a pre-clear generation is ignored."""
        cache = TTLCache(maxsize=10, ttl=60, timer=timer)
        generation = cache.generation
        cache.clear()

        assert cache.put("page", "stale", generation=generation) is False
        assert cache.get("page") is None
        assert cache.put("page", "fresh", generation=cache.generation) is True
        assert cache.get("page") == "fresh"

    def test_stats_hit_rate(self, timer):
        """Test hit and miss counters."""
        cache = TTLCache(maxsize=10, ttl=60, timer=timer)
        cache.put("a", 1)
        cache.get("a")
        cache.get("b")

        stats = cache.stats()
        assert stats.hits == 1
        assert stats.misses == 1
        assert stats.size == 1
        assert stats.hit_rate == 0.5

    @pytest.mark.parametrize("maxsize,ttl", [(0, 60), (10, 0)])
    def test_invalid_configuration(self, maxsize, ttl):
        """Test non-positive size or ttl is rejected."""
        with pytest.raises(ValueError):
            TTLCache(maxsize=maxsize, ttl=ttl)
