"""Unit tests for the expiring cache module."""
import threading
import pytest
from community_site.cache import (
    ExpiringCache,
    ownership_key,
    post_prefix,
    post_metadata_key,
    post_slug_metadata_key,
    profile_key,
)


class TestCacheKey:
    """Test cache key generation."""

    def test_ownership_key(self):
        assert ownership_key("42", "7") == "post:42:user:7"

    def test_ownership_key_starts_with_post_prefix(self):
        """Prefix invalidation relies on the post id leading the key."""
        assert ownership_key("42", "abc").startswith(post_prefix("42"))
        assert not ownership_key("420", "abc").startswith(post_prefix("42"))

    def test_metadata_keys(self):
        assert post_metadata_key("42") == "post:42:metadata"
        assert post_slug_metadata_key("hello-world") == "post-slug:hello-world:metadata"

    def test_profile_key(self):
        assert profile_key("u1") == "profile:u1"


class TestExpiringCache:
    """Test expiring cache functionality with a controlled clock."""

    @pytest.fixture(autouse=True)
    def _cache(self, clock):
        self.clock = clock
        self.cache = ExpiringCache(ttl_seconds=60, name="ownership", clock=clock)

    def test_set_and_get(self):
        """A value is readable right after it is stored."""
        self.cache.set("post:1:user:a", {"authorized": True})
        assert self.cache.get("post:1:user:a") == {"authorized": True}

    def test_miss_nonexistent_key(self):
        assert self.cache.get("nonexistent:key") is None

    def test_expiry_after_ttl(self):
        self.cache.set("k", "v")
        self.clock.advance(61)
        assert self.cache.get("k") is None

    def test_valid_at_exactly_ttl(self):
        """Expiry is strictly greater than ttl."""
        self.cache.set("k", "v")
        self.clock.advance(60)
        assert self.cache.get("k") == "v"

    def test_expired_just_after_ttl(self):
        self.cache.set("k", "v")
        self.clock.advance(60.001)
        assert self.cache.get("k") is None

    def test_expired_get_evicts_entry(self):
        """A stale entry found on read is removed."""
        self.cache.set("k", "v")
        self.clock.advance(61)
        assert self.cache.size() == 1
        self.cache.get("k")
        assert self.cache.size() == 0

    def test_overwrite_returns_latest_value(self):
        self.cache.set("k", "v1")
        self.cache.set("k", "v2")
        assert self.cache.get("k") == "v2"

    def test_overwrite_refreshes_timestamp(self):
        """Age is measured from the latest set."""
        self.cache.set("k", "v1")
        self.clock.advance(40)
        self.cache.set("k", "v2")
        self.clock.advance(40)
        assert self.cache.get("k") == "v2"
        self.clock.advance(21)
        assert self.cache.get("k") is None

    def test_delete(self):
        self.cache.set("k", "v")
        self.cache.delete("k")
        assert self.cache.get("k") is None

    def test_delete_absent_key_is_noop(self):
        self.cache.set("other", "v")
        self.cache.delete("missing")
        self.cache.delete("missing")
        assert self.cache.size() == 1

    def test_delete_by_prefix(self):
        self.cache.set("res:1:user:a", 1)
        self.cache.set("res:1:user:b", 2)
        self.cache.set("res:2:user:a", 3)

        removed = self.cache.delete_by_prefix("res:1:")

        assert removed == 2
        assert self.cache.get("res:1:user:a") is None
        assert self.cache.get("res:1:user:b") is None
        assert self.cache.get("res:2:user:a") == 3

    def test_delete_by_prefix_no_match(self):
        self.cache.set("res:1:user:a", 1)
        assert self.cache.delete_by_prefix("res:9:") == 0
        assert self.cache.size() == 1

    def test_clear(self):
        self.cache.set("a", 1)
        self.cache.set("b", 2)
        self.cache.clear()
        assert self.cache.size() == 0
        assert self.cache.get("a") is None

    def test_sweep_reclaims_without_get(self):
        for i in range(25):
            self.cache.set(f"post:{i}:user:x", i)
        self.clock.advance(61)

        evicted = self.cache.sweep()

        assert evicted == 25
        assert self.cache.size() == 0

    def test_sweep_preserves_fresh_entries(self):
        self.cache.set("old", 1)
        self.clock.advance(30)
        self.cache.set("new", 2)
        self.clock.advance(31)

        assert self.cache.sweep() == 1
        assert self.cache.get("old") is None
        assert self.cache.get("new") == 2

    def test_sweep_reads_clock_once(self):
        """Every entry in one sweep is judged against the same instant."""
        ticks = iter(range(1, 100))
        cache = ExpiringCache(ttl_seconds=2, clock=lambda: next(ticks))
        for i in range(5):
            cache.set(f"post:{i}:user:a", i)  # stored at t=1..5

        # Swept at t=6: ages 5, 4, 3 are stale, 2 and 1 are not
        assert cache.sweep() == 3
        assert sorted(cache.keys()) == ["post:3:user:a", "post:4:user:a"]

    def test_sweep_on_empty_cache(self):
        assert self.cache.sweep() == 0

    def test_keys_is_a_snapshot(self):
        self.cache.set("a", 1)
        keys = self.cache.keys()
        keys.append("b")
        assert self.cache.keys() == ["a"]

    def test_stats(self):
        self.cache.set("a", 1)
        self.cache.get("a")
        self.cache.get("missing")
        self.clock.advance(61)
        self.cache.get("a")

        stats = self.cache.stats()
        assert stats == {
            "name": "ownership",
            "size": 0,
            "ttl_seconds": 60,
            "hits": 1,
            "misses": 2,
            "evictions": 1,
        }

    @pytest.mark.parametrize("ttl", [0, -1, -0.5])
    def test_non_positive_ttl_rejected(self, ttl):
        with pytest.raises(ValueError):
            ExpiringCache(ttl_seconds=ttl)

    def test_ttl_is_read_only(self):
        with pytest.raises(AttributeError):
            self.cache.ttl_seconds = 5

    def test_thread_safety(self):
        """Concurrent writers, readers and sweeps leave a consistent mapping."""
        cache = ExpiringCache(ttl_seconds=5)
        errors = []

        def write_cache(offset):
            try:
                for i in range(200):
                    cache.set(f"post:{offset}:user:{i}", i)
            except Exception as e:  # pragma: no cover
                errors.append(e)

        def read_and_sweep():
            try:
                for i in range(200):
                    cache.get(f"post:0:user:{i}")
                    cache.sweep()
                    cache.delete_by_prefix("post:1:")
            except Exception as e:  # pragma: no cover
                errors.append(e)

        threads = [threading.Thread(target=write_cache, args=(n,)) for n in range(3)]
        threads.append(threading.Thread(target=read_and_sweep))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert cache.size() >= 400


class TestCacheRealWorldUsage:
    """Test real-world usage scenarios."""

    def test_ownership_decision_lifecycle(self, clock):
        cache = ExpiringCache(ttl_seconds=60, clock=clock)
        key = "post:42:user:7"

        cache.set(key, {"authorized": True})
        clock.now = 59
        assert cache.get(key) == {"authorized": True}

        clock.now = 61
        assert cache.get(key) is None

        # Caller recomputes from the database and stores the new answer
        cache.set(key, {"authorized": False})
        clock.now = 90
        assert cache.get(key) == {"authorized": False}

    def test_instances_do_not_share_storage(self, clock):
        ownership = ExpiringCache(ttl_seconds=60, name="ownership", clock=clock)
        metadata = ExpiringCache(ttl_seconds=30, name="post_metadata", clock=clock)

        ownership.set("x", 1)

        assert metadata.get("x") is None
        assert ownership.get("x") == 1
        assert metadata.size() == 0

    def test_post_deleted_invalidation_workflow(self):
        cache = ExpiringCache(ttl_seconds=60)
        cache.set(ownership_key("42", "a"), {"authorized": True})
        cache.set(ownership_key("42", "b"), {"authorized": False})
        cache.set(ownership_key("43", "a"), {"authorized": True})

        # Post 42 deleted
        cache.delete_by_prefix(post_prefix("42"))

        assert cache.get(ownership_key("42", "a")) is None
        assert cache.get(ownership_key("42", "b")) is None
        assert cache.get(ownership_key("43", "a")) == {"authorized": True}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
