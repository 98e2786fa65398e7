"""Unit tests for PathCache.

Tests cover:
- Cache hits (a parsed path is served from memory on the second call)
- LRU eviction (silent eviction at max_size)
- Instance isolation (separate PathCache instances do not share state)
- Malformed paths are never cached
- Properties (max_size and curr_size return correct values)
"""

from __future__ import annotations

import pytest

from docsync.cache import PathCache
from docsync.errors import PathSyntaxError


class TestCacheHits:
    """Parsed tuples are reused."""

    def test_same_object_returned(self) -> None:
        cache = PathCache()
        first = cache.parse("items[0].title")
        assert first == ("items", 0, "title")
        assert cache.parse("items[0].title") is first

    def test_curr_size_counts_distinct_paths(self) -> None:
        cache = PathCache()
        cache.parse("a")
        cache.parse("a")
        cache.parse("b")
        assert cache.curr_size == 2

    def test_parsed_tuple_passes_through_uncached(self) -> None:
        cache = PathCache()
        segments = ("a.b", 0)
        assert cache.parse(segments) is segments
        assert cache.curr_size == 0


class TestEviction:
    """LRU eviction at max_size."""

    def test_evicts_least_recently_used(self) -> None:
        cache = PathCache(max_size=2)
        a = cache.parse("a")
        cache.parse("b")
        cache.parse("a")  # refresh "a"
        cache.parse("c")  # evicts "b"
        assert cache.curr_size == 2
        assert cache.parse("a") is a

    def test_max_size_property(self) -> None:
        assert PathCache(max_size=7).max_size == 7

    def test_clear(self) -> None:
        cache = PathCache()
        cache.parse("a")
        cache.clear()
        assert cache.curr_size == 0


class TestIsolationAndErrors:
    """Instances are independent; errors are not cached."""

    def test_instances_do_not_share_entries(self) -> None:
        first, second = PathCache(), PathCache()
        first.parse("a")
        assert second.curr_size == 0

    def test_malformed_path_raises_every_time(self) -> None:
        cache = PathCache()
        for _ in range(2):
            with pytest.raises(PathSyntaxError):
                cache.parse("a[")
        assert cache.curr_size == 0
