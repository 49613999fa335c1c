from __future__ import annotations

from countyscope.models import NaicsCode


def test_cache_miss_then_hit(cache) -> None:
    assert cache.get("children-62") is None

    cache.set("children-62", [NaicsCode("621", "Ambulatory")])

    assert cache.get("children-62") == [NaicsCode("621", "Ambulatory")]
    stats = cache.stats
    assert stats["entries"] == 1
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 0.5


def test_cache_stores_empty_lists(cache) -> None:
    cache.set("children-621111", [])

    assert cache.get("children-621111") == []
    assert "children-621111" in cache


def test_cache_returns_copies(cache) -> None:
    cache.set("all-2022", [NaicsCode("62", "Health")])

    cache.get("all-2022").append(NaicsCode("11", "Agriculture"))

    assert len(cache.get("all-2022")) == 1


def test_cache_clear_and_invalidate(cache) -> None:
    cache.set("a", [])
    cache.set("b", [])

    cache.invalidate("a")
    assert "a" not in cache
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0
    assert cache.stats["hits"] == 0


def test_membership_checks_do_not_touch_stats_and_last_write_tracks_set(cache) -> None:
    assert cache.stats["last_write"] is None

    cache.set("children-62", [])
    assert cache.contains("children-62")
    assert "children-11" not in cache
    assert len(cache) == 1

    stats = cache.stats
    assert stats["hits"] == 0
    assert stats["misses"] == 0
    assert stats["last_write"] is not None
