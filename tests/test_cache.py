from __future__ import annotations

import threading

import pytest

from credentials_http.cache import ProfileCache, cache_key
from credentials_http.profile import UserProfile


def profile(userid: str) -> UserProfile:
    return UserProfile(id=userid, display_name=userid.title())


def test_lookup_miss_returns_none() -> None:
    cache = ProfileCache()
    assert cache.lookup(cache_key("Mary", "qwerasdf")) is None
    assert len(cache) == 0


def test_store_then_lookup() -> None:
    cache = ProfileCache()
    key = cache_key("Mary", "qwerasdf")
    cache.store(key, profile("mary"))

    assert cache.lookup(key) == profile("mary")
    assert key in cache


def test_store_overwrites_existing_entry() -> None:
    cache = ProfileCache()
    key = cache_key("Mary", "qwerasdf")
    cache.store(key, profile("mary"))
    cache.store(key, profile("maria"))

    assert cache.lookup(key) == profile("maria")
    assert len(cache) == 1


def test_keys_do_not_collide_across_split_points() -> None:
    assert cache_key("ab", "c") != cache_key("a", "bc")
    cache = ProfileCache()
    cache.store(cache_key("ab", "c"), profile("ab"))
    assert cache.lookup(cache_key("a", "bc")) is None


def test_capacity_evicts_least_recently_used() -> None:
    cache = ProfileCache(capacity=2)
    cache.store(cache_key("a", "1"), profile("a"))
    cache.store(cache_key("b", "2"), profile("b"))
    # touching "a" makes "b" the eviction candidate
    assert cache.lookup(cache_key("a", "1")) is not None
    cache.store(cache_key("c", "3"), profile("c"))

    assert cache_key("b", "2") not in cache
    assert cache_key("a", "1") in cache
    assert cache_key("c", "3") in cache
    assert len(cache) == 2


def test_unbounded_by_default() -> None:
    cache = ProfileCache()
    for idx in range(1000):
        cache.store(cache_key(f"user{idx}", "pw"), profile(f"user{idx}"))
    assert len(cache) == 1000


def test_clear_removes_everything() -> None:
    cache = ProfileCache()
    cache.store(cache_key("a", "1"), profile("a"))
    cache.clear()
    assert len(cache) == 0


@pytest.mark.parametrize("capacity", [0, -5])
def test_non_positive_capacity_rejected(capacity: int) -> None:
    with pytest.raises(ValueError):
        ProfileCache(capacity=capacity)


def test_concurrent_store_and_lookup() -> None:
    cache = ProfileCache()
    errors: list[BaseException] = []
    barrier = threading.Barrier(8)

    def worker(worker_id: int) -> None:
        try:
            barrier.wait()
            for idx in range(500):
                key = cache_key(f"user{idx}", "shared")
                cache.store(key, profile(f"user{idx}"))
                seen = cache.lookup(key)
                assert seen is not None and seen.id == f"user{idx}"
                cache.store(cache_key(f"w{worker_id}", str(idx)), profile(f"w{worker_id}"))
        except BaseException as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(cache) == 500 + 8 * 500
