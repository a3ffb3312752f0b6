from app.client.cache import COLLECTION, QueryCache, note_key


def test_fetch_loads_once_until_invalidated():
    cache = QueryCache()
    calls = []

    def loader():
        calls.append(1)
        return len(calls)

    assert cache.fetch(COLLECTION, loader) == 1
    assert cache.fetch(COLLECTION, loader) == 1
    cache.invalidate(COLLECTION)
    assert cache.is_stale(COLLECTION)
    assert cache.fetch(COLLECTION, loader) == 2


def test_invalidation_is_exact_per_partition():
    cache = QueryCache()
    cache.set(COLLECTION, ["a"])
    cache.set(note_key("a"), "A")

    cache.invalidate(COLLECTION)
    assert cache.is_stale(COLLECTION)
    assert not cache.is_stale(note_key("a"))


def test_invalidate_missing_key_is_noop():
    cache = QueryCache()
    cache.invalidate(note_key("ghost"))
    assert note_key("ghost") not in cache


def test_remove_evicts():
    cache = QueryCache()
    cache.set(note_key("a"), "A")
    cache.remove(note_key("a"))
    assert cache.get(note_key("a")) is None
    cache.remove(note_key("a"))


def test_last_write_wins():
    cache = QueryCache()
    cache.set(note_key("a"), "first")
    cache.set(note_key("a"), "second")
    assert cache.get(note_key("a")).value == "second"
