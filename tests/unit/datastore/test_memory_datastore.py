from __future__ import annotations

from result import is_err, is_ok

from tidytop.datastore import DataStoreKeyNotFoundError, MemoryDataStore


def test_memory_store_round_trips_and_isolates_copies() -> None:
    store = MemoryDataStore()
    payload = {"items": [1, 2]}
    store.save("key", payload)
    payload["items"].append(3)

    loaded = store.load("key").unwrap()
    loaded["items"].append(4)

    assert store.load("key").unwrap() == {"items": [1, 2]}


def test_memory_store_missing_key_and_delete() -> None:
    store = MemoryDataStore(namespace="test")

    missing = store.load("nope")
    assert is_err(missing)
    assert isinstance(missing.unwrap_err(), DataStoreKeyNotFoundError)

    store.save("b", 1)
    store.save("a", 2)
    assert store.keys().unwrap() == ["a", "b"]
    assert is_ok(store.delete("a"))
    assert store.keys().unwrap() == ["b"]
