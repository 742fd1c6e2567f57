from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import BaseModel
from result import is_err, is_ok

from tidytop.registry import DuplicateKeyError, EntityRegistry, NotFoundError


class Counter(BaseModel):
    name: str
    value: int = 0
    tags: list[str] = []


@pytest.fixture
def registry() -> EntityRegistry[str, Counter]:
    return EntityRegistry("counter")


def test_add_then_get_returns_equal_entity(registry: EntityRegistry[str, Counter]) -> None:
    registry.add("a", Counter(name="a", value=1))

    result = registry.get("a")

    assert is_ok(result)
    assert result.unwrap() == Counter(name="a", value=1)


def test_add_duplicate_key_fails_and_keeps_original(registry: EntityRegistry[str, Counter]) -> None:
    registry.add("a", Counter(name="first"))

    result = registry.add("a", Counter(name="second"))

    assert is_err(result)
    error = result.unwrap_err()
    assert isinstance(error, DuplicateKeyError)
    assert error.kind == "counter"
    assert error.key == "a"
    assert registry.get("a").unwrap().name == "first"


def test_get_missing_key_returns_not_found(registry: EntityRegistry[str, Counter]) -> None:
    result = registry.get("missing")

    assert is_err(result)
    error = result.unwrap_err()
    assert isinstance(error, NotFoundError)
    assert error.message == "Counter 'missing' not found"


def test_update_requires_existing_key(registry: EntityRegistry[str, Counter]) -> None:
    assert is_err(registry.update("a", Counter(name="a")))

    registry.add("a", Counter(name="a"))
    assert is_ok(registry.update("a", Counter(name="a", value=7)))
    assert registry.get("a").unwrap().value == 7


def test_remove_returns_entity_and_forgets_key(registry: EntityRegistry[str, Counter]) -> None:
    registry.add("a", Counter(name="a"))

    removed = registry.remove("a")

    assert removed.unwrap().name == "a"
    assert not registry.contains("a")
    assert is_err(registry.remove("a"))


def test_returned_values_are_copies(registry: EntityRegistry[str, Counter]) -> None:
    original = Counter(name="a", tags=["x"])
    registry.add("a", original)
    original.tags.append("mutated-before-read")

    fetched = registry.get("a").unwrap()
    fetched.tags.append("mutated-after-read")

    assert registry.get("a").unwrap().tags == ["x"]


def test_modify_applies_callback_to_current_value(registry: EntityRegistry[str, Counter]) -> None:
    registry.add("a", Counter(name="a", value=1))

    result = registry.modify("a", lambda counter: counter.model_copy(update={"value": counter.value + 1}))

    assert result.unwrap().value == 2
    assert registry.get("a").unwrap().value == 2


def test_modify_missing_key_does_not_call_callback(registry: EntityRegistry[str, Counter]) -> None:
    calls: list[Counter] = []

    result = registry.modify("missing", lambda counter: calls.append(counter) or counter)

    assert is_err(result)
    assert calls == []


def test_keys_list_all_and_len(registry: EntityRegistry[str, Counter]) -> None:
    for name in ("a", "b", "c"):
        registry.add(name, Counter(name=name))

    assert sorted(registry.keys()) == ["a", "b", "c"]
    assert sorted(counter.name for counter in registry.list_all()) == ["a", "b", "c"]
    assert len(registry) == 3


def test_concurrent_adds_of_same_key_admit_exactly_one(registry: EntityRegistry[str, Counter]) -> None:
    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(lambda i: registry.add("shared", Counter(name=str(i))), range(64)))

    assert sum(1 for result in results if is_ok(result)) == 1
    assert len(registry) == 1


def test_concurrent_modify_never_loses_updates(registry: EntityRegistry[str, Counter]) -> None:
    registry.add("a", Counter(name="a"))

    def _increment(_: int) -> None:
        registry.modify("a", lambda counter: counter.model_copy(update={"value": counter.value + 1}))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(_increment, range(200)))

    assert registry.get("a").unwrap().value == 200


def test_locked_is_reentrant_for_registry_calls(registry: EntityRegistry[str, Counter]) -> None:
    registry.add("a", Counter(name="a"))

    with registry.locked("a"):
        registry.update("a", Counter(name="a", value=3))
        assert registry.get("a").unwrap().value == 3


def test_removed_keys_release_their_locks(registry: EntityRegistry[str, Counter]) -> None:
    def _cycle(index: int) -> None:
        key = f"k{index % 4}"
        registry.add(key, Counter(name=key))
        registry.modify(key, lambda counter: counter.model_copy(update={"value": counter.value + 1}))
        registry.remove(key)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(_cycle, range(200)))

    registry.add("kept", Counter(name="kept"))

    assert len(registry) == 1
    assert set(registry._key_locks) == {"kept"}  # noqa: SLF001


def test_nested_lock_survives_inner_removal(registry: EntityRegistry[str, Counter]) -> None:
    registry.add("a", Counter(name="a"))

    with registry.locked("a"):
        registry.remove("a")
        assert "a" in registry._key_locks  # noqa: SLF001

    assert "a" not in registry._key_locks  # noqa: SLF001
