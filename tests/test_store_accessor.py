"""Tests for StoreAccessor: paging, exhaustive listing, bulk reads, writes."""

import math

import pytest

from model.namespace import KeyReadFailure
from service.store_accessor import StoreAccessor
from util.errors import PaginationExhausted, StoreUnavailable, TooManyKeys

from conftest import InMemoryKVStore


def _store(n: int, prefix: str = "k") -> InMemoryKVStore:
    return InMemoryKVStore("KV_TEST", {f"{prefix}{i:04d}": f"v{i}" for i in range(n)})


@pytest.mark.asyncio
async def test_list_all_scenario_court_of_appeal(registry, stores):
    stores["KV_COURT_OF_APPEAL"].data.clear()
    for k in ("a", "b", "c"):
        await stores["KV_COURT_OF_APPEAL"].put(k, k.upper())
    accessor = StoreAccessor(registry.resolve("court-of-appeal"))
    keys = await accessor.list_all()
    assert sorted(keys) == ["a", "b", "c"]
    assert len(keys) == len(set(keys))


@pytest.mark.asyncio
@pytest.mark.parametrize("n,page_size", [(0, 3), (1, 3), (9, 3), (10, 3), (250, 100)])
async def test_list_all_returns_every_key_in_ceil_pages(n, page_size):
    store = _store(n)
    accessor = StoreAccessor(store, page_size=page_size)
    keys = await accessor.list_all()
    assert sorted(keys) == sorted(store.data)
    assert len(keys) == len(set(keys))
    list_calls = [c for c in store.calls if c[0] == "list"]
    assert len(list_calls) == max(1, math.ceil(n / page_size))


@pytest.mark.asyncio
async def test_list_all_respects_prefix():
    store = InMemoryKVStore("KV_TEST", {"email:1": "a", "email:2": "b", "other": "c"})
    assert await StoreAccessor(store, page_size=1).list_all("email:") == ["email:1", "email:2"]


@pytest.mark.asyncio
async def test_list_all_gives_up_on_store_that_never_completes():
    store = _store(5)
    store.never_complete = True
    accessor = StoreAccessor(store, page_size=2, max_pages=7)
    with pytest.raises(PaginationExhausted):
        await accessor.list_all()
    assert len([c for c in store.calls if c[0] == "list"]) == 7


@pytest.mark.asyncio
async def test_list_page_clamps_limit():
    store = _store(20)
    accessor = StoreAccessor(store, max_limit=5)
    page = await accessor.list_page(limit=500)
    assert len(page.keys) == 5
    assert page.complete is False
    page = await accessor.list_page(limit=0)
    assert len(page.keys) == 1


@pytest.mark.asyncio
async def test_list_page_threads_cursor():
    store = _store(5)
    accessor = StoreAccessor(store)
    first = await accessor.list_page(limit=3)
    second = await accessor.list_page(cursor=first.cursor, limit=3)
    assert first.keys + second.keys == sorted(store.data)
    assert second.complete is True
    assert second.cursor is None


@pytest.mark.asyncio
async def test_get_many_returns_entry_for_every_key():
    store = InMemoryKVStore("KV_TEST", {"a": "1", "b": "2"})
    store.failing_keys = {"b"}
    results = await StoreAccessor(store).get_many(["a", "b", "missing"])
    assert set(results) == {"a", "b", "missing"}
    assert results["a"] == "1"
    assert results["missing"] is None
    assert isinstance(results["b"], KeyReadFailure)
    assert "KV_TEST" in results["b"].error


@pytest.mark.asyncio
async def test_get_many_at_cap_is_allowed():
    store = _store(100)
    results = await StoreAccessor(store).get_many(list(store.data))
    assert len(results) == 100


@pytest.mark.asyncio
async def test_get_many_over_cap_rejected_before_any_store_call():
    store = _store(101)
    with pytest.raises(TooManyKeys):
        await StoreAccessor(store).get_many(list(store.data))
    assert store.calls == []


@pytest.mark.asyncio
async def test_put_get_delete_round_trip():
    store = InMemoryKVStore("KV_TEST")
    accessor = StoreAccessor(store)
    assert await accessor.put("k", "v", {"m": 1}) is True
    assert await accessor.get("k") == "v"
    assert (await accessor.get_with_metadata("k")).metadata == {"m": 1}
    assert await accessor.delete("k") is True
    assert await accessor.get("k") is None
    assert await accessor.delete("k") is True


@pytest.mark.asyncio
async def test_single_key_failure_surfaces_directly():
    store = InMemoryKVStore("KV_TEST")
    store.failing_ops = {"get"}
    with pytest.raises(StoreUnavailable):
        await StoreAccessor(store).get("k")
