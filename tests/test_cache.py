import asyncio
from dataclasses import dataclass
from datetime import timedelta

import pytest

from agentweave.cache import InMemoryStore, TypedCache
from agentweave.errors import AutoGenError


@dataclass
class SampleData:
    id: int
    name: str


@pytest.mark.asyncio
async def test_in_memory_store_basic_operations():
    store = InMemoryStore()
    value = {"test": "value"}
    await store.set("key1", value)

    assert await store.get("key1") == value
    assert await store.exists("key1") is True
    assert await store.exists("nonexistent") is False

    assert await store.remove("key1") is True
    assert await store.remove("key1") is False
    assert await store.exists("key1") is False


@pytest.mark.asyncio
async def test_in_memory_store_ttl():
    store = InMemoryStore()
    await store.set("ttl_key", "expires_soon", timedelta(milliseconds=50))

    assert await store.exists("ttl_key") is True
    assert await store.get("ttl_key") == "expires_soon"

    await asyncio.sleep(0.1)

    assert await store.exists("ttl_key") is False
    assert await store.get("ttl_key") is None


@pytest.mark.asyncio
async def test_default_ttl_applies_and_explicit_ttl_overrides():
    store = InMemoryStore.with_default_ttl(0.05)
    await store.set("short", 1)
    await store.set("long", 2, ttl=60)
    await asyncio.sleep(0.1)
    assert await store.get("short") is None
    assert await store.get("long") == 2
    assert await store.keys() == ["long"]


@pytest.mark.asyncio
async def test_stored_value_is_copied():
    store = InMemoryStore()
    value = {"items": [1]}
    await store.set("k", value)
    value["items"].append(2)
    fetched = await store.get("k")
    assert fetched == {"items": [1]}
    fetched["items"].append(3)
    assert await store.get("k") == {"items": [1]}


@pytest.mark.asyncio
async def test_typed_cache():
    store = InMemoryStore()
    cache = TypedCache(store, SampleData)
    data = SampleData(id=42, name="Test")

    await cache.set("test_key", data)
    assert await cache.get("test_key") == data
    assert await store.get("test_key") == {"id": 42, "name": "Test"}

    assert await cache.remove("test_key") is True
    assert await cache.get("test_key") is None
    assert await cache.exists("test_key") is False


@pytest.mark.asyncio
async def test_typed_cache_deserialize_failure():
    store = InMemoryStore()
    await store.set("bad", {"unexpected": 1})
    cache = TypedCache(store, SampleData)
    with pytest.raises(AutoGenError, match="Failed to deserialize cached value"):
        await cache.get("bad")


@pytest.mark.asyncio
async def test_typed_cache_serialize_failure():
    cache = TypedCache(InMemoryStore(), set)
    with pytest.raises(AutoGenError, match="Failed to serialize value for caching"):
        await cache.set("k", {1, 2})


@pytest.mark.asyncio
async def test_cache_size_and_keys():
    store = InMemoryStore()
    assert await store.size() == 0
    assert await store.keys() == []

    await store.set("key1", "value1")
    await store.set("key2", "value2")

    assert await store.size() == 2
    assert sorted(await store.keys()) == ["key1", "key2"]

    await store.clear()
    assert await store.size() == 0