"""Key/value caches with optional expiry, plus a typed view over a store."""

from __future__ import annotations

import copy
import dataclasses
import json
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Generic, TypeVar, Union

from agentweave.errors import AutoGenError

TTL = Union[float, int, timedelta]
T = TypeVar("T")


def _seconds(ttl: TTL | None) -> float | None:
    if ttl is None:
        return None
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    return float(ttl)


class CacheStore(ABC):
    """Storage backend for cached JSON values."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value for key, or None if absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: TTL | None = None) -> None:
        """Store value under key; ttl is seconds or a timedelta."""

    @abstractmethod
    async def remove(self, key: str) -> bool:
        """Remove key; return True if it was present."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Whether key is present and not expired."""

    @abstractmethod
    async def size(self) -> int:
        """Number of live entries."""

    @abstractmethod
    async def keys(self) -> list[str]:
        """Keys of all live entries."""


@dataclass
class _CacheEntry:
    value: Any
    created_at: float
    expires_at: float | None

    @classmethod
    def create(cls, value: Any, ttl: float | None) -> _CacheEntry:
        now = time.monotonic()
        return cls(value, now, None if ttl is None else now + ttl)

    def is_expired(self) -> bool:
        return self.expires_at is not None and time.monotonic() > self.expires_at


class InMemoryStore(CacheStore):
    """Process-local cache; expired entries are dropped lazily."""

    def __init__(self, default_ttl: TTL | None = None) -> None:
        self._entries: dict[str, _CacheEntry] = {}
        self._lock = threading.Lock()
        self.default_ttl = _seconds(default_ttl)

    @classmethod
    def with_default_ttl(cls, default_ttl: TTL) -> InMemoryStore:
        """A store whose entries expire after default_ttl unless told otherwise."""
        return cls(default_ttl)

    def _cleanup_expired(self) -> None:
        with self._lock:
            self._entries = {
                key: entry
                for key, entry in self._entries.items()
                if not entry.is_expired()
            }

    async def get(self, key: str) -> Any | None:
        self._cleanup_expired()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.is_expired():
                return None
            return copy.deepcopy(entry.value)

    async def set(self, key: str, value: Any, ttl: TTL | None = None) -> None:
        effective = _seconds(ttl)
        if effective is None:
            effective = self.default_ttl
        entry = _CacheEntry.create(copy.deepcopy(value), effective)
        with self._lock:
            self._entries[key] = entry

    async def remove(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    async def exists(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not entry.is_expired()

    async def size(self) -> int:
        self._cleanup_expired()
        with self._lock:
            return len(self._entries)

    async def keys(self) -> list[str]:
        self._cleanup_expired()
        with self._lock:
            return list(self._entries)


def _default_encoder(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def _default_decoder(cls: type) -> Callable[[Any], Any]:
    if dataclasses.is_dataclass(cls):
        def decode(data: Any) -> Any:
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            return cls(**data)
        return decode

    def decode_plain(data: Any) -> Any:
        if isinstance(data, cls):
            return data
        return cls(data)

    return decode_plain


class TypedCache(Generic[T]):
    """View over a CacheStore that converts values of one type to and from JSON.

    Dataclasses are stored as dicts by default; other types are passed
    through and rebuilt with ``cls(value)``.  Custom ``encode``/``decode``
    callables may be supplied instead.
    """

    def __init__(
        self,
        store: CacheStore,
        cls: type[T],
        encode: Callable[[T], Any] | None = None,
        decode: Callable[[Any], T] | None = None,
    ) -> None:
        self.store = store
        self.cls = cls
        self._encode = encode or _default_encoder
        self._decode = decode or _default_decoder(cls)

    async def get(self, key: str) -> T | None:
        value = await self.store.get(key)
        if value is None:
            return None
        try:
            return self._decode(value)
        except (TypeError, ValueError, KeyError) as exc:
            raise AutoGenError(
                f"Failed to deserialize cached value: {exc}", source=exc
            ) from exc

    async def set(self, key: str, value: T, ttl: TTL | None = None) -> None:
        try:
            json_value = json.loads(json.dumps(self._encode(value)))
        except (TypeError, ValueError) as exc:
            raise AutoGenError(
                f"Failed to serialize value for caching: {exc}", source=exc
            ) from exc
        await self.store.set(key, json_value, ttl)

    async def remove(self, key: str) -> bool:
        return await self.store.remove(key)

    async def exists(self, key: str) -> bool:
        return await self.store.exists(key)