"""Named cache storage.

Mirrors the browser's versioned cache interface: a storage holds named
caches, each cache maps a request key (absolute URL) to a stored response.
Any object with the same async methods can stand in for the in-memory
implementation below.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from atelier.cache_models import CachedResponse

logger = logging.getLogger(__name__)


@runtime_checkable
class Cache(Protocol):
    """One cache generation."""

    async def match(self, key: str) -> CachedResponse | None:
        """Return the stored response for ``key``, or None."""
        ...

    async def put(self, key: str, response: CachedResponse) -> None:
        """Store ``response`` under ``key``, replacing any previous entry."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete the entry for ``key``. Returns True if one existed."""
        ...

    async def keys(self) -> list[str]:
        """List stored keys in insertion order."""
        ...


@runtime_checkable
class CacheStorage(Protocol):
    """Container of named caches."""

    async def open(self, name: str) -> Cache:
        """Return the cache called ``name``, creating it if absent."""
        ...

    async def has(self, name: str) -> bool:
        ...

    async def delete(self, name: str) -> bool:
        """Delete the cache called ``name``. Returns True if it existed."""
        ...

    async def keys(self) -> list[str]:
        """List cache names in creation order."""
        ...

    async def match(self, key: str) -> CachedResponse | None:
        """Search every cache, oldest first, for ``key``."""
        ...


class InMemoryCache:
    """Dict-backed cache. Each operation completes without yielding to the loop."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._entries: dict[str, CachedResponse] = {}

    async def match(self, key: str) -> CachedResponse | None:
        return self._entries.get(key)

    async def put(self, key: str, response: CachedResponse) -> None:
        self._entries[key] = response

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def keys(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class InMemoryCacheStorage:
    def __init__(self) -> None:
        self._caches: dict[str, InMemoryCache] = {}

    async def open(self, name: str) -> InMemoryCache:
        cache = self._caches.get(name)
        if cache is None:
            cache = InMemoryCache(name)
            self._caches[name] = cache
            logger.debug("Created cache %s", name)
        return cache

    async def has(self, name: str) -> bool:
        return name in self._caches

    async def delete(self, name: str) -> bool:
        return self._caches.pop(name, None) is not None

    async def keys(self) -> list[str]:
        return list(self._caches)

    async def match(self, key: str) -> CachedResponse | None:
        for cache in list(self._caches.values()):
            hit = await cache.match(key)
            if hit is not None:
                return hit
        return None
