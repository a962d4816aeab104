"""Offline cache manager: precache on install, sweep on activate, serve on fetch."""

from __future__ import annotations

import asyncio
import logging

import httpx

from atelier.cache_models import CachedResponse, FetchRequest, WorkerState
from atelier.cache_storage import CacheStorage
from atelier.config import CacheConfig
from atelier.errors import InstallError

logger = logging.getLogger(__name__)


class CacheManager:
    """Background worker for one cache generation.

    Navigations are served network-first and fall back to the cache when the
    network is unreachable. Everything else is served cache-first; a 200 from
    the network is copied into the current cache in the background.
    """

    def __init__(
        self,
        config: CacheConfig,
        storage: CacheStorage,
        http_client: httpx.AsyncClient,
    ) -> None:
        self.config = config
        self.storage = storage
        self.http = http_client
        self.state = WorkerState.PARSED
        self.skip_waiting_requested = False
        self.clients_claimed = False
        self._pending_writes: set[asyncio.Task] = set()

    @property
    def cache_name(self) -> str:
        return self.config.cache_name

    def resolve(self, url: str) -> str:
        """Absolute URL used as the cache key."""
        return str(httpx.URL(self.config.origin).join(url))

    # --- lifecycle ---

    async def install(self) -> None:
        """Precache every configured asset, or nothing at all."""
        cache = await self.storage.open(self.cache_name)
        logger.info("Cache opened: %s", self.cache_name)

        urls = [self.resolve(u) for u in self.config.precache_urls]
        tasks = [asyncio.create_task(self._fetch_for_precache(u)) for u in urls]
        try:
            entries = await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        for url, entry in zip(urls, entries):
            await cache.put(url, entry)
        logger.info("Precached %d assets into %s", len(entries), self.cache_name)

        if self.config.skip_waiting:
            self.skip_waiting()

    async def _fetch_for_precache(self, url: str) -> CachedResponse:
        try:
            response = await self.http.get(url)
        except httpx.TransportError as e:
            raise InstallError(url, str(e) or type(e).__name__) from e
        if not response.is_success:
            raise InstallError(url, f"HTTP {response.status_code}")
        return CachedResponse.from_response(url, response)

    def skip_waiting(self) -> None:
        self.skip_waiting_requested = True

    async def activate(self) -> list[str]:
        """Delete every cache generation but the current one."""
        stale = [name for name in await self.storage.keys() if name != self.cache_name]
        for name in stale:
            logger.info("Deleting stale cache: %s", name)
            await self.storage.delete(name)

        if self.config.claim_clients:
            self.clients_claimed = True
        return stale

    # --- fetch ---

    async def fetch(self, request: FetchRequest) -> httpx.Response:
        if not request.is_cacheable:
            return await self._network(request)
        if request.is_navigation:
            return await self._network_first(request)
        return await self._cache_first(request)

    async def _network(self, request: FetchRequest) -> httpx.Response:
        return await self.http.request(
            request.method,
            self.resolve(request.url),
            headers=request.headers,
            content=request.body,
        )

    async def _network_first(self, request: FetchRequest) -> httpx.Response:
        try:
            return await self._network(request)
        except httpx.TransportError:
            cached = await self.storage.match(self.resolve(request.url))
            if cached is None:
                raise
            logger.info("Network unavailable, serving %s from cache", cached.url)
            return cached.to_response()

    async def _cache_first(self, request: FetchRequest) -> httpx.Response:
        key = self.resolve(request.url)
        cached = await self.storage.match(key)
        if cached is not None:
            return cached.to_response()

        response = await self._network(request)
        if response.status_code != 200:
            return response

        self._schedule_put(key, CachedResponse.from_response(key, response))
        return response

    def _schedule_put(self, key: str, entry: CachedResponse) -> None:
        # Not awaited: the caller gets the response while the write is pending.
        # Concurrent misses for the same key may each write; the last one wins.
        # A write still pending when a newer worker activates reopens this
        # generation; it lingers until the next version bump sweeps it.
        task = asyncio.create_task(self._put(key, entry))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _put(self, key: str, entry: CachedResponse) -> None:
        try:
            cache = await self.storage.open(self.cache_name)
            await cache.put(key, entry)
            logger.debug("Cached %s", key)
        except Exception:
            logger.exception("Failed to cache %s", key)

    async def wait_for_pending_writes(self) -> None:
        """Wait until every background cache write has finished."""
        while self._pending_writes:
            await asyncio.gather(*list(self._pending_writes))
