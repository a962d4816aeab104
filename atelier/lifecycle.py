"""Registration host that drives cache manager lifecycles.

Plays the browser's part: installs a newly registered worker, activates it
(immediately when it asked to skip waiting), and routes page requests to the
worker controlling each page.
"""

from __future__ import annotations

import logging

import httpx

from atelier.cache_manager import CacheManager
from atelier.cache_models import FetchRequest, WorkerState
from atelier.errors import InstallError

logger = logging.getLogger(__name__)


class Registration:
    def __init__(self, http_client: httpx.AsyncClient, origin: str = "http://localhost") -> None:
        self.http = http_client
        self.origin = origin
        self.active: CacheManager | None = None
        self.waiting: CacheManager | None = None
        self._clients: dict[str, CacheManager | None] = {}

    def resolve(self, url: str) -> str:
        return str(httpx.URL(self.origin).join(url))

    # --- clients ---

    def open_client(self, client_id: str) -> None:
        """A page opened now is controlled by the active worker, if any."""
        self._clients[client_id] = self.active

    async def close_client(self, client_id: str) -> None:
        self._clients.pop(client_id, None)
        if self.waiting is not None and not self._clients_of(self.active):
            await self._activate(self.waiting)

    def controller(self, client_id: str) -> CacheManager | None:
        return self._clients.get(client_id)

    def _clients_of(self, worker: CacheManager | None) -> list[str]:
        if worker is None:
            return []
        return [cid for cid, w in self._clients.items() if w is worker]

    # --- lifecycle ---

    async def register(self, worker: CacheManager) -> WorkerState:
        """Install ``worker`` and activate it when nothing holds it back.

        On install failure the worker becomes redundant, the current active
        worker and its cache stay in place, and the error propagates.
        """
        worker.state = WorkerState.INSTALLING
        try:
            await worker.install()
        except InstallError:
            worker.state = WorkerState.REDUNDANT
            logger.warning("Install of %s failed; keeping previous worker", worker.cache_name)
            raise
        worker.state = WorkerState.INSTALLED

        if self.waiting is not None and self.waiting is not worker:
            self.waiting.state = WorkerState.REDUNDANT
        self.waiting = worker

        if worker.skip_waiting_requested or not self._clients_of(self.active):
            await self._activate(worker)
        else:
            logger.info("Worker for %s is waiting for open pages to close", worker.cache_name)
        return worker.state

    async def _activate(self, worker: CacheManager) -> None:
        previous = self.active
        self.waiting = None
        worker.state = WorkerState.ACTIVATING
        await worker.activate()
        worker.state = WorkerState.ACTIVATED
        self.active = worker

        if previous is not None and previous is not worker:
            previous.state = WorkerState.REDUNDANT

        # pages of the replaced worker move over; uncontrolled pages only on claim
        for client_id, controller in self._clients.items():
            if worker.clients_claimed or (controller is previous and previous is not None):
                self._clients[client_id] = worker
        logger.info("Activated worker for %s", worker.cache_name)

    # --- fetch ---

    async def fetch(self, request: FetchRequest, client_id: str | None = None) -> httpx.Response:
        if request.is_navigation:
            worker = self.active
        else:
            worker = self._clients.get(client_id) if client_id is not None else None

        if worker is None:
            return await self.http.request(
                request.method,
                self.resolve(request.url),
                headers=request.headers,
                content=request.body,
            )
        return await worker.fetch(request)
