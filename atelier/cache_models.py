"""Data models for the offline cache manager."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum

import httpx

# Headers describing the wire encoding. Stored bodies are already decoded, so
# these would make a replayed response decode twice.
_WIRE_HEADERS = frozenset({"content-encoding", "content-length", "transfer-encoding"})


class RequestMode(str, Enum):
    NAVIGATE = "navigate"
    SAME_ORIGIN = "same-origin"
    NO_CORS = "no-cors"
    CORS = "cors"


class WorkerState(str, Enum):
    PARSED = "parsed"
    INSTALLING = "installing"
    INSTALLED = "installed"
    ACTIVATING = "activating"
    ACTIVATED = "activated"
    REDUNDANT = "redundant"


@dataclass(frozen=True)
class FetchRequest:
    url: str
    method: str = "GET"
    mode: RequestMode = RequestMode.NO_CORS
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    @property
    def is_navigation(self) -> bool:
        """Top-level page loads."""
        return self.mode == RequestMode.NAVIGATE

    @property
    def is_cacheable(self) -> bool:
        return self.method.upper() == "GET"


@dataclass(frozen=True)
class CachedResponse:
    """A stored copy of a network response, keyed by its absolute URL."""

    url: str
    status_code: int
    headers: tuple[tuple[str, str], ...]
    content: bytes
    stored_at: float = field(default_factory=time.time)

    @classmethod
    def from_response(cls, url: str, response: httpx.Response) -> CachedResponse:
        headers = tuple(
            (k, v) for k, v in response.headers.multi_items()
            if k.lower() not in _WIRE_HEADERS
        )
        return cls(
            url=url,
            status_code=response.status_code,
            headers=headers,
            content=bytes(response.content),
        )

    def to_response(self) -> httpx.Response:
        """Build a fresh response object so every hit gets its own body."""
        return httpx.Response(
            self.status_code,
            headers=list(self.headers),
            content=self.content,
            request=httpx.Request("GET", self.url),
        )
