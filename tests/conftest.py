from pathlib import Path
import sys

import httpx
import pytest
import pytest_asyncio

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from atelier.cache_storage import InMemoryCacheStorage
from atelier.config import CacheConfig

ORIGIN = "https://arttesdabel.example"
CDN_FONT = "https://fonts.example-cdn.com/css2?family=Lora"


class FakeNetwork:
    """Routes for an httpx.MockTransport. Unknown URLs answer 404."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, bytes]] = {}
        self.offline = False
        self.calls: list[str] = []

    def serve(self, url: str, body: bytes = b"ok", status: int = 200) -> None:
        self.routes[url] = (status, body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        if self.offline:
            raise httpx.ConnectError("network unreachable", request=request)
        status, body = self.routes.get(url, (404, b"not found"))
        return httpx.Response(status, content=body, headers={"content-type": "text/plain"})


@pytest.fixture
def network():
    net = FakeNetwork()
    net.serve(f"{ORIGIN}/", b"<html>home</html>")
    net.serve(f"{ORIGIN}/index.html", b"<html>home</html>")
    net.serve(f"{ORIGIN}/assets/logo.png", b"PNG")
    net.serve(CDN_FONT, b"@font-face {}")
    return net


@pytest_asyncio.fixture
async def http_client(network):
    async with httpx.AsyncClient(transport=httpx.MockTransport(network)) as client:
        yield client


@pytest.fixture
def storage():
    return InMemoryCacheStorage()


@pytest.fixture
def config():
    return CacheConfig(
        cache_name="arttesdabel-cache-v2",
        precache_urls=("/", "/index.html", "/assets/logo.png", CDN_FONT),
        origin=ORIGIN,
    )
