from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from atelier.cache_manager import CacheManager
from atelier.cache_models import FetchRequest, RequestMode, WorkerState
from atelier.config import CacheConfig
from atelier.errors import InstallError
from atelier.lifecycle import Registration
from conftest import ORIGIN


def _config(version: str, **kwargs) -> CacheConfig:
    return CacheConfig(
        cache_name=f"arttesdabel-cache-{version}",
        precache_urls=("/", "/index.html"),
        origin=ORIGIN,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_first_registration_installs_and_activates(storage, http_client):
    registration = Registration(http_client)
    worker = CacheManager(_config("v1"), storage, http_client)

    state = await registration.register(worker)

    assert state is WorkerState.ACTIVATED
    assert registration.active is worker
    assert registration.waiting is None


@pytest.mark.asyncio
async def test_new_version_replaces_old_generation_and_claims_pages(storage, http_client):
    registration = Registration(http_client)
    old = CacheManager(_config("v1"), storage, http_client)
    await registration.register(old)
    registration.open_client("tab-1")

    new = CacheManager(_config("v2"), storage, http_client)
    await registration.register(new)

    assert registration.active is new
    assert old.state is WorkerState.REDUNDANT
    assert registration.controller("tab-1") is new
    assert await storage.keys() == ["arttesdabel-cache-v2"]


@pytest.mark.asyncio
async def test_claim_takes_control_of_uncontrolled_pages(storage, http_client):
    registration = Registration(http_client)
    registration.open_client("tab-1")
    assert registration.controller("tab-1") is None

    worker = CacheManager(_config("v1"), storage, http_client)
    await registration.register(worker)

    assert registration.controller("tab-1") is worker


@pytest.mark.asyncio
async def test_without_claim_uncontrolled_pages_stay_uncontrolled(storage, http_client):
    registration = Registration(http_client)
    registration.open_client("tab-1")

    worker = CacheManager(_config("v1", claim_clients=False), storage, http_client)
    await registration.register(worker)

    assert registration.controller("tab-1") is None
    registration.open_client("tab-2")
    assert registration.controller("tab-2") is worker


@pytest.mark.asyncio
async def test_failed_install_keeps_previous_generation_active(storage, http_client, network):
    registration = Registration(http_client)
    old = CacheManager(_config("v1"), storage, http_client)
    await registration.register(old)

    broken = CacheManager(
        CacheConfig(
            cache_name="arttesdabel-cache-v2",
            precache_urls=("/", "/assets/missing.png"),
            origin=ORIGIN,
        ),
        storage,
        http_client,
    )
    with pytest.raises(InstallError):
        await registration.register(broken)

    assert broken.state is WorkerState.REDUNDANT
    assert registration.active is old
    assert old.state is WorkerState.ACTIVATED
    assert await storage.has("arttesdabel-cache-v1")

    network.offline = True
    response = await registration.fetch(FetchRequest("/index.html", mode=RequestMode.NAVIGATE))
    assert response.content == b"<html>home</html>"


@pytest.mark.asyncio
async def test_worker_without_skip_waiting_waits_for_pages_to_close(storage, http_client):
    registration = Registration(http_client)
    old = CacheManager(_config("v1"), storage, http_client)
    await registration.register(old)
    registration.open_client("tab-1")

    new = CacheManager(_config("v2", skip_waiting=False), storage, http_client)
    state = await registration.register(new)

    assert state is WorkerState.INSTALLED
    assert registration.waiting is new
    assert registration.active is old
    assert await storage.has("arttesdabel-cache-v1")

    await registration.close_client("tab-1")

    assert registration.active is new
    assert new.state is WorkerState.ACTIVATED
    assert not await storage.has("arttesdabel-cache-v1")


@pytest.mark.asyncio
async def test_uncontrolled_subresource_goes_to_network(storage, http_client, network):
    registration = Registration(http_client, origin=ORIGIN)
    worker = CacheManager(_config("v1", claim_clients=False), storage, http_client)
    await registration.register(worker)
    network.calls.clear()

    response = await registration.fetch(FetchRequest("/index.html"), client_id="unknown-tab")

    assert response.status_code == 200
    assert network.calls == [f"{ORIGIN}/index.html"]


@pytest.mark.asyncio
async def test_controlled_subresource_is_served_from_cache(storage, http_client, network):
    registration = Registration(http_client)
    worker = CacheManager(_config("v1"), storage, http_client)
    await registration.register(worker)
    registration.open_client("tab-1")
    network.calls.clear()

    response = await registration.fetch(FetchRequest("/index.html"), client_id="tab-1")

    assert response.status_code == 200
    assert network.calls == []


@pytest.mark.asyncio
async def test_navigation_before_any_worker_goes_to_network(http_client, network):
    registration = Registration(http_client, origin=ORIGIN)

    response = await registration.fetch(FetchRequest("/", mode=RequestMode.NAVIGATE))

    assert response.content == b"<html>home</html>"
    assert network.calls == [f"{ORIGIN}/"]


@pytest.mark.asyncio
async def test_subresource_of_unknown_page_without_worker_goes_to_network(http_client, network):
    registration = Registration(http_client, origin=ORIGIN)

    response = await registration.fetch(FetchRequest("/assets/logo.png"), client_id="tab-1")

    assert response.content == b"PNG"
    assert network.calls == [f"{ORIGIN}/assets/logo.png"]
