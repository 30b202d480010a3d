"""Pytest fixtures for the catalog data layer.

The live backend is the reference FastAPI app served in-process through
httpx.ASGITransport; outages are simulated with httpx.MockTransport.
"""

import asyncio
from typing import List

import httpx
import pytest

from catalog_client.backend import create_app
from catalog_client.config import BackendConfig, ClientSettings, ListingConfig, TimeoutConfig
from catalog_client.demo import DemoDataset
from catalog_client.service import build_catalog_service
from catalog_client.storage import InMemoryKeyValueStore

BASE_URL = "http://catalog.test"


class RecordingTransport(httpx.AsyncBaseTransport):
    """Wraps another transport and remembers every request path."""

    def __init__(self, inner: httpx.AsyncBaseTransport):
        self.inner = inner
        self.requests: List[httpx.Request] = []

    @property
    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return await self.inner.handle_async_request(request)


def refusing_handler(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


async def hanging_handler(request: httpx.Request) -> httpx.Response:
    await asyncio.sleep(5)
    return httpx.Response(200, json={})


@pytest.fixture
def settings():
    return ClientSettings(
        backend=BackendConfig(base_url=BASE_URL),
        timeouts=TimeoutConfig(read_seconds=1, write_seconds=1, summary_seconds=1, probe_seconds=1),
        listing=ListingConfig(product_page_size=5, review_page_size=3, debounce_seconds=0.05),
    )


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def demo():
    """Local fallback dataset."""
    return DemoDataset.seeded()


@pytest.fixture
def backend_dataset():
    """Dataset behind the reference backend (separate from the fallback one)."""
    return DemoDataset.seeded()


@pytest.fixture
def live_transport(backend_dataset):
    return RecordingTransport(httpx.ASGITransport(app=create_app(backend_dataset)))


@pytest.fixture
def offline_transport():
    return RecordingTransport(httpx.MockTransport(refusing_handler))


@pytest.fixture
def live_service(settings, store, demo, live_transport):
    return build_catalog_service(settings, store=store, demo=demo, transport=live_transport)


@pytest.fixture
def offline_service(settings, store, demo, offline_transport):
    return build_catalog_service(settings, store=store, demo=demo, transport=offline_transport)
