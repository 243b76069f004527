import random
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from survey_fleet.config.settings import FleetSettings
from survey_fleet.dependencies import Services, build_services
from survey_fleet.main import create_app
from survey_fleet.store.base import DocumentStore
from survey_fleet.store.connection import StoreHandle
from survey_fleet.store.memory import MemoryDocumentStore


@pytest.fixture
def test_settings() -> FleetSettings:
    return FleetSettings(
        DATABASE_URL=None,
        SIMULATION_ENABLED=False,
        TELEMETRY_ENABLED=False,
        LOG_FILE=None,
        STRICT_PERSISTENCE=False,
    )


@pytest.fixture
async def mock_store() -> AsyncGenerator:
    store = MemoryDocumentStore()
    yield store
    await store.close()


@pytest.fixture
def store_handle(mock_store: MemoryDocumentStore) -> StoreHandle:
    return StoreHandle(mock_store)


@pytest.fixture
def services(store_handle: StoreHandle, test_settings: FleetSettings) -> Services:
    return build_services(store_handle, test_settings, rng=random.Random(7))


@pytest.fixture
def app(test_settings: FleetSettings, mock_store: MemoryDocumentStore):
    return create_app(test_settings, mock_store=mock_store)


@pytest.fixture
async def async_client(app) -> AsyncGenerator:
    # ASGITransport does not run the lifespan, so drive it explicitly
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client


class FailingStore(DocumentStore):
    """Real backend stand-in whose every call fails."""

    backend_name = "PostgreSQL"

    def __init__(self):
        self.calls = 0

    def _fail(self):
        self.calls += 1
        raise ConnectionError("database unreachable")

    async def get_all(self, collection, order_by=None):
        self._fail()

    async def get(self, collection, doc_id):
        self._fail()

    async def query(self, collection, filters=(), order_by=None):
        self._fail()

    async def add(self, collection, data, id_prefix=None):
        self._fail()

    async def set(self, collection, doc_id, data):
        self._fail()

    async def update(self, collection, doc_id, fields):
        self._fail()

    async def listen(self, collection, callback, *, order_by=None, interval=None, on_error=None):
        self._fail()


@pytest.fixture
def failing_handle(mock_store: MemoryDocumentStore) -> StoreHandle:
    return StoreHandle(mock_store, real=FailingStore())
