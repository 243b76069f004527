import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from survey_fleet.config.settings import FleetSettings
from survey_fleet.store.base import DocumentStore
from survey_fleet.store.memory import MemoryDocumentStore
from survey_fleet.store.sql import SqlDocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionStatus:
    is_connected: bool
    backend_name: str


class StoreHandle:
    """The backend chosen at start-up plus the mock store every call can fall back to."""

    def __init__(self, mock: MemoryDocumentStore, real: Optional[DocumentStore] = None) -> None:
        self.mock = mock
        self.real = real

    @property
    def is_connected(self) -> bool:
        return self.real is not None

    @property
    def active(self) -> DocumentStore:
        return self.real if self.real is not None else self.mock

    def status(self) -> ConnectionStatus:
        return ConnectionStatus(is_connected=self.is_connected, backend_name=self.active.backend_name)

    async def close(self) -> None:
        await self.mock.close()
        if self.real is not None:
            await self.real.close()


async def connect_store(
    settings: FleetSettings, mock: Optional[MemoryDocumentStore] = None
) -> StoreHandle:
    """Try the real backend once; any failure selects mock mode for the process lifetime."""
    mock = mock or MemoryDocumentStore()

    if not settings.DATABASE_URL:
        logger.warning("No database configured, falling back to mock database mode")
        return StoreHandle(mock)

    logger.info("Attempting to connect to document database...")
    try:
        real = await asyncio.wait_for(
            SqlDocumentStore.connect(
                settings.DATABASE_URL,
                connect_timeout=settings.CONNECT_TIMEOUT,
                poll_interval=settings.POLL_INTERVAL,
            ),
            timeout=settings.CONNECT_TIMEOUT,
        )
    except Exception as exc:
        logger.error("Database initialization failed: %s", exc)
        logger.warning("Falling back to mock database mode")
        return StoreHandle(mock)

    logger.info("Connected to %s document store", real.backend_name)
    return StoreHandle(mock, real)
