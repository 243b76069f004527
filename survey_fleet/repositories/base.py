"""
Entity repositories over the active document store.

Every operation is routed to the backend chosen at start-up. When the real
backend raises during a call, the failure is logged and the same operation is
replayed against the mock store, so callers always get data back. Set
``strict=True`` to raise ``StoreUnavailableError`` instead.
"""

import logging
from typing import Any, Awaitable, Callable, ClassVar, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from survey_fleet.exceptions import StoreUnavailableError
from survey_fleet.store.base import Document, DocumentStore, OrderBy, Snapshot, Unsubscribe
from survey_fleet.store.connection import StoreHandle
from survey_fleet.store.memory import MemoryDocumentStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)
R = TypeVar("R")


class Repository(Generic[T]):
    collection: ClassVar[str]
    model: ClassVar[Type[BaseModel]]
    id_prefix: ClassVar[str] = ""
    order_by: ClassVar[Optional[OrderBy]] = None
    listen_interval: float = 5.0

    def __init__(
        self,
        store: StoreHandle,
        *,
        strict: bool = False,
        listen_interval: Optional[float] = None,
    ) -> None:
        self.store = store
        self.strict = strict
        if listen_interval is not None:
            self.listen_interval = listen_interval

    @property
    def mock(self) -> MemoryDocumentStore:
        return self.store.mock

    def _absorb(self, operation: str, exc: Exception) -> None:
        if self.strict:
            raise StoreUnavailableError(operation, self.collection, exc) from exc
        logger.warning(
            "%s error during %s on %s, using mock data: %s",
            self.store.active.backend_name, operation, self.collection, exc
        )

    async def _run(self, operation: str, action: Callable[[DocumentStore], Awaitable[R]]) -> R:
        if not self.store.is_connected:
            return await action(self.mock)
        try:
            return await action(self.store.active)
        except Exception as exc:
            self._absorb(operation, exc)
            return await action(self.mock)

    def _to_model(self, document: Document) -> T:
        return self.model.model_validate(document)

    def _to_models(self, documents: Snapshot) -> List[T]:
        return [self._to_model(document) for document in documents]

    @staticmethod
    def _to_document(entity: Any) -> Document:
        if isinstance(entity, BaseModel):
            return entity.model_dump(by_alias=True, exclude_none=True, mode="json")
        return dict(entity)

    async def get_all(self) -> List[T]:
        documents = await self._run("get_all", lambda store: store.get_all(self.collection, self.order_by))
        return self._to_models(documents)

    async def get_by_id(self, doc_id: str) -> Optional[T]:
        document = await self._run("get_by_id", lambda store: store.get(self.collection, doc_id))
        return self._to_model(document) if document is not None else None

    async def query(self, *filters, order_by: Optional[OrderBy] = None) -> List[T]:
        documents = await self._run(
            "query", lambda store: store.query(self.collection, list(filters), order_by or self.order_by)
        )
        return self._to_models(documents)

    async def add(self, entity: Any) -> str:
        data = self._to_document(entity)
        data.pop("id", None)
        doc_id = await self._run("add", lambda store: store.add(self.collection, data, id_prefix=self.id_prefix))
        logger.info("Added %s/%s", self.collection, doc_id)
        return doc_id

    async def update(self, doc_id: str, updates: Any) -> bool:
        """Merge ``updates`` (document field names) into the stored record.

        Fields a model carries as ``None`` are left untouched in the store.
        """
        if isinstance(updates, BaseModel):
            fields = updates.model_dump(by_alias=True, exclude_unset=True, exclude_none=True, mode="json")
        else:
            fields = dict(updates)
        if not fields:
            return False
        return await self._run("update", lambda store: store.update(self.collection, doc_id, fields))

    def _mock_tick(self, store: MemoryDocumentStore) -> None:
        """Hook run by mock listeners before each re-delivery."""

    async def listen(self, callback: Callable[[List[T]], None]) -> Unsubscribe:
        """Deliver the current snapshot now and again on every change."""

        def deliver(documents: Snapshot) -> None:
            callback(self._to_models(documents))

        if not self.store.is_connected:
            logger.info("Using mock %s listener", self.collection)
            return await self.mock.listen(
                self.collection,
                deliver,
                order_by=self.order_by,
                interval=self.listen_interval,
                on_tick=self._mock_tick,
            )

        def on_error(exc: Exception) -> None:
            logger.error("%s listener error, falling back to mock: %s", self.collection, exc)
            deliver(self.mock.snapshot(self.collection, self.order_by))

        try:
            logger.info("Setting up %s listener for %s", self.store.active.backend_name, self.collection)
            return await self.store.active.listen(
                self.collection, deliver, order_by=self.order_by, on_error=on_error
            )
        except Exception as exc:
            self._absorb("listen", exc)
            deliver(self.mock.snapshot(self.collection, self.order_by))
            return Unsubscribe(name=f"fallback {self.collection}")
