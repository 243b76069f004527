import asyncio
import copy
import logging
import threading
import uuid
from typing import Callable, Dict, List, Optional, Sequence, Set

from survey_fleet.store.base import (
    Document,
    DocumentStore,
    ErrorCallback,
    Filter,
    OrderBy,
    Snapshot,
    SnapshotCallback,
    Unsubscribe,
    matches,
    sort_documents,
)
from survey_fleet.store.fixtures import default_seed
from survey_fleet.utils.clock import to_iso

logger = logging.getLogger(__name__)

DEFAULT_LISTEN_INTERVAL = 5.0

TickHook = Callable[["MemoryDocumentStore"], None]


class MemoryDocumentStore(DocumentStore):
    """In-memory stand-in for the document database.

    Collections are plain lists of dicts, mutated in place under a re-entrant
    lock. Reads hand out deep copies so callers never alias stored documents.
    Listeners are asyncio tasks owned by the store; ``close`` cancels any that
    were not released by their subscriber.
    """

    backend_name = "Mock"

    def __init__(self, seed: Optional[Dict[str, List[Document]]] = None) -> None:
        self._seed = copy.deepcopy(seed) if seed is not None else default_seed()
        self._lock = threading.RLock()
        self._collections: Dict[str, List[Document]] = {}
        self._tasks: Set[asyncio.Task] = set()
        self.reset()

    def reset(self) -> None:
        """Restore every collection to the seed data."""
        with self._lock:
            self._collections = copy.deepcopy(self._seed)
        logger.debug("Mock store reset (%d collections)", len(self._collections))

    @property
    def listener_count(self) -> int:
        return sum(1 for task in self._tasks if not task.done())

    # Synchronous primitives, also used by tick hooks

    def snapshot(self, collection: str, order_by: Optional[OrderBy] = None) -> Snapshot:
        with self._lock:
            documents = copy.deepcopy(self._collections.get(collection, []))
        return sort_documents(documents, order_by)

    def find(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            for document in self._collections.get(collection, []):
                if document.get("id") == doc_id:
                    return copy.deepcopy(document)
        return None

    def insert(self, collection: str, data: Document, id_prefix: Optional[str] = None) -> str:
        with self._lock:
            documents = self._collections.setdefault(collection, [])
            doc_id = self._next_id(documents, id_prefix)
            now = to_iso()
            documents.append({"createdAt": now, "updatedAt": now, **copy.deepcopy(data), "id": doc_id})
        logger.debug("Mock: added %s/%s", collection, doc_id)
        return doc_id

    def replace(self, collection: str, doc_id: str, data: Document) -> None:
        with self._lock:
            documents = self._collections.setdefault(collection, [])
            record = {**copy.deepcopy(data), "id": doc_id}
            for index, document in enumerate(documents):
                if document.get("id") == doc_id:
                    documents[index] = record
                    return
            documents.append(record)

    def merge(self, collection: str, doc_id: str, fields: Document) -> bool:
        with self._lock:
            documents = self._collections.get(collection, [])
            for index, document in enumerate(documents):
                if document.get("id") == doc_id:
                    documents[index] = {**document, **copy.deepcopy(fields), "id": doc_id, "updatedAt": to_iso()}
                    logger.debug("Mock: updated %s/%s with %s", collection, doc_id, sorted(fields))
                    return True
        logger.debug("Mock: %s/%s not found, update ignored", collection, doc_id)
        return False

    @staticmethod
    def _next_id(documents: List[Document], id_prefix: Optional[str]) -> str:
        if not id_prefix:
            return uuid.uuid4().hex
        existing = {document.get("id") for document in documents}
        counter = len(documents) + 1
        while f"{id_prefix}{counter:03d}" in existing:
            counter += 1
        return f"{id_prefix}{counter:03d}"

    # DocumentStore interface

    async def get_all(self, collection: str, order_by: Optional[OrderBy] = None) -> Snapshot:
        return self.snapshot(collection, order_by)

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        return self.find(collection, doc_id)

    async def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[OrderBy] = None,
    ) -> Snapshot:
        documents = [doc for doc in self.snapshot(collection) if matches(doc, filters)]
        return sort_documents(documents, order_by)

    async def add(self, collection: str, data: Document, id_prefix: Optional[str] = None) -> str:
        return self.insert(collection, data, id_prefix)

    async def set(self, collection: str, doc_id: str, data: Document) -> None:
        self.replace(collection, doc_id, data)

    async def update(self, collection: str, doc_id: str, fields: Document) -> bool:
        return self.merge(collection, doc_id, fields)

    async def listen(
        self,
        collection: str,
        callback: SnapshotCallback,
        *,
        order_by: Optional[OrderBy] = None,
        interval: Optional[float] = None,
        on_error: Optional[ErrorCallback] = None,
        on_tick: Optional[TickHook] = None,
    ) -> Unsubscribe:
        """Deliver the snapshot now, then the full collection every ``interval`` seconds."""
        interval = interval or DEFAULT_LISTEN_INTERVAL
        logger.info("Mock: listening to %s every %.1fs", collection, interval)
        callback(self.snapshot(collection, order_by))

        task = asyncio.get_running_loop().create_task(
            self._tick_loop(collection, callback, order_by, interval, on_error, on_tick),
            name=f"mock-listener-{collection}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return Unsubscribe(task.cancel, name=f"mock {collection}")

    async def _tick_loop(
        self,
        collection: str,
        callback: SnapshotCallback,
        order_by: Optional[OrderBy],
        interval: float,
        on_error: Optional[ErrorCallback],
        on_tick: Optional[TickHook],
    ) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                if on_tick is not None:
                    on_tick(self)
                callback(self.snapshot(collection, order_by))
            except Exception as exc:
                logger.exception("Mock listener for %s failed: %s", collection, exc)
                if on_error is not None:
                    on_error(exc)

    async def close(self) -> None:
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("Mock: cancelled %d listener(s)", len(tasks))
