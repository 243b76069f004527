"""
Document store interface shared by the real and the mock backends.

A store holds named collections of JSON-like documents keyed by id. Both
backends expose the same async surface so repositories can route any
operation to either of them:

- get_all / get / query: reads (query takes where-filters and an order-by)
- add / set / update: writes (update is a shallow merge)
- listen: snapshot subscription that delivers immediately and then on change
"""

import logging
import operator
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
Snapshot = List[Document]
SnapshotCallback = Callable[[Snapshot], None]
ErrorCallback = Callable[[Exception], None]
Filter = Tuple[str, str, Any]
OrderBy = Tuple[str, bool]  # (field, descending)

_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "in": lambda value, options: value in options,
}


def matches(document: Document, filters: Iterable[Filter]) -> bool:
    """Return True when the document satisfies every (field, op, value) filter."""
    for field, op, expected in filters:
        try:
            compare = _OPERATORS[op]
        except KeyError:
            raise ValueError(f"Unsupported filter operator: {op}") from None
        value = document.get(field)
        if value is None and op != "==":
            return False
        try:
            if not compare(value, expected):
                return False
        except TypeError:
            return False
    return True


def sort_documents(documents: List[Document], order_by: Optional[OrderBy]) -> List[Document]:
    """Stable sort on one field; documents missing the field keep their order at the end."""
    if order_by is None:
        return documents
    field, descending = order_by
    present = [doc for doc in documents if doc.get(field) is not None]
    missing = [doc for doc in documents if doc.get(field) is None]
    present.sort(key=lambda doc: doc[field], reverse=descending)
    return present + missing


class Unsubscribe:
    """Idempotent handle that releases a snapshot subscription."""

    def __init__(self, release: Optional[Callable[[], None]] = None, name: str = "") -> None:
        self._release = release
        self._name = name
        self.closed = False

    def __call__(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._release is not None:
            self._release()
        logger.debug("Unsubscribed from %s", self._name or "listener")


class DocumentStore(ABC):
    backend_name: str = "Unknown"

    def collection(self, name: str) -> "Collection":
        return Collection(self, name)

    @abstractmethod
    async def get_all(self, collection: str, order_by: Optional[OrderBy] = None) -> Snapshot:
        ...

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        ...

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[OrderBy] = None,
    ) -> Snapshot:
        ...

    @abstractmethod
    async def add(self, collection: str, data: Document, id_prefix: Optional[str] = None) -> str:
        ...

    @abstractmethod
    async def set(self, collection: str, doc_id: str, data: Document) -> None:
        ...

    @abstractmethod
    async def update(self, collection: str, doc_id: str, fields: Document) -> bool:
        ...

    @abstractmethod
    async def listen(
        self,
        collection: str,
        callback: SnapshotCallback,
        *,
        order_by: Optional[OrderBy] = None,
        interval: Optional[float] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> Unsubscribe:
        ...

    async def close(self) -> None:
        return None


class Collection:
    """Handle to one named collection of a store."""

    def __init__(self, store: DocumentStore, name: str) -> None:
        self.store = store
        self.name = name

    async def get_all(self, order_by: Optional[OrderBy] = None) -> Snapshot:
        return await self.store.get_all(self.name, order_by=order_by)

    async def get(self, doc_id: str) -> Optional[Document]:
        return await self.store.get(self.name, doc_id)

    async def where(self, field: str, op: str, value: Any, order_by: Optional[OrderBy] = None) -> Snapshot:
        return await self.store.query(self.name, [(field, op, value)], order_by=order_by)

    async def add(self, data: Document, id_prefix: Optional[str] = None) -> str:
        return await self.store.add(self.name, data, id_prefix=id_prefix)

    async def update(self, doc_id: str, fields: Document) -> bool:
        return await self.store.update(self.name, doc_id, fields)


@asynccontextmanager
async def subscription(
    store: DocumentStore, collection: str, callback: SnapshotCallback, **kwargs: Any
) -> AsyncIterator[Unsubscribe]:
    """Scope a listener so it is released on every exit path."""
    unsubscribe = await store.listen(collection, callback, **kwargs)
    try:
        yield unsubscribe
    finally:
        unsubscribe()
