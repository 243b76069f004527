import asyncio
import logging
import uuid
from typing import Optional, Sequence

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncEngine

from survey_fleet.db import Base, build_engine, build_session_factory
from survey_fleet.models.document import Document as DocumentRow
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
from survey_fleet.utils.clock import to_iso

logger = logging.getLogger(__name__)


class SqlDocumentStore(DocumentStore):
    """Document store persisted in a single JSON ``documents`` table.

    Filtering and ordering run in Python over the collection's rows, so the
    same semantics hold for PostgreSQL (JSONB) and SQLite (JSON). Listeners
    poll the collection and re-deliver when the snapshot changes.
    """

    def __init__(self, engine: AsyncEngine, poll_interval: float = 2.0) -> None:
        self.engine = engine
        self.session_factory = build_session_factory(engine)
        self.poll_interval = poll_interval
        self.backend_name = {
            "postgresql": "PostgreSQL",
            "sqlite": "SQLite",
        }.get(engine.dialect.name, engine.dialect.name)
        self._tasks: set = set()

    @classmethod
    async def connect(
        cls, database_url: str, *, connect_timeout: float = 5.0, poll_interval: float = 2.0
    ) -> "SqlDocumentStore":
        """Open the engine, check connectivity and create the table if missing."""
        engine = build_engine(database_url, connect_timeout=connect_timeout)
        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                await conn.run_sync(Base.metadata.create_all)
        except Exception:
            await engine.dispose()
            raise
        return cls(engine, poll_interval=poll_interval)

    async def _rows(self, collection: str) -> Snapshot:
        async with self.session_factory() as session:
            result = await session.execute(
                select(DocumentRow)
                .filter(DocumentRow.collection == collection)
                .order_by(DocumentRow.created_at, DocumentRow.id)
            )
            return [{**row.data, "id": row.id} for row in result.scalars().all()]

    async def get_all(self, collection: str, order_by: Optional[OrderBy] = None) -> Snapshot:
        return sort_documents(await self._rows(collection), order_by)

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        async with self.session_factory() as session:
            row = await session.get(DocumentRow, (collection, doc_id))
            if row is None:
                return None
            return {**row.data, "id": row.id}

    async def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[OrderBy] = None,
    ) -> Snapshot:
        documents = [doc for doc in await self._rows(collection) if matches(doc, filters)]
        return sort_documents(documents, order_by)

    async def add(self, collection: str, data: Document, id_prefix: Optional[str] = None) -> str:
        doc_id = uuid.uuid4().hex
        now = to_iso()
        payload = {key: value for key, value in data.items() if key != "id"}
        payload.update(createdAt=now, updatedAt=now)
        async with self.session_factory() as session:
            session.add(DocumentRow(collection=collection, id=doc_id, data=payload))
            await session.commit()
        return doc_id

    async def set(self, collection: str, doc_id: str, data: Document) -> None:
        payload = {key: value for key, value in data.items() if key != "id"}
        async with self.session_factory() as session:
            row = await session.get(DocumentRow, (collection, doc_id))
            if row is None:
                session.add(DocumentRow(collection=collection, id=doc_id, data=payload))
            else:
                row.data = payload
            await session.commit()

    async def update(self, collection: str, doc_id: str, fields: Document) -> bool:
        async with self.session_factory() as session:
            row = await session.get(DocumentRow, (collection, doc_id))
            if row is None:
                return False
            changes = {key: value for key, value in fields.items() if key != "id"}
            row.data = {**row.data, **changes, "updatedAt": to_iso()}
            await session.commit()
            return True

    async def listen(
        self,
        collection: str,
        callback: SnapshotCallback,
        *,
        order_by: Optional[OrderBy] = None,
        interval: Optional[float] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> Unsubscribe:
        snapshot = await self.get_all(collection, order_by)
        callback(snapshot)

        task = asyncio.get_running_loop().create_task(
            self._poll(collection, callback, order_by, snapshot, on_error),
            name=f"sql-listener-{collection}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info("Listening to %s (poll every %.1fs)", collection, self.poll_interval)
        return Unsubscribe(task.cancel, name=f"{self.backend_name} {collection}")

    async def _poll(
        self,
        collection: str,
        callback: SnapshotCallback,
        order_by: Optional[OrderBy],
        last: Snapshot,
        on_error: Optional[ErrorCallback],
    ) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)
            try:
                snapshot = await self.get_all(collection, order_by)
            except Exception as exc:
                logger.error("Listener poll for %s failed: %s", collection, exc)
                if on_error is not None:
                    on_error(exc)
                continue
            if snapshot != last:
                last = snapshot
                callback(snapshot)

    async def close(self) -> None:
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        await self.engine.dispose()
