"""
Document store.

Collections of JSON documents addressed by id. The console only needs
list/get/create/partial-update; there are no queries, no transactions
and no concurrency checks (last write wins).

Usage:
    store = SQLDocumentStore(AsyncSessionLocal)
    course_id = await store.create_document("allGPSArtCourses", {...})
    doc = await store.get_by_id("allGPSArtCourses", course_id)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from outline_admin.models.document import StoredDocument
from outline_admin.shared.errors import PersistenceFailure
from outline_admin.shared.repository import BaseRepository

logger = logging.getLogger(__name__)


@dataclass
class Document:
    """A document snapshot: its id and a copy of its fields."""

    id: str
    fields: dict[str, Any] = field(default_factory=dict)


class DocumentStore(Protocol):
    """Operations the console needs from a document database."""

    async def list_collection(self, name: str) -> list[Document]: ...

    async def get_by_id(self, collection: str, doc_id: str) -> Document | None: ...

    async def create_document(self, collection: str, fields: dict[str, Any]) -> str: ...

    async def update_document(
        self, collection: str, doc_id: str, partial_fields: dict[str, Any]
    ) -> None: ...


class DocumentRepository(BaseRepository[StoredDocument]):
    """Repository for StoredDocument rows."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, StoredDocument)

    async def in_collection(self, name: str) -> list[StoredDocument]:
        return await self.get_all(order_by=StoredDocument.created_at, collection=name)

    async def find(self, collection: str, doc_id: str) -> StoredDocument | None:
        return await self.get_by(collection=collection, id=doc_id)


def _snapshot(row: StoredDocument) -> Document:
    return Document(id=row.id, fields=dict(row.fields or {}))


class SQLDocumentStore:
    """
    Document store on top of a SQLAlchemy async engine.

    Each call opens its own session and commits before returning,
    so a returned id or a completed update is durable.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def list_collection(self, name: str) -> list[Document]:
        """All documents of a collection, in creation order."""
        async with self.session_factory() as session:
            rows = await DocumentRepository(session).in_collection(name)
            return [_snapshot(row) for row in rows]

    async def get_by_id(self, collection: str, doc_id: str) -> Document | None:
        """Get a document, or None if it does not exist."""
        async with self.session_factory() as session:
            row = await DocumentRepository(session).find(collection, doc_id)
            return _snapshot(row) if row else None

    async def create_document(self, collection: str, fields: dict[str, Any]) -> str:
        """
        Create a document with a generated id.

        Raises:
            PersistenceFailure: If the write is rejected
        """
        try:
            async with self.session_factory() as session:
                row = await DocumentRepository(session).create(
                    collection=collection, fields=dict(fields)
                )
                await session.commit()
                doc_id = row.id
        except SQLAlchemyError as e:
            logger.error(f"Failed to create document in {collection}: {e}")
            raise PersistenceFailure(f"Could not create document in {collection}") from e

        logger.info(f"Document written with ID: {doc_id} ({collection})")
        return doc_id

    async def update_document(
        self, collection: str, doc_id: str, partial_fields: dict[str, Any]
    ) -> None:
        """
        Merge fields into an existing document.

        Raises:
            PersistenceFailure: If the document is missing or the write is rejected
        """
        try:
            async with self.session_factory() as session:
                repo = DocumentRepository(session)
                row = await repo.find(collection, doc_id)
                if row is None:
                    raise PersistenceFailure(f"No document {collection}/{doc_id}")
                merged = {**(row.fields or {}), **partial_fields}
                await repo.update(row, fields=merged)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to update {collection}/{doc_id}: {e}")
            raise PersistenceFailure(f"Could not update {collection}/{doc_id}") from e

        logger.debug(f"Updated {collection}/{doc_id}: {sorted(partial_fields)}")
