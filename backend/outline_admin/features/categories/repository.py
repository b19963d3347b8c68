"""
Category repository.

Data access layer for category documents.
"""

from typing import Optional

from outline_admin.config import settings
from outline_admin.storage.documents import DocumentStore

from .schemas import Category


class CategoryRepository:
    """Repository for category documents."""

    def __init__(self, store: DocumentStore, collection: Optional[str] = None):
        self.store = store
        self.collection = collection or settings.categories_collection

    async def list_all(self) -> list[Category]:
        """All categories, in store order."""
        docs = await self.store.list_collection(self.collection)
        return [Category.from_document(doc.id, doc.fields) for doc in docs]

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        doc = await self.store.get_by_id(self.collection, category_id)
        if doc is None:
            return None
        return Category.from_document(doc.id, doc.fields)

    async def update_selection(
        self, category_id: str, course_id_list: list[str], thumbnail_url: Optional[str]
    ) -> None:
        """Write the ordered course ids and the thumbnail URL in one update."""
        await self.store.update_document(
            self.collection,
            category_id,
            {"courseIdList": list(course_id_list), "thumbnailUrl": thumbnail_url},
        )
