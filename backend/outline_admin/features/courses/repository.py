"""
Course repository.

Data access layer for course documents.
"""

from typing import Optional

from outline_admin.config import settings
from outline_admin.storage.documents import DocumentStore

from .schemas import Course


class CourseRepository:
    """Repository for course documents."""

    def __init__(self, store: DocumentStore, collection: Optional[str] = None):
        self.store = store
        self.collection = collection or settings.courses_collection

    async def list_all(self) -> list[Course]:
        """All courses, sorted by name."""
        docs = await self.store.list_collection(self.collection)
        courses = [Course.from_document(doc.id, doc.fields) for doc in docs]
        return sorted(courses, key=lambda c: c.course_name)

    async def get_by_id(self, course_id: str) -> Optional[Course]:
        doc = await self.store.get_by_id(self.collection, course_id)
        if doc is None:
            return None
        return Course.from_document(doc.id, doc.fields)

    async def create(self, course: Course) -> str:
        """Create a course document and return its id."""
        return await self.store.create_document(self.collection, course.to_fields())

    async def save(self, course: Course) -> None:
        """Write every course field to its existing document."""
        await self.store.update_document(self.collection, course.id, course.to_fields())
