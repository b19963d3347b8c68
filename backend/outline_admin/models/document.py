"""
Stored document model.

Every collection of the document store lives in a single table,
keyed by (collection, id), with the document fields kept as JSON.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON
import uuid

from outline_admin.models.base import Base


class StoredDocument(Base):
    """
    One document of a named collection.

    The field map is replaced, never patched in place, so SQLAlchemy
    always sees the change.
    """

    __tablename__ = "documents"

    collection = Column(String(100), primary_key=True)
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    fields = Column(JSON, nullable=False, default=dict)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<StoredDocument {self.collection}/{self.id}>"
