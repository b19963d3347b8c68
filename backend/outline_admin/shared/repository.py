"""
Base repository with common CRUD operations.

Provides generic database operations for the storage layer.
Uses SQLAlchemy async session for non-blocking database access.

Usage:
    class DocumentRepository(BaseRepository[StoredDocument]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, StoredDocument)

        async def in_collection(self, name: str) -> list[StoredDocument]:
            return await self.get_all(collection=name)
"""

from typing import TypeVar, Generic, Type
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for database operations.

    All methods are async for use with AsyncSession. Callers own the
    transaction: methods flush, they never commit.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        """
        Initialize repository.

        Args:
            db: Async database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def _filtered(self, **kwargs):
        query = select(self.model)
        for key, value in kwargs.items():
            query = query.where(getattr(self.model, key) == value)
        return query

    async def get_by(self, **kwargs) -> T | None:
        """
        Get single entity by arbitrary field values.

        Args:
            **kwargs: Field name-value pairs to filter by

        Returns:
            First matching entity or None
        """
        result = await self.db.execute(self._filtered(**kwargs))
        return result.scalar_one_or_none()

    async def get_all(self, order_by=None, **kwargs) -> list[T]:
        """
        Get all entities matching criteria.

        Args:
            order_by: Optional column to sort by
            **kwargs: Field name-value pairs to filter by

        Returns:
            List of matching entities
        """
        query = self._filtered(**kwargs)
        if order_by is not None:
            query = query.order_by(order_by)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(self, **kwargs) -> T:
        """
        Create new entity.

        Args:
            **kwargs: Field values for new entity

        Returns:
            Created entity with generated ID
        """
        entity = self.model(**kwargs)
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def update(self, entity: T, **kwargs) -> T:
        """
        Update entity fields.

        Args:
            entity: Entity to update
            **kwargs: Field values to update

        Returns:
            Updated entity
        """
        for key, value in kwargs.items():
            setattr(entity, key, value)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity
