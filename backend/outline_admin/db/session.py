"""
Database Session Management

Provides the async engine and session factory backing the document store.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def _get_async_url(url: str) -> str:
    """Convert sync database URL to async version."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///")
    elif url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://")
    return url


def create_engine_for(database_url: str) -> AsyncEngine:
    """Create an async engine for a sync or async database URL."""
    async_url = _get_async_url(database_url)

    if async_url.startswith("sqlite"):
        return create_async_engine(
            async_url,
            connect_args={"check_same_thread": False}
        )
    elif async_url.startswith("postgresql"):
        # PostgreSQL with connection pool settings
        return create_async_engine(
            async_url,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=1800,  # 30 minutes
        )
    return create_async_engine(async_url)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Async session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


# =============================================================================
# Initialization
# =============================================================================

async def init_db(engine: AsyncEngine) -> None:
    """Initialize database tables."""
    from outline_admin.models.base import Base
    # Import all models to register them
    from outline_admin.models import document  # noqa

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
