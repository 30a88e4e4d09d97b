"""FastAPI dependencies for host endpoints that use tagging."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from taggable.config.database import db_manager
from taggable.container import container
from taggable.services.tag_manager import TagManager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for database session.

    Yields an async SQLAlchemy session that auto-commits on success
    and rolls back on exception.

    Yields
    ------
    AsyncSession
        An async SQLAlchemy session for database operations.
    """
    async for session in db_manager.get_session():
        yield session


def get_tag_manager() -> TagManager:
    """Dependency returning a TagManager wired by the global container."""
    return container.create_tag_manager()
