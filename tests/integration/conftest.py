"""
Shared fixtures for integration tests.

Runs the tagging stack against an in-memory SQLite database with the host
``Post``/``PostTag`` models from ``tests.host_models``.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taggable.config.settings import Settings
from taggable.container import Container
from taggable.db.models import Base
from taggable.services.entity_tag_manager import EntityTagManager
from taggable.services.tag_manager import TagManager
from tests.host_models import Post, PostTag


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Provide database session for tests.

    Each test gets a fresh in-memory database, so no cleanup is shared
    between tests.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()

    await engine.dispose()


@pytest.fixture
def integration_container() -> Container:
    return Container(
        settings=Settings(
            database_url="sqlite+aiosqlite:///:memory:", max_tags_per_entity=5
        )
    )


@pytest.fixture
def tag_manager(integration_container: Container) -> TagManager:
    return integration_container.create_tag_manager()


@pytest.fixture
def post_tags(integration_container: Container) -> EntityTagManager[Post, PostTag]:
    return integration_container.create_entity_tag_manager(PostTag, Post)


@pytest.fixture
async def post(db_session: AsyncSession) -> Post:
    post = Post(title="Hello tags")
    db_session.add(post)
    await db_session.flush()
    return post
