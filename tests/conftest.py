"""
Pytest configuration and fixtures for taggable tests.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from taggable.config.settings import Settings


@pytest.fixture
def mock_settings() -> Settings:
    """Settings for testing, with a small tag ceiling."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        max_tags_per_entity=5,
    )


@pytest.fixture
def mock_session() -> AsyncMock:
    """Mock async database session."""
    session = AsyncMock(spec=AsyncSession)
    # add/add_all are synchronous on AsyncSession
    session.add = MagicMock()
    session.add_all = MagicMock()
    return session
