"""
Repository layer for data access patterns.

This module provides repository interfaces and implementations following
the Repository pattern for clean separation of tagging rules and data
persistence.
"""

from .base import BaseRepository, BaseSQLAlchemyRepository
from .tag_repository import TagRepository
from .taggable_repository import TaggableRepository

__all__ = [
    "BaseRepository",
    "BaseSQLAlchemyRepository",
    "TagRepository",
    "TaggableRepository",
]
