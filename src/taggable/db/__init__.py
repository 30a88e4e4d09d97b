"""
Database layer for taggable.

SQLAlchemy declarative models for tags and the association mixins host
applications combine with their own entities.
"""

from __future__ import annotations

from .models import (
    TAG_KEY_LENGTH,
    TAG_NAME_LENGTH,
    Base,
    Tag,
    TagAssociationMixin,
    TaggableEntityMixin,
)

__all__ = [
    "Base",
    "Tag",
    "TagAssociationMixin",
    "TaggableEntityMixin",
    "TAG_KEY_LENGTH",
    "TAG_NAME_LENGTH",
]
