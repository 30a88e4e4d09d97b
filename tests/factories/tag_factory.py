"""
Factories for tag models using factory_boy.

Provides test data for the Pydantic tag models and for transient ``Tag``
ORM rows with their derived columns filled in.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

import factory
from factory import LazyAttribute, LazyFunction, Sequence
from uuid_utils import uuid7

from taggable.db.models import Tag as TagDB
from taggable.models.tag import Tag, TagCreate, TagUpdate
from taggable.services.tag_normalization import normalize_name, slugify


def _uuid7() -> uuid.UUID:
    """Generate a UUIDv7 as a standard uuid.UUID for Pydantic compatibility."""
    return uuid.UUID(bytes=uuid7().bytes)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TagCreateFactory(factory.Factory[TagCreate]):
    """Factory for TagCreate models."""

    class Meta:
        model = TagCreate

    name: Any = Sequence(lambda n: f"Tag {n}")
    description: Any = LazyFunction(lambda: None)


class TagUpdateFactory(factory.Factory[TagUpdate]):
    """Factory for TagUpdate models.

    Respects the model defaults (None for all fields); values are only set
    when passed to build().
    """

    class Meta:
        model = TagUpdate


class TagFactory(factory.Factory[Tag]):
    """Factory for full Tag read models."""

    class Meta:
        model = Tag

    id: Any = LazyFunction(_uuid7)
    name: Any = Sequence(lambda n: f"Tag {n}")
    description: Any = LazyFunction(lambda: None)
    slug: Any = LazyAttribute(lambda o: slugify(o.name))
    active: Any = True
    created_at: Any = LazyFunction(_now)
    updated_at: Any = LazyFunction(_now)


class TagDBFactory(factory.Factory[TagDB]):
    """Factory for transient Tag ORM rows (not attached to a session)."""

    class Meta:
        model = TagDB

    id: Any = LazyFunction(_uuid7)
    name: Any = Sequence(lambda n: f"Tag {n}")
    normalized_name: Any = LazyAttribute(lambda o: normalize_name(o.name))
    slug: Any = LazyAttribute(lambda o: slugify(o.name))
    description: Any = None
    active: Any = True
    created_at: Any = LazyFunction(_now)
    updated_at: Any = LazyFunction(_now)
