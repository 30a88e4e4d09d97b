"""
Database models for taggable.

This module contains the SQLAlchemy ``Tag`` model and the mixins used to
attach tags to arbitrary host entities. Host applications declare their
entity and association models on the same ``Base`` so the foreign keys
resolve within one metadata:

    >>> class Post(TaggableEntityMixin, Base):
    ...     __tablename__ = "posts"
    ...     title: Mapped[str] = mapped_column(String(200))
    >>> class PostTag(TagAssociationMixin, Base):
    ...     __tablename__ = "post_tags"
    ...     __entity_table__ = "posts"
"""

from __future__ import annotations

import datetime
import uuid
from typing import Any, ClassVar, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    declared_attr,
    mapped_column,
    relationship,
)
from sqlalchemy.sql import func
from uuid_utils import uuid7

TAG_NAME_LENGTH = 100

# Casefolding expands a character to at most three, so derived keys get room
TAG_KEY_LENGTH = 3 * TAG_NAME_LENGTH


def utcnow() -> datetime.datetime:
    """Timezone-aware current time used for timestamp columns."""
    return datetime.datetime.now(datetime.timezone.utc)


def new_id() -> uuid.UUID:
    """Return a UUIDv7 expressed as a stdlib ``uuid.UUID`` instance."""
    return uuid.UUID(bytes=uuid7().bytes)


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class Tag(Base):
    """A named label attachable to host entities."""

    __tablename__ = "tags"

    # Primary key
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_id)

    # Tag content
    name: Mapped[str] = mapped_column(String(TAG_NAME_LENGTH), nullable=False)
    normalized_name: Mapped[str] = mapped_column(
        String(TAG_KEY_LENGTH), nullable=False, unique=True
    )  # Casefolded name; enforces case-insensitive uniqueness
    slug: Mapped[str] = mapped_column(
        String(TAG_KEY_LENGTH), nullable=False, index=True
    )
    description: Mapped[Optional[str]] = mapped_column(Text)

    # Status tracking
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"Tag(id={self.id!r}, name={self.name!r})"


class TaggableEntityMixin:
    """Common columns for host entities: id, timestamps and active flag."""

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_id)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class TagAssociationMixin:
    """
    Join row linking one tag to one host entity.

    Subclasses set ``__tablename__`` and ``__entity_table__`` (the table
    holding the host entity, whose primary key column must be ``id``).
    ``__entity_id_type__`` may be overridden for non-UUID host keys.
    """

    __entity_table__: ClassVar[str]
    __entity_id_type__: ClassVar[Any] = Uuid

    @declared_attr
    def entity_id(cls) -> Mapped[Any]:
        return mapped_column(
            cls.__entity_id_type__,
            ForeignKey(f"{cls.__entity_table__}.id", ondelete="CASCADE"),
            primary_key=True,
        )

    @declared_attr
    def tag_id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(
            Uuid,
            ForeignKey("tags.id", ondelete="CASCADE"),
            primary_key=True,
        )

    @declared_attr
    def tag(cls) -> Mapped[Tag]:
        return relationship(Tag, lazy="selectin")

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
