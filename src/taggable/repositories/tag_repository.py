"""
Tag repository implementation.

Provides the data access layer for tags: lookups by id and by
case-insensitive name, single and bulk inserts, merges and deletes.
Storage errors are translated into taggable exceptions; nothing is
committed here.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from typing import Any, List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taggable.db.models import Tag as TagDB
from taggable.exceptions import RepositoryError, TagConflictError
from taggable.models.tag import TagCreate, TagUpdate
from taggable.repositories.base import BaseSQLAlchemyRepository
from taggable.services.tag_normalization import clean_name, normalize_name, slugify

logger = logging.getLogger(__name__)


class TagRepository(BaseSQLAlchemyRepository[TagDB, TagCreate, TagUpdate]):
    """Repository for tag operations."""

    def __init__(self) -> None:
        super().__init__(TagDB)

    @staticmethod
    def build(tag_in: TagCreate) -> TagDB:
        """Build a transient ``TagDB`` with its derived columns filled in."""
        name = clean_name(tag_in.name)
        normalized = normalize_name(name)
        if normalized is None:
            raise ValueError("Tag name cannot be empty")

        return TagDB(
            name=name,
            normalized_name=normalized,
            slug=slugify(name),
            description=tag_in.description,
            active=True if tag_in.active is None else tag_in.active,
        )

    async def _flush(
        self, session: AsyncSession, names: Sequence[str], operation: str
    ) -> None:
        try:
            await session.flush()
        except IntegrityError as e:
            logger.warning(
                "Unique constraint rejected %s of tags %s", operation, list(names)
            )
            raise TagConflictError(names, original_error=e) from e
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to {operation} tags",
                operation=operation,
                entity_type="Tag",
                original_error=e,
            ) from e

    async def get_all(
        self, session: AsyncSession, *, include_inactive: bool = True
    ) -> List[TagDB]:
        """Get all tags ordered by name."""
        query = select(TagDB)
        if not include_inactive:
            query = query.where(TagDB.active.is_(True))

        result = await session.execute(query.order_by(TagDB.normalized_name))
        return list(result.scalars().all())

    async def get(self, session: AsyncSession, id: uuid.UUID) -> Optional[TagDB]:
        """Get tag by UUID primary key."""
        result = await session.execute(select(TagDB).where(TagDB.id == id))
        return result.scalar_one_or_none()

    async def get_by_name(self, session: AsyncSession, name: str) -> Optional[TagDB]:
        """
        Look up a single tag by name, ignoring case.

        Parameters
        ----------
        session : AsyncSession
            Database session.
        name : str
            Tag name in any casing; surrounding whitespace is ignored.

        Returns
        -------
        Optional[TagDB]
            The matching tag, or ``None`` if not found.
        """
        normalized = normalize_name(name)
        if normalized is None:
            return None

        result = await session.execute(
            select(TagDB).where(TagDB.normalized_name == normalized)
        )
        return result.scalar_one_or_none()

    async def exists_by_name(self, session: AsyncSession, name: str) -> bool:
        """Check if a tag with this name exists, ignoring case."""
        normalized = normalize_name(name)
        if normalized is None:
            return False

        result = await session.execute(
            select(TagDB.id).where(TagDB.normalized_name == normalized)
        )
        return result.first() is not None

    async def get_by_names(
        self, session: AsyncSession, names: Sequence[str]
    ) -> List[TagDB]:
        """
        Get every tag whose name matches one of *names*, ignoring case.

        Names that match nothing are simply absent from the result.
        """
        keys = {key for key in (normalize_name(n) for n in names) if key is not None}
        if not keys:
            return []

        result = await session.execute(
            select(TagDB).where(TagDB.normalized_name.in_(keys))
        )
        return list(result.scalars().all())

    async def create(self, session: AsyncSession, *, obj_in: TagCreate) -> TagDB:
        """Create a single tag."""
        db_obj = self.build(obj_in)
        session.add(db_obj)
        await self._flush(session, [db_obj.name], "insert")
        await session.refresh(db_obj)
        return db_obj

    async def save_range(
        self, session: AsyncSession, tags: Sequence[TagCreate]
    ) -> List[TagDB]:
        """Insert several tags with a single flush."""
        db_objs = [self.build(tag) for tag in tags]
        if not db_objs:
            return []

        session.add_all(db_objs)
        await self._flush(session, [obj.name for obj in db_objs], "insert")
        return db_objs

    async def update(
        self,
        session: AsyncSession,
        *,
        db_obj: TagDB,
        obj_in: Union[TagUpdate, TagCreate, dict[str, Any]],
    ) -> TagDB:
        """
        Merge the fields set on *obj_in* onto an existing tag.

        A changed name also refreshes ``normalized_name`` and ``slug``.
        ``None`` for ``name`` or ``active`` leaves the stored value untouched.
        """
        update_data = self._dump(obj_in, exclude_unset=True)
        for required in ("name", "active"):
            if update_data.get(required) is None:
                update_data.pop(required, None)

        if "name" in update_data:
            name = clean_name(update_data["name"])
            normalized = normalize_name(name)
            if normalized is None:
                raise ValueError("Tag name cannot be empty")
            update_data["name"] = name
            update_data["normalized_name"] = normalized
            update_data["slug"] = slugify(name)

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        session.add(db_obj)
        await self._flush(session, [db_obj.name], "update")
        await session.refresh(db_obj)
        return db_obj
