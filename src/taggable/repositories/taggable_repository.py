"""
Taggable repository implementation.

Data access for the association rows linking tags to one host entity type.
The repository is constructed explicitly with the host's association and
entity models, so one instance serves one ``(entity, association)`` pair.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Generic, List, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taggable.db.models import Tag as TagDB
from taggable.exceptions import RepositoryError

logger = logging.getLogger(__name__)

EntityType = TypeVar("EntityType")
AssociationType = TypeVar("AssociationType")


class TaggableRepository(Generic[EntityType, AssociationType]):
    """Repository for entity-tag association operations."""

    def __init__(
        self,
        association_model: type[AssociationType],
        entity_model: type[EntityType],
    ) -> None:
        self.association_model = association_model
        self.entity_model = entity_model

    @property
    def _assoc(self) -> Any:
        return self.association_model

    async def entity_exists(self, session: AsyncSession, entity_id: Any) -> bool:
        """Check whether the host entity row exists."""
        entity: Any = self.entity_model
        result = await session.execute(select(entity.id).where(entity.id == entity_id))
        return result.first() is not None

    async def get_missing_tag_ids(
        self, session: AsyncSession, tag_ids: Sequence[Any]
    ) -> List[Any]:
        """Return the ids in *tag_ids* that have no tag row, in input order."""
        if not tag_ids:
            return []

        result = await session.execute(select(TagDB.id).where(TagDB.id.in_(tag_ids)))
        found = set(result.scalars().all())
        return [tag_id for tag_id in tag_ids if tag_id not in found]

    async def get_tag_ids_for_entity(
        self, session: AsyncSession, entity_id: Any
    ) -> List[Any]:
        """Get the ids of every tag attached to an entity."""
        result = await session.execute(
            select(self._assoc.tag_id).where(self._assoc.entity_id == entity_id)
        )
        return list(result.scalars().all())

    async def add_tags_to_entity(
        self, session: AsyncSession, entity_id: Any, tags: Sequence[TagDB]
    ) -> List[AssociationType]:
        """
        Attach tags to an entity, one association row per tag, one flush.

        Tags already attached to the entity (or repeated in *tags*) are
        skipped so the composite key is never written twice.

        Returns
        -------
        List[AssociationType]
            The newly written association rows.
        """
        attached = set(await self.get_tag_ids_for_entity(session, entity_id))

        rows: List[AssociationType] = []
        for tag in tags:
            if tag.id in attached:
                continue
            attached.add(tag.id)
            rows.append(self.association_model(entity_id=entity_id, tag_id=tag.id))

        if not rows:
            return rows

        logger.debug("Attaching %d tags to entity %s", len(rows), entity_id)
        session.add_all(rows)
        try:
            await session.flush()
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to attach tags to entity {entity_id}",
                operation="insert",
                entity_type=self.association_model.__name__,
                original_error=e,
            ) from e
        return rows

    async def remove_tag_from_entity(
        self, session: AsyncSession, entity_id: Any, tag_id: Any
    ) -> int:
        """Delete one association row, returning the affected-row count."""
        result = await session.execute(
            delete(self._assoc).where(
                self._assoc.entity_id == entity_id,
                self._assoc.tag_id == tag_id,
            )
        )
        return result.rowcount or 0

    async def get_tags_for_entity(
        self, session: AsyncSession, entity_id: Any
    ) -> List[TagDB]:
        """Get all tags attached to an entity, ordered by name."""
        result = await session.execute(
            select(TagDB)
            .join(self._assoc, self._assoc.tag_id == TagDB.id)
            .where(self._assoc.entity_id == entity_id)
            .order_by(TagDB.normalized_name)
        )
        return list(result.scalars().all())

    async def get_entities_for_tag(
        self, session: AsyncSession, tag_id: Any
    ) -> List[EntityType]:
        """Get all entities carrying a tag."""
        entity: Any = self.entity_model
        result = await session.execute(
            select(entity)
            .join(self._assoc, self._assoc.entity_id == entity.id)
            .where(self._assoc.tag_id == tag_id)
        )
        return list(result.scalars().all())

    async def entity_has_tag(
        self, session: AsyncSession, entity_id: Any, tag_id: Any
    ) -> bool:
        """Check whether an entity carries a tag."""
        result = await session.execute(
            select(self._assoc.tag_id).where(
                self._assoc.entity_id == entity_id,
                self._assoc.tag_id == tag_id,
            )
        )
        return result.first() is not None
