"""
Entity tag manager service.

Manages the links between tags and one host entity type. The manager is
bound to a ``TaggableRepository`` built for the host's association and
entity models; the caller supplies the session and owns the transaction.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, Generic, List

from sqlalchemy.ext.asyncio import AsyncSession

from taggable.db.models import Tag as TagDB
from taggable.exceptions import TagNotFoundError
from taggable.repositories.taggable_repository import (
    AssociationType,
    EntityType,
    TaggableRepository,
)

if TYPE_CHECKING:
    from taggable.services.tag_manager import TagManager

logger = logging.getLogger(__name__)


class EntityTagManager(Generic[EntityType, AssociationType]):
    """Attach, detach and query tags on host entities."""

    def __init__(
        self, repository: TaggableRepository[EntityType, AssociationType]
    ) -> None:
        self._repository = repository

    async def attach_tags(
        self, session: AsyncSession, entity_id: Any, tags: Sequence[TagDB]
    ) -> List[AssociationType]:
        """
        Attach tags to an entity.

        No ceiling or name reconciliation happens here; pass tags obtained
        from ``TagManager.create_or_get_tags`` to get those guarantees.
        Tags already attached are skipped.

        Returns
        -------
        List[AssociationType]
            The association rows written by this call.

        Raises
        ------
        TagNotFoundError
            If the entity or any of the tags does not exist. Nothing is
            written in that case.
        """
        await self._ensure_entity(session, entity_id)

        missing = await self._repository.get_missing_tag_ids(
            session, [tag.id for tag in tags]
        )
        if missing:
            logger.warning(
                "Cannot attach missing tags %s to entity %s", missing, entity_id
            )
            raise TagNotFoundError(missing[0])

        rows = await self._repository.add_tags_to_entity(session, entity_id, tags)
        logger.info("Attached %d tags to entity %s", len(rows), entity_id)
        return rows

    async def _ensure_entity(self, session: AsyncSession, entity_id: Any) -> None:
        if not await self._repository.entity_exists(session, entity_id):
            logger.warning("Entity %s does not exist", entity_id)
            raise TagNotFoundError(
                entity_id, resource_type=self._repository.entity_model.__name__
            )

    async def detach_tag(
        self, session: AsyncSession, entity_id: Any, tag_id: Any
    ) -> int:
        """
        Remove one tag from an entity.

        Raises
        ------
        TagNotFoundError
            If the entity does not carry the tag.
        """
        removed = await self._repository.remove_tag_from_entity(
            session, entity_id, tag_id
        )
        if removed == 0:
            logger.warning("Tag %s is not attached to entity %s", tag_id, entity_id)
            raise TagNotFoundError(
                f"{entity_id}/{tag_id}", resource_type="TagAssociation"
            )

        logger.info("Detached tag %s from entity %s", tag_id, entity_id)
        return removed

    async def get_tags_for_entity(
        self, session: AsyncSession, entity_id: Any
    ) -> List[TagDB]:
        return await self._repository.get_tags_for_entity(session, entity_id)

    async def get_entities_for_tag(
        self, session: AsyncSession, tag_id: Any
    ) -> List[EntityType]:
        return await self._repository.get_entities_for_tag(session, tag_id)

    async def entity_has_tag(
        self, session: AsyncSession, entity_id: Any, tag_id: Any
    ) -> bool:
        return await self._repository.entity_has_tag(session, entity_id, tag_id)

    async def replace_tags(
        self,
        session: AsyncSession,
        entity_id: Any,
        names: Iterable[str],
        tag_manager: TagManager,
    ) -> List[TagDB]:
        """
        Make *names* the complete tag set of an entity.

        Names are reconciled through ``tag_manager`` first, so the ceiling,
        validation and deduplication rules apply and nothing changes when
        they fail. Existing links not in the new set are removed.

        Returns
        -------
        List[TagDB]
            The entity's tags in request order.
        """
        await self._ensure_entity(session, entity_id)

        tags = await tag_manager.create_or_get_tags(session, names)
        wanted = {tag.id for tag in tags}

        current = await self._repository.get_tag_ids_for_entity(session, entity_id)
        for tag_id in current:
            if tag_id not in wanted:
                await self._repository.remove_tag_from_entity(
                    session, entity_id, tag_id
                )

        await self._repository.add_tags_to_entity(session, entity_id, tags)
        logger.info("Replaced tags on entity %s with %d tags", entity_id, len(tags))
        return tags
