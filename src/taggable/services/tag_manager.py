"""
Tag manager service.

Sits between the host's API layer and the tag repository. It owns every
business rule: the per-entity tag ceiling, validation before persistence,
and case-insensitive reconciliation of requested names against existing
rows. The caller supplies the ``AsyncSession`` and owns the transaction.

Lookup policy: the manager's single-tag lookups (``get_tag_by_id``,
``get_tag_by_name``, ``delete_tag``) raise ``TagNotFoundError``; batch
reconciliation treats absence as "create".
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from taggable.config.settings import Settings
from taggable.config.settings import settings as default_settings
from taggable.db.models import Tag as TagDB
from taggable.exceptions import (
    TagConfigurationError,
    TagNotFoundError,
    TagValidationError,
)
from taggable.models.tag import TagCreate
from taggable.models.validation import ValidationResult
from taggable.repositories.tag_repository import TagRepository
from taggable.services.tag_normalization import normalize_name, unique_names
from taggable.services.tag_validator import DefaultTagValidator, TagValidator

logger = logging.getLogger(__name__)


class TagManager:
    """
    Service for creating, reconciling, retrieving and deleting tags.

    Validation rules come from the injected ``TagValidator``; see
    ``DefaultTagValidator`` for the built-in ones.
    """

    def __init__(
        self,
        repository: TagRepository,
        validator: Optional[TagValidator] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or default_settings
        self._repository = repository
        self._validator = validator or DefaultTagValidator(self._settings)

    @property
    def max_tags_per_entity(self) -> int:
        return self._settings.max_tags_per_entity

    async def _ensure_valid(self, tag: TagCreate) -> None:
        result = await self._validator.validate(tag)
        if not result.is_valid:
            logger.warning(
                "Tag validation failed for tag '%s', Errors: %s",
                tag.name,
                result.errors,
            )
            raise TagValidationError("Tag validation failed", result.errors)

    async def create_or_get_tags(
        self, session: AsyncSession, names: Iterable[str]
    ) -> List[TagDB]:
        """
        Resolve requested tag names into existing or newly created tags.

        Names are trimmed, blanks dropped and duplicates removed ignoring
        case (first spelling wins). Names that already exist are returned
        as stored; the rest are validated together and created in one bulk
        insert. Either every new tag is created or none is, and a validation
        error carries the messages of every failing name.

        Parameters
        ----------
        session : AsyncSession
            Database session (caller manages transaction).
        names : Iterable[str]
            Requested tag names.

        Returns
        -------
        List[TagDB]
            One tag per distinct requested name, in request order.

        Raises
        ------
        TagConfigurationError
            If the distinct name count exceeds ``max_tags_per_entity``.
            Nothing is read or written.
        TagValidationError
            If any new name fails validation. Nothing is written.
        TagConflictError
            If a concurrent request created one of the names first.
        """
        requested = unique_names(names)

        if len(requested) > self.max_tags_per_entity:
            logger.warning(
                "Tag limit exceeded. Maximum allowed is %d, but %d were provided.",
                self.max_tags_per_entity,
                len(requested),
            )
            raise TagConfigurationError(
                max_tags=self.max_tags_per_entity, provided=len(requested)
            )

        if not requested:
            return []

        existing = await self._repository.get_by_names(session, requested)
        by_key = {tag.normalized_name: tag for tag in existing}

        candidates = [
            TagCreate(name=name)
            for name in requested
            if normalize_name(name) not in by_key
        ]

        failures = ValidationResult()
        for candidate in candidates:
            failures.merge(await self._validator.validate(candidate))
        if not failures.is_valid:
            logger.warning(
                "Tag validation failed for %d new tags, Errors: %s",
                len(failures.errors),
                failures.errors,
            )
            raise TagValidationError("Tag validation failed", failures.errors)

        if candidates:
            logger.info("Creating %d new tags.", len(candidates))
            created = await self._repository.save_range(session, candidates)
            by_key.update({tag.normalized_name: tag for tag in created})

        result = [by_key[normalize_name(name)] for name in requested]
        logger.info(
            "Returning a total of %d tags (existing and new).", len(result)
        )
        return result

    async def save_tag(self, session: AsyncSession, tag_in: TagCreate) -> TagDB:
        """
        Validate and save a single tag, updating it if the name exists.

        Saving the same name twice (in any casing) updates the stored row
        rather than creating a duplicate.

        Raises
        ------
        TagValidationError
            If the tag fails validation. Nothing is written.
        """
        await self._ensure_valid(tag_in)

        existing = await self._repository.get_by_name(session, tag_in.name)
        if existing is not None:
            logger.info(
                "Tag with name %s already exists. Updating existing tag.",
                tag_in.name,
            )
            return await self._repository.update(
                session, db_obj=existing, obj_in=tag_in
            )

        logger.info("Creating new tag with name: %s", tag_in.name)
        return await self._repository.create(session, obj_in=tag_in)

    async def delete_tag(self, session: AsyncSession, tag_id: uuid.UUID) -> TagDB:
        """
        Delete a tag by id and return the removed row.

        Raises
        ------
        TagNotFoundError
            If no tag has this id. Nothing is deleted.
        """
        existing = await self._repository.get(session, tag_id)
        if existing is None:
            logger.error("Attempted to delete non-existent tag with ID: %s", tag_id)
            raise TagNotFoundError(tag_id)

        logger.info("Deleting tag with ID: %s", tag_id)
        await self._repository.delete(session, id=tag_id)
        return existing

    async def get_all_tags(
        self, session: AsyncSession, *, include_inactive: bool = True
    ) -> List[TagDB]:
        """Get all tags; inactive ones are included unless asked otherwise."""
        logger.info("Retrieving all tags.")
        return await self._repository.get_all(
            session, include_inactive=include_inactive
        )

    async def get_tag_by_id(self, session: AsyncSession, tag_id: uuid.UUID) -> TagDB:
        """
        Get a tag by id.

        Raises
        ------
        TagNotFoundError
            If no tag has this id.
        """
        tag = await self._repository.get(session, tag_id)
        if tag is None:
            logger.warning("Tag with ID %s not found.", tag_id)
            raise TagNotFoundError(tag_id)

        logger.debug("Tag with ID %s retrieved successfully.", tag_id)
        return tag

    async def get_tag_by_name(self, session: AsyncSession, name: str) -> TagDB:
        """
        Get a tag by name, ignoring case.

        Raises
        ------
        TagNotFoundError
            If no tag has this name.
        """
        tag = await self._repository.get_by_name(session, name)
        if tag is None:
            logger.warning("Tag with name %s not found.", name)
            raise TagNotFoundError(name)

        return tag
