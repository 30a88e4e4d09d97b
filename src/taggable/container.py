"""
Dependency Injection Container for taggable.

This module provides a centralized container for wiring the tagging
services. It implements a lightweight dependency injection pattern that:

- Provides factory methods for creating repository instances (transient)
- Caches the default tag validator via a cached property (singleton)
- Enables easy mock injection for testing

Usage
-----
Basic service access:

    >>> from taggable.container import container
    >>> manager = container.create_tag_manager()
    >>> post_tags = container.create_entity_tag_manager(PostTag, Post)

Design Principles
-----------------
- Repository and service factories return new instances each call
- The validator is cached via @cached_property (lazy initialization)
- Container can be reset for testing isolation
"""

from __future__ import annotations

from functools import cached_property
from typing import Any, Optional

from taggable.config.settings import Settings, get_settings
from taggable.repositories import TagRepository, TaggableRepository
from taggable.services.entity_tag_manager import EntityTagManager
from taggable.services.tag_manager import TagManager
from taggable.services.tag_validator import DefaultTagValidator, TagValidator


class Container:
    """
    Dependency injection container for taggable.

    Examples
    --------
    Creating repositories (transient - new instance each call):

        >>> container = Container()
        >>> repo1 = container.create_tag_repository()
        >>> repo2 = container.create_tag_repository()
        >>> repo1 is repo2
        False

    Notes
    -----
    Every factory method follows the naming convention ``create_<name>()``
    and returns a new instance each call.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> Settings:
        """Settings used for every service built by this container."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    # -------------------------------------------------------------------------
    # Repository Factory Methods (Transient - new instance per call)
    # -------------------------------------------------------------------------

    def create_tag_repository(self) -> TagRepository:
        """
        Create a new TagRepository instance.

        Returns
        -------
        TagRepository
            A new TagRepository instance for tag CRUD operations.
        """
        return TagRepository()

    def create_taggable_repository(
        self, association_model: type[Any], entity_model: type[Any]
    ) -> TaggableRepository[Any, Any]:
        """
        Create a TaggableRepository bound to a host's association model.

        Parameters
        ----------
        association_model : type
            The host model built on ``TagAssociationMixin``.
        entity_model : type
            The host entity the association points at.

        Returns
        -------
        TaggableRepository
            A new repository for that (entity, association) pair.
        """
        return TaggableRepository(association_model, entity_model)

    # -------------------------------------------------------------------------
    # Service Factory Methods
    # -------------------------------------------------------------------------

    @cached_property
    def tag_validator(self) -> DefaultTagValidator:
        """
        Get the default tag validator (singleton).

        The validator holds only a compiled pattern, so one instance is
        shared by every manager built here.
        """
        return DefaultTagValidator(self.settings)

    def create_tag_validator(self) -> TagValidator:
        """Create a fresh DefaultTagValidator from the container settings."""
        return DefaultTagValidator(self.settings)

    def create_tag_manager(
        self,
        repository: Optional[TagRepository] = None,
        validator: Optional[TagValidator] = None,
    ) -> TagManager:
        """
        Create a TagManager with all dependencies injected.

        Parameters
        ----------
        repository : TagRepository, optional
            Repository to use (default: a new TagRepository).
        validator : TagValidator, optional
            Host-specific validator (default: the cached default validator).

        Returns
        -------
        TagManager
            A new manager wired with the container settings.
        """
        return TagManager(
            repository=repository or self.create_tag_repository(),
            validator=validator or self.tag_validator,
            settings=self.settings,
        )

    def create_entity_tag_manager(
        self, association_model: type[Any], entity_model: type[Any]
    ) -> EntityTagManager[Any, Any]:
        """Create an EntityTagManager for a host's association model."""
        return EntityTagManager(
            self.create_taggable_repository(association_model, entity_model)
        )

    def reset(self) -> None:
        """
        Reset the container by clearing all cached singleton instances.

        This method is primarily for testing purposes, allowing tests to
        change settings and then restore the container to a clean state.
        """
        self.__dict__.pop("tag_validator", None)


# Global container instance
container = Container()
