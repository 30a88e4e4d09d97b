"""
Tests for the dependency injection container.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from taggable.config.settings import Settings
from taggable.container import Container, container
from taggable.repositories import TagRepository, TaggableRepository
from taggable.services.entity_tag_manager import EntityTagManager
from taggable.services.tag_manager import TagManager
from taggable.services.tag_validator import DefaultTagValidator
from tests.host_models import Post, PostTag


@pytest.fixture
def test_container(mock_settings: Settings) -> Container:
    return Container(settings=mock_settings)


class TestRepositoryFactories:
    """Test transient repository factories."""

    def test_create_tag_repository_is_transient(self, test_container: Container):
        repo1 = test_container.create_tag_repository()
        repo2 = test_container.create_tag_repository()

        assert isinstance(repo1, TagRepository)
        assert repo1 is not repo2

    def test_create_taggable_repository(self, test_container: Container):
        repo = test_container.create_taggable_repository(PostTag, Post)

        assert isinstance(repo, TaggableRepository)
        assert repo.association_model is PostTag
        assert repo.entity_model is Post


class TestServiceFactories:
    """Test service factories and the cached validator."""

    def test_tag_validator_is_cached(self, test_container: Container):
        assert test_container.tag_validator is test_container.tag_validator

    def test_create_tag_validator_is_fresh(self, test_container: Container):
        validator = test_container.create_tag_validator()

        assert isinstance(validator, DefaultTagValidator)
        assert validator is not test_container.tag_validator

    def test_create_tag_manager_uses_container_settings(
        self, test_container: Container
    ):
        manager = test_container.create_tag_manager()

        assert isinstance(manager, TagManager)
        assert manager.max_tags_per_entity == 5
        assert manager._validator is test_container.tag_validator

    def test_create_tag_manager_accepts_overrides(self, test_container: Container):
        repository = MagicMock(spec=TagRepository)
        validator = MagicMock()

        manager = test_container.create_tag_manager(
            repository=repository, validator=validator
        )

        assert manager._repository is repository
        assert manager._validator is validator

    def test_create_entity_tag_manager(self, test_container: Container):
        manager = test_container.create_entity_tag_manager(PostTag, Post)

        assert isinstance(manager, EntityTagManager)
        assert manager._repository.association_model is PostTag

    def test_reset_clears_cached_validator(self, test_container: Container):
        first = test_container.tag_validator

        test_container.reset()

        assert test_container.tag_validator is not first


def test_global_container_loads_settings_lazily():
    assert isinstance(container, Container)
    assert isinstance(container.settings, Settings)
