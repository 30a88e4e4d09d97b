"""
Tests for TagRepository.

Uses a mocked AsyncSession; behaviour against a real database is covered by
the integration suite.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from taggable.db.models import Tag as TagDB
from taggable.exceptions import RepositoryError, TagConflictError
from taggable.models.tag import TagCreate, TagUpdate
from taggable.repositories.tag_repository import TagRepository
from tests.factories.tag_factory import TagCreateFactory, TagDBFactory

pytestmark = pytest.mark.asyncio


@pytest.fixture
def repository() -> TagRepository:
    return TagRepository()


def _scalars_result(rows: list) -> MagicMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


class TestBuild:
    """Tests for deriving column values from TagCreate."""

    def test_build_fills_derived_columns(self) -> None:
        tag = TagRepository.build(TagCreate(name="  Café   Society "))

        assert isinstance(tag, TagDB)
        assert tag.name == "Café Society"
        assert tag.normalized_name == "café society"
        assert tag.slug == "cafe-society"
        assert tag.active is True

    def test_build_keeps_explicit_inactive_flag(self) -> None:
        tag = TagRepository.build(TagCreate(name="old", active=False))

        assert tag.active is False

    def test_build_rejects_empty_name(self) -> None:
        with pytest.raises(ValueError):
            TagRepository.build(TagCreate(name="   "))


class TestReads:
    """Tests for lookup methods."""

    async def test_get_by_name_is_case_insensitive(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        tag = TagDBFactory.build(name="Python")
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = tag
        mock_session.execute.return_value = mock_result

        assert await repository.get_by_name(mock_session, " PYTHON ") is tag

        query = mock_session.execute.call_args.args[0]
        assert "python" in query.compile().params.values()

    async def test_get_by_name_blank_skips_query(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        assert await repository.get_by_name(mock_session, "  ") is None
        assert await repository.exists_by_name(mock_session, "") is False
        mock_session.execute.assert_not_called()

    async def test_exists_by_name(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        mock_result = MagicMock()
        mock_result.first.return_value = ("some-id",)
        mock_session.execute.return_value = mock_result

        assert await repository.exists_by_name(mock_session, "Python") is True

    async def test_get_by_names_returns_matches(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        tags = [TagDBFactory.build(name="a"), TagDBFactory.build(name="b")]
        mock_session.execute.return_value = _scalars_result(tags)

        result = await repository.get_by_names(mock_session, ["A", "b", "zzz"])

        assert result == tags
        mock_session.execute.assert_called_once()

    async def test_get_by_names_empty_skips_query(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        assert await repository.get_by_names(mock_session, ["", " "]) == []
        mock_session.execute.assert_not_called()

    async def test_get_all_active_only_filters(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        mock_session.execute.return_value = _scalars_result([])

        await repository.get_all(mock_session, include_inactive=False)

        query = mock_session.execute.call_args.args[0]
        assert query.whereclause is not None

    async def test_get_all_includes_inactive_by_default(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        mock_session.execute.return_value = _scalars_result([])

        await repository.get_all(mock_session)

        query = mock_session.execute.call_args.args[0]
        assert query.whereclause is None


class TestWrites:
    """Tests for create, save_range and update."""

    async def test_create_adds_flushes_and_refreshes(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        result = await repository.create(mock_session, obj_in=TagCreate(name="Rust"))

        assert result.normalized_name == "rust"
        mock_session.add.assert_called_once_with(result)
        mock_session.flush.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(result)

    async def test_save_range_uses_one_flush(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        tags_in = TagCreateFactory.build_batch(3)

        result = await repository.save_range(mock_session, tags_in)

        assert [tag.name for tag in result] == [tag.name for tag in tags_in]
        mock_session.add_all.assert_called_once()
        mock_session.flush.assert_awaited_once()

    async def test_save_range_empty_is_noop(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        assert await repository.save_range(mock_session, []) == []
        mock_session.flush.assert_not_called()

    async def test_unique_violation_becomes_conflict(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        mock_session.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed")
        )

        with pytest.raises(TagConflictError) as exc_info:
            await repository.save_range(mock_session, [TagCreate(name="python")])

        assert exc_info.value.names == ["python"]
        assert isinstance(exc_info.value.original_error, IntegrityError)

    async def test_other_database_error_becomes_repository_error(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        mock_session.flush.side_effect = OperationalError(
            "INSERT", {}, Exception("database is locked")
        )

        with pytest.raises(RepositoryError) as exc_info:
            await repository.create(mock_session, obj_in=TagCreate(name="python"))

        assert exc_info.value.operation == "insert"
        assert exc_info.value.entity_type == "Tag"

    async def test_update_rename_recomputes_derived_columns(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        tag = TagDBFactory.build(name="python")

        await repository.update(
            mock_session, db_obj=tag, obj_in=TagUpdate(name="Python 3")
        )

        assert tag.name == "Python 3"
        assert tag.normalized_name == "python 3"
        assert tag.slug == "python-3"

    async def test_update_from_create_keeps_unset_active(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        tag = TagDBFactory.build(name="python", active=False)

        await repository.update(
            mock_session,
            db_obj=tag,
            obj_in=TagCreate(name="PYTHON", description="A language"),
        )

        assert tag.active is False
        assert tag.description == "A language"
        assert tag.name == "PYTHON"

    async def test_update_rejects_blank_name(
        self, repository: TagRepository, mock_session: AsyncMock
    ) -> None:
        tag = TagDBFactory.build(name="python")

        with pytest.raises(ValueError, match="cannot be empty"):
            await repository.update(
                mock_session, db_obj=tag, obj_in=TagUpdate(name="   ")
            )

        assert tag.name == "python"
        assert tag.normalized_name == "python"
        mock_session.flush.assert_not_called()
