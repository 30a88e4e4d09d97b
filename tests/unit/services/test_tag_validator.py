"""
Tests for DefaultTagValidator and the TagValidator protocol.
"""

from __future__ import annotations

import pytest

from taggable.config.settings import Settings
from taggable.models.tag import TagCreate
from taggable.models.validation import ValidationResult
from taggable.services.tag_validator import (
    EMPTY_NAME_KEY,
    DefaultTagValidator,
    TagValidator,
)

pytestmark = pytest.mark.asyncio


@pytest.fixture
def validator(mock_settings: Settings) -> DefaultTagValidator:
    return DefaultTagValidator(mock_settings)


class TestDefaultTagValidator:
    """Tests for the built-in rules."""

    @pytest.mark.parametrize(
        "name", ["python", "Machine Learning", "web-dev", "v1.2", "café", "日本語"]
    )
    async def test_valid_names(self, validator: DefaultTagValidator, name: str) -> None:
        result = await validator.validate(TagCreate(name=name))

        assert result.is_valid
        assert result.errors == {}

    async def test_empty_name_keyed_by_name(
        self, validator: DefaultTagValidator
    ) -> None:
        result = await validator.validate(TagCreate(name="   "))

        assert result.errors == {EMPTY_NAME_KEY: ["Tag name cannot be empty."]}

    async def test_too_long_name(self, validator: DefaultTagValidator) -> None:
        name = "a" * 101

        result = await validator.validate(TagCreate(name=name))

        assert result.errors == {name: ["Tag name cannot exceed 100 characters."]}

    async def test_name_at_max_length_is_valid(
        self, validator: DefaultTagValidator
    ) -> None:
        result = await validator.validate(TagCreate(name="a" * 100))

        assert result.is_valid

    async def test_casefold_expansion_within_key_width_is_valid(
        self, validator: DefaultTagValidator
    ) -> None:
        result = await validator.validate(TagCreate(name="ß" * 100))

        assert result.is_valid

    async def test_compatibility_expansion_past_key_width(
        self, validator: DefaultTagValidator
    ) -> None:
        # Each ROMAN NUMERAL EIGHT decomposes to "viii" in the slug
        name = "ⅷ" * 100

        result = await validator.validate(TagCreate(name=name))

        assert result.errors == {name: ["Tag name is too long once normalized."]}

    @pytest.mark.parametrize("name", ["C++", "#python", "-leading", "semi;colon"])
    async def test_disallowed_characters(
        self, validator: DefaultTagValidator, name: str
    ) -> None:
        result = await validator.validate(TagCreate(name=name))

        assert result.errors == {
            name: ["Tag name contains characters that are not allowed."]
        }

    async def test_multiple_messages_for_one_name_keep_order(
        self, validator: DefaultTagValidator
    ) -> None:
        name = "+" * 101

        result = await validator.validate(TagCreate(name=name))

        assert result.errors[name] == [
            "Tag name cannot exceed 100 characters.",
            "Tag name contains characters that are not allowed.",
        ]

    async def test_description_too_long(self, validator: DefaultTagValidator) -> None:
        result = await validator.validate(
            TagCreate(name="python", description="x" * 1001)
        )

        assert result.errors == {
            "description": ["Tag description cannot exceed 1000 characters."]
        }

    async def test_each_call_returns_fresh_result(
        self, validator: DefaultTagValidator
    ) -> None:
        bad = await validator.validate(TagCreate(name="C++"))
        good = await validator.validate(TagCreate(name="python"))

        assert not bad.is_valid
        assert good.is_valid
        assert bad is not good

    async def test_settings_drive_the_rules(self) -> None:
        strict = DefaultTagValidator(
            Settings(tag_name_max_length=5, tag_name_pattern=r"^[a-z]+$")
        )

        result = await strict.validate(TagCreate(name="Python"))

        assert result.errors == {
            "Python": [
                "Tag name cannot exceed 5 characters.",
                "Tag name contains characters that are not allowed.",
            ]
        }


class TestTagValidatorProtocol:
    """Tests for the TagValidator protocol."""

    def test_default_validator_satisfies_protocol(
        self, validator: DefaultTagValidator
    ) -> None:
        assert isinstance(validator, TagValidator)

    def test_host_validator_satisfies_protocol(self) -> None:
        class AlwaysValid:
            async def validate(self, tag: TagCreate) -> ValidationResult:
                return ValidationResult()

        assert isinstance(AlwaysValid(), TagValidator)
