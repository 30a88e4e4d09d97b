"""
Tag validation.

``TagValidator`` is the hook host applications implement to enforce their
own rules; ``DefaultTagValidator`` checks emptiness, length and the allowed
character class configured in settings. Validators are pure: each call
returns a fresh ``ValidationResult``.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Protocol, runtime_checkable

from taggable.config.settings import Settings
from taggable.config.settings import settings as default_settings
from taggable.db.models import TAG_KEY_LENGTH
from taggable.models.tag import TagCreate
from taggable.models.validation import ValidationResult
from taggable.services.tag_normalization import normalize_name, slugify

logger = logging.getLogger(__name__)

# Key used when the tag has no name to key its errors by
EMPTY_NAME_KEY = "name"


@runtime_checkable
class TagValidator(Protocol):
    """Contract for validating a tag before it is persisted."""

    async def validate(self, tag: TagCreate) -> ValidationResult:
        """Return the validation messages for *tag*; empty means valid."""
        ...


class DefaultTagValidator:
    """
    Built-in tag rules.

    Messages for the name are keyed by the (trimmed) tag name, or by
    ``"name"`` when the name is empty. Description messages are keyed by
    ``"description"``.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or default_settings
        self._name_pattern = re.compile(self._settings.tag_name_pattern)

    async def validate(self, tag: TagCreate) -> ValidationResult:
        result = ValidationResult()
        name = (tag.name or "").strip()

        if not name:
            result.add(EMPTY_NAME_KEY, "Tag name cannot be empty.")
        else:
            max_length = self._settings.tag_name_max_length
            if len(name) > max_length:
                result.add(
                    name, f"Tag name cannot exceed {max_length} characters."
                )
            if not self._name_pattern.fullmatch(name):
                result.add(
                    name, "Tag name contains characters that are not allowed."
                )
            if self._derived_key_length(name) > TAG_KEY_LENGTH:
                result.add(name, "Tag name is too long once normalized.")

        max_description = self._settings.tag_description_max_length
        if tag.description is not None and len(tag.description) > max_description:
            result.add(
                "description",
                f"Tag description cannot exceed {max_description} characters.",
            )

        if not result.is_valid:
            logger.debug("Tag %r failed validation: %s", name, result.errors)
        return result

    @staticmethod
    def _derived_key_length(name: str) -> int:
        # Compatibility decomposition in slugify can expand past the casefold bound
        return max(len(normalize_name(name) or ""), len(slugify(name)))
