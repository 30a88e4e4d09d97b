"""Test data factories."""

from tests.factories.tag_factory import (
    TagCreateFactory,
    TagDBFactory,
    TagFactory,
    TagUpdateFactory,
)

__all__ = [
    "TagCreateFactory",
    "TagDBFactory",
    "TagFactory",
    "TagUpdateFactory",
]
