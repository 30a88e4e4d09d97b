"""
Pydantic models for taggable.

Read and write contracts for tags and associations, plus the validation
result returned by tag validators.
"""

from __future__ import annotations

from .tag import Tag, TagAssociation, TagBase, TagCreate, TagUpdate
from .validation import ValidationResult

__all__ = [
    "Tag",
    "TagAssociation",
    "TagBase",
    "TagCreate",
    "TagUpdate",
    "ValidationResult",
]
