"""
Tag models.

Defines Pydantic models for tags and tag associations with validation and
serialization support.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TagBase(BaseModel):
    """Base model for tag data."""

    name: str = Field(..., description="Display form of the tag")
    description: Optional[str] = Field(
        default=None, description="Optional free-text description"
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Trim surrounding whitespace; other rules belong to tag validators."""
        return v.strip()

    model_config = ConfigDict(
        validate_assignment=True,
    )


class TagCreate(TagBase):
    """Model for creating or saving tags."""

    active: Optional[bool] = Field(
        default=None, description="Active flag; None keeps the stored value"
    )


class TagUpdate(BaseModel):
    """Model for updating tags (PATCH-style, all fields optional)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    active: Optional[bool] = None

    model_config = ConfigDict(
        validate_assignment=True,
    )


class Tag(TagBase):
    """Full tag model with identifiers and timestamps."""

    id: uuid.UUID = Field(..., description="Tag UUID (UUIDv7)")
    slug: str = Field(..., description="URL-safe form derived from the name")
    active: bool = Field(default=True, description="Whether the tag is active")
    created_at: datetime = Field(..., description="When the record was created")
    updated_at: datetime = Field(..., description="When the record was last updated")

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode for SQLAlchemy compatibility
        validate_assignment=True,
    )


class TagAssociation(BaseModel):
    """A link between one tag and one host entity."""

    entity_id: Any = Field(..., description="Primary key of the host entity")
    tag_id: uuid.UUID = Field(..., description="Primary key of the tag")
    created_at: Optional[datetime] = Field(
        default=None, description="When the tag was attached"
    )

    model_config = ConfigDict(
        from_attributes=True,
    )
