"""
Service layer for taggable.

Tag reconciliation, validation, normalization and entity association
management. Import services from their modules, e.g.
``from taggable.services.tag_manager import TagManager``.
"""

from __future__ import annotations

__all__: list[str] = []
