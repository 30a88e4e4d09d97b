"""
taggable - Reusable tagging for SQLAlchemy-backed web applications.

Provides a generic tag entity, association tables for attaching tags to
host entities, a validation hook and a service layer that reconciles
requested tag names against existing rows.
"""

from __future__ import annotations

__version__ = "0.3.0"
__author__ = "taggable"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]
