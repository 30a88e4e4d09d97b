"""
Configuration management module for taggable.

Handles tagging options, environment variables and database configuration.
"""

from __future__ import annotations

__all__: list[str] = []
