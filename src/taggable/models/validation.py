"""
Validation result returned by tag validators.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ValidationResult:
    """
    Field-keyed validation messages.

    An empty ``errors`` mapping means the validated object is valid. Each
    key maps to the ordered list of messages recorded for it.
    """

    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, key: str, message: str) -> None:
        """Record *message* under *key*, preserving insertion order."""
        self.errors.setdefault(key, []).append(message)

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Append every message from *other* into this result."""
        for key, messages in other.errors.items():
            for message in messages:
                self.add(key, message)
        return self
