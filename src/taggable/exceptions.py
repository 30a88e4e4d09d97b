"""
Custom exceptions for the taggable package.

This module defines the error kinds surfaced by the tagging service layer.
Every error is raised synchronously as the terminal outcome of a call; none
are retried or suppressed internally.
"""

from __future__ import annotations

from typing import Any, Sequence


class TaggableError(Exception):
    """Base exception for all taggable errors."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        """
        Initialize TaggableError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class TagConfigurationError(TaggableError):
    """
    Exception raised when a batch exceeds the configured tag ceiling.

    Raised before any read or write takes place, so no side effects occur.

    Attributes
    ----------
    message : str
        Human-readable error message.
    max_tags : int
        The configured maximum number of tags per entity.
    provided : int
        The number of distinct tag names that were requested.

    Examples
    --------
    >>> try:
    ...     await manager.create_or_get_tags(session, names)
    ... except TagConfigurationError as e:
    ...     print(f"{e.provided} tags requested, {e.max_tags} allowed")
    """

    status_code: int = 400
    error_code: str = "TAG_LIMIT_EXCEEDED"

    def __init__(
        self,
        message: str | None = None,
        max_tags: int = 0,
        provided: int = 0,
    ) -> None:
        """
        Initialize TagConfigurationError.

        Parameters
        ----------
        message : str | None, optional
            Human-readable error message (default: derived from ``max_tags``).
        max_tags : int, optional
            The configured tag ceiling (default: 0).
        provided : int, optional
            Number of distinct tag names requested (default: 0).
        """
        self.max_tags = max_tags
        self.provided = provided
        super().__init__(
            message or f"A maximum of {max_tags} tags are allowed per entity."
        )


class TagValidationError(TaggableError):
    """
    Exception raised when a tag fails validation.

    Attributes
    ----------
    message : str
        Human-readable error message.
    errors : dict[str, list[str]]
        Field key to ordered list of validation messages.

    Examples
    --------
    >>> try:
    ...     await manager.save_tag(session, TagCreate(name=""))
    ... except TagValidationError as e:
    ...     print(e.errors)
    {'name': ['Tag name cannot be empty.']}
    """

    status_code: int = 422
    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Tag validation failed",
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        """
        Initialize TagValidationError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Tag validation failed").
        errors : dict[str, list[str]] | None, optional
            Field-keyed validation messages (default: None).
        """
        self.errors: dict[str, list[str]] = errors or {}
        super().__init__(message)


class TagNotFoundError(TaggableError):
    """
    Exception raised when a tag or tag association does not exist.

    Attributes
    ----------
    resource_type : str
        The type of resource that was not found (e.g., "Tag").
    identifier : str
        The identifier used to look up the resource.
    """

    status_code: int = 404
    error_code: str = "NOT_FOUND"

    def __init__(self, identifier: Any, resource_type: str = "Tag") -> None:
        """
        Initialize TagNotFoundError.

        Parameters
        ----------
        identifier : Any
            The identifier used to look up the resource.
        resource_type : str, optional
            The type of resource that was not found (default: "Tag").
        """
        self.resource_type = resource_type
        self.identifier = str(identifier)
        super().__init__(f"{resource_type} with ID {self.identifier} not found.")


class TagConflictError(TaggableError):
    """
    Exception raised when the storage uniqueness constraint rejects a write.

    Two concurrent requests can both observe a name as missing and both
    attempt an insert; the unique constraint on the normalized name lets
    one of them win and this error reports the other. The caller's session
    must be rolled back before reuse.

    Attributes
    ----------
    names : list[str]
        The tag names that were being written.
    original_error : Exception | None
        The database exception that caused this error.
    """

    status_code: int = 409
    error_code: str = "CONFLICT"

    def __init__(
        self,
        names: Sequence[str] = (),
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize TagConflictError.

        Parameters
        ----------
        names : Sequence[str], optional
            The tag names being written (default: empty).
        original_error : Exception | None, optional
            The original database exception (default: None).
        """
        self.names: list[str] = list(names)
        self.original_error: Exception | None = original_error
        super().__init__(
            f"Tag(s) already exist: {', '.join(self.names)}"
            if self.names
            else "Tag already exists"
        )


class RepositoryError(TaggableError):
    """
    Exception raised for repository/database operation failures.

    Attributes
    ----------
    message : str
        Human-readable error message.
    operation : str | None
        The database operation that failed (e.g., "insert", "delete").
    entity_type : str | None
        The type of entity involved (e.g., "Tag").
    original_error : Exception | None
        The original database exception that caused this error.
    """

    status_code: int = 500
    error_code: str = "DATABASE_ERROR"

    def __init__(
        self,
        message: str = "Repository operation failed",
        operation: str | None = None,
        entity_type: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize RepositoryError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Repository operation failed").
        operation : str | None, optional
            The database operation that failed (default: None).
        entity_type : str | None, optional
            The type of entity involved (default: None).
        original_error : Exception | None, optional
            The original database exception (default: None).
        """
        self.operation: str | None = operation
        self.entity_type: str | None = entity_type
        self.original_error: Exception | None = original_error
        super().__init__(message)
