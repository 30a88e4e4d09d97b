"""Exception handlers for FastAPI with RFC 7807 compliance.

Host applications call ``register_exception_handlers(app)`` to turn taggable
exceptions into RFC 7807 Problem Details responses.

RFC 7807 Reference: https://tools.ietf.org/html/rfc7807
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from taggable.api.schemas.responses import (
    ERROR_TITLES,
    ErrorCode,
    FieldError,
    ProblemDetail,
    ProblemJSONResponse,
    ValidationProblemDetail,
    get_error_type_uri,
)
from taggable.exceptions import RepositoryError, TaggableError, TagValidationError

logger = logging.getLogger(__name__)

MAX_DETAIL_LENGTH = 4096
"""Maximum allowed length for detail messages before truncation."""

TRUNCATION_SUFFIX = "... (truncated)"
"""Suffix appended to truncated detail messages."""


def _truncate_detail(detail: str) -> str:
    """Truncate detail message if it exceeds maximum length."""
    if len(detail) <= MAX_DETAIL_LENGTH:
        return detail
    truncate_at = MAX_DETAIL_LENGTH - len(TRUNCATION_SUFFIX)
    return detail[:truncate_at] + TRUNCATION_SUFFIX


def _problem_response(
    code: ErrorCode,
    status: int,
    detail: str,
    instance: str,
) -> ProblemJSONResponse:
    """Build a ProblemJSONResponse for one error occurrence.

    Parameters
    ----------
    code : ErrorCode
        The error code for the problem.
    status : int
        HTTP status code for the response.
    detail : str
        Human-readable explanation of the problem.
    instance : str
        URI reference of the specific occurrence.

    Returns
    -------
    ProblemJSONResponse
        RFC 7807 compliant JSON response.
    """
    problem = ProblemDetail(
        type=get_error_type_uri(code),
        title=ERROR_TITLES.get(code, "Error"),
        status=status,
        detail=_truncate_detail(detail),
        instance=instance,
        code=code.value,
    )
    return ProblemJSONResponse(content=problem.model_dump(), status_code=status)


def _validation_response(
    detail: str, instance: str, errors: list[FieldError]
) -> ProblemJSONResponse:
    problem = ValidationProblemDetail(
        type=get_error_type_uri(ErrorCode.VALIDATION_ERROR),
        title=ERROR_TITLES[ErrorCode.VALIDATION_ERROR],
        status=422,
        detail=detail,
        instance=instance,
        code=ErrorCode.VALIDATION_ERROR.value,
        errors=errors,
    )
    return ProblemJSONResponse(content=problem.model_dump(), status_code=422)


# =============================================================================
# Exception Handlers
# =============================================================================


async def taggable_error_handler(
    request: Request, exc: TaggableError
) -> ProblemJSONResponse:
    """Handle TaggableError subclasses and convert to RFC 7807 Problem Detail.

    The status and code come from the exception class:
    - TagNotFoundError (404)
    - TagConfigurationError (400)
    - TagConflictError (409)

    Parameters
    ----------
    request : Request
        The incoming FastAPI request.
    exc : TaggableError
        The exception that was raised.

    Returns
    -------
    ProblemJSONResponse
        RFC 7807 compliant JSON response with the exception's status code.
    """
    return _problem_response(
        code=ErrorCode(exc.error_code),
        status=exc.status_code,
        detail=exc.message,
        instance=str(request.url.path),
    )


async def tag_validation_error_handler(
    request: Request, exc: TagValidationError
) -> ProblemJSONResponse:
    """Handle TagValidationError with one FieldError per validation message.

    Each error is located at ``["tag", <key>]`` where the key is the tag
    name (or ``"name"``/``"description"``) the validator reported.
    """
    errors = [
        FieldError(loc=["tag", key], msg=message, type="tag_validation")
        for key, messages in exc.errors.items()
        for message in messages
    ]
    return _validation_response(exc.message, str(request.url.path), errors)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> ProblemJSONResponse:
    """Handle Pydantic RequestValidationError and convert to RFC 7807 format."""
    errors = [
        FieldError(
            loc=list(error.get("loc", [])),
            msg=error.get("msg", ""),
            type=error.get("type", ""),
        )
        for error in exc.errors()
    ]
    return _validation_response(
        "Request validation failed", str(request.url.path), errors
    )


async def repository_error_handler(
    request: Request, exc: RepositoryError
) -> ProblemJSONResponse:
    """Handle RepositoryError and convert to RFC 7807 Problem Detail.

    Uses a generic detail message to avoid exposing database implementation
    details. The internal error is logged for debugging.
    """
    logger.error(
        "Repository error: %s (operation=%s, entity=%s)",
        exc.message,
        exc.operation,
        exc.entity_type,
        exc_info=exc.original_error,
    )

    return _problem_response(
        code=ErrorCode.DATABASE_ERROR,
        status=500,
        detail="A database error occurred",
        instance=str(request.url.path),
    )


# =============================================================================
# Handler Registration
# =============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    """Register the taggable exception handlers on a FastAPI app.

    Parameters
    ----------
    app : FastAPI
        The FastAPI application instance.

    Examples
    --------
    >>> from fastapi import FastAPI
    >>> from taggable.api.exception_handlers import register_exception_handlers
    >>> app = FastAPI()
    >>> register_exception_handlers(app)
    """
    # Starlette dispatches on the most specific class in the MRO
    app.add_exception_handler(TaggableError, taggable_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(TagValidationError, tag_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RepositoryError, repository_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
