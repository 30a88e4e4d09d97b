"""RFC 7807 problem response schemas."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from starlette.responses import JSONResponse


class ErrorCode(str, Enum):
    """Machine-readable error codes carried in problem responses.

    4xx Client Errors:
        NOT_FOUND: Tag or tag association does not exist (404)
        TAG_LIMIT_EXCEEDED: Too many tags requested for one entity (400)
        VALIDATION_ERROR: Tag or request validation failed (422)
        CONFLICT: Tag name already taken (409)

    5xx Server Errors:
        INTERNAL_ERROR: Unexpected server error (500)
        DATABASE_ERROR: Database operation failed (500)
    """

    NOT_FOUND = "NOT_FOUND"
    TAG_LIMIT_EXCEEDED = "TAG_LIMIT_EXCEEDED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"

    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


ERROR_TYPE_BASE: str = "/errors"
"""Base URI reference for constructing RFC 7807 type URIs."""


def get_error_type_uri(code: ErrorCode) -> str:
    """Generate RFC 7807 type URI from error code.

    Examples
    --------
    >>> get_error_type_uri(ErrorCode.NOT_FOUND)
    '/errors/NOT_FOUND'
    """
    return f"{ERROR_TYPE_BASE}/{code.value}"


ERROR_TITLES: dict[ErrorCode, str] = {
    ErrorCode.NOT_FOUND: "Resource Not Found",
    ErrorCode.TAG_LIMIT_EXCEEDED: "Tag Limit Exceeded",
    ErrorCode.VALIDATION_ERROR: "Validation Error",
    ErrorCode.CONFLICT: "Resource Conflict",
    ErrorCode.INTERNAL_ERROR: "Internal Server Error",
    ErrorCode.DATABASE_ERROR: "Database Error",
}
"""Mapping from ErrorCode to human-readable RFC 7807 title."""


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response for API errors.

    Attributes
    ----------
    type : str
        URI identifying the problem type.
    title : str
        Short human-readable summary of the problem type.
    status : int
        HTTP status code (4xx or 5xx).
    detail : str
        Human-readable explanation of the specific problem occurrence.
    instance : str
        URI reference of the specific occurrence.
    code : str
        Application-specific error code from ErrorCode enum.
    """

    type: str = Field(
        ...,
        description="URI identifying the problem type",
        examples=["/errors/NOT_FOUND"],
    )
    title: str = Field(
        ...,
        description="Short human-readable summary",
        examples=["Resource Not Found"],
    )
    status: int = Field(
        ...,
        ge=400,
        le=599,
        description="HTTP status code",
        examples=[404],
    )
    detail: str = Field(
        ...,
        description="Human-readable explanation of the problem",
        examples=["Tag with ID 0190f1c4-8e2a-7b3c-9d4e-5f6a7b8c9d0e not found."],
    )
    instance: str = Field(
        ...,
        description="URI reference of the specific occurrence",
        examples=["/tags/0190f1c4-8e2a-7b3c-9d4e-5f6a7b8c9d0e"],
    )
    code: str = Field(
        ...,
        description="Application-specific error code",
        examples=["NOT_FOUND"],
    )


class FieldError(BaseModel):
    """Individual field validation error for RFC 7807 validation responses.

    Attributes
    ----------
    loc : list[str | int]
        Location of the error as a field path (e.g., ["body", "name"]).
    msg : str
        Human-readable error message.
    type : str
        Error type identifier.
    """

    loc: list[str | int] = Field(
        ...,
        description="Location of the error (field path)",
        examples=[["tag", "C++"]],
    )
    msg: str = Field(
        ...,
        description="Error message",
        examples=["Tag name contains characters that are not allowed."],
    )
    type: str = Field(
        ...,
        description="Error type identifier",
        examples=["tag_validation"],
    )


class ValidationProblemDetail(ProblemDetail):
    """RFC 7807 Problem Details with field-level errors for 422 responses."""

    errors: list[FieldError] = Field(
        ...,
        description="List of field-level validation errors",
    )


class ProblemJSONResponse(JSONResponse):
    """JSONResponse subclass for RFC 7807 Problem Details.

    Sets the ``application/problem+json`` media type.
    """

    media_type = "application/problem+json"
