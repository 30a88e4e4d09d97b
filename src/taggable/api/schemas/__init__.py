"""API schema exports."""

from taggable.api.schemas.responses import (
    ERROR_TITLES,
    ErrorCode,
    FieldError,
    ProblemDetail,
    ProblemJSONResponse,
    ValidationProblemDetail,
    get_error_type_uri,
)

__all__ = [
    "ERROR_TITLES",
    "ErrorCode",
    "FieldError",
    "ProblemDetail",
    "ProblemJSONResponse",
    "ValidationProblemDetail",
    "get_error_type_uri",
]
