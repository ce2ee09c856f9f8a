"""Error handling module for mongo-pagination."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    InternalServerError,
    create_problem_response
)
from .pagination import (
    PaginationError,
    InvalidArgumentError,
    CursorDecodeError,
    MalformedCursorError,
    ArityError,
    CursorEncodeError
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "InternalServerError",
    "create_problem_response",
    "PaginationError",
    "InvalidArgumentError",
    "CursorDecodeError",
    "MalformedCursorError",
    "ArityError",
    "CursorEncodeError",
    "register_exception_handlers"
]
