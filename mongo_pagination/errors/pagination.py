"""Exceptions raised by the pagination engine.

Client-side mistakes (bad arguments, corrupted or replayed cursors) are 400
problems; failing to serialize a cursor from our own records is a 500.
"""

from typing import Any

from .problem_details import BadRequestError, InternalServerError


class PaginationError(BadRequestError):
    """Base class for pagination request errors."""

    type_uri = "about:blank"

    def __init__(self, detail: str, **extensions: Any):
        super().__init__(detail, type_uri=self.type_uri, **extensions)


class InvalidArgumentError(PaginationError):
    """Missing results destination or storage handle, or a non-positive limit."""

    type_uri = "urn:mongo-pagination:invalid-argument"


class CursorDecodeError(PaginationError):
    """A cursor token could not be decoded."""

    type_uri = "urn:mongo-pagination:invalid-cursor"


class MalformedCursorError(CursorDecodeError):
    """A cursor decoded fine but does not match the pagination configuration."""

    type_uri = "urn:mongo-pagination:malformed-cursor"


class ArityError(PaginationError):
    """Wrong number of cursor values for the range query."""

    type_uri = "urn:mongo-pagination:cursor-arity"


class CursorEncodeError(InternalServerError):
    """A cursor could not be generated from a result record."""

    def __init__(self, detail: str, **extensions: Any):
        super().__init__(
            detail,
            type_uri="urn:mongo-pagination:cursor-encode",
            **extensions
        )
