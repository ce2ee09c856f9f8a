"""Pagination module for cursor-based pagination."""

from .cursor import (
    ID_FIELD,
    encode_cursor,
    decode_cursor,
    parse_cursor,
    generate_cursor
)
from .fields import find_field_name_by_alias, get_field_value
from .query import (
    GREATER_THAN,
    LESS_THAN,
    comparison_operator,
    generate_cursor_query,
    build_sort
)
from .find import FindParams, Cursor, Paginator, find
from .http import PaginationQuery, PaginatedResponse, create_link_header

__all__ = [
    "ID_FIELD",
    "encode_cursor",
    "decode_cursor",
    "parse_cursor",
    "generate_cursor",
    "find_field_name_by_alias",
    "get_field_value",
    "GREATER_THAN",
    "LESS_THAN",
    "comparison_operator",
    "generate_cursor_query",
    "build_sort",
    "FindParams",
    "Cursor",
    "Paginator",
    "find",
    "PaginationQuery",
    "PaginatedResponse",
    "create_link_header"
]
