"""Storage collaborators backed by pymongo."""

from .queries import build_filter, parse_sort, execute_count_query, execute_cursor_query

__all__ = [
    "build_filter",
    "parse_sort",
    "execute_count_query",
    "execute_cursor_query"
]
