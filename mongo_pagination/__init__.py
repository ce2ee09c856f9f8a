"""Keyset (cursor) pagination for MongoDB collections."""

from .pagination import FindParams, Cursor, Paginator, find

__version__ = "1.0.0"

__all__ = ["FindParams", "Cursor", "Paginator", "find", "__version__"]
