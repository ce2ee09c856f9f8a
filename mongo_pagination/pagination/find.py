"""Keyset paginated find over a MongoDB collection."""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Type

from pydantic import BaseModel, ConfigDict, Field
from pymongo.collation import Collation

from ..config import get_settings
from ..db.queries import execute_count_query, execute_cursor_query
from ..errors.pagination import CursorDecodeError, InvalidArgumentError
from .cursor import ID_FIELD, generate_cursor, parse_cursor
from .query import build_sort, comparison_operator, generate_cursor_query


logger = logging.getLogger(__name__)

CountQuery = Callable[[Any, str, Sequence[Dict[str, Any]]], int]
CursorQuery = Callable[..., None]


class FindParams(BaseModel):
    """Parameters of a single paginated find."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    db: Any = Field(default=None, description="Storage handle passed to the collaborators")
    collection_name: str = Field(default="", description="Collection to query")
    query: Dict[str, Any] = Field(default_factory=dict, description="Base filter")
    paginated_field: str = Field(default=ID_FIELD, description="Stored name of the field to sort and page on")
    sort_ascending: bool = Field(default=False, description="Sort direction of the paginated field")
    limit: int = Field(
        default_factory=lambda: get_settings().default_page_size,
        description="Maximum number of records per page"
    )
    next: str = Field(default="", description="Cursor of the page to continue after")
    previous: str = Field(default="", description="Cursor of the page to continue before")
    count_total: bool = Field(default=False, description="Whether to count all records matching the base filter")
    collation: Optional[Collation] = Field(default=None, description="Collation applied to the fetch")
    model: Optional[Type[BaseModel]] = Field(default=None, description="Model the fetched documents are validated into")


class Cursor(BaseModel):
    """Pagination state returned alongside a page of results."""

    previous: str = Field(default="", description="Cursor for the previous page")
    next: str = Field(default="", description="Cursor for the next page")
    has_previous: bool = Field(default=False, description="Whether a previous page exists")
    has_next: bool = Field(default=False, description="Whether a next page exists")
    count: int = Field(default=0, description="Total matching records, when counted")


class Paginator:
    """Runs paginated finds through a count and a fetch collaborator.

    The collaborators default to the pymongo implementations; any callables
    with the same signatures can be supplied instead.
    """

    def __init__(
        self,
        count_query: CountQuery = execute_count_query,
        cursor_query: CursorQuery = execute_cursor_query
    ):
        self.count_query = count_query
        self.cursor_query = cursor_query

    def find(self, params: FindParams, results: Optional[List[Any]]) -> Cursor:
        """Fill ``results`` with one page and return the cursor state.

        Args:
            params: Find parameters
            results: List receiving the page, replaced in place

        Returns:
            Cursor with the previous/next tokens, flags and optional count

        Raises:
            InvalidArgumentError: If results or the DB is missing, or limit < 1
            CursorDecodeError: If the next or previous cursor cannot be used
        """
        if results is None:
            raise InvalidArgumentError("results can't be None")
        if params.db is None:
            raise InvalidArgumentError("DB can't be None")
        if params.limit < 1:
            raise InvalidArgumentError("a limit of at least 1 is required")

        paginated_field = params.paginated_field or ID_FIELD
        should_secondary_sort_on_id = paginated_field != ID_FIELD
        forward = bool(params.next)
        backward = not forward and bool(params.previous)

        queries = [params.query]

        if forward or backward:
            if forward:
                cursor_values = self._parse(params.next, "next", should_secondary_sort_on_id)
            else:
                cursor_values = self._parse(params.previous, "previous", should_secondary_sort_on_id)

            queries.append(generate_cursor_query(
                should_secondary_sort_on_id,
                paginated_field,
                comparison_operator(params.sort_ascending, backward),
                cursor_values
            ))

        count = 0
        if params.count_total:
            count = self.count_query(params.db, params.collection_name, [params.query])

        # Fetching backward walks away from the cursor in reverse sort order
        sort = build_sort(paginated_field, should_secondary_sort_on_id, params.sort_ascending == backward)
        logger.debug(f"Querying '{params.collection_name}' with {queries} sorted by {sort}")

        results.clear()

        # One extra record tells whether another page follows
        self.cursor_query(
            params.db,
            params.collection_name,
            queries,
            sort,
            params.limit + 1,
            params.collation,
            results,
            model=params.model
        )

        has_more = len(results) > params.limit
        if has_more:
            del results[params.limit:]

        if backward:
            results.reverse()

        has_previous = forward or (backward and has_more)
        has_next = backward or has_more

        previous_cursor = ""
        next_cursor = ""
        if results:
            if has_previous:
                previous_cursor = generate_cursor(results[0], paginated_field, should_secondary_sort_on_id)
            if has_next:
                next_cursor = generate_cursor(results[-1], paginated_field, should_secondary_sort_on_id)

        logger.info(
            f"Paginated '{params.collection_name}' on {paginated_field}: {len(results)} results, "
            f"has_previous={has_previous}, has_next={has_next}"
        )

        return Cursor(
            previous=previous_cursor,
            next=next_cursor,
            has_previous=has_previous,
            has_next=has_next,
            count=count
        )

    @staticmethod
    def _parse(cursor: str, name: str, should_secondary_sort_on_id: bool) -> List[Any]:
        try:
            return parse_cursor(cursor, should_secondary_sort_on_id)
        except CursorDecodeError as e:
            raise type(e)(f"{name} cursor parse failed: {e}") from e


default_paginator = Paginator()


def find(params: FindParams, results: Optional[List[Any]]) -> Cursor:
    """Run a paginated find with the pymongo collaborators."""
    return default_paginator.find(params, results)
