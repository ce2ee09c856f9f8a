"""FastAPI helpers for exposing paginated finds over HTTP."""

from typing import Annotated, Any, Dict, List, Optional, Type
from urllib.parse import urlencode

from fastapi import Query
from pydantic import BaseModel, Field
from pymongo.collation import Collation

from ..config import get_settings
from ..errors.pagination import InvalidArgumentError
from .cursor import ID_FIELD
from .find import Cursor, FindParams


class PaginationQuery:
    """Query string parameters of a paginated listing, usable with ``Depends``."""

    def __init__(
        self,
        limit: Annotated[Optional[int], Query(ge=1, description="Number of items per page")] = None,
        next: Annotated[Optional[str], Query(description="Cursor of the page to continue after")] = None,
        previous: Annotated[Optional[str], Query(description="Cursor of the page to continue before")] = None,
        order: Annotated[str, Query(pattern="^(asc|desc)$", description="Sort order")] = "desc",
        count_total: Annotated[bool, Query(description="Include the total count")] = False
    ):
        settings = get_settings()
        if limit is None:
            limit = settings.default_page_size
        if limit > settings.max_page_size:
            raise InvalidArgumentError(f"limit must not exceed {settings.max_page_size}")

        self.limit = limit
        self.next = next or ""
        self.previous = previous or ""
        self.order = order
        self.count_total = count_total

    def to_find_params(
        self,
        db: Any,
        collection_name: str,
        query: Optional[Dict[str, Any]] = None,
        paginated_field: str = ID_FIELD,
        collation: Optional[Collation] = None,
        model: Optional[Type[BaseModel]] = None
    ) -> FindParams:
        """Combine the query string with the listing's fixed parameters."""
        return FindParams(
            db=db,
            collection_name=collection_name,
            query=query or {},
            paginated_field=paginated_field,
            sort_ascending=self.order == "asc",
            limit=self.limit,
            next=self.next,
            previous=self.previous,
            count_total=self.count_total,
            collation=collation,
            model=model
        )

    def query_params(self) -> Dict[str, Any]:
        """Parameters to carry over into pagination links."""
        params: Dict[str, Any] = {"limit": self.limit, "order": self.order}
        if self.count_total:
            params["count_total"] = "true"
        return params


class PaginatedResponse(BaseModel):
    """Response model for paginated data."""

    items: List[Any] = Field(description="List of items")
    next_cursor: Optional[str] = Field(default=None, description="Cursor for next page")
    previous_cursor: Optional[str] = Field(default=None, description="Cursor for previous page")
    has_next: bool = Field(description="Whether more items follow")
    has_previous: bool = Field(description="Whether items precede this page")
    total_count: Optional[int] = Field(default=None, description="Total count if requested")

    @classmethod
    def from_cursor(cls, items: List[Any], cursor: Cursor, counted: bool = False) -> "PaginatedResponse":
        return cls(
            items=items,
            next_cursor=cursor.next or None,
            previous_cursor=cursor.previous or None,
            has_next=cursor.has_next,
            has_previous=cursor.has_previous,
            total_count=cursor.count if counted else None
        )


def create_link_header(
    base_url: str,
    params: Dict[str, Any],
    next_cursor: Optional[str] = None,
    previous_cursor: Optional[str] = None
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Query parameters shared by both links
        next_cursor: Cursor for next page
        previous_cursor: Cursor for previous page

    Returns:
        Link header value or None if no links
    """
    links = []

    if next_cursor:
        next_url = f"{base_url}?" + urlencode({**params, "next": next_cursor})
        links.append(f'<{next_url}>; rel="next"')

    if previous_cursor:
        prev_url = f"{base_url}?" + urlencode({**params, "previous": previous_cursor})
        links.append(f'<{prev_url}>; rel="prev"')

    return ", ".join(links) if links else None
