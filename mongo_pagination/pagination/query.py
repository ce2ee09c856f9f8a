"""Range filter and sort construction for keyset pagination."""

from typing import Any, Dict, List, Sequence

from ..errors.pagination import ArityError
from .cursor import ID_FIELD


GREATER_THAN = "$gt"
LESS_THAN = "$lt"


def comparison_operator(sort_ascending: bool, backward: bool = False) -> str:
    """Pick the operator selecting records past the cursor in paging direction."""
    if sort_ascending != backward:
        return GREATER_THAN
    return LESS_THAN


def generate_cursor_query(
    should_secondary_sort_on_id: bool,
    paginated_field: str,
    comparison_op: str,
    cursor_field_values: Sequence[Any]
) -> Dict[str, Any]:
    """Build the filter matching records strictly past a cursor.

    With the ``_id`` tie-breaker the filter is
    ``field op v0 OR (field == v0 AND _id op v1)`` so records sharing the
    cursor's paginated value are split on ``_id``.

    Args:
        should_secondary_sort_on_id: Whether the cursor carries an ``_id``
        paginated_field: Stored name of the paginated field
        comparison_op: ``$gt`` or ``$lt``
        cursor_field_values: Values parsed from the cursor

    Returns:
        MongoDB filter document

    Raises:
        ArityError: If the value count does not match the configuration
    """
    expected = 2 if should_secondary_sort_on_id else 1
    if len(cursor_field_values) != expected:
        raise ArityError("wrong number of cursor field values specified")

    if not should_secondary_sort_on_id:
        return {paginated_field: {comparison_op: cursor_field_values[0]}}

    return {"$or": [
        {paginated_field: {comparison_op: cursor_field_values[0]}},
        {"$and": [
            {paginated_field: {"$eq": cursor_field_values[0]}},
            {ID_FIELD: {comparison_op: cursor_field_values[1]}}
        ]}
    ]}


def build_sort(paginated_field: str, should_secondary_sort_on_id: bool, descending: bool) -> List[str]:
    """Sort keys for the fetch, ``-`` prefixed when descending."""
    prefix = "-" if descending else ""
    sort = [f"{prefix}{paginated_field}"]
    if should_secondary_sort_on_id:
        sort.append(f"{prefix}{ID_FIELD}")
    return sort
