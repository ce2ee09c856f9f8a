"""Default pymongo implementations of the count and fetch collaborators."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel
from pymongo import ASCENDING, DESCENDING
from pymongo.collation import Collation
from pymongo.database import Database


logger = logging.getLogger(__name__)


def build_filter(queries: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """AND together the filter fragments, skipping empty ones."""
    fragments = [query for query in queries if query]
    if not fragments:
        return {}
    if len(fragments) == 1:
        return fragments[0]
    return {"$and": fragments}


def parse_sort(sort: Sequence[str]) -> List[Tuple[str, int]]:
    """Convert ``-`` prefixed field names to pymongo sort specifications."""
    return [
        (field[1:], DESCENDING) if field.startswith("-") else (field, ASCENDING)
        for field in sort
    ]


def execute_count_query(db: Database, collection_name: str, queries: Sequence[Dict[str, Any]]) -> int:
    """Count the documents matching all of ``queries``."""
    count = db[collection_name].count_documents(build_filter(queries))
    logger.debug(f"Counted {count} documents in '{collection_name}'")
    return count


def execute_cursor_query(
    db: Database,
    collection_name: str,
    queries: Sequence[Dict[str, Any]],
    sort: Sequence[str],
    limit: int,
    collation: Optional[Collation],
    results: List[Any],
    model: Optional[Type[BaseModel]] = None
) -> None:
    """Fetch up to ``limit`` matching documents into ``results``.

    Documents are appended as-is, or validated into ``model`` when one is
    given. ``results`` is cleared first.
    """
    options: Dict[str, Any] = {"sort": parse_sort(sort), "limit": limit}
    if collation is not None:
        options["collation"] = collation

    cursor = db[collection_name].find(build_filter(queries), **options)

    results.clear()
    for document in cursor:
        results.append(model.model_validate(document) if model else document)

    logger.debug(f"Fetched {len(results)} documents from '{collection_name}'")
