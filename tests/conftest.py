"""Pytest configuration and shared fixtures for the mongo-pagination tests."""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List

import pytest
from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field
from pymongo import DESCENDING

from mongo_pagination.db.queries import parse_sort


# Disable logging for cleaner test output
logging.getLogger("mongo_pagination").setLevel(logging.WARNING)


class Item(BaseModel):
    """Record shape whose stored names differ from its attribute names."""

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: ObjectId = Field(alias="_id")
    name: str
    created_at: datetime = Field(alias="createdAt")


def make_object_id(s: str) -> ObjectId:
    """Left pad a short hex string into an ObjectId."""
    return ObjectId(s.rjust(24, "0"))


def _compare(value: Any, op: str, expected: Any) -> bool:
    if value is None:
        return False
    if op == "$eq":
        return value == expected
    if op == "$gt":
        return value > expected
    if op == "$lt":
        return value < expected
    raise AssertionError(f"unsupported operator {op}")


def matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    """Evaluate the subset of MongoDB filters the paginator generates."""
    for key, condition in query.items():
        if key == "$and":
            if not all(matches(document, q) for q in condition):
                return False
        elif key == "$or":
            if not any(matches(document, q) for q in condition):
                return False
        elif isinstance(condition, re.Pattern):
            if not condition.search(document.get(key) or ""):
                return False
        elif isinstance(condition, dict):
            for op, expected in condition.items():
                if not _compare(document.get(key), op, expected):
                    return False
        elif document.get(key) != condition:
            return False
    return True


class InMemoryStore:
    """Count and fetch collaborators over a list of documents."""

    def __init__(self, documents: List[Dict[str, Any]]):
        self.documents = documents
        self.count_calls: List[tuple] = []
        self.cursor_calls: List[tuple] = []

    def _matching(self, queries) -> List[Dict[str, Any]]:
        return [d for d in self.documents if all(matches(d, q) for q in queries)]

    def count_query(self, db, collection_name, queries) -> int:
        self.count_calls.append((collection_name, queries))
        return len(self._matching(queries))

    def cursor_query(self, db, collection_name, queries, sort, limit, collation, results, model=None) -> None:
        self.cursor_calls.append((collection_name, queries, sort, limit, collation))
        documents = self._matching(queries)
        for field, direction in reversed(parse_sort(sort)):
            documents.sort(key=lambda d: d[field], reverse=direction == DESCENDING)
        results[:] = [model.model_validate(d) if model else dict(d) for d in documents[:limit]]


@pytest.fixture
def items() -> List[Dict[str, Any]]:
    """Three documents matching 'test item.*', in ascending name order."""
    created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return [
        {"_id": make_object_id("111"), "name": "test item 1", "createdAt": created_at},
        {"_id": make_object_id("222"), "name": "test item 2", "createdAt": created_at},
        {"_id": make_object_id("333"), "name": "test item 3", "createdAt": created_at},
    ]


@pytest.fixture
def duplicate_items() -> List[Dict[str, Any]]:
    """Documents sharing name values, so ordering depends on the _id tie-break."""
    created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    names = ["alpha", "beta", "beta", "beta", "gamma", "beta", "alpha"]
    return [
        {"_id": make_object_id(f"{i + 1:x}"), "name": name, "createdAt": created_at}
        for i, name in enumerate(names)
    ]


@pytest.fixture
def store(items) -> InMemoryStore:
    return InMemoryStore(items)


@pytest.fixture
def db() -> object:
    """Opaque storage handle; the in-memory collaborators ignore it."""
    return object()


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, mocked)")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
