"""Tests for the FastAPI pagination helpers."""

from typing import Annotated
from unittest.mock import patch
from urllib.parse import parse_qs, urlsplit

import pytest
from fastapi import Depends, FastAPI, Request, Response
from fastapi.testclient import TestClient

from mongo_pagination.config import Settings
from mongo_pagination.errors import register_exception_handlers
from mongo_pagination.pagination.find import Cursor, Paginator
from mongo_pagination.pagination.http import (
    PaginatedResponse,
    PaginationQuery,
    create_link_header
)
from tests.conftest import InMemoryStore


DOCUMENTS = [{"_id": f"id-{i}", "name": f"item {i}"} for i in range(5)]


def create_test_app(store: InMemoryStore) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    paginator = Paginator(store.count_query, store.cursor_query)

    @app.get("/items", response_model=PaginatedResponse)
    def list_items(
        request: Request,
        response: Response,
        pagination: Annotated[PaginationQuery, Depends()]
    ) -> PaginatedResponse:
        results = []
        params = pagination.to_find_params(db=store, collection_name="items", paginated_field="name")
        cursor = paginator.find(params, results)

        base_url = f"{request.url.scheme}://{request.url.netloc}{request.url.path}"
        link = create_link_header(base_url, pagination.query_params(), cursor.next, cursor.previous)
        if link:
            response.headers["Link"] = link

        return PaginatedResponse.from_cursor(results, cursor, pagination.count_total)

    return app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_test_app(InMemoryStore([dict(d) for d in DOCUMENTS])))


class TestCreateLinkHeader:
    """Test create_link_header."""

    def test_no_cursors(self):
        assert create_link_header("http://x/items", {"limit": 2}) is None

    def test_both_cursors(self):
        header = create_link_header("http://x/items", {"limit": 2}, "n-1", "p_1")

        assert header == (
            '<http://x/items?limit=2&next=n-1>; rel="next", '
            '<http://x/items?limit=2&previous=p_1>; rel="prev"'
        )

    def test_parameters_are_url_encoded(self):
        header = create_link_header("http://x/items", {"q": "a b&c"}, next_cursor="abc")

        assert header == '<http://x/items?q=a+b%26c&next=abc>; rel="next"'


class TestPaginatedResponse:
    """Test PaginatedResponse.from_cursor."""

    def test_empty_cursors_become_none(self):
        response = PaginatedResponse.from_cursor([], Cursor(count=4))

        assert response.next_cursor is None
        assert response.previous_cursor is None
        assert response.total_count is None

    def test_counted(self):
        response = PaginatedResponse.from_cursor([1], Cursor(next="abc", has_next=True, count=4), counted=True)

        assert response.next_cursor == "abc"
        assert response.has_next is True
        assert response.total_count == 4


class TestPaginationQuery:
    """Test the query string dependency."""

    def test_defaults_from_settings(self):
        with patch("mongo_pagination.pagination.http.get_settings", return_value=Settings(default_page_size=3)):
            query = PaginationQuery()

        assert query.limit == 3
        assert query.next == ""
        assert query.previous == ""

    def test_to_find_params(self):
        query = PaginationQuery(limit=10, next="abc", order="asc", count_total=True)

        params = query.to_find_params(db="db", collection_name="items", query={"a": 1}, paginated_field="name")

        assert params.sort_ascending is True
        assert params.limit == 10
        assert params.next == "abc"
        assert params.count_total is True
        assert params.query == {"a": 1}
        assert params.paginated_field == "name"


class TestPaginatedEndpoint:
    """Test paging through an endpoint built on the helpers."""

    def test_walk_forward(self, client):
        names = []
        params = {"limit": 2, "order": "asc", "count_total": "true"}

        response = client.get("/items", params=params)
        for _ in range(5):
            assert response.status_code == 200
            data = response.json()
            assert data["total_count"] == 5
            names.extend(item["name"] for item in data["items"])
            if not data["has_next"]:
                assert "Link" not in response.headers or 'rel="next"' not in response.headers["Link"]
                break
            assert 'rel="next"' in response.headers["Link"]
            response = client.get("/items", params={**params, "next": data["next_cursor"]})
        else:
            pytest.fail("pagination did not reach the last page")

        assert names == [f"item {i}" for i in range(5)]

    def test_link_header_round_trips(self, client):
        first = client.get("/items", params={"limit": 2, "order": "asc"})
        next_url = first.headers["Link"].split(";")[0].strip("<>")
        query = parse_qs(urlsplit(next_url).query)

        second = client.get("/items", params={k: v[0] for k, v in query.items()})

        assert [item["name"] for item in second.json()["items"]] == ["item 2", "item 3"]
        assert second.json()["has_previous"] is True

    def test_bad_cursor_is_problem_details(self, client):
        response = client.get("/items", params={"next": "XXXXXaGVsbG8="})

        assert response.status_code == 400
        assert response.headers["Content-Type"] == "application/problem+json"
        body = response.json()
        assert body["detail"] == "next cursor parse failed: illegal base64 data at input byte 12"
        assert body["type"] == "urn:mongo-pagination:invalid-cursor"
        assert body["instance"] == "/items"

    def test_limit_above_maximum(self, client):
        with patch("mongo_pagination.pagination.http.get_settings", return_value=Settings(max_page_size=3)):
            response = client.get("/items", params={"limit": 4})

        assert response.status_code == 400
        assert response.json()["detail"] == "limit must not exceed 3"

    def test_limit_below_one(self, client):
        response = client.get("/items", params={"limit": 0})

        assert response.status_code == 422
        assert response.headers["Content-Type"] == "application/problem+json"
