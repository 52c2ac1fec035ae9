"""
Tests for Book Search

The Google Books API is never contacted: the client is built with an
httpx.MockTransport that records requests and returns canned payloads.
"""

import httpx
import pytest
from fastapi import status

from bookclub.dependencies import get_book_search
from bookclub.main import app
from bookclub.schemas.book import Book
from bookclub.services.books import GoogleBooksClient, to_book

BOOKS_URL = "https://books.test/volumes"

DUNE_PAYLOAD = {
    "totalItems": 2,
    "items": [
        {
            "volumeInfo": {
                "title": "Dune",
                "authors": ["Frank Herbert"],
                "imageLinks": {"thumbnail": "http://img.test/dune.jpg"},
            }
        },
        {"volumeInfo": {}},
    ],
}


@pytest.fixture
def catalog(client):
    """
    Point /books/search at a fake catalog.

    Yields a controller whose .response is returned for every request and
    whose .requests lists what was sent.
    """

    class FakeCatalog:
        def __init__(self):
            self.requests: list[httpx.Request] = []
            self.response = httpx.Response(200, json=DUNE_PAYLOAD)

        def handler(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if isinstance(self.response, Exception):
                raise self.response
            return self.response

    fake = FakeCatalog()
    app.dependency_overrides[get_book_search] = lambda: GoogleBooksClient(
        BOOKS_URL,
        api_key="k3y",
        max_page_size=40,
        transport=httpx.MockTransport(fake.handler),
    )
    yield fake
    app.dependency_overrides.pop(get_book_search, None)


class TestBookSearch:
    """Tests for GET /books/search."""

    def test_maps_volumes(self, client, catalog):
        response = client.get("/books/search", params={"query": "dune"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"] == [
            {
                "title": "Dune",
                "authors": ["Frank Herbert"],
                "thumbnail": "http://img.test/dune.jpg",
            },
            {"title": "No Title", "authors": ["Unknown Author"]},
        ]

    def test_paging_parameters(self, client, catalog):
        client.get("/books/search", params={"query": "dune", "page": 3, "limit": 5})

        sent = catalog.requests[0].url.params
        assert sent["q"] == "dune"
        assert sent["startIndex"] == "10"
        assert sent["maxResults"] == "5"
        assert sent["key"] == "k3y"

    def test_blank_query_makes_no_call(self, client, catalog):
        response = client.get("/books/search", params={"query": "   "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Missing search query"
        assert catalog.requests == []

    def test_missing_query_param(self, client, catalog):
        response = client.get("/books/search")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert catalog.requests == []

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 41}])
    def test_invalid_paging(self, client, catalog, params):
        response = client.get("/books/search", params={"query": "dune", **params})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert catalog.requests == []

    def test_non_numeric_page(self, client, catalog):
        response = client.get("/books/search", params={"query": "dune", "page": "two"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["success"] is False

    def test_no_items_is_not_found(self, client, catalog):
        catalog.response = httpx.Response(200, json={"totalItems": 0})

        response = client.get("/books/search", params={"query": "zzzz"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "No books found"

    def test_empty_body_is_internal_error(self, client, catalog):
        catalog.response = httpx.Response(200, content=b"")

        response = client.get("/books/search", params={"query": "dune"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error"].startswith("Google Books API error")

    def test_unparsable_body_is_internal_error(self, client, catalog):
        catalog.response = httpx.Response(200, content=b"<html>oops</html>")

        response = client.get("/books/search", params={"query": "dune"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR

    def test_upstream_status_is_internal_error(self, client, catalog):
        catalog.response = httpx.Response(503, text="unavailable")

        response = client.get("/books/search", params={"query": "dune"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error"] == "Google Books API error: HTTP 503"

    def test_timeout_is_internal_error(self, client, catalog):
        catalog.response = httpx.ReadTimeout("timed out")

        response = client.get("/books/search", params={"query": "dune"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error"].startswith("Google Books API error")

    def test_items_not_a_list_is_internal_error(self, client, catalog):
        catalog.response = httpx.Response(200, json={"totalItems": 1, "items": "abc"})

        response = client.get("/books/search", params={"query": "dune"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error"] == "Google Books API error: unexpected response shape"

    def test_odd_volume_fields_fall_back_to_defaults(self, client, catalog):
        catalog.response = httpx.Response(200, json={"items": [{"volumeInfo": {
            "title": 42,
            "authors": "Frank",
            "imageLinks": {"thumbnail": {"url": "http://img.test/x.jpg"}},
        }}]})

        response = client.get("/books/search", params={"query": "dune"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"] == [{"title": "No Title", "authors": ["Unknown Author"]}]

    def test_unmappable_volume_is_internal_error(self, client, catalog, monkeypatch):
        def reject(item):
            return Book.model_validate({"authors": "Frank"})

        monkeypatch.setattr("bookclub.services.books.to_book", reject)

        response = client.get("/books/search", params={"query": "dune"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error"] == "Google Books API error: unexpected volume shape"


class TestToBook:
    def test_defaults(self):
        book = to_book({})

        assert book.title == "No Title"
        assert book.authors == ["Unknown Author"]
        assert book.thumbnail is None

    def test_empty_author_list_gets_default(self):
        book = to_book({"volumeInfo": {"title": "Anon", "authors": []}})

        assert book.authors == ["Unknown Author"]

    def test_non_string_authors_dropped(self):
        book = to_book({"volumeInfo": {"authors": ["Frank Herbert", None, 7]}})

        assert book.authors == ["Frank Herbert"]

    def test_non_dict_sections_ignored(self):
        book = to_book({"volumeInfo": {"title": "Dune", "imageLinks": "nope"}})

        assert book.title == "Dune"
        assert book.thumbnail is None
