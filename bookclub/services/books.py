"""
Book Search Gateway

Queries the Google Books volumes API and maps each volume onto Book.

Request:
    GET {books_api_url}?q=<query>&startIndex=<offset>&maxResults=<limit>[&key=<api key>]

Response fields used (everything else is ignored):
    items[].volumeInfo.title                 -> Book.title ("No Title" if missing)
    items[].volumeInfo.authors               -> Book.authors (["Unknown Author"] if missing)
    items[].volumeInfo.imageLinks.thumbnail  -> Book.thumbnail

Failure mapping:
- blank query, page < 1, limit out of range -> BAD_REQUEST (no outbound call)
- transport error, timeout, non-2xx status  -> INTERNAL
- empty or unparsable body                  -> INTERNAL
- items not a list, unmappable volume       -> INTERNAL
- zero items                                -> NOT_FOUND
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from bookclub.config import Settings
from bookclub.results import Err, ErrorKind, Ok, Result
from bookclub.schemas.book import DEFAULT_AUTHOR, DEFAULT_TITLE, Book

logger = logging.getLogger(__name__)


class GoogleBooksClient:
    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        max_page_size: int = 40,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout
        self.max_page_size = max_page_size
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "GoogleBooksClient":
        return cls(
            base_url=settings.books_api_url,
            api_key=settings.books_api_key,
            timeout=settings.external_timeout_seconds,
            max_page_size=settings.books_max_page_size,
            **kwargs,
        )

    async def search(self, query: str, page: int = 1, limit: int = 10) -> Result[list[Book]]:
        """
        Search the catalog for one page of results.

        Args:
            query: Free-text catalog query
            page: 1-indexed page number
            limit: Page size, at most max_page_size

        Returns:
            Ok with the mapped books, or Err describing the failure
        """
        if not query or not query.strip():
            return Err(ErrorKind.BAD_REQUEST, "Missing search query")
        if page < 1:
            return Err(ErrorKind.BAD_REQUEST, "page must be at least 1")
        if not 1 <= limit <= self.max_page_size:
            return Err(ErrorKind.BAD_REQUEST, f"limit must be between 1 and {self.max_page_size}")

        params: dict[str, Any] = {
            "q": query,
            "startIndex": (page - 1) * limit,
            "maxResults": limit,
        }
        if self.api_key:
            params["key"] = self.api_key

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.base_url, params=params)
        except httpx.HTTPError as exc:
            logger.error(f"Google Books request failed: {exc!r}")
            return Err(ErrorKind.INTERNAL, f"Google Books API error: {exc!r}")

        if not response.is_success:
            logger.error(f"Google Books returned {response.status_code}: {response.text[:200]}")
            return Err(ErrorKind.INTERNAL, f"Google Books API error: HTTP {response.status_code}")

        if not response.content.strip():
            return Err(ErrorKind.INTERNAL, "Google Books API error: empty response body")

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error(f"Unparsable Google Books response: {exc}")
            return Err(ErrorKind.INTERNAL, "Google Books API error: unparsable response body")

        if not isinstance(payload, dict):
            return Err(ErrorKind.INTERNAL, "Google Books API error: unexpected response shape")

        items = payload.get("items") or []
        if not isinstance(items, list):
            logger.error(f"Google Books 'items' is {type(items).__name__}, expected a list")
            return Err(ErrorKind.INTERNAL, "Google Books API error: unexpected response shape")
        if not items:
            logger.info(f"No books found for '{query}' (page {page})")
            return Err(ErrorKind.NOT_FOUND, "No books found")

        try:
            books = [to_book(item) for item in items if isinstance(item, dict)]
        except ValidationError as exc:
            logger.error(f"Unmappable Google Books volume: {exc}")
            return Err(ErrorKind.INTERNAL, "Google Books API error: unexpected volume shape")

        logger.info(f"Book search '{query}' page {page} returned {len(books)} results")
        return Ok(books)


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def to_book(item: dict) -> Book:
    """
    Map one Google Books volume onto Book, filling in defaults.

    Fields of an unexpected type are treated as missing: a title that is not
    a string falls back to DEFAULT_TITLE, authors that are not a list fall
    back to [DEFAULT_AUTHOR], and a non-string thumbnail is dropped.
    """
    info = _as_dict(item.get("volumeInfo"))
    image_links = _as_dict(info.get("imageLinks"))

    title = info.get("title")
    if not isinstance(title, str) or not title:
        title = DEFAULT_TITLE

    authors = info.get("authors")
    if isinstance(authors, list):
        authors = [author for author in authors if isinstance(author, str) and author]
    if not authors or not isinstance(authors, list):
        authors = [DEFAULT_AUTHOR]

    thumbnail = image_links.get("thumbnail")
    if not isinstance(thumbnail, str):
        thumbnail = None

    return Book(title=title, authors=authors, thumbnail=thumbnail)
