"""
Open Library integration for the catalogue.

``OpenLibraryClient`` exposes the two lookups the API needs:

* ``search_books()`` — keyword search by title and/or author, one page
  at a time.  Results are mapped into the ``Book`` schema.

* ``get_book_by_id()`` — detailed information about a single work,
  with author keys resolved to display names through
  ``/authors/{id}.json``.

Every lookup goes through a shared ``TTLCache``: searches under
``search_<query>``, works under ``works/<id>`` and author names under
``authors/<id>``.  Failures of the search or work request propagate to
the caller; a failing author lookup only drops that author's name.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Sequence, Tuple
from urllib.parse import quote, urlencode

import httpx
from pydantic import ValidationError

from ..models import Book
from . import normalizer
from .cache import TTLCache
from .schemas import AuthorDetail, SearchResponse, WorkDetail


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://openlibrary.org"
DEFAULT_TIMEOUT = 10.0
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MIN_PAGE_SIZE = 10

DEFAULT_HEADERS = {
    "User-Agent": "book-catalog-api/1.0 (+https://openlibrary.org/developers/api)",
    "Accept": "application/json",
}


def normalize_paging(page: Optional[int], page_size: Optional[int]) -> Tuple[int, int]:
    """Clamp paging input: page must be positive, page size at least 10.

    Out-of-range values fall back to the defaults rather than failing.
    """
    page = page if page is not None and page > 0 else DEFAULT_PAGE
    page_size = (
        page_size if page_size is not None and page_size >= MIN_PAGE_SIZE else DEFAULT_PAGE_SIZE
    )
    return page, page_size


def build_search_query(
    title: Optional[str], author: Optional[str], page: int, page_size: int
) -> str:
    """Query string in fixed field order: title, author, page, limit."""
    params: List[Tuple[str, Any]] = []
    if title and title.strip():
        params.append(("title", title))
    if author and author.strip():
        params.append(("author", author))
    params.append(("page", page))
    params.append(("limit", page_size))
    return urlencode(params, quote_via=quote)


class OpenLibraryClient:
    """Read-through cached client for the Open Library API."""

    def __init__(
        self,
        cache: Optional[TTLCache] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.cache = cache if cache is not None else TTLCache()
        self.base_url = base_url.rstrip("/")
        self._http = http_client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=DEFAULT_HEADERS,
            follow_redirects=True,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "OpenLibraryClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _set_cache(self, key: str, value: Any) -> None:
        try:
            self.cache.set(key, value)
            logger.debug("Cached value for key: %s", key)
        except Exception:
            logger.exception("Failed to set cache for key: %s", key)

    async def _get(self, path: str) -> httpx.Response:
        logger.debug("Making API request to: %s%s", self.base_url, path)
        response = await self._http.get(path)
        response.raise_for_status()
        return response

    async def search_books(
        self,
        title: Optional[str] = None,
        author: Optional[str] = None,
        page: Optional[int] = DEFAULT_PAGE,
        page_size: Optional[int] = DEFAULT_PAGE_SIZE,
    ) -> List[Book]:
        """Search Open Library by title and/or author.

        An empty result is a valid answer and is cached like any other.
        Transport errors and non-2xx statuses are logged and re-raised.
        """
        logger.info(
            "Searching books with title: %s, author: %s, page: %s, pageSize: %s",
            title, author, page, page_size,
        )
        page, page_size = normalize_paging(page, page_size)
        query = build_search_query(title, author, page, page_size)

        cache_key = f"search_{query}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info("Returning cached books for query: %s", query)
            return cached

        try:
            response = await self._get(f"/search.json?{query}")
            result = SearchResponse.model_validate(response.json() or {})
        except Exception:
            logger.exception("Unexpected error during book search for query: %s", query)
            raise

        books = [
            Book(
                id=normalizer.strip_work_prefix(doc.key),
                title=doc.title,
                author=normalizer.join_author_names(doc.author_name),
                description=normalizer.extract_description(doc.description),
                published_year=doc.first_publish_year or 0,
            )
            for doc in result.docs or []
        ]
        if not books:
            logger.info(
                "No books found for query: %s (numFound=%s)", query, result.num_found
            )

        self._set_cache(cache_key, books)
        return books

    async def get_book_by_id(self, book_id: str) -> Optional[Book]:
        """Return a work by its Open Library id, or ``None`` if the body is unusable."""
        cache_key = f"works/{book_id}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info("Returning cached book for ID: %s", book_id)
            return cached

        try:
            response = await self._get(f"/works/{quote(book_id, safe='')}.json")
        except Exception:
            logger.exception("Failed to get book details for ID: %s", book_id)
            raise

        try:
            payload = response.json()
            work = WorkDetail.model_validate(payload) if payload is not None else None
        except (ValueError, ValidationError):
            work = None
        if work is None:
            logger.info("No book found for ID: %s", book_id)
            return None

        if work.authors:
            author = await self.resolve_authors(normalizer.extract_author_ids(work.authors))
        else:
            author = normalizer.UNKNOWN_AUTHOR

        book = Book(
            id=book_id,
            title=work.title,
            author=author,
            description=normalizer.extract_description(work.description),
            published_year=normalizer.parse_published_year(work.first_publish_date),
        )
        self._set_cache(cache_key, book)
        return book

    async def resolve_authors(self, author_ids: Sequence[str]) -> str:
        """Comma-joined display names for ``author_ids``; ``"Unknown"`` if none resolve."""
        names = await asyncio.gather(*(self._resolve_author(a) for a in author_ids))
        resolved = [n for n in names if n]
        result = ", ".join(resolved) if resolved else normalizer.UNKNOWN_AUTHOR
        logger.debug("Final author string: %s", result)
        return result

    async def _resolve_author(self, author_id: str) -> Optional[str]:
        cache_key = f"authors/{author_id}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Using cached author name for ID: %s", author_id)
            return cached

        try:
            response = await self._get(f"/authors/{quote(author_id, safe='')}.json")
            name = AuthorDetail.model_validate(response.json()).display_name
        except Exception:
            logger.exception("Failed to get author details for ID: %s", author_id)
            return None

        if name:
            logger.debug("Found author name: %s for ID: %s", name, author_id)
            self._set_cache(cache_key, name)
        return name
