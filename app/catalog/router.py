"""
Route definitions for the Open Library backed part of the API.

Endpoints under /books:
- GET  /books/search     : search Open Library by title/author
- GET  /books/{book_id}  : one work by its Open Library id

The local collection (GET/POST /books) lives in ``app.main``.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ..models import Book
from .openlibrary_service import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, OpenLibraryClient


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["catalog"])


def get_catalog_client(request: Request) -> OpenLibraryClient:
    return request.app.state.catalog


@router.get("/search", response_model=List[Book])
async def search_books(
    title: Optional[str] = Query(default=None, description="Title to search for"),
    author: Optional[str] = Query(default=None, description="Author to search for"),
    page: Optional[int] = Query(default=DEFAULT_PAGE, description="Page (1-indexed)"),
    page_size: Optional[int] = Query(
        default=DEFAULT_PAGE_SIZE, alias="pageSize", description="Results per page (min 10)"
    ),
    catalog: OpenLibraryClient = Depends(get_catalog_client),
) -> List[Book]:
    # Out-of-range paging is corrected by the client, not rejected here.
    books = await catalog.search_books(title, author, page, page_size)
    logger.info("Books retrieved successfully")
    return books


@router.get("/{book_id}", response_model=Book)
async def get_book(
    book_id: str,
    catalog: OpenLibraryClient = Depends(get_catalog_client),
) -> Book:
    logger.info("Getting book by ID: %s", book_id)
    book = await catalog.get_book_by_id(book_id)
    if book is None:
        logger.info("Book with ID %s not found", book_id)
        raise HTTPException(status_code=404, detail=f"Book with ID {book_id} Not Found.")
    return book
