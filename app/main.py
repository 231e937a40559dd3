# app/main.py
import logging
import time
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Request

from .catalog import catalog_router
from .catalog.cache import TTLCache
from .catalog.openlibrary_service import OpenLibraryClient
from .config import Settings
from .errors import register_error_handlers
from .logging_setup import configure_logging
from .models import Book, BookSubmission
from .storage import LocalBookStore


logger = logging.getLogger(__name__)


def get_store(request: Request) -> LocalBookStore:
    return request.app.state.store


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        app.state.store.initialize()
        app.state.catalog = OpenLibraryClient(
            cache=TTLCache(ttl_seconds=settings.cache_ttl_seconds),
            base_url=settings.catalog_base_url,
            timeout=settings.catalog_timeout,
        )
        logger.info(
            "Book catalog started (environment=%s, catalog=%s)",
            settings.environment, settings.catalog_base_url,
        )
        try:
            yield
        finally:
            await app.state.catalog.aclose()

    app = FastAPI(
        title="Book Catalog API",
        description=(
            "Local book list plus cached search and detail lookups "
            "against the Open Library catalog."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = LocalBookStore(settings.books_file)

    register_error_handlers(app, show_details=settings.is_development)

    # Registered last so it wraps the error middleware and sees final statuses.
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        query = f"?{request.url.query}" if request.url.query else ""
        logger.debug("Request started: %s %s%s", request.method, request.url.path, query)
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            logger.debug(
                "Request completed: %s %s%s - Status: %s - Duration: %dms",
                request.method, request.url.path, query, status_code,
                (time.perf_counter() - started) * 1000,
            )

    @app.get("/")
    def health_check():
        return {"status": "ok"}

    @app.get("/books", response_model=List[Book])
    def list_books_api(store: LocalBookStore = Depends(get_store)):
        logger.info("Getting all books")
        return store.get_all()

    @app.post("/books", response_model=List[Book])
    def add_book_api(req: BookSubmission, store: LocalBookStore = Depends(get_store)):
        logger.info("Adding book: %s", req.title)
        return store.add(req)

    app.include_router(catalog_router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
