# app/storage.py
import enum
import logging
import threading
from pathlib import Path
from typing import List

from pydantic import TypeAdapter, ValidationError

from .models import Book, BookSubmission


logger = logging.getLogger(__name__)

_book_list = TypeAdapter(List[Book])


class StoreState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class LocalBookStore:
    """In-memory list of user-submitted books.

    The list is seeded once from a JSON snapshot and only grows afterwards.
    Ids are assigned as ``count + 1``, which stays unique only because
    books are never removed.
    """

    def __init__(self, snapshot_path: Path):
        self.snapshot_path = Path(snapshot_path)
        self.state = StoreState.UNINITIALIZED
        self._books: List[Book] = []
        self._lock = threading.Lock()

    def initialize(self) -> None:
        """Load the snapshot; a missing or broken file leaves the store empty."""
        books: List[Book] = []
        if not self.snapshot_path.exists():
            logger.warning(
                "%s not found. Initializing with empty collection.", self.snapshot_path
            )
        else:
            try:
                books = _book_list.validate_json(self.snapshot_path.read_bytes())
            except (OSError, ValidationError):
                logger.exception("Error loading %s", self.snapshot_path)
                books = []

        with self._lock:
            self._books = books
            self.state = StoreState.READY
        logger.info("Local store ready with %d book(s)", len(books))

    def get_all(self) -> List[Book]:
        return list(self._books)

    def add(self, submission: BookSubmission) -> List[Book]:
        with self._lock:
            book = submission.to_book(str(len(self._books) + 1))
            self._books.append(book)
        logger.info("Added book %s: %s", book.id, book.title)
        return self.get_all()
