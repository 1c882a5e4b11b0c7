import logging
from threading import RLock
from typing import Any, Dict, Iterable, List, Optional

from book import Book
from validators import TextValidator

logger = logging.getLogger(__name__)


SEED_BOOKS = (
    {"title": "The Lord of the Rings", "author": "J.R.R. Tolkien", "publicationYear": 1954},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "publicationYear": 1813},
    {"title": "1984", "author": "George Orwell", "publicationYear": 1949},
)


class InvalidBookError(ValueError):
    """Raised when a write is missing a required field."""


class BookNotFoundError(LookupError):
    """Raised when no stored book has the requested ID."""

    def __init__(self, book_id: str, action: Optional[str] = None) -> None:
        self.book_id = book_id
        self.action = action
        suffix = f" for {action}" if action else ""
        super().__init__(f"Book with ID '{book_id}' not found{suffix}.")


class Library:
    """Owns the in-memory, insertion-ordered collection of books."""

    def __init__(self, seed: bool = True, books: Optional[Iterable[Book]] = None) -> None:
        self._lock = RLock()
        self.books: List[Book] = list(books or [])
        if seed and books is None:
            for data in SEED_BOOKS:
                self.books.append(Book.from_dict(data))
        logger.debug("Library initialised with %d books", len(self.books))

    # ------------------------- Core operations ------------------------- #
    def list_books(self) -> List[Book]:
        with self._lock:
            return list(self.books)

    def get_book(self, book_id: str) -> Book:
        with self._lock:
            book = self.find_book(book_id)
            if book is None:
                logger.debug("Lookup for unknown book %s", book_id)
                raise BookNotFoundError(book_id)
            return book

    def find_book(self, book_id: str) -> Optional[Book]:
        with self._lock:
            index = self._index_of(book_id)
            return None if index is None else self.books[index]

    def add_book(self, title: Any, author: Any, publication_year: Any = None) -> Book:
        """Create a book with a fresh ID and append it to the collection."""
        self._require_title_and_author(title, author, "Title and author are required fields.")
        book = Book(title=title, author=author, publication_year=publication_year)
        with self._lock:
            self.books.append(book)
        logger.info("Added book %s (%s)", book.id, book.title)
        return book

    def replace_book(self, book_id: str, title: Any, author: Any, publication_year: Any = None) -> Book:
        """Replace the whole record in place, keeping its ID and position.

        Fields outside the schema that the old record carried are dropped.
        """
        self._require_title_and_author(title, author, "Title and author are required fields for PUT.")
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                raise BookNotFoundError(book_id, "update")
            book = Book(title=title, author=author, publication_year=publication_year, book_id=book_id)
            self.books[index] = book
        logger.info("Replaced book %s", book_id)
        return book

    def update_book(self, book_id: str, updates: Dict[str, Any]) -> Book:
        """Shallow-merge ``updates`` onto a stored book.

        Every supplied key overwrites the stored value, ``None`` included.
        Title and author are not re-validated; an ``id`` key is ignored.
        """
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                raise BookNotFoundError(book_id, "partial update")
            if "id" in updates and updates["id"] != book_id:
                logger.warning("Ignoring attempt to change ID of book %s", book_id)
            book = self.books[index].merged(updates)
            self.books[index] = book
        logger.info("Updated book %s fields: %s", book_id, ", ".join(sorted(k for k in updates if k != "id")))
        return book

    def remove_book(self, book_id: str) -> None:
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                raise BookNotFoundError(book_id, "deletion")
            del self.books[index]
        logger.info("Removed book %s", book_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self.books)

    # ------------------------- Utilities ------------------------- #
    def _index_of(self, book_id: str) -> Optional[int]:
        for index, book in enumerate(self.books):
            if book.id == book_id:
                return index
        return None

    @staticmethod
    def _require_title_and_author(title: Any, author: Any, message: str) -> None:
        if not (TextValidator.validate_title(title) and TextValidator.validate_author(author)):
            raise InvalidBookError(message)
