import uuid
from typing import Any, Dict, Optional


SCHEMA_FIELDS = ("id", "title", "author", "publicationYear")


class Book:
    """Represents a single book record held by the store."""

    def __init__(self, title: Any, author: Any, publication_year: Any = None, book_id: Optional[str] = None,
                 extra: Optional[Dict[str, Any]] = None) -> None:
        self.id = book_id if book_id is not None else str(uuid.uuid4())
        self.title = title
        self.author = author
        self.publication_year = publication_year
        # Keys outside the schema that arrived through a partial update
        self.extra: Dict[str, Any] = dict(extra or {})

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} (ID: {self.id})"

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, title={self.title!r}, author={self.author!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "publicationYear": self.publication_year,
        }
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @staticmethod
    def from_dict(data: dict) -> "Book":
        extra = {k: v for k, v in data.items() if k not in SCHEMA_FIELDS}
        return Book(
            title=data.get("title"),
            author=data.get("author"),
            publication_year=data.get("publicationYear"),
            book_id=data.get("id"),
            extra=extra,
        )

    def merged(self, updates: Dict[str, Any]) -> "Book":
        """Return a copy with ``updates`` shallow-merged on top; ``id`` is kept."""
        data = self.to_dict()
        data.update(updates)
        data["id"] = self.id
        return Book.from_dict(data)
