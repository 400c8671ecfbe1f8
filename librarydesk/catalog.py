"""The book catalogue: lookups, availability and status changes."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from .store import BookRecord, PathLike, append_book, read_books, write_books

AVAILABLE = "Available"
ISSUED = "Issued"
RESERVED = "Reserved"


class BookStatus(Enum):
    """Whether a book can be lent out."""

    AVAILABLE = "available"
    BORROWED = "borrowed"
    RESERVED = "reserved"
    NOT_FOUND = "not found"


_STATUS_BY_TEXT = {
    "available": BookStatus.AVAILABLE,
    "issued": BookStatus.BORROWED,
    "reserved": BookStatus.RESERVED,
}


def _key(title: str) -> str:
    return title.strip().lower()


class Catalog:
    """The books held in one catalogue file."""

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)

    def books(self) -> list[BookRecord]:
        """Every book in the catalogue, in file order."""
        return read_books(self.path)

    def find(self, title: str) -> BookRecord | None:
        """The first book whose title matches, ignoring case."""
        wanted = _key(title)
        return next((book for book in self.books() if _key(book.title) == wanted), None)

    def status_of(self, title: str) -> BookStatus:
        """The lending status of a book.

        A book whose recorded status is not recognised counts as not found.
        """
        book = self.find(title)
        if book is None:
            return BookStatus.NOT_FOUND
        return _STATUS_BY_TEXT.get(book.status.strip().lower(), BookStatus.NOT_FOUND)

    def set_status(self, title: str, status: str) -> None:
        """Set the recorded status of every book with this title.

        Raises KeyError, leaving the file untouched, when no book matches.
        """
        wanted = _key(title)
        books = self.books()
        matches = [book for book in books if _key(book.title) == wanted]
        if not matches:
            raise KeyError(f"Book not found: {title!r}")
        for book in matches:
            book.status = status
        write_books(self.path, books)

    def available(self) -> list[BookRecord]:
        """Books whose status reads exactly ``Available``."""
        return [book for book in self.books() if book.status == AVAILABLE]

    def next_serial(self) -> int:
        """Serial number for the next book added: the count of non-empty lines."""
        try:
            with open(self.path, encoding="utf-8") as handle:
                count = sum(1 for line in handle if line.strip())
        except FileNotFoundError:
            count = 0
        return max(count, 1)

    def add_book(self, title: str, author: str, publisher: str, year: int, isbn: str) -> BookRecord:
        """Append a new, available book and return its record."""
        book = BookRecord(
            serial=self.next_serial(),
            title=title,
            author=author,
            publisher=publisher,
            year=int(year),
            isbn=isbn,
            status=AVAILABLE,
        )
        append_book(self.path, book)
        return book