"""Comma-separated storage for the book catalogue, users and current loans.

Each file starts with a header line, followed by one record per line with
fields separated by plain commas (no quoting).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, Iterator, Union

from .dates import format_date, parse_date

PathLike = Union[str, "os.PathLike[str]"]

BOOKS_FILE = "books.csv"
USERS_FILE = "users.csv"
LOANS_FILE = "cur_borrowed_books.csv"

BOOKS_HEADER = "Serial Number,Book Title,Author,Publisher,Year,ISBN Number,Book Status"
USERS_HEADER = "User Name,User ID,Password,Role"
LOANS_HEADER = "Book Title,Author,Publisher,Date of issue,ISBN Number,userID"


@dataclass
class BookRecord:
    """One row of the book catalogue."""

    serial: int
    title: str
    author: str
    publisher: str
    year: int
    isbn: str
    status: str


@dataclass
class UserRecord:
    """One registered user."""

    serial: int
    name: str
    user_id: str
    password: str
    role: str


@dataclass
class LoanRecord:
    """A book currently lent out to a user."""

    title: str
    author: str
    publisher: str
    issued: date
    isbn: str
    user_id: str


def _rows(path: PathLike, width: int) -> Iterator[list[str]]:
    """Yield the data rows of a file, padded or cut to ``width`` fields."""
    with open(path, encoding="utf-8") as handle:
        next(handle, None)
        for line in handle:
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            fields = line.split(",")
            fields.extend([""] * (width - len(fields)))
            yield fields[:width]


def _number(text: str, what: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"invalid {what}: {text!r}") from None


def _write(path: PathLike, header: str, lines: Iterable[str]) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(header + "\n")
        for line in lines:
            handle.write(line + "\n")


def _append(path: PathLike, header: str, line: str) -> None:
    target = Path(path)
    needs_header = not target.exists() or target.stat().st_size == 0
    with open(target, "a", encoding="utf-8") as handle:
        if needs_header:
            handle.write(header + "\n")
        handle.write(line + "\n")


def _book_line(book: BookRecord) -> str:
    return ",".join(
        [str(book.serial), book.title, book.author, book.publisher, str(book.year), book.isbn, book.status]
    )


def _user_line(user: UserRecord) -> str:
    return ",".join([str(user.serial), user.name, user.user_id, user.password, user.role])


def _loan_line(loan: LoanRecord) -> str:
    return ",".join(
        [loan.title, loan.author, loan.publisher, format_date(loan.issued), loan.isbn, loan.user_id]
    )


def read_books(path: PathLike) -> list[BookRecord]:
    """Read every book in the catalogue file."""
    return [
        BookRecord(
            serial=_number(serial, "serial number"),
            title=title,
            author=author,
            publisher=publisher,
            year=_number(year, "year"),
            isbn=isbn,
            status=status,
        )
        for serial, title, author, publisher, year, isbn, status in _rows(path, 7)
    ]


def write_books(path: PathLike, books: Iterable[BookRecord]) -> None:
    """Replace the catalogue file with the given books."""
    _write(path, BOOKS_HEADER, (_book_line(book) for book in books))


def append_book(path: PathLike, book: BookRecord) -> None:
    """Add one book to the end of the catalogue file."""
    _append(path, BOOKS_HEADER, _book_line(book))


def read_users(path: PathLike) -> list[UserRecord]:
    """Read every registered user."""
    return [
        UserRecord(
            serial=_number(serial, "serial number"),
            name=name,
            user_id=user_id,
            password=password,
            role=role,
        )
        for serial, name, user_id, password, role in _rows(path, 5)
    ]


def append_user(path: PathLike, user: UserRecord) -> None:
    """Add one user to the end of the users file."""
    _append(path, USERS_HEADER, _user_line(user))


def read_loans(path: PathLike) -> list[LoanRecord]:
    """Read every current loan."""
    return [
        LoanRecord(
            title=title,
            author=author,
            publisher=publisher,
            issued=parse_date(issued),
            isbn=isbn,
            user_id=user_id,
        )
        for title, author, publisher, issued, isbn, user_id in _rows(path, 6)
    ]


def write_loans(path: PathLike, loans: Iterable[LoanRecord]) -> None:
    """Replace the loans file with the given loans."""
    _write(path, LOANS_HEADER, (_loan_line(loan) for loan in loans))


def append_loan(path: PathLike, loan: LoanRecord) -> None:
    """Add one loan to the end of the loans file."""
    _append(path, LOANS_HEADER, _loan_line(loan))