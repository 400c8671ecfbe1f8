"""Write the sample catalogue, users and loans used to start a library."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Callable

from .store import (
    BOOKS_FILE,
    LOANS_FILE,
    USERS_FILE,
    BookRecord,
    LoanRecord,
    PathLike,
    UserRecord,
    append_user,
    write_books,
    write_loans,
)

_SAMPLE_PASSWORD = "password"

SAMPLE_BOOKS = (
    BookRecord(1, "The Pragmatic Programmer", "Andrew Hunt", "Addison-Wesley", 1999, "978-0-201-61622-4", "Issued"),
    BookRecord(2, "1984", "George Orwell", "Secker & Warburg", 1949, "978-0-452-28423-4", "Issued"),
    BookRecord(3, "The Great Gatsby", "F. Scott Fitzgerald", "Charles Scribner's Sons", 1925, "978-0-7432-7356-5", "Available"),
    BookRecord(4, "To Kill a Mockingbird", "Harper Lee", "J. B. Lippincott & Co.", 1960, "978-0-06-112008-4", "Available"),
    BookRecord(5, "Feluda Samagra", "Satyajit Ray", "Ananda Publishers", 1965, "978-93-80341-45-6", "Reserved"),
    BookRecord(6, "Byomkesh Bakshi Stories", "Sharadindu Bandyopadhyay", "Ananda Publishers", 1932, "978-93-80341-46-3", "IAvailable"),
    BookRecord(7, "Professor Shonku Samagra", "Satyajit Ray", "Ananda Publishers", 1961, "978-93-80341-47-0", "Available"),
    BookRecord(8, "Harry Potter and the Sorcerer's Stone", "J.K. Rowling", "Bloomsbury", 1997, "978-0-7475-3269-9", "Available"),
    BookRecord(9, "A Brief History of Time", "Stephen Hawking", "Bantam Books", 1988, "978-0-553-10953-5", "Available"),
    BookRecord(10, "The Theory of Everything", "Albert Einstein", "Princeton University Press", 1950, "978-0-691-16410-3", "Available"),
    BookRecord(11, "The Guide", "R. K. Narayan", "Indian Thought Publications", 1958, "978-0-000-00002-4", "Issued"),
)

SAMPLE_USERS = (
    UserRecord(1, "Asha Verma", "asha_23", _SAMPLE_PASSWORD, "Student"),
    UserRecord(2, "Meera Kapoor", "meera_23", _SAMPLE_PASSWORD, "Student"),
    UserRecord(3, "Arun Mehta", "amehta", _SAMPLE_PASSWORD, "Faculty"),
    UserRecord(4, "Priya Nair", "priya_23", _SAMPLE_PASSWORD, "Student"),
    UserRecord(5, "Riya Joshi", "riya_23", _SAMPLE_PASSWORD, "Student"),
    UserRecord(6, "Vikram Rao", "vrao", _SAMPLE_PASSWORD, "Faculty"),
    UserRecord(7, "Sunita Das", "sunita_d", _SAMPLE_PASSWORD, "Librarian"),
    UserRecord(8, "Kavya Iyer", "kavya_i", _SAMPLE_PASSWORD, "Student"),
    UserRecord(9, "Ravi Kumar", "ravi_k", _SAMPLE_PASSWORD, "Faculty"),
    UserRecord(10, "Neha Gupta", "neha_g23", _SAMPLE_PASSWORD, "Librarian"),
)

SAMPLE_LOANS = (
    LoanRecord("1984", "George Orwell", "Secker & Warburg", date(2015, 2, 25), "978-0-452-28423-4", "meera_23"),
    LoanRecord("The Pragmatic Programmer", "Andrew Hunt", "Addison-Wesley", date(2025, 2, 20), "978-0-201-61622-4", "amehta"),
    LoanRecord("The guide", "R. K. Narayan", "Indian Thought Publications", date(2025, 3, 10), "978-0-000-00002-4", "asha_23"),
)


def write_sample_books(path: PathLike) -> None:
    """Overwrite ``path`` with the sample catalogue."""
    write_books(path, SAMPLE_BOOKS)


def write_sample_users(path: PathLike) -> None:
    """Overwrite ``path`` with the sample users."""
    Path(path).unlink(missing_ok=True)
    for user in SAMPLE_USERS:
        append_user(path, user)


def write_sample_loans(path: PathLike) -> None:
    """Overwrite ``path`` with the sample current loans."""
    write_loans(path, SAMPLE_LOANS)


_WRITERS: dict[str, tuple[str, Callable[[PathLike], None]]] = {
    "books": (BOOKS_FILE, write_sample_books),
    "users": (USERS_FILE, write_sample_users),
    "loans": (LOANS_FILE, write_sample_loans),
}


def main(argv: list[str] | None = None) -> int:
    """Write sample data files into a directory."""
    parser = argparse.ArgumentParser(
        prog="librarydesk-seed",
        description="Write the sample library data files.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="which files to write: books, users, loans (default: all)",
    )
    parser.add_argument("--dir", default=".", help="directory to write into")
    args = parser.parse_args(argv)

    unknown = [name for name in args.files if name not in _WRITERS]
    if unknown:
        parser.error(f"unknown file kind: {', '.join(unknown)}")

    directory = Path(args.dir)
    for name in args.files or list(_WRITERS):
        filename, writer = _WRITERS[name]
        try:
            writer(directory / filename)
        except OSError as exc:
            print(f"Error opening file! {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())