"""Lending rules: borrowing limits, fines and returns."""

from __future__ import annotations

import contextlib
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .accounts import Role, UserDirectory
from .catalog import AVAILABLE, ISSUED, BookStatus, Catalog
from .dates import days_since
from .store import (
    BOOKS_FILE,
    LOANS_FILE,
    USERS_FILE,
    LoanRecord,
    PathLike,
    append_loan,
    read_loans,
    write_loans,
)

STUDENT_BOOK_LIMIT = 3
FACULTY_BOOK_LIMIT = 5
FACULTY_DAY_LIMIT = 60
FREE_DAYS = 15
FINE_PER_DAY = 10


class LibraryError(Exception):
    """A lending request the library refuses."""


@dataclass
class IssuedBook:
    """A book a user currently holds."""

    title: str
    issued: date
    total_days: int = 0
    fine: int = 0


def calc_fine(role: str, total_days: int) -> int:
    """Fine owed for a loan: faculty pay nothing, others pay per day past the free period."""
    if role == Role.FACULTY.value:
        return 0
    return max(total_days - FREE_DAYS, 0) * FINE_PER_DAY


class FineLedger:
    """Fines collected from users."""

    def __init__(self) -> None:
        self.entries: dict[str, list[tuple[int, date]]] = defaultdict(list)

    def record(self, user_id: str, fine: int, when: date | None = None) -> None:
        """Note a fine paid by a user."""
        self.entries[user_id].append((fine, when or date.today()))

    def total(self) -> int:
        """Sum of every fine collected."""
        return sum(fine for payments in self.entries.values() for fine, _ in payments)


def _same_title(left: str, right: str) -> bool:
    return left.strip().lower() == right.strip().lower()


class Library:
    """The library's data files and the loans of each user."""

    def __init__(self, data_dir: PathLike, today: date | None = None) -> None:
        self.data_dir = Path(data_dir)
        self.today = today or date.today()
        self.catalog = Catalog(self.data_dir / BOOKS_FILE)
        self.users = UserDirectory(self.data_dir / USERS_FILE)
        self.loans_path = self.data_dir / LOANS_FILE
        self.fines = FineLedger()
        self._history: dict[str, list[IssuedBook]] = defaultdict(list)

    def load_history(self) -> None:
        """Rebuild each user's loans, days and fines from the loans file."""
        self._history.clear()
        try:
            roles = self.users.roles()
        except FileNotFoundError:
            roles = {}
        try:
            loans = read_loans(self.loans_path)
        except FileNotFoundError:
            return
        for loan in loans:
            days = days_since(loan.issued, self.today)
            self._history[loan.user_id].append(
                IssuedBook(loan.title, loan.issued, days, calc_fine(roles.get(loan.user_id, ""), days))
            )

    def history(self, user_id: str) -> list[IssuedBook]:
        """The books a user currently holds."""
        return list(self._history.get(user_id, ()))

    def total_fine(self, user_id: str) -> int:
        """Sum of the fines on a user's loans."""
        return sum(book.fine for book in self._history.get(user_id, ()))

    def _issue(self, user_id: str, title: str) -> IssuedBook:
        book = self.catalog.find(title)
        if book is None:
            raise LibraryError("Book not found in books.csv!")
        self.catalog.set_status(book.title, ISSUED)
        issued = IssuedBook(book.title, self.today)
        self._history[user_id].append(issued)
        append_loan(
            self.loans_path,
            LoanRecord(book.title, book.author, book.publisher, self.today, book.isbn, user_id),
        )
        return issued

    def borrow_as_student(self, user_id: str, title: str) -> IssuedBook:
        """Lend a book to a student, enforcing the fine and three-book rules."""
        if self.total_fine(user_id) != 0:
            raise LibraryError("Sorry! your fine is pending.")
        if len(self._history.get(user_id, ())) >= STUDENT_BOOK_LIMIT:
            raise LibraryError(
                f"You have already issued {STUDENT_BOOK_LIMIT} books. Return atleast one to issue new."
            )
        status = self.catalog.status_of(title)
        if status is BookStatus.RESERVED:
            raise LibraryError("You can only read this book with Library premise.")
        if status is BookStatus.BORROWED:
            raise LibraryError("Come another time! The book is not available for issue now.")
        if status is BookStatus.NOT_FOUND:
            raise LibraryError("Sorry the book is not present in the library.")
        return self._issue(user_id, title)

    def borrow_as_faculty(self, user_id: str, title: str) -> IssuedBook:
        """Lend a book to a faculty member, enforcing the five-book and 60-day rules."""
        held = self._history.get(user_id, [])
        if len(held) >= FACULTY_BOOK_LIMIT:
            raise LibraryError(
                f"You have already issued {FACULTY_BOOK_LIMIT} books. Return atleast one to issue new."
            )
        overdue = [book.title for book in held if book.total_days >= FACULTY_DAY_LIMIT]
        if overdue:
            raise LibraryError(
                f"The book {overdue[-1]} has been issued for over {FACULTY_DAY_LIMIT} days."
            )
        if self.catalog.find(title) is None:
            raise LibraryError("This book is not available in library")
        if self.catalog.status_of(title) in (BookStatus.RESERVED, BookStatus.BORROWED):
            raise LibraryError("Come another time! The book is not available for issue now.")
        return self._issue(user_id, title)

    def return_book(self, user_id: str, title: str, pay_fine: bool = False) -> int:
        """Take a book back from a user and return the fine paid.

        A loan with a fine is only closed when ``pay_fine`` is true.
        """
        held = self._history.get(user_id)
        if not held:
            raise LibraryError("You have not issued any book!")
        loan = next((book for book in held if _same_title(book.title, title)), None)
        if loan is None:
            raise LibraryError(f"{title} is not among the books you have issued.")
        paid = loan.fine
        if paid:
            if not pay_fine:
                raise LibraryError(f"Fine not paid. Pay your fine: {paid} INR")
            self.fines.record(user_id, paid, self.today)
            loan.fine = 0
        held.remove(loan)

        with contextlib.suppress(KeyError):
            self.catalog.set_status(title, AVAILABLE)
        with contextlib.suppress(FileNotFoundError):
            remaining = [entry for entry in read_loans(self.loans_path) if not _same_title(entry.title, title)]
            write_loans(self.loans_path, remaining)
        return paid