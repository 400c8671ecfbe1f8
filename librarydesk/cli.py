"""Interactive text menus for students, faculty and librarians."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, TextIO

from .accounts import Role
from .dates import format_date
from .library import (
    FACULTY_BOOK_LIMIT,
    FACULTY_DAY_LIMIT,
    STUDENT_BOOK_LIMIT,
    Library,
    LibraryError,
)
from .store import BookRecord

_RULE = "-" * 69
_SHORT_RULE = "-" * 46
_TABLE_RULE = "-" * 44
_LIST_RULE = "-" * 62

Action = Callable[[str], None]


class _EndOfInput(Exception):
    """The input stream ran out."""


def _same_title(left: str, right: str) -> bool:
    return left.strip().lower() == right.strip().lower()


class Session:
    """One run of the library's menus over a pair of text streams."""

    def __init__(self, library: Library, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self.library = library
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    # ----- input and output -------------------------------------------------

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _say(self, text: str = "") -> None:
        self._write(text + "\n")

    def _line(self) -> str:
        line = self.stdin.readline()
        if not line:
            raise _EndOfInput
        return line

    def _ask(self, prompt: str) -> str:
        """Show a prompt and return the next non-blank line, stripped."""
        self._write(prompt)
        while True:
            text = self._line().strip()
            if text:
                return text

    def _choice(self) -> str:
        """The first character of the next non-blank line."""
        while True:
            text = self._line().strip()
            if text:
                return text[0]

    def _guarded(self, action: Action, user_id: str) -> None:
        try:
            action(user_id)
        except LibraryError as exc:
            self._say(str(exc))
        except OSError as exc:
            self._say(f"Error opening file! {exc}")
        except ValueError as exc:
            self._say(f"Error reading file! {exc}")

    # ----- top level --------------------------------------------------------

    def run(self) -> int:
        """Load current loans and serve the menus until the user exits."""
        try:
            self.library.load_history()
        except OSError as exc:
            self._say(f"Error opening cur_borrowed_books.csv! {exc}")
        except ValueError as exc:
            self._say(f"Error reading cur_borrowed_books.csv! {exc}")
        try:
            while self._welcome():
                pass
        except _EndOfInput:
            pass
        return 0

    def _welcome(self) -> bool:
        self._say(_RULE)
        self._say("Welcome to IITK Library")
        self._say("Enter 1 to Login\nEnter 2 to Sign Up\nEnter 3 to exit")
        self._say(_RULE)
        choice = self._choice()
        if choice == "1":
            self._login()
        elif choice == "2":
            self._sign_up()
        else:
            self._say("Bye!!!")
            return False
        return True

    def _login(self) -> None:
        user_id = self._ask("Enter your id: \n")
        given = self._ask("Enter your password: \n")
        try:
            role = self.library.users.authenticate(user_id, given)
        except (OSError, ValueError) as exc:
            self._say(f"Error opening file! {exc}")
            role = None
        if role is Role.STUDENT:
            self._say("You have been logged in as a student.")
            self._student_menu(user_id)
        elif role is Role.FACULTY:
            self._say("You have been logged in as a faculty.")
            self._faculty_menu(user_id)
        elif role is Role.LIBRARIAN:
            self._say("You have been logged in as Librarian.")
            self._librarian_menu(user_id)
        else:
            self._say("Invalid User.")

    def _sign_up(self) -> None:
        name = self._ask("Enter your name: ")
        kind = self._ask("Enter 1 if you are a faculty or 2 for student: ")
        role = Role.FACULTY if kind == "1" else Role.STUDENT
        chosen = self._ask("Enter your password: ")
        directory = self.library.users
        try:
            while True:
                user_id = self._ask("Enter your userID: ")
                if not directory.is_user_id_taken(user_id):
                    break
                self._say("This userID is not available")
            directory.register(name, user_id, chosen, role)
        except (OSError, ValueError):
            self._say("Registration failed!")
            return
        self._say("Registration Successful!")

    # ----- menus ------------------------------------------------------------

    def _menu(self, lines: list[str], actions: dict[str, Action], logout: str, user_id: str) -> None:
        while True:
            self._say(_RULE)
            for line in lines:
                self._say(line)
            self._say(_RULE)
            choice = self._choice()
            if choice == logout:
                self._say("You are logged out.")
                return
            action = actions.get(choice)
            if action is None:
                self._say("Invalid choice. Please try again.")
                continue
            self._guarded(action, user_id)

    def _student_menu(self, user_id: str) -> None:
        self._menu(
            [
                "Press 1 to see available books.",
                "Press 2 to see your borrowing history.",
                "Press 3 to see your fine.",
                "Press 4 to issue a book.",
                "Press 5 to return books and clear fine.",
                "Press 7 to see availabilty of a particular book.",
                "Press 8 to logout.",
            ],
            {
                "1": self._show_available,
                "2": lambda uid: self._show_history(uid, Role.STUDENT),
                "3": self._show_student_fine,
                "4": self._student_borrow,
                "5": self._return_book,
                "7": self._search_book,
            },
            "8",
            user_id,
        )

    def _faculty_menu(self, user_id: str) -> None:
        self._menu(
            [
                "Press 1 to see available books.",
                "Press 2 to see your borrowing history.",
                "Press 3 to see your fine.",
                "Press 4 to issue a book.",
                "Press 5 to return books.",
                "Press 6 to see availability of a particular book.",
                "Press 7 to logout.",
            ],
            {
                "1": self._show_available,
                "2": lambda uid: self._show_history(uid, Role.FACULTY),
                "3": lambda uid: self._say("Your total fine is: 0 INR"),
                "4": self._faculty_borrow,
                "5": self._return_book,
                "6": self._search_book,
            },
            "7",
            user_id,
        )

    def _librarian_menu(self, user_id: str) -> None:
        self._menu(
            [
                "Press 1 to see all books.",
                "Press 2 to search for an user.",
                "Press 3 to add new books to the Library.",
                "Press 4 to search for a particular book.",
                "Press 5 to logout.",
            ],
            {
                "1": self._list_all_books,
                "2": self._search_user,
                "3": self._add_book,
                "4": self._search_book,
            },
            "5",
            user_id,
        )

    # ----- shared actions ---------------------------------------------------

    def _show_available(self, _user_id: str) -> None:
        books = self.library.catalog.available()
        self._say("Available books:")
        self._say(_SHORT_RULE)
        for book in books:
            self._say(f"{book.serial}. {book.title} by {book.author} ({book.year})")
        if not books:
            self._say("No books are currently available.")
        self._say("-" * 63)

    def _search_book(self, _user_id: str) -> None:
        title = self._ask("Enter the book name you want to search for: ")
        matches = [book for book in self.library.catalog.books() if _same_title(book.title, title)]
        for book in matches:
            self._say(
                f"{book.serial}. {book.title} by {book.author} ({book.year}) "
                f"isbn number: {book.isbn}, publisher: {book.publisher} "
                f"and availability: {book.status}"
            )
        if not matches:
            self._say("Searched book is not vailable in the Library! :(")

    def _show_history(self, user_id: str, role: Role) -> None:
        self._say(f"Checking history for user: '{user_id}'")
        held = self.library.history(user_id)
        if not held:
            self._say("No books have been issued!")
            return
        self._say("Books issued by you: ")
        self._say(_TABLE_RULE)
        self._say("Book Title | Date Issued | Days Issued | Fine")
        for book in held:
            fine = 0 if role is Role.FACULTY else book.fine
            self._say(f"{book.title} | {format_date(book.issued)} | {book.total_days} | Rs. {fine}")
        self._say(_TABLE_RULE)

    def _show_student_fine(self, user_id: str) -> None:
        self._say(f"Your total fine is : {self.library.total_fine(user_id)} INR")

    def _return_book(self, user_id: str) -> None:
        title = self._ask("Write the title of the book to be returned: ")
        held = self.library.history(user_id)
        if not held:
            self._say("You have not issued any book!")
            return
        loan = next((book for book in held if _same_title(book.title, title)), None)
        pay = False
        if loan is not None and loan.fine:
            self._say(f"Pay your fine: {loan.fine} INR")
            self._say("Once done, press 1!")
            if self._choice() != "1":
                self._say("Fine not paid.")
                return
            pay = True
        self.library.return_book(user_id, title, pay_fine=pay)
        self._say(f"{title} has been successfully returned.")

    # ----- borrowing --------------------------------------------------------

    def _student_borrow(self, user_id: str) -> None:
        if self.library.total_fine(user_id) != 0:
            self._say("Sorry! your fine is pending.")
            return
        if len(self.library.history(user_id)) >= STUDENT_BOOK_LIMIT:
            self._say(
                f"You have already issued {STUDENT_BOOK_LIMIT} books. Return atleast one to issue new."
            )
            return
        self._say(_SHORT_RULE)
        title = self._ask("Enter the name of the book you want to issue: ")
        self.library.borrow_as_student(user_id, title)
        self._say("You have issued successfully! Please collect your book from the Library.")

    def _faculty_borrow(self, user_id: str) -> None:
        held = self.library.history(user_id)
        if len(held) >= FACULTY_BOOK_LIMIT:
            self._say(
                f"You have already issued {FACULTY_BOOK_LIMIT} books. Return atleast one to issue new."
            )
            return
        overdue = [book.title for book in held if book.total_days >= FACULTY_DAY_LIMIT]
        if overdue:
            self._say(f"The book {overdue[-1]} has been issued for over {FACULTY_DAY_LIMIT} days.")
            return
        self._say(_SHORT_RULE)
        title = self._ask("Enter the name of the book you want to issue: ")
        self.library.borrow_as_faculty(user_id, title)
        self._say("Issued Successfully")

    # ----- librarian actions ------------------------------------------------

    def _print_book(self, book: BookRecord) -> None:
        self._say(f"Serial Number: {book.serial}")
        self._say(f"Title: {book.title}")
        self._say(f"Author: {book.author}")
        self._say(f"Publisher: {book.publisher}")
        self._say(f"Year: {book.year}")
        self._say(f"ISBN: {book.isbn}")
        self._say(f"Status: {book.status}")
        self._say(_LIST_RULE)

    def _list_all_books(self, _user_id: str) -> None:
        books = self.library.catalog.books()
        self._say("\nList of Books:")
        self._say(_LIST_RULE)
        for book in books:
            self._print_book(book)

    def _search_user(self, _user_id: str) -> None:
        wanted = self._ask("Enter userID: ")
        user = self.library.users.find(wanted)
        if user is None:
            self._say("User ID not found!")
            return
        self._say(f"User Name: {user.name}")
        self._say(f"User ID: {user.user_id}")
        self._say(f"Role: {user.role}")

    def _add_book(self, _user_id: str) -> None:
        title = self._ask("Title of the new book : ")
        author = self._ask("Author of the book : ")
        publisher = self._ask("Publisher of the book : ")
        isbn = self._ask("ISBN number: ")
        year_text = self._ask("Year of the book: ")
        try:
            year = int(year_text)
        except ValueError:
            self._say(f"Invalid year: {year_text}")
            return
        self.library.catalog.add_book(title, author, publisher, year, isbn)
        self._say(f"{title} has been successfully added.")


def main(argv: list[str] | None = None) -> int:
    """Start the library menus on the data files in a directory."""
    parser = argparse.ArgumentParser(prog="librarydesk", description="Library lending desk.")
    parser.add_argument("--dir", default=".", help="directory holding the library's data files")
    args = parser.parse_args(argv)
    return Session(Library(args.dir)).run()


if __name__ == "__main__":
    sys.exit(main())