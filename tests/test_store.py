from datetime import date

import pytest

from librarydesk.store import (
    BOOKS_HEADER,
    LOANS_HEADER,
    USERS_HEADER,
    BookRecord,
    LoanRecord,
    UserRecord,
    append_book,
    append_loan,
    append_user,
    read_books,
    read_loans,
    read_users,
    write_books,
    write_loans,
)


def _book(serial, title, status="Available"):
    return BookRecord(serial, title, "Some Author", "Some Press", 1990 + serial, f"isbn-{serial}", status)


def test_books_round_trip(tmp_path):
    path = tmp_path / "books.csv"
    books = [_book(1, "First"), _book(2, "Second", "Issued")]
    write_books(path, books)
    assert read_books(path) == books


def test_write_books_starts_with_header(tmp_path):
    path = tmp_path / "books.csv"
    write_books(path, [_book(1, "First")])
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == BOOKS_HEADER
    assert lines[1] == "1,First,Some Author,Some Press,1991,isbn-1,Available"


def test_read_books_parses_source_row(tmp_path):
    path = tmp_path / "books.csv"
    path.write_text(
        BOOKS_HEADER + "\n"
        "1,The Pragmatic Programmer,Andrew Hunt,Addison-Wesley,1999,978-0-201-61622-4,Issued\n",
        encoding="utf-8",
    )
    assert read_books(path) == [
        BookRecord(1, "The Pragmatic Programmer", "Andrew Hunt", "Addison-Wesley", 1999, "978-0-201-61622-4", "Issued")
    ]


def test_read_books_skips_blank_lines_and_pads_short_rows(tmp_path):
    path = tmp_path / "books.csv"
    path.write_text(BOOKS_HEADER + "\n\n1,T,A,P,2000,isbn\n   \n", encoding="utf-8")
    books = read_books(path)
    assert len(books) == 1
    assert books[0].status == ""
    assert books[0].isbn == "isbn"


def test_read_books_ignores_extra_fields(tmp_path):
    path = tmp_path / "books.csv"
    path.write_text(BOOKS_HEADER + "\n1,T,A,P,2000,isbn,Available,extra\n", encoding="utf-8")
    assert read_books(path)[0].status == "Available"


def test_read_books_rejects_bad_serial(tmp_path):
    path = tmp_path / "books.csv"
    path.write_text(BOOKS_HEADER + "\nx,T,A,P,2000,isbn,Available\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_books(path)


def test_read_books_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_books(tmp_path / "absent.csv")


def test_append_book_creates_header_once(tmp_path):
    path = tmp_path / "books.csv"
    append_book(path, _book(1, "First"))
    append_book(path, _book(2, "Second"))
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines.count(BOOKS_HEADER) == 1
    assert [b.title for b in read_books(path)] == ["First", "Second"]


def test_append_book_after_write_keeps_order(tmp_path):
    path = tmp_path / "books.csv"
    write_books(path, [_book(1, "First")])
    append_book(path, _book(2, "Second"))
    assert [b.serial for b in read_books(path)] == [1, 2]


def test_users_append_and_read(tmp_path):
    path = tmp_path / "users.csv"
    first = UserRecord(1, "Asha Verma", "asha_23", "password", "Student")
    second = UserRecord(2, "Arun Mehta", "amehta", "password", "Faculty")
    append_user(path, first)
    append_user(path, second)
    assert path.read_text(encoding="utf-8").splitlines()[0] == USERS_HEADER
    assert read_users(path) == [first, second]


def test_read_users_skips_header_only(tmp_path):
    path = tmp_path / "users.csv"
    path.write_text(USERS_HEADER + "\n", encoding="utf-8")
    assert read_users(path) == []


def test_loans_round_trip(tmp_path):
    path = tmp_path / "loans.csv"
    loans = [
        LoanRecord("1984", "George Orwell", "Secker & Warburg", date(2015, 2, 25), "978-0-452-28423-4", "meera_23"),
        LoanRecord("T", "A", "P", date(2025, 3, 10), "isbn", "asha_23"),
    ]
    write_loans(path, loans)
    assert read_loans(path) == loans


def test_loan_date_is_written_in_source_format(tmp_path):
    path = tmp_path / "loans.csv"
    append_loan(path, LoanRecord("1984", "George Orwell", "Secker & Warburg", date(2015, 2, 25), "978-0-452-28423-4", "u1"))
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == [LOANS_HEADER, "1984,George Orwell,Secker & Warburg,25-2-2015,978-0-452-28423-4,u1"]


def test_read_loans_rejects_bad_date(tmp_path):
    path = tmp_path / "loans.csv"
    path.write_text(LOANS_HEADER + "\nT,A,P,someday,isbn,u1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_loans(path)