# librarydesk

A console lending desk for a small library. Books, members and current
loans live in three CSV files in one directory, so the state of the
library can be read and edited with any spreadsheet or text editor.

## Installing

```
pip install .
```

## Getting started

Write a set of sample data files into the current directory:

```
librarydesk-seed
```

This writes `books.csv` (the catalogue), `users.csv` (members and their
roles) and `cur_borrowed_books.csv` (books currently out on loan),
overwriting any that are already there. To write only some of them, or
to write elsewhere:

```
librarydesk-seed books users --dir path/to/data
```

The file kinds are `books`, `users` and `loans`. Every sample member
has the password `password`; `sunita_d` and `neha_g23` are librarians,
`amehta`, `vrao` and `ravi_k` are faculty, and the rest are students.

Then start the desk on the same directory:

```
librarydesk --dir path/to/data
```

`--dir` defaults to the current directory. On start the desk reads the
current loans, works out how many days each has been out and the fine
owed, and offers a menu to log in, sign up as a student or a faculty
member, or leave. Librarians cannot sign up through the menu; they must
already be listed in `users.csv`. The desk ends on the exit choice or
when input runs out.

## What each role can do

**Students** can list the available books, see their borrowing history
and fines, issue a book, return a book (paying any fine first) and
search for a title.

- At most 3 books may be held at once.
- No new book can be issued while a fine is outstanding.
- A loan is free for 15 days; after that the fine is 10 INR per day.

**Faculty** have the same menu and never pay fines.

- At most 5 books may be held at once.
- No new book can be issued while any held book has been out for 60
  days or more.

**Librarians** can list the whole catalogue, look up a member by user
ID, add new books (added as `Available`) and search for a title.

A book's status in `books.csv` is `Available`, `Issued` or `Reserved`
(matched without regard to case when issuing). `Reserved` books can only
be read on the library premises; `Issued` books are out until returned.
A student asking for a book whose status is none of these is told the
book is not in the library. Titles are matched ignoring case and
surrounding spaces.

## File formats

Each file has a header line and then one record per line, with fields
separated by plain commas (no quoting, so fields must not contain
commas). Dates are written as `day-month-year` without zero padding,
e.g. `25-2-2015`.

| File | Fields |
| --- | --- |
| `books.csv` | serial number, title, author, publisher, year, ISBN, status |
| `users.csv` | serial number, name, user ID, password, role |
| `cur_borrowed_books.csv` | title, author, publisher, date of issue, ISBN, user ID |

## Using it as a library

The pieces behind the console can be imported:

```python
from librarydesk.library import Library, LibraryError, calc_fine

desk = Library("path/to/data")
desk.load_history()

try:
    desk.borrow_as_student("asha_23", "The Great Gatsby")
except LibraryError as err:
    print(err)

print(desk.total_fine("asha_23"))
print(calc_fine("Student", 20))   # 50
```

- `librarydesk.library.Library` applies the lending rules:
  `load_history()`, `history(user_id)`, `total_fine(user_id)`,
  `borrow_as_student(user_id, title)`, `borrow_as_faculty(user_id, title)`
  and `return_book(user_id, title, pay_fine=False)`, which returns the
  fine paid and refuses to close a loan with a fine unless `pay_fine` is
  true. Refusals raise `LibraryError`. `Library(data_dir, today=None)`
  takes an optional date to count loan days against.
- `librarydesk.catalog.Catalog` reads and updates `books.csv`: `books()`,
  `find()`, `status_of()` (a `BookStatus`), `set_status()`,
  `available()`, `next_serial()` and `add_book()`.
- `librarydesk.accounts.UserDirectory` authenticates and registers
  members: `authenticate()` returns a `Role` or `None`,
  `is_user_id_taken()`, `register()`, `find()` and `roles()`.
- `librarydesk.store` holds the `BookRecord`, `UserRecord` and
  `LoanRecord` dataclasses and the functions that read, write and append
  them.
- `librarydesk.dates` has `parse_date()`, `format_date()`,
  `current_date()` and `days_since()`.
- `librarydesk.cli.Session(library, stdin, stdout).run()` serves the
  menus over any pair of text streams.
- `librarydesk.seed` has `write_sample_books()`, `write_sample_users()`
  and `write_sample_loans()`.

## What it does not do

- Passwords are stored and compared as plain text in `users.csv`.
- Fines collected on return are kept in a `FineLedger` for the running
  session only; they are not written to any file.
- Borrowing history covers only books currently on loan; returned
  books are dropped from it.
- There is no locking: two desks working on the same files at once can
  overwrite each other's changes.

## Running the tests

```
pip install .[test]
pytest
```