"""Issue dates in the library's day-month-year text form."""

from __future__ import annotations

from datetime import date
from typing import Union

DateLike = Union[date, str]


def format_date(day: date) -> str:
    """Render a date as ``D-M-YYYY`` without zero padding."""
    return f"{day.day}-{day.month}-{day.year}"


def parse_date(text: str) -> date:
    """Parse a ``D-M-YYYY`` string into a date.

    Raises ValueError when the text is not three dash-separated numbers
    forming a real calendar date.
    """
    parts = text.strip().split("-")
    if len(parts) != 3:
        raise ValueError(f"expected a date as D-M-YYYY, got {text!r}")
    try:
        day, month, year = (int(part) for part in parts)
    except ValueError:
        raise ValueError(f"expected a date as D-M-YYYY, got {text!r}") from None
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise ValueError(f"not a valid date: {text!r} ({exc})") from None


def current_date() -> str:
    """Today's local date as ``D-M-YYYY``."""
    return format_date(date.today())


def _as_date(value: DateLike) -> date:
    return parse_date(value) if isinstance(value, str) else value


def days_since(issue_date: DateLike, today: DateLike) -> int:
    """Whole days from ``issue_date`` to ``today``; either may be a date or text."""
    return (_as_date(today) - _as_date(issue_date)).days