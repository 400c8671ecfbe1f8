"""Registered users: sign-in, sign-up and role lookups."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from .store import PathLike, UserRecord, append_user, read_users


class Role(str, Enum):
    """What a user may do in the library."""

    STUDENT = "Student"
    FACULTY = "Faculty"
    LIBRARIAN = "Librarian"


class UserDirectory:
    """The users kept in one users file."""

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)

    def _users(self) -> list[UserRecord]:
        return read_users(self.path)

    def authenticate(self, user_id: str, password: str) -> Role | None:
        """The user's role if the id and password match, otherwise None."""
        for user in self._users():
            if user.user_id == user_id and user.password == password:
                try:
                    return Role(user.role)
                except ValueError:
                    return None
        return None

    def is_user_id_taken(self, user_id: str) -> bool:
        """Whether some user already has this id."""
        try:
            return any(user.user_id == user_id for user in self._users())
        except FileNotFoundError:
            return False

    def _next_serial(self) -> int:
        try:
            with open(self.path, encoding="utf-8") as handle:
                count = sum(1 for line in handle if line.strip())
        except FileNotFoundError:
            count = 0
        return max(count, 1)

    def register(self, name: str, user_id: str, password: str, role: Role | str) -> UserRecord:
        """Add a new user; raises ValueError if the id is taken."""
        if self.is_user_id_taken(user_id):
            raise ValueError("This userID is not available")
        user = UserRecord(
            serial=self._next_serial(),
            name=name,
            user_id=user_id,
            password=password,
            role=Role(role).value,
        )
        append_user(self.path, user)
        return user

    def find(self, user_id: str) -> UserRecord | None:
        """The user with this id, if any."""
        return next((user for user in self._users() if user.user_id == user_id), None)

    def roles(self) -> dict[str, str]:
        """Map each user id to the role recorded for it."""
        return {user.user_id: user.role for user in self._users()}