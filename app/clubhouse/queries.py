"""
Persistence layer: every statement the app runs against `users` and `messages`.

All SQL is hand-written and parameterized (bound `:name` params through
sqlalchemy.text). Each function runs exactly one statement; callers own commit.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import text

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


@dataclass(frozen=True)
class UserRecord:
    id: int
    first_name: str
    last_name: str
    username: str
    password: str
    is_member: bool
    is_admin: bool

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class MessageRecord:
    id: int
    title: str
    message: str
    timestamp: datetime | str
    user_id: int
    first_name: str
    last_name: str
    is_member: bool

    @property
    def author(self) -> str:
        return f"{self.first_name} {self.last_name}"


_USER_COLUMNS = "id, first_name, last_name, username, password, is_member, is_admin"


def _to_user(row: Any) -> UserRecord | None:
    if row is None:
        return None
    return UserRecord(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        username=row.username,
        password=row.password,
        is_member=bool(row.is_member),
        is_admin=bool(row.is_admin),
    )


# ---------- Users ----------
def get_user(s: "Session", user_id: int) -> UserRecord | None:
    row = s.execute(text(f"SELECT {_USER_COLUMNS} FROM users WHERE id = :id"), {"id": user_id}).first()
    return _to_user(row)


def find_user_by_username(s: "Session", username: str) -> UserRecord | None:
    row = s.execute(
        text(f"SELECT {_USER_COLUMNS} FROM users WHERE username = :username"),
        {"username": username},
    ).first()
    return _to_user(row)


def insert_user(s: "Session", *, first_name: str, last_name: str, username: str, password_hash: str) -> None:
    """New accounts always start as non-members; is_member/is_admin use column defaults."""
    s.execute(
        text(
            "INSERT INTO users (first_name, last_name, username, password) "
            "VALUES (:first_name, :last_name, :username, :password)"
        ),
        {"first_name": first_name, "last_name": last_name, "username": username, "password": password_hash},
    )


def set_member(s: "Session", user_id: int) -> None:
    s.execute(text("UPDATE users SET is_member = :flag WHERE id = :id"), {"flag": True, "id": user_id})


def set_admin(s: "Session", user_id: int) -> None:
    s.execute(text("UPDATE users SET is_admin = :flag WHERE id = :id"), {"flag": True, "id": user_id})


# ---------- Messages ----------
def list_messages(s: "Session") -> list[MessageRecord]:
    rows = s.execute(
        text(
            "SELECT messages.id, messages.title, messages.message, messages.timestamp, messages.user_id, "
            "users.first_name, users.last_name, users.is_member "
            "FROM messages JOIN users ON messages.user_id = users.id "
            "ORDER BY messages.timestamp DESC, messages.id DESC"
        )
    ).all()
    return [
        MessageRecord(
            id=r.id,
            title=r.title,
            message=r.message,
            timestamp=r.timestamp,
            user_id=r.user_id,
            first_name=r.first_name,
            last_name=r.last_name,
            is_member=bool(r.is_member),
        )
        for r in rows
    ]


def insert_message(s: "Session", *, title: str, message: str, user_id: int) -> None:
    s.execute(
        text("INSERT INTO messages (title, message, user_id) VALUES (:title, :message, :user_id)"),
        {"title": title, "message": message, "user_id": user_id},
    )


def delete_message(s: "Session", message_id: int) -> int:
    """Returns the number of rows removed (0 when the id does not exist)."""
    result = s.execute(text("DELETE FROM messages WHERE id = :id"), {"id": message_id})
    return result.rowcount or 0
