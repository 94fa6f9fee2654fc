"""SQLite-backed repository for users and tasks."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Iterator, Literal

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    completed INTEGER NOT NULL DEFAULT 0,
    user_id INTEGER NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE
);
CREATE INDEX IF NOT EXISTS idx_tasks_user ON tasks (user_id);
"""

_USER_COLUMNS = "id, username, email, password_hash, created_at"
_TASK_COLUMNS = "id, title, description, completed, user_id, created_at, updated_at"


class DuplicateUserError(Exception):
    """Raised when a username or email is already taken."""

    def __init__(self, field: Literal["username", "email"]) -> None:
        self.field = field
        super().__init__(f"{field}_exists")


@dataclass(slots=True)
class UserRecord:
    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime


@dataclass(slots=True)
class TaskRecord:
    id: int
    title: str
    description: str
    completed: bool
    user_id: int
    created_at: datetime
    updated_at: datetime


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _user_from_row(row: sqlite3.Row) -> UserRecord:
    return UserRecord(
        id=int(row["id"]),
        username=str(row["username"]),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def _task_from_row(row: sqlite3.Row) -> TaskRecord:
    return TaskRecord(
        id=int(row["id"]),
        title=str(row["title"]),
        description=str(row["description"] or ""),
        completed=bool(row["completed"]),
        user_id=int(row["user_id"]),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


def _duplicate_field(exc: sqlite3.IntegrityError) -> Literal["username", "email"] | None:
    message = str(exc)
    if "users.username" in message:
        return "username"
    if "users.email" in message:
        return "email"
    return None


class SqliteStore:
    """Relational persistence for users and tasks.

    Every operation opens its own connection, so the store is safe to share
    across request threads; SQLite serializes writers.
    """

    def __init__(self, database_path: str) -> None:
        self._database_path = database_path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        Path(self._database_path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self._database_path, timeout=30, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA foreign_keys = ON;")
            conn.execute("PRAGMA busy_timeout = 5000;")
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create tables if they do not exist yet."""
        logger.info("store.initialize path=%s", self._database_path)
        with self._connect() as conn:
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.executescript(_SCHEMA)

    # Users

    def create_user(self, *, username: str, email: str, password_hash: str) -> UserRecord:
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "INSERT INTO users (username, email, password_hash, created_at) VALUES (?, ?, ?, ?)",
                    (username, email, password_hash, _now_iso()),
                )
                row = conn.execute(
                    f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?",
                    (cursor.lastrowid,),
                ).fetchone()
        except sqlite3.IntegrityError as exc:
            field = _duplicate_field(exc)
            if field is None:
                raise
            raise DuplicateUserError(field) from exc
        return _user_from_row(row)

    def get_user(self, user_id: int) -> UserRecord | None:
        with self._connect() as conn:
            row = conn.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
        return _user_from_row(row) if row is not None else None

    def get_user_by_username(self, username: str) -> UserRecord | None:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE username = ?",
                (username,),
            ).fetchone()
        return _user_from_row(row) if row is not None else None

    def list_users(self) -> list[UserRecord]:
        with self._connect() as conn:
            rows = conn.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY id").fetchall()
        return [_user_from_row(row) for row in rows]

    def update_user(self, user_id: int, *, username: str, email: str) -> UserRecord | None:
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "UPDATE users SET username = ?, email = ? WHERE id = ?",
                    (username, email, user_id),
                )
                if cursor.rowcount == 0:
                    return None
                row = conn.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
        except sqlite3.IntegrityError as exc:
            field = _duplicate_field(exc)
            if field is None:
                raise
            raise DuplicateUserError(field) from exc
        return _user_from_row(row)

    def update_password_hash(self, user_id: int, password_hash: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE users SET password_hash = ? WHERE id = ?",
                (password_hash, user_id),
            )
            changed = cursor.rowcount > 0
        return changed

    def delete_user(self, user_id: int) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            changed = cursor.rowcount > 0
        return changed

    # Tasks

    def create_task(self, *, title: str, description: str, user_id: int) -> TaskRecord:
        now = _now_iso()
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO tasks (title, description, completed, user_id, created_at, updated_at)
                VALUES (?, ?, 0, ?, ?, ?)
                """,
                (title, description, user_id, now, now),
            )
            row = conn.execute(f"SELECT {_TASK_COLUMNS} FROM tasks WHERE id = ?", (cursor.lastrowid,)).fetchone()
        return _task_from_row(row)

    def get_task(self, task_id: int) -> TaskRecord | None:
        with self._connect() as conn:
            row = conn.execute(f"SELECT {_TASK_COLUMNS} FROM tasks WHERE id = ?", (task_id,)).fetchone()
        return _task_from_row(row) if row is not None else None

    def list_tasks(self) -> list[TaskRecord]:
        with self._connect() as conn:
            rows = conn.execute(f"SELECT {_TASK_COLUMNS} FROM tasks ORDER BY id").fetchall()
        return [_task_from_row(row) for row in rows]

    def list_tasks_for_user(self, user_id: int) -> list[TaskRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_TASK_COLUMNS} FROM tasks WHERE user_id = ? ORDER BY id",
                (user_id,),
            ).fetchall()
        return [_task_from_row(row) for row in rows]

    def update_task(
        self,
        task_id: int,
        *,
        title: str,
        description: str,
        completed: bool,
    ) -> TaskRecord | None:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE tasks SET title = ?, description = ?, completed = ?, updated_at = ? WHERE id = ?",
                (title, description, 1 if completed else 0, _now_iso(), task_id),
            )
            if cursor.rowcount == 0:
                return None
            row = conn.execute(f"SELECT {_TASK_COLUMNS} FROM tasks WHERE id = ?", (task_id,)).fetchone()
        return _task_from_row(row)

    def delete_task(self, task_id: int) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            changed = cursor.rowcount > 0
        return changed
