"""SQLite-backed persistence for user records."""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional

from .models import UserRecord


def _ensure_directory(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_database_path(env_value: Optional[str]) -> Path:
    """Resolve the on-disk path for the application database."""

    if env_value:
        return Path(env_value).expanduser().resolve(strict=False)
    base_dir = Path(__file__).resolve().parent.parent / "data"
    return (base_dir / "users.sqlite3").resolve(strict=False)


def _current_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class Database:
    """Simple wrapper around SQLite implementing the user repository contract."""

    def __init__(self, path: Path) -> None:
        _ensure_directory(path)
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create the required tables if they do not already exist."""

        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    first_name TEXT NOT NULL,
                    last_name TEXT NOT NULL,
                    email TEXT NOT NULL,
                    password TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )

    # ------------------------------------------------------------------
    # Repository contract
    # ------------------------------------------------------------------
    def find_by_id(self, user_id: Optional[int]) -> Optional[UserRecord]:
        if user_id is None:
            return None
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    def exists_by_id(self, user_id: Optional[int]) -> bool:
        if user_id is None:
            return False
        with self._connect() as conn:
            row = conn.execute("SELECT 1 FROM users WHERE id = ?", (user_id,)).fetchone()
        return row is not None

    def save(self, record: UserRecord) -> UserRecord:
        """Insert ``record`` when it has no id, otherwise upsert it by id."""

        timestamp = _current_timestamp()
        with self._connect() as conn:
            if record.id is None:
                cursor = conn.execute(
                    """
                    INSERT INTO users (first_name, last_name, email, password, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.first_name,
                        record.last_name,
                        record.email,
                        record.password,
                        timestamp,
                        timestamp,
                    ),
                )
                user_id = int(cursor.lastrowid)
            else:
                conn.execute(
                    """
                    INSERT INTO users (id, first_name, last_name, email, password, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        first_name = excluded.first_name,
                        last_name = excluded.last_name,
                        email = excluded.email,
                        password = excluded.password,
                        updated_at = excluded.updated_at
                    """,
                    (
                        record.id,
                        record.first_name,
                        record.last_name,
                        record.email,
                        record.password,
                        timestamp,
                        timestamp,
                    ),
                )
                user_id = record.id

        return UserRecord(
            id=user_id,
            first_name=record.first_name,
            last_name=record.last_name,
            email=record.email,
            password=record.password,
        )

    def delete_by_id(self, user_id: int) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM users WHERE id = ?", (user_id,))

    def find_all(self) -> List[UserRecord]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY id").fetchall()
        return [self._row_to_record(row) for row in rows]

    def count(self) -> int:
        with self._connect() as conn:
            row = conn.execute("SELECT COUNT(*) AS total FROM users").fetchone()
        return int(row["total"])

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _row_to_record(self, row: sqlite3.Row) -> UserRecord:
        return UserRecord(
            id=int(row["id"]),
            first_name=str(row["first_name"]),
            last_name=str(row["last_name"]),
            email=str(row["email"]),
            password=str(row["password"]),
        )


__all__ = ["Database", "resolve_database_path"]
