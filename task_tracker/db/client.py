"""SQLite-backed task store."""

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from ulid import ULID

from ..errors import StoreUnavailableError, TaskValidationError
from ..logging_config import get_logger
from ..models import UPDATABLE_FIELDS, TaskStatus

logger = get_logger(__name__)

STATUSES = {status.value for status in TaskStatus}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def _check_title(title: str | None) -> str:
    title = (title or "").strip()
    if not title:
        raise TaskValidationError("Task title cannot be empty")
    return title


def _check_status(status: str) -> str:
    if status not in STATUSES:
        raise TaskValidationError(
            f"Invalid status '{status}'; expected one of {', '.join(sorted(STATUSES))}"
        )
    return status


class TaskStore:
    """Task collection stored one row per task.

    Every operation opens its own connection and runs in a single
    transaction, so each task is read and written atomically.
    """

    def __init__(self, database_path: Path | str):
        self.database_path = Path(database_path)
        self._ready = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def init(self) -> None:
        """Open the database and create the schema."""
        try:
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
            conn = self._connect()
        except (OSError, sqlite3.Error) as e:
            raise StoreUnavailableError(
                f"Cannot open task database at {self.database_path}: {e}"
            ) from e
        try:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("""
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL CHECK (length(trim(title)) > 0),
                    description TEXT NOT NULL DEFAULT '',
                    status TEXT NOT NULL DEFAULT 'pending',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_tasks_status
                ON tasks(status)
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_tasks_created_at
                ON tasks(created_at)
            """)
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Cannot initialise task schema: {e}") from e
        finally:
            conn.close()
        self._ready = True
        logger.info("task store ready", database_path=str(self.database_path))

    def close(self) -> None:
        """Stop serving operations."""
        self._ready = False
        logger.info("task store closed", database_path=str(self.database_path))

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path, isolation_level=None)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _transaction(self, write: bool = False) -> Iterator[sqlite3.Connection]:
        """Run a block in one transaction, wrapping driver errors."""
        if not self._ready:
            raise StoreUnavailableError("Task store is not initialised")
        try:
            conn = self._connect()
        except sqlite3.Error as e:
            raise StoreUnavailableError(str(e)) from e
        try:
            conn.execute("BEGIN IMMEDIATE" if write else "BEGIN")
            yield conn
            conn.execute("COMMIT")
        except sqlite3.Error as e:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            logger.error("task store operation failed", error=str(e))
            raise StoreUnavailableError(str(e)) from e
        except Exception:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        finally:
            conn.close()

    @staticmethod
    def _fetch(conn: sqlite3.Connection, task_id: str) -> dict | None:
        row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        return dict(row) if row else None

    # =========================================================================
    # Operations
    # =========================================================================

    def insert(
        self,
        title: str,
        description: str = "",
        status: str = TaskStatus.PENDING.value,
    ) -> dict:
        """Create a new task and return it."""
        title = _check_title(title)
        status = _check_status(status)
        task_id = str(ULID())
        now = _now()
        with self._transaction(write=True) as conn:
            conn.execute(
                """
                INSERT INTO tasks (id, title, description, status, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (task_id, title, description or "", status, now, now),
            )
            return self._fetch(conn, task_id)

    def find_all(self, status: str | None = None) -> list[dict]:
        """Get all tasks, newest first, optionally filtered by status."""
        with self._transaction() as conn:
            if status:
                cursor = conn.execute(
                    "SELECT * FROM tasks WHERE status = ? "
                    "ORDER BY created_at DESC, rowid DESC",
                    (status,),
                )
            else:
                cursor = conn.execute(
                    "SELECT * FROM tasks ORDER BY created_at DESC, rowid DESC"
                )
            return [dict(row) for row in cursor.fetchall()]

    def find_by_id(self, task_id: str) -> dict | None:
        """Get a task by ID."""
        with self._transaction() as conn:
            return self._fetch(conn, task_id)

    def update_by_id(self, task_id: str, fields: dict) -> dict | None:
        """Apply a partial update and return the updated task.

        Returns None when the task does not exist.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise TaskValidationError(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}"
            )
        if "title" in fields:
            fields = {**fields, "title": _check_title(fields["title"])}
        if "status" in fields:
            _check_status(fields["status"])

        with self._transaction(write=True) as conn:
            if not fields:
                return self._fetch(conn, task_id)

            # Column names come from UPDATABLE_FIELDS only.
            columns = sorted(fields)
            updates = [f"{column} = ?" for column in columns]
            params = [fields[column] for column in columns]

            updates.append("updated_at = ?")
            params.append(_now())
            params.append(task_id)

            cursor = conn.execute(
                f"UPDATE tasks SET {', '.join(updates)} WHERE id = ?",
                params,
            )
            if cursor.rowcount == 0:
                return None
            return self._fetch(conn, task_id)

    def delete_by_id(self, task_id: str) -> dict | None:
        """Delete a task and return it, or None if it did not exist."""
        with self._transaction(write=True) as conn:
            task = self._fetch(conn, task_id)
            if task is None:
                return None
            conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            return task
