"""Database connection management.

Handles SQLite connection setup, PRAGMA configuration, transaction
scopes and translation of driver errors into the catalog taxonomy.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gamecatalog.core.errors import (
    CatalogError,
    ConstraintKind,
    ConstraintViolationError,
    DatabaseConnectionError,
)
from gamecatalog.utils.i18n import t

logger = logging.getLogger("gamecatalog.database")

__all__ = ["DBManager", "ExecuteResult", "translate_error"]

MEMORY_DATABASE = ":memory:"

# OperationalError messages that mean the storage itself is unusable,
# as opposed to a bad statement ("no such table", syntax errors).
_CONNECTION_MARKERS = (
    "unable to open database",
    "database is locked",
    "disk i/o error",
    "readonly database",
    "closed database",
    "not a database",
)

_CONSTRAINT_MARKERS = (
    ("UNIQUE", ConstraintKind.UNIQUE),
    ("PRIMARYKEY", ConstraintKind.UNIQUE),
    ("FOREIGN KEY", ConstraintKind.FOREIGN_KEY),
    ("FOREIGNKEY", ConstraintKind.FOREIGN_KEY),
    ("NOT NULL", ConstraintKind.NOT_NULL),
    ("NOTNULL", ConstraintKind.NOT_NULL),
    ("CHECK", ConstraintKind.CHECK),
)


@dataclass(frozen=True)
class ExecuteResult:
    """Outcome of a single write statement."""

    rowcount: int
    lastrowid: int | None


def _constraint_kind(exc: sqlite3.IntegrityError) -> ConstraintKind:
    """Classify an IntegrityError by extended error name or message text."""
    # sqlite_errorname exists on Python 3.11+, e.g. "SQLITE_CONSTRAINT_UNIQUE"
    haystacks = [getattr(exc, "sqlite_errorname", "") or "", str(exc)]
    for haystack in haystacks:
        upper = haystack.upper()
        for marker, kind in _CONSTRAINT_MARKERS:
            if marker in upper:
                return kind
    return ConstraintKind.UNKNOWN


def translate_error(exc: sqlite3.Error) -> CatalogError:
    """Map a sqlite3 exception onto the catalog error taxonomy.

    Args:
        exc: The driver exception.

    Returns:
        The catalog error carrying the original message.
    """
    message = str(exc)
    if isinstance(exc, sqlite3.IntegrityError):
        return ConstraintViolationError(message, _constraint_kind(exc))
    if isinstance(exc, sqlite3.ProgrammingError) and "closed" in message.lower():
        return DatabaseConnectionError(message)
    if isinstance(exc, (sqlite3.OperationalError, sqlite3.DatabaseError)):
        lowered = message.lower()
        if any(marker in lowered for marker in _CONNECTION_MARKERS):
            return DatabaseConnectionError(message)
    return CatalogError(message)


@contextmanager
def _translated() -> Iterator[None]:
    """Re-raise sqlite3 errors from the body as catalog errors."""
    try:
        yield
    except sqlite3.Error as exc:
        error = translate_error(exc)
        if isinstance(error, DatabaseConnectionError):
            logger.error(t("logs.db.connection_error", error=error.message))
        raise error from exc


class DBManager:
    """Connection provider wrapping a single SQLite connection.

    Configures foreign keys (needed for cascade deletes) and WAL mode.
    The connection runs in autocommit mode; multi-statement work goes
    through ``transaction()``, whose nested scopes become savepoints.

    One instance may be shared between threads: a re-entrant lock is held
    for each statement and for the whole of a transaction scope.
    """

    conn: sqlite3.Connection
    db_path: Path

    def __init__(self, db_path: Path | str, timeout: float = 5.0) -> None:
        """Open the database connection.

        Args:
            db_path: Path to SQLite database file, or ":memory:".
            timeout: Seconds to wait on a locked database.

        Raises:
            DatabaseConnectionError: If the database cannot be opened.
        """
        self.db_path = Path(db_path)
        self._lock = threading.RLock()
        self._depth = 0

        in_memory = str(db_path) == MEMORY_DATABASE
        try:
            if not in_memory:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error(t("logs.db.connection_error", error=str(exc)))
            raise DatabaseConnectionError(str(exc)) from exc

        with _translated():
            self.conn = sqlite3.connect(
                MEMORY_DATABASE if in_memory else str(self.db_path),
                timeout=timeout,
                isolation_level=None,
                check_same_thread=False,
            )
            try:
                self.conn.row_factory = sqlite3.Row
                self.conn.execute("PRAGMA foreign_keys = ON")
                self.conn.execute("PRAGMA journal_mode = WAL")
            except sqlite3.Error:
                self.conn.close()
                raise

        logger.debug(t("logs.db.connected", path=str(db_path)))

    @property
    def in_transaction(self) -> bool:
        """True while a transaction scope is open."""
        return self._depth > 0

    def execute(self, sql: str, params: Sequence[Any] = ()) -> ExecuteResult:
        """Execute a single write statement.

        Args:
            sql: Parameterized SQL.
            params: Bound parameters.

        Returns:
            Affected row count and last inserted row id.
        """
        with self._lock, _translated():
            cursor = self.conn.execute(sql, params)
            return ExecuteResult(rowcount=cursor.rowcount, lastrowid=cursor.lastrowid)

    def executemany(self, sql: str, rows: Iterable[Sequence[Any]]) -> int:
        """Execute one statement for each parameter row.

        Returns:
            Total number of affected rows.
        """
        with self._lock, _translated():
            cursor = self.conn.executemany(sql, rows)
            return max(cursor.rowcount, 0)

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        """Run a SELECT and return all rows."""
        with self._lock, _translated():
            return self.conn.execute(sql, params).fetchall()

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Row | None:
        """Run a SELECT and return the first row, or None."""
        with self._lock, _translated():
            return self.conn.execute(sql, params).fetchone()

    def executescript(self, script: str) -> None:
        """Run a multi-statement SQL script (schema bootstrap).

        Must not be called inside a transaction scope, since sqlite3
        commits any pending transaction before running a script.
        """
        with self._lock:
            if self.in_transaction:
                raise CatalogError("executescript() cannot run inside a transaction")
            try:
                with _translated():
                    self.conn.executescript(script)
            except CatalogError:
                # A script with its own BEGIN may have failed mid-way
                if self.conn.in_transaction:
                    self.conn.execute("ROLLBACK")
                raise

    @contextmanager
    def transaction(self, read_only: bool = False) -> Iterator[DBManager]:
        """Scope a unit of work: commit on success, roll back on any exception.

        The outermost scope takes the write lock up front (BEGIN IMMEDIATE),
        waiting up to ``timeout`` for other connections. A deferred WAL
        transaction that reads before it writes fails with "database is
        locked" instead of seeing another connection's newer rows.
        Nested scopes use SAVEPOINTs, so an inner failure can be recovered
        by the caller without discarding the outer work.

        Args:
            read_only: Open the outermost scope as a plain deferred read
                snapshot. Ignored for nested scopes.

        Yields:
            This manager, for convenience.
        """
        with self._lock:
            savepoint = f"sp_{self._depth}" if self._depth else None
            if savepoint:
                begin = f"SAVEPOINT {savepoint}"
            else:
                begin = "BEGIN" if read_only else "BEGIN IMMEDIATE"
            with _translated():
                self.conn.execute(begin)
            self._depth += 1
            try:
                yield self
            except BaseException:
                self._depth -= 1
                self._rollback(savepoint)
                raise
            self._depth -= 1
            self._commit(savepoint)

    def _commit(self, savepoint: str | None) -> None:
        try:
            with _translated():
                self.conn.execute(f"RELEASE {savepoint}" if savepoint else "COMMIT")
        except CatalogError:
            self._rollback(savepoint)
            raise

    def _rollback(self, savepoint: str | None) -> None:
        """Undo the current scope; a failing rollback is logged, not raised."""
        try:
            if savepoint:
                self.conn.execute(f"ROLLBACK TO {savepoint}")
                self.conn.execute(f"RELEASE {savepoint}")
            elif self.conn.in_transaction:
                self.conn.execute("ROLLBACK")
        except sqlite3.Error as exc:
            logger.warning(t("logs.db.rollback_failed", error=str(exc)))

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            self.conn.close()

    def __enter__(self) -> DBManager:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
