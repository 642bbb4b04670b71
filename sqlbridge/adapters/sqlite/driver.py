"""SQLite-backed host database object.

Behaves like a typical CMS database object: it only accepts complete SQL
strings, never raises for SQL errors, and reports failures through a
``False``/``None`` return value plus ``last_error``.
"""

import logging
import sqlite3
from typing import Any, Optional, Union

from sqlbridge.adapters.sqlite.core import collect_rows, escape_literal, resolve_rowcount
from sqlbridge.utils.logging import get_logger, log_query

__all__ = ("SqliteHostDatabase",)

logger = get_logger("adapters.sqlite")


class SqliteHostDatabase:
    """Host database object over a :mod:`sqlite3` connection.

    The connection runs in autocommit mode (``isolation_level=None``) so that
    explicit ``BEGIN``/``COMMIT`` statements sent as plain SQL control transactions.
    """

    def __init__(self, database: str = ":memory:", prefix: str = "", **connect_kwargs: Any) -> None:
        connect_kwargs.setdefault("isolation_level", None)
        self.connection = sqlite3.connect(database, **connect_kwargs)
        self.dbname = "main"
        self.prefix = prefix
        self.last_error = ""
        self.last_query = ""
        self.insert_id = 0
        self.rows_affected = 0
        self._suppress_errors = False

    def suppress_errors(self, suppress: bool = True) -> bool:
        """Toggle failure logging and return the previous setting."""
        previous = self._suppress_errors
        self._suppress_errors = suppress
        return previous

    def escape(self, value: str) -> str:
        return escape_literal(value)

    def query(self, sql: str) -> Union[int, bool]:
        """Run a statement.

        Returns:
            Rows affected for writes, rows returned for selects, ``True`` for
            anything else and ``False`` on failure.
        """
        changes_before = self.connection.total_changes
        cursor = self._execute(sql)
        if cursor is None:
            return False
        if cursor.description is not None:
            return len(cursor.fetchall())
        rows_affected = resolve_rowcount(cursor, self.connection.total_changes - changes_before)
        if rows_affected is None:
            return True
        self.rows_affected = rows_affected
        if cursor.lastrowid:
            self.insert_id = cursor.lastrowid
        return rows_affected

    def get_results(self, sql: str) -> "Optional[list[dict[str, Any]]]":
        cursor = self._execute(sql)
        if cursor is None:
            return None
        return collect_rows(cursor.fetchall(), cursor.description)

    def get_row(self, sql: str) -> "Optional[dict[str, Any]]":
        rows = self.get_results(sql)
        if not rows:
            return None
        return rows[0]

    def get_var(self, sql: str) -> Any:
        row = self.get_row(sql)
        if row is None:
            return None
        return next(iter(row.values()), None)

    def close(self) -> None:
        self.connection.close()

    def _execute(self, sql: str) -> "Optional[sqlite3.Cursor]":
        self.last_error = ""
        self.last_query = sql
        try:
            return self.connection.execute(sql)
        except sqlite3.Error as e:
            self.last_error = str(e)
            if not self._suppress_errors:
                log_query(logger, logging.WARNING, "SQLite host query failed", sql=sql, host_error=self.last_error)
            return None
