"""SQLite host helpers."""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ("collect_rows", "escape_literal", "resolve_rowcount")


def escape_literal(value: str) -> str:
    """Escape a string for use between single quotes in SQLite.

    SQLite has no backslash escapes; a quote is escaped by doubling it.
    """
    return value.replace("'", "''")


def collect_rows(fetched_data: "list[Any]", description: "Sequence[Any] | None") -> "list[dict[str, Any]]":
    """Collect SQLite result rows as dictionaries keyed by column name.

    Args:
        fetched_data: Raw rows from cursor.fetchall()
        description: Cursor description (tuple of tuples)

    Returns:
        One dict per row.
    """
    if not description:
        return []

    column_names = [col[0] for col in description]
    return [dict(zip(column_names, row)) for row in fetched_data]


def resolve_rowcount(cursor: Any, changes: int) -> Optional[int]:
    """Resolve the rows a statement without a result set modified.

    :mod:`sqlite3` leaves ``rowcount`` at -1 for statements it does not
    recognise as DML, such as writes behind a ``WITH`` clause, so the change
    counter delta is used as a fallback.

    Args:
        cursor: SQLite cursor with optional rowcount metadata.
        changes: ``Connection.total_changes`` delta across the statement.

    Returns:
        Rows modified, or None when the statement modified no rows and is not DML.
    """
    rowcount = getattr(cursor, "rowcount", -1)
    if isinstance(rowcount, int) and rowcount >= 0:
        return rowcount
    if changes > 0:
        return changes
    return None
