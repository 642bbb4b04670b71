"""Runtime-checkable protocols for the host database and binding values.

The host protocol describes the object a host application hands us: it only
runs complete SQL strings and reports failure through a ``False`` return value
plus a last-error string instead of raising.
"""

from typing import Any, Optional, Protocol, Union, runtime_checkable

__all__ = (
    "HasDatabaseName",
    "HasEscape",
    "HostDatabaseProtocol",
    "SupportsJson",
    "SupportsSerialize",
)


@runtime_checkable
class HostDatabaseProtocol(Protocol):
    """Protocol for the host application's database access object."""

    last_error: str
    insert_id: int
    prefix: str

    def query(self, sql: str) -> Union[int, bool]:
        """Run a statement, returning rows affected, ``True`` or ``False`` on failure."""
        ...

    def get_results(self, sql: str) -> "Optional[list[Any]]":
        """Run a select and return every row."""
        ...

    def get_row(self, sql: str) -> Any:
        """Run a select and return the first row or ``None``."""
        ...

    def get_var(self, sql: str) -> Any:
        """Run a select and return the first column of the first row."""
        ...

    def suppress_errors(self, suppress: bool = True) -> bool:
        """Toggle host error reporting and return the previous setting."""
        ...


@runtime_checkable
class HasEscape(Protocol):
    """Host objects that ship their own SQL string escaping."""

    def escape(self, value: str) -> str:
        """Escape a string for inclusion between single quotes."""
        ...


@runtime_checkable
class HasDatabaseName(Protocol):
    """Host objects exposing the name of the database they are bound to."""

    dbname: str


@runtime_checkable
class SupportsSerialize(Protocol):
    """Objects that can serialize themselves to a string."""

    def serialize(self) -> str: ...


@runtime_checkable
class SupportsJson(Protocol):
    """Objects that expose JSON-encodable data through ``__json__``."""

    def __json__(self) -> Any: ...
