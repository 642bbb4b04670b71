from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, Optional

__all__ = (
    "BindingConversionError",
    "ExtraParameterError",
    "HostDatabaseError",
    "ImproperConfigurationError",
    "MissingParameterError",
    "ParameterError",
    "QueryError",
    "SQLBridgeError",
    "SerializationError",
    "TransactionError",
    "wrap_host_exceptions",
)


class SQLBridgeError(Exception):
    """Base exception class from which all sqlbridge exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLBridgeError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class HostDatabaseError(SQLBridgeError):
    """Error text reported by the host database object."""

    def __init__(self, message: Optional[str] = None) -> None:
        if not message:
            message = "Host database call failed without an error message."
        super().__init__(message)


class QueryError(SQLBridgeError):
    """A query submitted to the host failed.

    Carries the final SQL text that reached the host and the bindings the
    caller supplied. The host's error is chained as ``__cause__``.
    """

    sql: str
    bindings: Any
    host_error: str

    def __init__(self, sql: str, bindings: Any = None, host_error: str = "") -> None:
        self.sql = sql
        self.bindings = [] if bindings is None else bindings
        self.host_error = host_error
        message = host_error or "Query failed"
        super().__init__(detail=f"{message} (SQL: {sql})")


class ParameterError(SQLBridgeError):
    """Base class for parameter-related errors."""

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        """Initialize with optional SQL context."""
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


class MissingParameterError(ParameterError):
    """Raised when there are fewer bindings than placeholders."""


class ExtraParameterError(ParameterError):
    """Raised when there are more bindings than placeholders."""


class BindingConversionError(ParameterError, TypeError):
    """A binding value has no scalar representation."""

    value_type: type

    def __init__(self, value: Any, sql: Optional[str] = None) -> None:
        self.value_type = type(value)
        super().__init__(f"Could not convert {self.value_type.__name__} to scalar", sql)


class TransactionError(SQLBridgeError):
    """Transaction control was used out of order."""


class ImproperConfigurationError(SQLBridgeError):
    """Improper Configuration error.

    Raised when the object handed to the adapter does not look like a host database.
    """


class SerializationError(SQLBridgeError):
    """Encoding or decoding of an object failed."""


@contextmanager
def wrap_host_exceptions(sql: str, bindings: Any = None) -> Generator[None, None, None]:
    """Convert anything the host raises into a :class:`QueryError`."""
    try:
        yield
    except SQLBridgeError:
        raise
    except Exception as exc:
        raise QueryError(sql, bindings, host_error=str(exc)) from exc
