"""ORM connection adapter over a host application's database object."""

import logging
import time
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional, Union

from mypy_extensions import mypyc_attr

from sqlbridge.exceptions import (
    HostDatabaseError,
    ImproperConfigurationError,
    QueryError,
    TransactionError,
    wrap_host_exceptions,
)
from sqlbridge.parameters import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_QUOTE_CHAR,
    ParameterBindingConfig,
    ParameterStyle,
    bind_parameters,
    escape_string,
    prepare_bindings,
)
from sqlbridge.protocols import HostDatabaseProtocol
from sqlbridge.utils.logging import get_logger, log_query
from sqlbridge.utils.type_guards import has_escape, is_host_database

__all__ = ("Bindings", "HostConnection", "QueryLogEntry")

logger = get_logger("adapters.host")

Bindings = Union[Mapping[Any, Any], list[Any], tuple[Any, ...]]

DEFAULT_CONNECTION_NAME = "host"
DEFAULT_BEGIN_STATEMENT = "START TRANSACTION"


@dataclass(frozen=True)
class QueryLogEntry:
    """One executed (or pretended) query."""

    sql: str
    bindings: Any
    time_ms: float


@mypyc_attr(allow_interpreted_subclasses=True)
class HostConnection:
    """Connection the ORM talks to, backed by a host database object.

    Every query is rendered to literal SQL with :func:`~sqlbridge.parameters.bind_parameters`
    and submitted through the host's string-only API. Host failures, signalled
    by a ``False`` return value or a non-empty ``last_error``, are raised as
    :class:`~sqlbridge.exceptions.QueryError`.

    Not safe for concurrent use: the host's last-error field is shared state.
    """

    parameter_style: "ClassVar[ParameterStyle]" = ParameterStyle.QMARK

    def __init__(
        self,
        host: HostDatabaseProtocol,
        database: str = "",
        table_prefix: str = "",
        config: "Optional[Mapping[str, Any]]" = None,
    ) -> None:
        if not is_host_database(host):
            msg = f"{type(host).__name__} does not implement the host database protocol"
            raise ImproperConfigurationError(msg)
        self._host = host
        self._database = database
        self._table_prefix = table_prefix
        self._config: dict[str, Any] = dict(config or {})
        self._binding_config = ParameterBindingConfig(
            date_format=self._config.get("date_format", DEFAULT_DATE_FORMAT),
            quote_char=self._config.get("quote_char", DEFAULT_QUOTE_CHAR),
            escape=host.escape if has_escape(host) else escape_string,
        )
        self._begin_statement: str = self._config.get("begin_statement", DEFAULT_BEGIN_STATEMENT)
        self._transactions = 0
        self._logging_queries = bool(self._config.get("log_queries", False))
        self._query_log: list[QueryLogEntry] = []
        self._pretend_log: Optional[list[QueryLogEntry]] = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, database={self._database!r}, "
            f"table_prefix={self._table_prefix!r})"
        )

    @property
    def host(self) -> HostDatabaseProtocol:
        return self._host

    @property
    def database(self) -> str:
        return self._database

    @property
    def table_prefix(self) -> str:
        return self._table_prefix

    @property
    def name(self) -> str:
        return str(self._config.get("name", DEFAULT_CONNECTION_NAME))

    @property
    def config(self) -> "dict[str, Any]":
        return dict(self._config)

    @property
    def binding_config(self) -> ParameterBindingConfig:
        return self._binding_config

    # -- Queries --

    def select(self, query: str, bindings: "Bindings" = (), use_read_connection: bool = True) -> "list[Any]":
        """Run a select statement and return every row.

        Args:
            query: SQL with ``?`` placeholders.
            bindings: Placeholder values.
            use_read_connection: Accepted for ORM compatibility; the host has a single connection.

        Raises:
            QueryError: The host reported a failure.

        Returns:
            Rows as produced by the host, or an empty list.
        """
        sql = self._bind(query, bindings)
        rows = self._run(sql, bindings, self._host.get_results, pretend_result=[])
        return [] if rows is None else rows

    def select_one(self, query: str, bindings: "Bindings" = (), use_read_connection: bool = True) -> Any:
        """Run a select statement and return the first row, or ``None``."""
        sql = self._bind(query, bindings)
        return self._run(sql, bindings, self._host.get_row, pretend_result=None)

    def select_value(self, query: str, bindings: "Bindings" = ()) -> Any:
        """Run a select statement and return the first column of the first row."""
        sql = self._bind(query, bindings)
        return self._run(sql, bindings, self._host.get_var, pretend_result=None)

    def insert(self, query: str, bindings: "Bindings" = ()) -> bool:
        return self.statement(query, bindings)

    def update(self, query: str, bindings: "Bindings" = ()) -> int:
        return self.affecting_statement(query, bindings)

    def delete(self, query: str, bindings: "Bindings" = ()) -> int:
        return self.affecting_statement(query, bindings)

    def statement(self, query: str, bindings: "Bindings" = ()) -> bool:
        """Execute a statement and return ``True`` once the host accepted it.

        Raises:
            QueryError: The host reported a failure.
        """
        sql = self._bind(query, bindings)
        self._run(sql, bindings, self._host.query, pretend_result=True)
        return True

    def affecting_statement(self, query: str, bindings: "Bindings" = ()) -> int:
        """Execute a statement and return the number of rows affected.

        Raises:
            QueryError: The host reported a failure.
        """
        sql = self._bind(query, bindings)
        return int(self._run(sql, bindings, self._host.query, pretend_result=0))

    def unprepared(self, query: str) -> bool:
        """Run raw SQL exactly as given, without binding or quote rewriting.

        Raises:
            QueryError: The host reported a failure.
        """
        self._run(query, [], self._host.query, pretend_result=True)
        return True

    def prepare_bindings(self, bindings: "Bindings") -> "Union[dict[Any, Any], list[Any]]":
        """Coerce bindings to values the host can receive as SQL literals.

        Raises:
            BindingConversionError: A value has no scalar representation.
        """
        return prepare_bindings(bindings, self._binding_config.date_format)

    def last_insert_id(self, sequence: "Optional[str]" = None) -> Any:
        """Return the id the host recorded for the most recent insert."""
        return self._host.insert_id

    def get_raw_connection(self) -> "HostConnection":
        """Return the low-level handle the ORM asks for.

        The host exposes no statement-level handle, so the adapter stands in for it.
        """
        return self

    # -- Transactions --

    @property
    def transaction_level(self) -> int:
        return self._transactions

    def begin(self) -> None:
        """Open a transaction, or a savepoint when one is already open."""
        if self._transactions == 0:
            self.unprepared(self._begin_statement)
        else:
            self.unprepared(f"SAVEPOINT trans{self._transactions + 1}")
        self._transactions += 1

    def commit(self) -> None:
        if self._transactions == 0:
            msg = "No active transaction to commit"
            raise TransactionError(msg)
        try:
            if self._transactions == 1:
                self.unprepared("COMMIT")
            else:
                self.unprepared(f"RELEASE SAVEPOINT trans{self._transactions}")
        finally:
            self._transactions -= 1

    def rollback(self) -> None:
        if self._transactions == 0:
            msg = "No active transaction to roll back"
            raise TransactionError(msg)
        if self._transactions == 1:
            self.unprepared("ROLLBACK")
        else:
            self.unprepared(f"ROLLBACK TO SAVEPOINT trans{self._transactions}")
        self._transactions -= 1

    @contextmanager
    def transaction(self) -> "Generator[HostConnection, None, None]":
        """Run the block in a transaction, rolling back if it raises."""
        self.begin()
        try:
            yield self
        except BaseException:
            self.rollback()
            raise
        self.commit()

    # -- Query log and pretend mode --

    @property
    def logging_queries(self) -> bool:
        return self._logging_queries

    def enable_query_log(self) -> None:
        self._logging_queries = True

    def disable_query_log(self) -> None:
        self._logging_queries = False

    def get_query_log(self) -> "list[QueryLogEntry]":
        return list(self._query_log)

    def flush_query_log(self) -> None:
        self._query_log.clear()

    @contextmanager
    def pretend(self) -> "Generator[list[QueryLogEntry], None, None]":
        """Collect the queries the block would run without sending them to the host.

        Selects return no rows, statements succeed and affecting statements report zero rows.
        """
        previous = self._pretend_log
        self._pretend_log = []
        try:
            yield self._pretend_log
        finally:
            self._pretend_log = previous

    # -- Internals --

    def _bind(self, query: str, bindings: "Bindings") -> str:
        return bind_parameters(query, bindings, self._binding_config)

    def _run(self, sql: str, bindings: Any, call: "Callable[[str], Any]", pretend_result: Any) -> Any:
        started = time.perf_counter()
        if self._pretend_log is not None:
            self._pretend_log.append(QueryLogEntry(sql, bindings, 0.0))
            return pretend_result

        previous = self._host.suppress_errors(True)
        try:
            with wrap_host_exceptions(sql, bindings):
                result = call(sql)
        finally:
            self._host.suppress_errors(previous)

        error = self._host.last_error
        if result is False or error:
            log_query(
                logger,
                logging.DEBUG,
                "Host query failed",
                sql=sql,
                bindings_count=len(bindings or ()),
                host_error=error,
            )
            raise QueryError(sql, bindings, host_error=error) from HostDatabaseError(error)

        self._log_query(sql, bindings, started)
        return result

    def _log_query(self, sql: str, bindings: Any, started: float) -> None:
        time_ms = round((time.perf_counter() - started) * 1000, 3)
        log_query(logger, logging.DEBUG, "Executed query", sql=sql, bindings_count=len(bindings or ()), time_ms=time_ms)
        if self._logging_queries:
            self._query_log.append(QueryLogEntry(sql, bindings, time_ms))
