"""Host database configuration with an explicitly injected host object."""

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, ClassVar, Optional, TypedDict, Union

from typing_extensions import NotRequired

from sqlbridge.adapters.host.driver import HostConnection, QueryLogEntry
from sqlbridge.config import NoPoolSyncConfig
from sqlbridge.exceptions import ImproperConfigurationError
from sqlbridge.protocols import HostDatabaseProtocol
from sqlbridge.utils.logging import get_logger
from sqlbridge.utils.type_guards import has_dbname, is_host_database

if TYPE_CHECKING:
    from collections.abc import Generator

logger = get_logger("adapters.host.config")

__all__ = ("HostConfig", "HostConnectionParams")


class HostConnectionParams(TypedDict, total=False):
    """Host connection parameters."""

    name: NotRequired[str]
    date_format: NotRequired[str]
    quote_char: NotRequired[str]
    begin_statement: NotRequired[str]
    log_queries: NotRequired[bool]


class HostConfig(NoPoolSyncConfig[HostConnection]):
    """Wires one host database object to one :class:`HostConnection`.

    Create it once at application startup and hand the connection to the ORM.
    """

    connection_type: "ClassVar[type[HostConnection]]" = HostConnection

    def __init__(
        self,
        host: HostDatabaseProtocol,
        *,
        database: "Optional[str]" = None,
        table_prefix: "Optional[str]" = None,
        connection_config: "Union[HostConnectionParams, dict[str, Any], None]" = None,
    ) -> None:
        """Initialize host configuration.

        Args:
            host: The host application's database object.
            database: Database name, defaults to the host's ``dbname`` when it has one.
            table_prefix: Table prefix, defaults to the host's ``prefix``.
            connection_config: Binding and logging options for the connection.
        """
        if not is_host_database(host):
            msg = f"{type(host).__name__} does not implement the host database protocol"
            raise ImproperConfigurationError(msg)
        if database is None:
            database = host.dbname if has_dbname(host) else ""
        if table_prefix is None:
            table_prefix = host.prefix

        super().__init__(connection_config=dict(connection_config or {}))
        self.host = host
        self.database = database
        self.table_prefix = table_prefix
        self._connection: Optional[HostConnection] = None

    def create_connection(self) -> HostConnection:
        """Return the connection bound to this configuration, creating it on first use.

        Returns:
            HostConnection: The same instance on every call.
        """
        if self._connection is None:
            self._connection = self.connection_type(
                self.host, database=self.database, table_prefix=self.table_prefix, config=self.connection_config
            )
            logger.debug("Created host connection %r for %s", self._connection.name, type(self.host).__name__)
        return self._connection

    @contextmanager
    def provide_connection(self, *args: Any, **kwargs: Any) -> "Generator[HostConnection, None, None]":
        """Provide the host connection as a context manager."""
        yield self.create_connection()

    @contextmanager
    def provide_session(self, *args: Any, **kwargs: Any) -> "Generator[HostConnection, None, None]":
        """Provide a session; the connection doubles as the driver."""
        with self.provide_connection(*args, **kwargs) as connection:
            yield connection

    def get_signature_namespace(self) -> "dict[str, type[Any]]":
        """Get the signature namespace for host types.

        Returns:
            Dictionary mapping type names to types.
        """
        namespace = super().get_signature_namespace()
        namespace.update({
            "HostConnection": HostConnection,
            "HostDatabaseProtocol": HostDatabaseProtocol,
            "QueryLogEntry": QueryLogEntry,
        })
        return namespace
