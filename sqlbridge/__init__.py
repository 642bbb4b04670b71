"""sqlbridge: run ORM queries through a host application's database object."""

from sqlbridge import adapters, exceptions, parameters, utils
from sqlbridge.__metadata__ import __version__
from sqlbridge.adapters.host import HostConfig, HostConnection, HostConnectionParams, QueryLogEntry
from sqlbridge.adapters.sqlite import SqliteHostDatabase
from sqlbridge.exceptions import (
    BindingConversionError,
    ExtraParameterError,
    HostDatabaseError,
    ImproperConfigurationError,
    MissingParameterError,
    ParameterError,
    QueryError,
    SQLBridgeError,
    TransactionError,
)
from sqlbridge.parameters import ParameterBindingConfig, ParameterStyle, bind_parameters, prepare_bindings
from sqlbridge.protocols import HostDatabaseProtocol

__all__ = (
    "BindingConversionError",
    "ExtraParameterError",
    "HostConfig",
    "HostConnection",
    "HostConnectionParams",
    "HostDatabaseError",
    "HostDatabaseProtocol",
    "ImproperConfigurationError",
    "MissingParameterError",
    "ParameterBindingConfig",
    "ParameterError",
    "ParameterStyle",
    "QueryError",
    "QueryLogEntry",
    "SQLBridgeError",
    "SqliteHostDatabase",
    "TransactionError",
    "__version__",
    "adapters",
    "bind_parameters",
    "exceptions",
    "parameters",
    "prepare_bindings",
    "utils",
)
