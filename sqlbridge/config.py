from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Optional, TypeVar

if TYPE_CHECKING:
    from contextlib import AbstractContextManager


__all__ = ("ConnectionT", "DatabaseConfigProtocol", "NoPoolSyncConfig")

ConnectionT = TypeVar("ConnectionT")


class DatabaseConfigProtocol(ABC, Generic[ConnectionT]):
    """Protocol defining the interface for database configurations."""

    connection_type: "ClassVar[type[Any]]"
    is_async: "ClassVar[bool]" = False
    supports_connection_pooling: "ClassVar[bool]" = False
    connection_config: "dict[str, Any]"

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(connection_config={self.connection_config!r})"

    @abstractmethod
    def create_connection(self) -> ConnectionT:
        """Create and return a database connection."""
        raise NotImplementedError

    @abstractmethod
    def provide_connection(self, *args: Any, **kwargs: Any) -> "AbstractContextManager[ConnectionT]":
        """Provide a database connection context manager."""
        raise NotImplementedError

    @abstractmethod
    def provide_session(self, *args: Any, **kwargs: Any) -> "AbstractContextManager[ConnectionT]":
        """Provide a database session context manager."""
        raise NotImplementedError

    def get_signature_namespace(self) -> "dict[str, type[Any]]":
        """Get the signature namespace for this database configuration.

        This method returns a dictionary of type names to types that should be
        registered with a framework's signature namespace to prevent serialization
        attempts on database-specific types.

        Returns:
            Dictionary mapping type names to types.
        """
        return {}


class NoPoolSyncConfig(DatabaseConfigProtocol[ConnectionT]):
    """Base class for sync configurations whose connection is owned by someone else."""

    is_async: "ClassVar[bool]" = False
    supports_connection_pooling: "ClassVar[bool]" = False

    def __init__(self, *, connection_config: "Optional[dict[str, Any]]" = None) -> None:
        self.connection_config = dict(connection_config or {})
