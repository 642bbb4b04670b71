"""Type guard functions for runtime type checking in sqlbridge.

This module provides type-safe runtime checks that help the type checker
understand type narrowing, replacing defensive hasattr() and duck typing patterns.
"""

from dataclasses import is_dataclass
from typing import Any

import msgspec
from typing_extensions import TypeGuard

from sqlbridge.protocols import HasDatabaseName, HasEscape, HostDatabaseProtocol, SupportsJson, SupportsSerialize

__all__ = (
    "has_custom_str",
    "has_dbname",
    "has_escape",
    "is_host_database",
    "is_json_container",
    "supports_json",
    "supports_serialize",
)


def is_host_database(obj: Any) -> "TypeGuard[HostDatabaseProtocol]":
    """Check if an object implements the host database protocol.

    Args:
        obj: The object to check

    Returns:
        True if the object exposes the host query surface, False otherwise
    """
    return isinstance(obj, HostDatabaseProtocol)


def has_escape(obj: Any) -> "TypeGuard[HasEscape]":
    """Check if a host object provides its own ``escape`` function."""
    return isinstance(obj, HasEscape) and callable(obj.escape)


def has_dbname(obj: Any) -> "TypeGuard[HasDatabaseName]":
    """Check if a host object exposes ``dbname``."""
    return isinstance(obj, HasDatabaseName)


def has_custom_str(obj: Any) -> bool:
    """Check if the object's type defines its own ``__str__``.

    Every Python object can be passed to :func:`str`, so only types that
    override :meth:`object.__str__` count as having a string conversion.

    Args:
        obj: The object to check

    Returns:
        True if ``type(obj).__str__`` is not inherited from ``object``
    """
    return type(obj).__str__ is not object.__str__


def supports_serialize(obj: Any) -> "TypeGuard[SupportsSerialize]":
    return isinstance(obj, SupportsSerialize)


def supports_json(obj: Any) -> "TypeGuard[SupportsJson]":
    return isinstance(obj, SupportsJson)


def is_json_container(obj: Any) -> bool:
    """Check if msgspec can encode the object as a JSON document.

    Args:
        obj: The object to check

    Returns:
        True for dicts, lists, tuples, sets, dataclass instances and msgspec structs
    """
    if isinstance(obj, (dict, list, tuple, set, frozenset, msgspec.Struct)):
        return True
    return is_dataclass(obj) and not isinstance(obj, type)
