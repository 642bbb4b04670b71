"""JSON serialization utilities for sqlbridge.

Wraps the core serialization module for JSON-capable binding values.
"""

from typing import Any, Literal, Union, overload

from sqlbridge._serialization import encode_json

__all__ = ("to_json",)


@overload
def to_json(data: Any, *, as_bytes: Literal[False] = ...) -> str: ...


@overload
def to_json(data: Any, *, as_bytes: Literal[True]) -> bytes: ...


def to_json(data: Any, *, as_bytes: bool = False) -> Union[str, bytes]:
    """Encode data to JSON string or bytes.

    Args:
        data: Data to encode.
        as_bytes: Whether to return bytes instead of string.

    Returns:
        JSON string or bytes representation based on as_bytes parameter.

    Raises:
        SerializationError: When the data cannot be encoded.
    """
    if as_bytes:
        return encode_json(data, as_bytes=True)
    return encode_json(data, as_bytes=False)
