"""JSON encoding backed by msgspec."""

from typing import Any, Literal, Union, overload

import msgspec

from sqlbridge.exceptions import SerializationError

__all__ = ("encode_json",)

_encoder = msgspec.json.Encoder()


@overload
def encode_json(data: Any, *, as_bytes: Literal[False] = ...) -> str: ...


@overload
def encode_json(data: Any, *, as_bytes: Literal[True]) -> bytes: ...


def encode_json(data: Any, *, as_bytes: bool = False) -> Union[str, bytes]:
    try:
        encoded = _encoder.encode(data)
    except (TypeError, msgspec.EncodeError) as e:
        msg = f"Could not encode {type(data).__name__} as JSON: {e}"
        raise SerializationError(msg) from e
    if as_bytes:
        return encoded
    return encoded.decode("utf-8")

