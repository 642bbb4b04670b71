"""Binding emulation for hosts that only accept complete SQL strings.

The ORM hands us ``?`` placeholders plus a list of bindings and expects a
prepared statement. The host cannot bind parameters, so the values are
rendered as SQL literals and spliced into the statement text.

This is string templating, not parameter binding. There is no type safety
and no separation between code and data: the only thing standing between a
binding and SQL injection is the escape function applied to string values.
When the host ships its own ``escape`` it must be used. :func:`escape_string`
is a fallback that mirrors MySQL's ``real_escape_string`` table and knows
nothing about the connection character set, so multi-byte encodings where a
backslash can appear inside a character (GBK, Big5, SJIS) are not safe.
"""

import datetime
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Final, Union

from sqlbridge.exceptions import (
    BindingConversionError,
    ExtraParameterError,
    MissingParameterError,
    SerializationError,
)
from sqlbridge.utils.serializers import to_json
from sqlbridge.utils.type_guards import (
    has_custom_str,
    is_json_container,
    supports_json,
    supports_serialize,
)

__all__ = (
    "DEFAULT_DATE_FORMAT",
    "DEFAULT_QUOTE_CHAR",
    "ParameterBindingConfig",
    "ParameterStyle",
    "bind_parameters",
    "coerce_binding",
    "compile_template",
    "count_placeholders",
    "escape_string",
    "prepare_bindings",
    "render_literals",
    "to_sql_literal",
)

DEFAULT_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
DEFAULT_QUOTE_CHAR: Final[str] = "`"
PLACEHOLDER: Final[str] = "?"

_SCALAR_TYPES: Final = (str, int, float, bytes, bytearray)

# MySQL real_escape_string table
_ESCAPE_TABLE: Final = str.maketrans({
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\x00": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "\x1a": "\\Z",
})


class ParameterStyle(str, Enum):
    """Placeholder styles seen along the binding pipeline."""

    QMARK = "qmark"
    POSITIONAL_PYFORMAT = "pyformat_positional"
    STATIC = "static"

    def __str__(self) -> str:
        return self.value


def escape_string(value: str) -> str:
    """Escape a string for use between single quotes in MySQL-flavoured SQL.

    Args:
        value: Raw string.

    Returns:
        The escaped string, without surrounding quotes.
    """
    return value.translate(_ESCAPE_TABLE)


@dataclass(frozen=True)
class ParameterBindingConfig:
    """How bindings are coerced and rendered for one connection.

    Attributes:
        date_format: ``strftime`` format applied to date and datetime bindings.
        quote_char: Identifier quote that replaces ANSI double quotes.
        escape: String escaping function, normally the host's own.
    """

    date_format: str = DEFAULT_DATE_FORMAT
    quote_char: str = DEFAULT_QUOTE_CHAR
    escape: "Callable[[str], str]" = field(default=escape_string)


def coerce_binding(value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> Any:
    """Coerce a single binding to something :func:`to_sql_literal` can render.

    Args:
        value: Binding value supplied by the ORM.
        date_format: ``strftime`` format for date and datetime values.

    Raises:
        BindingConversionError: The value has no string, serialized or JSON form,
            or is a non-finite float.

    Returns:
        ``None``, a number, a string or bytes.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Enum):
        return coerce_binding(value.value, date_format)
    if isinstance(value, float) and not math.isfinite(value):
        raise BindingConversionError(value)
    if value is None or isinstance(value, _SCALAR_TYPES):
        return value
    if isinstance(value, datetime.date):
        return value.strftime(date_format)
    if has_custom_str(value):
        return str(value)
    if supports_serialize(value):
        return value.serialize()
    if supports_json(value):
        return _encode_binding(value, value.__json__())
    if is_json_container(value):
        return _encode_binding(value, value)
    raise BindingConversionError(value)


def _encode_binding(value: Any, payload: Any) -> str:
    try:
        return to_json(payload)
    except SerializationError as e:
        raise BindingConversionError(value) from e


def prepare_bindings(
    bindings: "Union[Mapping[Any, Any], list[Any], tuple[Any, ...], None]", date_format: str = DEFAULT_DATE_FORMAT
) -> "Union[dict[Any, Any], list[Any]]":
    """Coerce every binding, keeping mapping keys.

    Args:
        bindings: Positional or keyed bindings.
        date_format: ``strftime`` format for date and datetime values.

    Returns:
        A dict for mapping input, otherwise a list.
    """
    if not bindings:
        return {} if isinstance(bindings, Mapping) else []
    if isinstance(bindings, Mapping):
        return {key: coerce_binding(value, date_format) for key, value in bindings.items()}
    return [coerce_binding(value, date_format) for value in bindings]


def to_sql_literal(value: Any, escape: "Callable[[str], str]" = escape_string) -> str:
    """Render an already coerced binding as SQL text."""
    if value is None:
        return "null"
    if isinstance(value, str):
        return f"'{escape(value)}'"
    if isinstance(value, (bytes, bytearray)):
        return f"X'{bytes(value).hex()}'"
    return str(value)


def render_literals(
    bindings: "Union[Mapping[Any, Any], list[Any], tuple[Any, ...]]", escape: "Callable[[str], str]" = escape_string
) -> "list[str]":
    """Render coerced bindings to literals in placeholder order.

    Mappings are consumed in insertion order.
    """
    values = bindings.values() if isinstance(bindings, Mapping) else bindings
    return [to_sql_literal(value, escape) for value in values]


def count_placeholders(sql: str) -> int:
    return sql.count(PLACEHOLDER)


def compile_template(sql: str, quote_char: str = DEFAULT_QUOTE_CHAR) -> str:
    """Compile ORM SQL into a printf-style template.

    Double quotes become ``quote_char``, literal ``%`` is doubled so it
    survives interpolation, and each ``?`` becomes ``%s``.

    Args:
        sql: SQL with ``?`` placeholders.
        quote_char: Identifier quote used by the host.

    Returns:
        The template string.
    """
    return sql.replace('"', quote_char).replace("%", "%%").replace(PLACEHOLDER, "%s")


def bind_parameters(
    sql: str,
    bindings: "Union[Mapping[Any, Any], list[Any], tuple[Any, ...], None]" = None,
    config: "ParameterBindingConfig | None" = None,
) -> str:
    """Produce the final SQL the host will run.

    Args:
        sql: SQL with ``?`` placeholders and ANSI quoted identifiers.
        bindings: Values for the placeholders, in order.
        config: Coercion and rendering settings.

    Raises:
        MissingParameterError: Fewer bindings than placeholders.
        ExtraParameterError: More bindings than placeholders.
        BindingConversionError: A binding could not be converted to a scalar.

    Returns:
        SQL with every placeholder replaced by a literal.
    """
    config = config or ParameterBindingConfig()
    prepared = prepare_bindings(bindings, config.date_format)
    if not prepared:
        return sql.replace('"', config.quote_char)

    literals = render_literals(prepared, config.escape)
    expected = count_placeholders(sql)
    if len(literals) < expected:
        msg = f"Expected {expected} bindings, got {len(literals)}"
        raise MissingParameterError(msg, sql)
    if len(literals) > expected:
        msg = f"Expected {expected} bindings, got {len(literals)}"
        raise ExtraParameterError(msg, sql)

    return compile_template(sql, config.quote_char) % tuple(literals)
