import pytest

from sqlbridge.exceptions import (
    BindingConversionError,
    ExtraParameterError,
    HostDatabaseError,
    ImproperConfigurationError,
    MissingParameterError,
    ParameterError,
    QueryError,
    SerializationError,
    SQLBridgeError,
    TransactionError,
    wrap_host_exceptions,
)


def test_exception_hierarchy():
    """Test exception classes inherit correctly."""
    assert issubclass(MissingParameterError, ParameterError)
    assert issubclass(ExtraParameterError, ParameterError)
    assert issubclass(BindingConversionError, ParameterError)
    assert issubclass(BindingConversionError, TypeError)

    for exc_type in (QueryError, HostDatabaseError, ParameterError, TransactionError, ImproperConfigurationError):
        assert issubclass(exc_type, SQLBridgeError)
    assert issubclass(SerializationError, SQLBridgeError)


def test_exception_instantiation():
    """Test exceptions can be instantiated with messages."""
    exc = TransactionError("No active transaction")
    assert str(exc) == "No active transaction"
    assert repr(exc) == "TransactionError - No active transaction"
    assert isinstance(exc, Exception)


def test_query_error_carries_context():
    exc = QueryError("SELECT * FROM `t` WHERE id = 5", [5], host_error="Unknown column 'id'")

    assert exc.sql == "SELECT * FROM `t` WHERE id = 5"
    assert exc.bindings == [5]
    assert exc.host_error == "Unknown column 'id'"
    assert str(exc) == "Unknown column 'id' (SQL: SELECT * FROM `t` WHERE id = 5)"


def test_query_error_defaults():
    exc = QueryError("SELECT 1")

    assert exc.bindings == []
    assert str(exc) == "Query failed (SQL: SELECT 1)"


def test_host_database_error_default_message():
    assert str(HostDatabaseError()) == "Host database call failed without an error message."
    assert str(HostDatabaseError("gone away")) == "gone away"


def test_parameter_error_includes_sql():
    exc = MissingParameterError("Expected 2 bindings, got 1", "SELECT ?, ?")

    assert exc.sql == "SELECT ?, ?"
    assert str(exc) == "Expected 2 bindings, got 1\nSQL: SELECT ?, ?"


def test_binding_conversion_error_names_type():
    exc = BindingConversionError(object())

    assert exc.value_type is object
    assert str(exc) == "Could not convert object to scalar"


def test_exception_chaining():
    """Test exceptions support chaining with 'from'."""
    try:
        try:
            raise HostDatabaseError("Lost connection")
        except HostDatabaseError as e:
            raise QueryError("SELECT 1", [], host_error=str(e)) from e
    except QueryError as exc:
        assert exc.__cause__ is not None
        assert isinstance(exc.__cause__, HostDatabaseError)


def test_wrap_host_exceptions():
    with pytest.raises(QueryError, match="disk full") as exc_info:
        with wrap_host_exceptions("INSERT INTO t VALUES (1)", [1]):
            raise OSError("disk full")

    assert exc_info.value.sql == "INSERT INTO t VALUES (1)"
    assert exc_info.value.bindings == [1]
    assert isinstance(exc_info.value.__cause__, OSError)


def test_wrap_host_exceptions_passes_library_errors_through():
    with pytest.raises(TransactionError):
        with wrap_host_exceptions("COMMIT"):
            raise TransactionError("No active transaction")
