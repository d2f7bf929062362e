import pytest

from multidb.adapters import ConnectionHandle, FileConnectionFactory, ValidationResult
from multidb.core import BackendKind, ConnectionFailedError, InvalidStateError
from multidb.dialects import SQLiteDialect


class FakeConnection:
    def __init__(self):
        self.closed = False
        self.calls = []

    def execute(self, sql, params=None):
        self.calls.append((sql, params))
        return self

    def close(self):
        self.closed = True


def _handle(opener, on_open=None):
    return ConnectionHandle(
        kind=BackendKind.SQLITE,
        dialect=SQLiteDialect(),
        opener=opener,
        label="unit.db",
        on_open=on_open,
    )


def test_handle_opens_lazily_and_runs_hook():
    opened = []
    connection = FakeConnection()
    handle = _handle(lambda: connection, on_open=opened.append)
    assert handle.is_open is False
    assert opened == []
    handle.open()
    assert opened == [handle]
    assert handle.open() is handle
    assert opened == [handle]
    handle.close()
    assert connection.closed is True


def test_execute_passes_parameters_through():
    connection = FakeConnection()
    with _handle(lambda: connection) as handle:
        handle.execute("SELECT 1")
        handle.execute("SELECT ?", (1,))
        handle.execute("SELECT @id", {"id": 1})
    assert connection.calls == [
        ("SELECT 1", None),
        ("SELECT ?", (1,)),
        ("SELECT :id", {"id": 1}),
    ]


def test_closed_handle_raises_invalid_state():
    handle = _handle(FakeConnection)
    with pytest.raises(InvalidStateError):
        handle.execute("SELECT 1")
    with pytest.raises(InvalidStateError):
        handle.executemany("SELECT 1", [])
    handle.close()


def test_opener_failure_is_wrapped():
    def opener():
        raise OSError("disk on fire")

    handle = _handle(opener)
    with pytest.raises(ConnectionFailedError) as excinfo:
        handle.open()
    assert "unit.db" in str(excinfo.value)
    assert handle.is_open is False


def test_validation_result_truthiness():
    assert ValidationResult.success()
    failure = ValidationResult.failure("nope", "because")
    assert not failure
    assert failure.error_message == "nope"
    assert failure.details == "because"


def test_file_factory_without_opener_cannot_be_instantiated():
    class IncompleteFactory(FileConnectionFactory):
        kind = BackendKind.SQLITE
        dialect_cls = SQLiteDialect

    with pytest.raises(TypeError):
        IncompleteFactory()
