import pytest

from multidb.adapters import (
    DuckDBConnectionFactory,
    PostgresConnectionFactory,
    SQLiteConnectionFactory,
)
from multidb.core import ArgumentError, BackendKind, InvalidArgumentError
from multidb.dialects import DuckDBDialect, PostgresDialect, SQLiteDialect
from multidb.providers import (
    BACKENDS,
    create_provider,
    create_provider_from_descriptor,
    supported_backends,
)


@pytest.mark.parametrize(
    "kind, descriptor, dialect_cls, factory_cls",
    [
        (BackendKind.SQLITE, ":memory:", SQLiteDialect, SQLiteConnectionFactory),
        (BackendKind.DUCKDB, "analytics.duckdb", DuckDBDialect, DuckDBConnectionFactory),
        (
            BackendKind.POSTGRESQL,
            "Host=localhost;Database=jvlink;Username=app",
            PostgresDialect,
            PostgresConnectionFactory,
        ),
    ],
)
def test_create_provider_for_each_kind(kind, descriptor, dialect_cls, factory_cls):
    provider = create_provider(kind, descriptor)
    assert provider.kind is kind
    assert isinstance(provider.dialect, dialect_cls)
    assert isinstance(provider.connection_factory, factory_cls)
    assert provider.connection_factory.dialect is provider.dialect
    assert provider.supports_transactions is True


def test_create_provider_accepts_kind_names():
    assert create_provider("duckdb", ":memory:").kind is BackendKind.DUCKDB
    assert create_provider("postgres", "Host=h").kind is BackendKind.POSTGRESQL


def test_create_provider_rejects_unknown_kind():
    with pytest.raises(ArgumentError) as excinfo:
        create_provider("mysql", ":memory:")
    assert "mysql" in str(excinfo.value)
    with pytest.raises(InvalidArgumentError):
        create_provider(None, ":memory:")


def test_create_provider_rejects_missing_descriptor():
    with pytest.raises(InvalidArgumentError):
        create_provider(BackendKind.SQLITE, None)
    with pytest.raises(ArgumentError):
        create_provider(BackendKind.SQLITE, "")


def test_create_provider_from_descriptor_detects_kind():
    assert create_provider_from_descriptor("race.db").kind is BackendKind.SQLITE
    assert create_provider_from_descriptor("Data Source=a.duckdb").kind is BackendKind.DUCKDB
    assert create_provider_from_descriptor("Server=db;Database=d").kind is BackendKind.POSTGRESQL


def test_detected_postgres_provider_validates_lazily():
    provider = create_provider_from_descriptor("Host=localhost;Database=jvlink")
    result = provider.connection_factory.validate_connection_string(provider.descriptor)
    assert result.is_valid is False
    assert "Username" in result.error_message
    assert "required" in result.error_message


def test_supported_backends_matches_dispatch_table():
    assert supported_backends() == [BackendKind.SQLITE, BackendKind.DUCKDB, BackendKind.POSTGRESQL]
    assert set(BACKENDS) == set(BackendKind)
