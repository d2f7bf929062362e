"""
multidb public package initialization.

Detect a backend from a connection descriptor, build a provider for it and
generate backend-specific DDL/DML from one table description.
"""

from .adapters import ConnectionHandle, ValidationResult  # noqa: F401
from .core import (
    ArgumentError,
    BackendKind,
    ColumnSpec,
    ConnectionFailedError,
    DatabaseProviderError,
    DetectionError,
    DriverNotInstalledError,
    InvalidArgumentError,
    InvalidStateError,
    IsolationLevel,
    ScalarKind,
    UnsupportedTypeError,
)  # noqa: F401
from .dialects import DuckDBDialect, PostgresDialect, SQLiteDialect  # noqa: F401
from .persistence import Transaction  # noqa: F401
from .providers import (
    DatabaseProvider,
    create_provider,
    create_provider_from_descriptor,
    detect_backend,
)  # noqa: F401
from .schema import plan_indexes  # noqa: F401
from .security import EnvironmentSecretResolver, StaticSecretResolver  # noqa: F401

__all__ = [
    "ArgumentError",
    "BackendKind",
    "ColumnSpec",
    "ConnectionFailedError",
    "ConnectionHandle",
    "DatabaseProvider",
    "DatabaseProviderError",
    "DetectionError",
    "DriverNotInstalledError",
    "DuckDBDialect",
    "EnvironmentSecretResolver",
    "InvalidArgumentError",
    "InvalidStateError",
    "IsolationLevel",
    "PostgresDialect",
    "SQLiteDialect",
    "ScalarKind",
    "StaticSecretResolver",
    "Transaction",
    "UnsupportedTypeError",
    "ValidationResult",
    "create_provider",
    "create_provider_from_descriptor",
    "detect_backend",
    "plan_indexes",
]
