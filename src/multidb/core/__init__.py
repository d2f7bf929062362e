"""
Core types and errors shared across multidb packages.
"""

from .errors import (
    ArgumentError,
    ConnectionFailedError,
    DatabaseProviderError,
    DetectionError,
    DriverNotInstalledError,
    InvalidArgumentError,
    InvalidStateError,
    ProviderConfigurationError,
    UnsupportedTypeError,
    require_value,
)
from .types import BackendKind, ColumnSpec, IsolationLevel, ScalarKind

__all__ = [
    "ArgumentError",
    "BackendKind",
    "ColumnSpec",
    "ConnectionFailedError",
    "DatabaseProviderError",
    "DetectionError",
    "DriverNotInstalledError",
    "InvalidArgumentError",
    "InvalidStateError",
    "IsolationLevel",
    "ProviderConfigurationError",
    "ScalarKind",
    "UnsupportedTypeError",
    "require_value",
]
