"""
Error hierarchy for multidb.
"""

from __future__ import annotations

from typing import Any


class DatabaseProviderError(Exception):
    """Base error for provider-related failures."""


class ArgumentError(DatabaseProviderError, ValueError):
    """Raised when a supplied value is present but malformed."""


class InvalidArgumentError(ArgumentError):
    """Raised when a required value is missing."""


class DetectionError(ArgumentError):
    """Raised when a descriptor does not match any supported backend."""


class UnsupportedTypeError(DatabaseProviderError, TypeError):
    """Raised when a dialect cannot represent a scalar kind."""


class InvalidStateError(DatabaseProviderError, RuntimeError):
    """Raised when an operation's precondition is not met."""


class ProviderConfigurationError(DatabaseProviderError, RuntimeError):
    """Raised when configuration or required dependencies are invalid."""


class DriverNotInstalledError(ProviderConfigurationError):
    """Raised when the driver package for a backend cannot be imported."""


class ConnectionFailedError(DatabaseProviderError, ConnectionError):
    """Raised when the underlying driver fails to open a connection."""


def require_value(value: Any, name: str, *, allow_blank: bool = False) -> Any:
    """
    Reject ``None`` with :class:`InvalidArgumentError` and, for strings,
    empty or whitespace-only values with :class:`ArgumentError`.

    ``allow_blank`` still rejects the empty string but accepts whitespace.
    """

    if value is None:
        raise InvalidArgumentError(f"{name} cannot be None.")
    if isinstance(value, str):
        if value == "":
            raise ArgumentError(f"{name} cannot be empty.")
        if not allow_blank and not value.strip():
            raise ArgumentError(f"{name} cannot be empty.")
    return value
