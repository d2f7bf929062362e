"""
Connection factory protocol, validation results and the connection handle.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol, Sequence

from ..core.errors import (
    ArgumentError,
    ConnectionFailedError,
    DatabaseProviderError,
    InvalidStateError,
    require_value,
)
from ..core.types import BackendKind
from ..dialects.base import Dialect
from ..security.descriptors import FileDescriptor, parse_file_descriptor
from ..security.redaction import redact_descriptor, redact_params
from ..utils import get_logger, resolve_slow_query_ms, time_call

EMPTY_DESCRIPTOR_MESSAGE = "Connection string cannot be null or empty."


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of a descriptor check. Returned, never raised.
    """

    is_valid: bool
    error_message: Optional[str] = None
    details: Optional[str] = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def failure(cls, error_message: str, details: Optional[str] = None) -> "ValidationResult":
        return cls(False, error_message, details)

    def __bool__(self) -> bool:
        return self.is_valid


class ConnectionHandle:
    """
    An unopened connection to one backend.

    The handle belongs to whoever created it; nothing in multidb keeps a
    reference after returning it. ``execute`` accepts SQL written with
    ``@name`` placeholders together with a mapping of values.
    """

    def __init__(
        self,
        *,
        kind: BackendKind,
        dialect: Dialect,
        opener: Callable[[], Any],
        label: str,
        on_open: Callable[["ConnectionHandle"], None] | None = None,
        slow_query_ms: int | None = None,
    ) -> None:
        self.kind = kind
        self.dialect = dialect
        self.label = label
        self._opener = opener
        self._on_open = on_open
        self._connection: Any = None
        self.logger = get_logger(f"adapters.{kind.value}")
        self.slow_query_ms = resolve_slow_query_ms(default=100, override=slow_query_ms)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    @property
    def is_open(self) -> bool:
        return self._connection is not None

    @property
    def raw(self) -> Any:
        """The underlying DB-API connection."""
        return self._ensure_open()

    def open(self) -> "ConnectionHandle":
        if self._connection is not None:
            return self
        self.logger.info("Opening %s connection to %s", self.kind.label, self.label)
        try:
            self._connection = self._opener()
        except DatabaseProviderError:
            raise
        except Exception as exc:
            raise ConnectionFailedError(
                f"Failed to open {self.kind.label} connection to {self.label}."
            ) from exc
        if self._on_open is not None:
            self._on_open(self)
        return self

    def close(self) -> None:
        if self._connection is None:
            return
        try:
            self._connection.close()
        finally:
            self._connection = None
            self.logger.debug("Closed %s connection to %s", self.kind.label, self.label)

    def _ensure_open(self) -> Any:
        if self._connection is None:
            raise InvalidStateError(f"{self.kind.label} connection to {self.label} is not open.")
        return self._connection

    def __enter__(self) -> "ConnectionHandle":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #
    def execute(self, sql: str, params: Mapping[str, Any] | Sequence[Any] | None = None) -> Any:
        """
        Execute one statement and return the driver's cursor.

        Named ``@field`` placeholders are rewritten for the driver when
        ``params`` is a mapping; positional parameters and parameterless SQL
        are passed through unchanged.
        """

        connection = self._ensure_open()
        driver_sql = self._driver_sql(sql, params)
        with time_call(
            f"{self.kind.value}.execute",
            self.logger,
            sql=driver_sql,
            params=redact_params(params) if params else None,
            backend=self.kind.value,
            threshold_ms=self.slow_query_ms,
        ):
            if params is None:
                return connection.execute(driver_sql)
            return connection.execute(driver_sql, params)

    def executemany(
        self,
        sql: str,
        seq_of_params: Iterable[Mapping[str, Any]] | Iterable[Sequence[Any]],
    ) -> Any:
        connection = self._ensure_open()
        rows = list(seq_of_params)
        driver_sql = self._driver_sql(sql, rows[0] if rows else None)
        executor = connection if hasattr(connection, "executemany") else connection.cursor()
        with time_call(
            f"{self.kind.value}.executemany",
            self.logger,
            sql=driver_sql,
            params="bulk",
            backend=self.kind.value,
            threshold_ms=self.slow_query_ms,
        ):
            return executor.executemany(driver_sql, rows)

    def _driver_sql(self, sql: str, params: Any) -> str:
        require_value(sql, "SQL")
        if isinstance(params, Mapping):
            return self.dialect.to_driver_sql(sql)
        return sql

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"ConnectionHandle(kind={self.kind.value}, target={self.label!r}, {state})"


class ConnectionFactory(Protocol):
    """
    Builds unopened connection handles for one backend.
    """

    kind: BackendKind

    def create_connection(self, descriptor: str) -> ConnectionHandle: ...

    def parse_descriptor(self, descriptor: str) -> Any: ...

    def validate_connection_string(self, descriptor: str) -> ValidationResult: ...

    def apply_connection_settings(self, handle: ConnectionHandle) -> None: ...


class FileConnectionFactory(ABC):
    """
    Shared parsing and validation for embedded, file-backed backends.

    Subclasses provide ``kind``, ``dialect_cls`` and :meth:`_open`.
    """

    kind: BackendKind
    dialect_cls: Callable[[], Dialect]

    def __init__(self, *, dialect: Dialect | None = None, slow_query_ms: int | None = None) -> None:
        self.dialect = dialect if dialect is not None else self.dialect_cls()
        self.slow_query_ms = slow_query_ms
        self.logger = get_logger(f"adapters.{self.kind.value}")

    def parse_descriptor(self, descriptor: str) -> FileDescriptor:
        return parse_file_descriptor(descriptor)

    def validate_connection_string(self, descriptor: str) -> ValidationResult:
        if descriptor is None or not str(descriptor).strip():
            return ValidationResult.failure(EMPTY_DESCRIPTOR_MESSAGE)
        try:
            parsed = self.parse_descriptor(descriptor)
        except ArgumentError as exc:
            return ValidationResult.failure(
                f"Invalid {self.kind.label} connection string format.", str(exc)
            )

        if parsed.in_memory:
            return ValidationResult.success()

        if ".." in parsed.path:
            return ValidationResult.failure(
                "Connection string contains path traversal attempt (..).",
                "Path traversal is not allowed for security reasons.",
            )

        directory = os.path.dirname(parsed.path)
        if directory and not os.path.isdir(directory):
            return ValidationResult.failure(
                f"Directory does not exist: {directory}. Create the directory before connecting.",
                "Directories for file-backed databases are never created automatically.",
            )
        return ValidationResult.success()

    def create_connection(self, descriptor: str) -> ConnectionHandle:
        require_value(descriptor, "Connection string")
        validation = self.validate_connection_string(descriptor)
        if not validation.is_valid:
            raise ArgumentError(validation.error_message)
        parsed = self.parse_descriptor(descriptor)
        if parsed.options:
            self.logger.debug(
                "Ignoring unsupported %s connection options: %s",
                self.kind.label,
                ", ".join(sorted(parsed.options)),
            )
        return ConnectionHandle(
            kind=self.kind,
            dialect=self.dialect,
            opener=lambda: self._open(parsed),
            label=redact_descriptor(parsed.path),
            on_open=self.apply_connection_settings,
            slow_query_ms=self.slow_query_ms,
        )

    def apply_connection_settings(self, handle: ConnectionHandle) -> None:
        """
        Hook for backend tuning after a connection opens. Currently a no-op.
        """
        require_value(handle, "Connection")

    @abstractmethod
    def _open(self, descriptor: FileDescriptor) -> Any:
        """Open the driver connection for an already validated descriptor."""
