"""
PostgreSQL connection factory.
"""

from __future__ import annotations

from typing import Any

from ..core.errors import ArgumentError, DriverNotInstalledError, require_value
from ..core.types import BackendKind
from ..dialects.base import Dialect
from ..dialects.postgres import PostgresDialect
from ..security.descriptors import PostgresDescriptor, parse_postgres_descriptor
from ..security.secrets import EnvironmentSecretResolver, SecretResolver
from ..utils import get_logger
from .base import EMPTY_DESCRIPTOR_MESSAGE, ConnectionHandle, ValidationResult


def _load_driver():
    try:
        import psycopg

        return psycopg
    except ImportError:
        return None


class PostgresConnectionFactory:
    """
    Builds psycopg connections from ``Host=...;Database=...;Username=...``
    descriptors.

    A password missing from the descriptor is taken from the injected secret
    resolver. The resolved value only lives in the effective connection
    parameters; the descriptor string is left as supplied.
    """

    kind = BackendKind.POSTGRESQL

    def __init__(
        self,
        *,
        secret_resolver: SecretResolver | None = None,
        dialect: Dialect | None = None,
        slow_query_ms: int | None = None,
    ) -> None:
        self.secret_resolver = secret_resolver if secret_resolver is not None else EnvironmentSecretResolver()
        self.dialect = dialect if dialect is not None else PostgresDialect()
        self.slow_query_ms = slow_query_ms
        self.logger = get_logger("adapters.postgresql")

    def parse_descriptor(self, descriptor: str) -> PostgresDescriptor:
        """
        Parse ``descriptor`` and fill in the password from the secret resolver
        when the descriptor has none.
        """

        require_value(descriptor, "Connection string")
        parsed = parse_postgres_descriptor(descriptor)
        if parsed.password:
            return parsed
        secret = self.secret_resolver.resolve()
        if not secret:
            return parsed
        return parsed.with_password(secret)

    def validate_connection_string(self, descriptor: str) -> ValidationResult:
        if descriptor is None or not str(descriptor).strip():
            return ValidationResult.failure(EMPTY_DESCRIPTOR_MESSAGE)
        try:
            parsed = parse_postgres_descriptor(descriptor)
        except ArgumentError as exc:
            return ValidationResult.failure(f"Invalid PostgreSQL connection string: {exc}", repr(exc))

        if not parsed.host:
            return ValidationResult.failure(
                "Host is required in PostgreSQL connection string.",
                "Add a Host or Server parameter, for example 'Host=localhost'.",
            )
        if not parsed.database:
            return ValidationResult.failure(
                "Database is required in PostgreSQL connection string.",
                "Add a Database parameter, for example 'Database=mydb'.",
            )
        if not parsed.username:
            return ValidationResult.failure(
                "Username is required in PostgreSQL connection string.",
                "Add a Username or User Id parameter, for example 'Username=postgres'.",
            )
        if parsed.unsupported_options:
            names = ", ".join(parsed.unsupported_options)
            return ValidationResult.failure(
                f"Unsupported PostgreSQL connection option(s): {names}.",
                "Use Timeout, SSL Mode, Application Name or the libpq option names.",
            )
        return ValidationResult.success()

    def create_connection(self, descriptor: str) -> ConnectionHandle:
        require_value(descriptor, "Connection string")
        validation = self.validate_connection_string(descriptor)
        if not validation.is_valid:
            raise ArgumentError(validation.error_message)
        effective = self.parse_descriptor(descriptor)
        if effective.ignored_options:
            self.logger.debug(
                "Ignoring client-side PostgreSQL options: %s", ", ".join(effective.ignored_options)
            )
        if not effective.password:
            self.logger.warning(
                "No password for %s in descriptor or secret source %r",
                effective.redacted(),
                self.secret_resolver,
            )
        return ConnectionHandle(
            kind=self.kind,
            dialect=self.dialect,
            opener=lambda: self._open(effective),
            label=effective.redacted(),
            on_open=self.apply_connection_settings,
            slow_query_ms=self.slow_query_ms,
        )

    def apply_connection_settings(self, handle: ConnectionHandle) -> None:
        """
        Hook for session tuning such as ``statement_timeout``. Currently a no-op.
        """
        require_value(handle, "Connection")

    def _open(self, descriptor: PostgresDescriptor) -> Any:
        driver = _load_driver()
        if driver is None:
            raise DriverNotInstalledError("psycopg is required to use PostgreSQL connections.")
        return driver.connect(autocommit=True, **descriptor.connect_kwargs())
