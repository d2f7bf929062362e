"""
Provider façade binding a descriptor to one backend's dialect and
connection factory.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Optional

from ..adapters.base import ConnectionFactory, ConnectionHandle
from ..adapters.duckdb import DuckDBConnectionFactory
from ..adapters.postgres import PostgresConnectionFactory
from ..adapters.sqlite import SQLiteConnectionFactory
from ..core.errors import ArgumentError, InvalidStateError, require_value
from ..core.types import BackendKind, IsolationLevel
from ..dialects.base import BaseDialect
from ..dialects.duckdb import DuckDBDialect
from ..dialects.postgres import PostgresDialect
from ..dialects.sqlite import SQLiteDialect
from ..persistence.transaction import Transaction
from ..security.redaction import redact_descriptor
from ..security.secrets import SecretResolver
from ..utils import get_logger

PROBE_SQL = "SELECT 1"


@dataclass(frozen=True)
class BackendSpec:
    """
    What a provider needs to serve one backend kind.
    """

    dialect: Callable[[], BaseDialect]
    connection_factory: Callable[[BaseDialect, Optional[SecretResolver], Optional[int]], ConnectionFactory]


BACKENDS: dict[BackendKind, BackendSpec] = {
    BackendKind.SQLITE: BackendSpec(
        dialect=SQLiteDialect,
        connection_factory=lambda dialect, _secrets, slow_ms: SQLiteConnectionFactory(
            dialect=dialect, slow_query_ms=slow_ms
        ),
    ),
    BackendKind.DUCKDB: BackendSpec(
        dialect=DuckDBDialect,
        connection_factory=lambda dialect, _secrets, slow_ms: DuckDBConnectionFactory(
            dialect=dialect, slow_query_ms=slow_ms
        ),
    ),
    BackendKind.POSTGRESQL: BackendSpec(
        dialect=PostgresDialect,
        connection_factory=lambda dialect, secrets, slow_ms: PostgresConnectionFactory(
            secret_resolver=secrets, dialect=dialect, slow_query_ms=slow_ms
        ),
    ),
}


class DatabaseProvider:
    """
    Entry point for working with one database.

    The provider is cheap to build and holds no open connection: every handle
    returned by :meth:`create_connection` belongs to the caller. One provider
    may be shared across threads to mint independent connections.
    """

    supports_transactions = True

    def __init__(
        self,
        kind: BackendKind,
        descriptor: str,
        *,
        secret_resolver: SecretResolver | None = None,
        slow_query_ms: int | None = None,
    ) -> None:
        require_value(descriptor, "Connection string")
        if not isinstance(kind, BackendKind):
            raise ArgumentError(f"Unsupported database type: {kind!r}.")
        self._kind = kind
        self._descriptor = descriptor
        self._secret_resolver = secret_resolver
        self._slow_query_ms = slow_query_ms
        self._disposed = False
        self.logger = get_logger("providers")

    @property
    def kind(self) -> BackendKind:
        return self._kind

    @property
    def descriptor(self) -> str:
        """
        The descriptor exactly as supplied. A password resolved from the
        secret source is only visible through
        ``connection_factory.parse_descriptor``.
        """
        return self._descriptor

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @cached_property
    def dialect(self) -> BaseDialect:
        return BACKENDS[self._kind].dialect()

    @cached_property
    def connection_factory(self) -> ConnectionFactory:
        return BACKENDS[self._kind].connection_factory(
            self.dialect, self._secret_resolver, self._slow_query_ms
        )

    # ------------------------------------------------------------------ #
    # Connections and transactions
    # ------------------------------------------------------------------ #
    def create_connection(self) -> ConnectionHandle:
        """Return an unopened handle; the caller opens and closes it."""
        if self._disposed:
            raise InvalidStateError("Provider has been disposed.")
        return self.connection_factory.create_connection(self._descriptor)

    def begin_transaction(
        self,
        connection: ConnectionHandle,
        isolation_level: IsolationLevel = IsolationLevel.READ_COMMITTED,
    ) -> Transaction:
        require_value(connection, "Connection")
        if not connection.is_open:
            raise InvalidStateError("Connection must be open before beginning a transaction.")
        if connection.kind is not self._kind:
            raise ArgumentError(
                f"Connection is for {connection.kind.label}, provider is for {self._kind.label}."
            )
        return Transaction(connection, isolation_level).begin()

    def validate_connection(self) -> bool:
        """
        Open a probe connection, run a trivial query and close it.

        Failures are logged and reported as ``False``; nothing is raised.
        """

        try:
            with self.create_connection() as probe:
                probe.execute(PROBE_SQL)
            return True
        except Exception as exc:
            self.logger.warning(
                "Connection validation failed for %s %s: %s",
                self._kind.label,
                redact_descriptor(self._descriptor),
                exc,
            )
            return False

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    def dispose(self) -> None:
        self._disposed = True

    def __enter__(self) -> "DatabaseProvider":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return f"DatabaseProvider({self._kind.label}, {redact_descriptor(self._descriptor)!r})"
