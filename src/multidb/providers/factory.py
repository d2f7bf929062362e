"""
Top-level construction of providers.
"""

from __future__ import annotations

from ..core.errors import require_value
from ..core.types import BackendKind
from ..security.secrets import SecretResolver
from .detection import detect_backend
from .provider import BACKENDS, DatabaseProvider


def create_provider(
    kind: BackendKind | str,
    descriptor: str,
    *,
    secret_resolver: SecretResolver | None = None,
    slow_query_ms: int | None = None,
) -> DatabaseProvider:
    """
    Build a provider for an explicit backend kind.

    ``kind`` may be a :class:`BackendKind` or its name, e.g. ``"duckdb"``.
    """

    require_value(descriptor, "Connection string")
    require_value(kind, "Database type")
    resolved = BackendKind.parse(kind)
    return DatabaseProvider(
        resolved,
        descriptor,
        secret_resolver=secret_resolver,
        slow_query_ms=slow_query_ms,
    )


def create_provider_from_descriptor(
    descriptor: str,
    *,
    secret_resolver: SecretResolver | None = None,
    slow_query_ms: int | None = None,
) -> DatabaseProvider:
    """Detect the backend from ``descriptor`` and build its provider."""
    return create_provider(
        detect_backend(descriptor),
        descriptor,
        secret_resolver=secret_resolver,
        slow_query_ms=slow_query_ms,
    )


def supported_backends() -> list[BackendKind]:
    return list(BACKENDS)
