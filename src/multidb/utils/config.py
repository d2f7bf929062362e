"""
Environment-driven settings for multidb.

Values are read at call time so tests can patch the environment per case.
"""

from __future__ import annotations

import os

from ..core.errors import ProviderConfigurationError

SLOW_QUERY_ENV_VAR = "MULTIDB_SLOW_QUERY_MS"
SQLITE_TIMEOUT_ENV_VAR = "MULTIDB_SQLITE_TIMEOUT"


def _parse_float(value: str, *, key: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ProviderConfigurationError(f"Invalid float value for '{key}': {value!r}") from exc


def _parse_int(value: str, *, key: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ProviderConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc


def resolve_slow_query_ms(*, default: int, override: int | None = None) -> int:
    """
    Threshold above which executed SQL is logged at WARNING.

    An explicit ``override`` wins over ``MULTIDB_SLOW_QUERY_MS``.
    """

    if override is not None:
        return override
    value = os.getenv(SLOW_QUERY_ENV_VAR)
    if not value:
        return default
    return _parse_int(value, key=SLOW_QUERY_ENV_VAR)


def resolve_sqlite_timeout(*, default: float = 5.0) -> float:
    value = os.getenv(SQLITE_TIMEOUT_ENV_VAR)
    if not value:
        return default
    return _parse_float(value, key=SQLITE_TIMEOUT_ENV_VAR)
