"""Security helpers for multidb: descriptor parsing, secrets and redaction."""

from .descriptors import (
    MEMORY_MARKER,
    FileDescriptor,
    PostgresDescriptor,
    parse_file_descriptor,
    parse_key_value,
    parse_postgres_descriptor,
)
from .redaction import redact_descriptor, redact_params
from .secrets import (
    LEGACY_PASSWORD_ENV_VAR,
    PASSWORD_ENV_VAR,
    EnvironmentSecretResolver,
    SecretResolver,
    StaticSecretResolver,
)

__all__ = [
    "LEGACY_PASSWORD_ENV_VAR",
    "MEMORY_MARKER",
    "PASSWORD_ENV_VAR",
    "EnvironmentSecretResolver",
    "FileDescriptor",
    "PostgresDescriptor",
    "SecretResolver",
    "StaticSecretResolver",
    "parse_file_descriptor",
    "parse_key_value",
    "parse_postgres_descriptor",
    "redact_descriptor",
    "redact_params",
]
