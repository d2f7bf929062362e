"""Redaction helpers for descriptors and logged parameters."""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

REDACTED_VALUE = "***"

_SENSITIVE_KEY_TOKENS = (
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "apikey",
    "api_key",
    "sslkey",
    "ssl_key",
    "sslpassword",
)

_SENSITIVE_VALUE_TOKENS = (
    "password",
    "passwd",
    "secret",
    "token",
    "bearer",
)

_PAIR_RE = re.compile(r"(?P<key>[^;=]+?)(?P<sep>\s*=\s*)(?P<value>[^;]*)")


def _compact(value: str) -> str:
    return "".join(ch for ch in value if ch.isalnum())


def is_sensitive_key(key: str) -> bool:
    normalized = key.lower()
    compact = _compact(normalized)
    return any(token in normalized or _compact(token) in compact for token in _SENSITIVE_KEY_TOKENS)


def is_sensitive_value(value: str) -> bool:
    normalized = value.lower()
    return any(token in normalized for token in _SENSITIVE_VALUE_TOKENS)


def redact_descriptor(descriptor: str) -> str:
    """
    Mask the values of sensitive keys in a ``key=value;...`` descriptor.

    Path-like descriptors come back unchanged.
    """

    if "=" not in descriptor:
        return descriptor

    def _mask(match: re.Match[str]) -> str:
        if is_sensitive_key(match.group("key")):
            return f"{match.group('key')}{match.group('sep')}{REDACTED_VALUE}"
        return match.group(0)

    return _PAIR_RE.sub(_mask, descriptor)


def redact_value(value: Any, *, key: str | None = None) -> Any:
    if key is not None and is_sensitive_key(str(key)):
        return REDACTED_VALUE
    if isinstance(value, Mapping):
        return {k: redact_value(v, key=str(k)) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(redact_value(item) for item in value)
    if isinstance(value, str) and is_sensitive_value(value):
        return REDACTED_VALUE
    return value


def redact_params(params: Mapping[str, Any] | Iterable[Any]) -> Any:
    if isinstance(params, Mapping):
        return redact_value(params)
    return [redact_value(value) for value in params]
