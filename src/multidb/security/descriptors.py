"""Connection descriptor parsing for file-backed and key-value backends."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Optional

from ..core.errors import ArgumentError, require_value
from .redaction import REDACTED_VALUE

MEMORY_MARKER = ":memory:"

_DATA_SOURCE_RE = re.compile(r"Data\s*Source\s*=\s*([^;]+)", re.IGNORECASE)
_URL_SCHEMES = ("sqlite", "duckdb")


def normalize_key(key: str) -> str:
    """``"User Id"`` and ``"userid"`` compare equal."""
    return "".join(key.split()).lower()


def is_memory_marker(value: str) -> bool:
    return value.strip().lower() == MEMORY_MARKER


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_key_value(descriptor: str) -> dict[str, str]:
    """
    Split ``key=value;key=value`` into a mapping keyed by normalized key.

    Whitespace around ``=`` and ``;`` is ignored, empty segments are skipped
    and surrounding quotes on values are removed. A later duplicate key wins.
    """

    require_value(descriptor, "Connection string")
    pairs: dict[str, str] = {}
    for segment in descriptor.split(";"):
        if not segment.strip():
            continue
        key, sep, value = segment.partition("=")
        if not sep or not key.strip():
            raise ArgumentError(
                f"Invalid connection string segment {segment.strip()!r}; expected 'Key=Value'."
            )
        pairs[normalize_key(key)] = _unquote(value.strip())
    return pairs


def extract_data_source(descriptor: str) -> Optional[str]:
    """Value of a ``Data Source``/``DataSource`` key, if present."""
    match = _DATA_SOURCE_RE.search(descriptor)
    if not match:
        return None
    return _unquote(match.group(1).strip())


@dataclass(frozen=True)
class FileDescriptor:
    """
    Parsed descriptor of an embedded, file-backed database.
    """

    path: str
    options: dict[str, str] = field(default_factory=dict)

    @property
    def in_memory(self) -> bool:
        return is_memory_marker(self.path)


def parse_file_descriptor(descriptor: str) -> FileDescriptor:
    """
    Accept ``:memory:``, a plain path, ``Data Source=<path>[;...]`` or a
    ``sqlite:///``/``duckdb:///`` URL.
    """

    require_value(descriptor, "Connection string")
    text = descriptor.strip()
    if is_memory_marker(text):
        return FileDescriptor(MEMORY_MARKER)

    for scheme in _URL_SCHEMES:
        prefix = f"{scheme}:///"
        if text.lower().startswith(prefix):
            path = text[len(prefix) :]
            return FileDescriptor(MEMORY_MARKER if is_memory_marker(path) else path)

    if "=" not in text:
        return FileDescriptor(text)

    pairs = parse_key_value(text)
    path = pairs.pop("datasource", None)
    if not path:
        raise ArgumentError(
            "Connection string must contain a 'Data Source' key or be a plain file path."
        )
    if is_memory_marker(path):
        path = MEMORY_MARKER
    return FileDescriptor(path, pairs)


_HOST_KEYS = ("host", "server")
_DATABASE_KEYS = ("database", "db")
_USERNAME_KEYS = ("username", "userid", "user")
_PASSWORD_KEYS = ("password", "pwd")
_PORT_KEYS = ("port",)
_KNOWN_KEYS = set(_HOST_KEYS + _DATABASE_KEYS + _USERNAME_KEYS + _PASSWORD_KEYS + _PORT_KEYS)

# Npgsql-style option names and their libpq equivalents. libpq names map to
# themselves so either spelling is accepted.
_DRIVER_OPTIONS = {
    "timeout": "connect_timeout",
    "connect_timeout": "connect_timeout",
    "sslmode": "sslmode",
    "rootcertificate": "sslrootcert",
    "sslrootcert": "sslrootcert",
    "sslcertificate": "sslcert",
    "sslcert": "sslcert",
    "sslkey": "sslkey",
    "applicationname": "application_name",
    "application_name": "application_name",
    "clientencoding": "client_encoding",
    "client_encoding": "client_encoding",
    "targetsessionattributes": "target_session_attrs",
    "target_session_attrs": "target_session_attrs",
    "options": "options",
}

# Npgsql client-side settings with no libpq counterpart.
_IGNORED_OPTIONS = frozenset(
    {
        "pooling",
        "minpoolsize",
        "minimumpoolsize",
        "maxpoolsize",
        "maximumpoolsize",
        "connectionlifetime",
        "connectionidlelifetime",
        "commandtimeout",
        "includeerrordetail",
        "trustservercertificate",
    }
)

_SSL_MODES = {
    "disable": "disable",
    "allow": "allow",
    "prefer": "prefer",
    "require": "require",
    "verifyca": "verify-ca",
    "verifyfull": "verify-full",
}


def _driver_value(option: str, value: str) -> str:
    if option == "sslmode":
        return _SSL_MODES.get(value.replace("-", "").lower(), value)
    return value


def _first(pairs: dict[str, str], keys: tuple[str, ...]) -> Optional[str]:
    for key in keys:
        value = pairs.get(key)
        if value is not None and value.strip():
            return value.strip()
    return None


@dataclass
class PostgresDescriptor:
    host: Optional[str]
    database: Optional[str]
    username: Optional[str]
    password: Optional[str]
    port: Optional[int]
    options: dict[str, str]
    ignored_options: tuple[str, ...] = ()
    unsupported_options: tuple[str, ...] = ()

    def with_password(self, password: Optional[str]) -> "PostgresDescriptor":
        return replace(self, password=password, options=dict(self.options))

    def connect_kwargs(self) -> dict[str, object]:
        kwargs: dict[str, object] = {
            "host": self.host,
            "dbname": self.database,
            "user": self.username,
        }
        if self.password:
            kwargs["password"] = self.password
        if self.port is not None:
            kwargs["port"] = self.port
        kwargs.update(self.options)
        return kwargs

    def redacted(self) -> str:
        """
        Rebuild the descriptor with the password masked, for diagnostics.
        """

        parts = []
        if self.host:
            parts.append(f"Host={self.host}")
        if self.port is not None:
            parts.append(f"Port={self.port}")
        if self.database:
            parts.append(f"Database={self.database}")
        if self.username:
            parts.append(f"Username={self.username}")
        if self.password:
            parts.append(f"Password={REDACTED_VALUE}")
        return ";".join(parts)


def parse_postgres_descriptor(descriptor: str) -> PostgresDescriptor:
    """
    Parse a ``Host=...;Database=...;Username=...`` descriptor.

    Raises :class:`ArgumentError` on malformed pairs or a non-integer port.
    Missing keys are left as ``None`` for the validator to report. Extra keys
    are translated to libpq option names; Npgsql pool settings are set aside
    in ``ignored_options`` and anything else in ``unsupported_options``.
    """

    pairs = parse_key_value(descriptor)
    port_text = _first(pairs, _PORT_KEYS)
    port: Optional[int] = None
    if port_text is not None:
        try:
            port = int(port_text)
        except ValueError as exc:
            raise ArgumentError(f"Invalid Port value {port_text!r}; expected an integer.") from exc
    options: dict[str, str] = {}
    ignored: list[str] = []
    unsupported: list[str] = []
    for key, value in pairs.items():
        if key in _KNOWN_KEYS:
            continue
        option = _DRIVER_OPTIONS.get(key)
        if option is not None:
            options[option] = _driver_value(option, value)
        elif key in _IGNORED_OPTIONS:
            ignored.append(key)
        else:
            unsupported.append(key)
    return PostgresDescriptor(
        host=_first(pairs, _HOST_KEYS),
        database=_first(pairs, _DATABASE_KEYS),
        username=_first(pairs, _USERNAME_KEYS),
        password=_first(pairs, _PASSWORD_KEYS),
        port=port,
        options=options,
        ignored_options=tuple(ignored),
        unsupported_options=tuple(unsupported),
    )
