"""
Backend detection from the shape of a connection descriptor.
"""

from __future__ import annotations

import os
import re

from ..core.errors import DetectionError, require_value
from ..core.types import BackendKind
from ..security.descriptors import extract_data_source, is_memory_marker
from ..security.redaction import redact_descriptor

_SERVER_KEY_RE = re.compile(r"(Host|Server)\s*=", re.IGNORECASE)

EXTENSION_KINDS: dict[str, BackendKind] = {
    ".db": BackendKind.SQLITE,
    ".sqlite": BackendKind.SQLITE,
    ".duckdb": BackendKind.DUCKDB,
}


def _kind_from_extension(path: str) -> BackendKind | None:
    extension = os.path.splitext(path.strip())[1].lower()
    return EXTENSION_KINDS.get(extension)


def detect_backend(descriptor: str) -> BackendKind:
    """
    Classify ``descriptor``; the first matching rule wins.

    1. ``:memory:`` (any case, surrounding whitespace ignored) is SQLite.
    2. A ``Host=`` or ``Server=`` key is PostgreSQL, even when the string also
       ends in a file extension.
    3. The extension of the descriptor, or of its ``Data Source`` value:
       ``.db``/``.sqlite`` is SQLite, ``.duckdb`` is DuckDB.
    """

    require_value(descriptor, "Connection string")

    if is_memory_marker(descriptor):
        return BackendKind.SQLITE

    if _SERVER_KEY_RE.search(descriptor):
        return BackendKind.POSTGRESQL

    kind = _kind_from_extension(descriptor)
    if kind is not None:
        return kind

    data_source = extract_data_source(descriptor)
    if data_source:
        kind = _kind_from_extension(data_source)
        if kind is not None:
            return kind

    raise DetectionError(
        "Unable to detect database type from connection string: "
        f"'{redact_descriptor(descriptor)}'. Expected: '.db', '.sqlite', '.duckdb' file "
        "extension, or PostgreSQL connection string (Host=... or Server=...)."
    )
