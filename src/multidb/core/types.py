"""
Backend-agnostic type vocabulary shared by dialects, adapters and providers.
"""

from __future__ import annotations

import datetime
import decimal
import types
import typing
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .errors import ArgumentError, UnsupportedTypeError, require_value


class BackendKind(Enum):
    """
    Closed set of supported storage engines.
    """

    SQLITE = "sqlite"
    DUCKDB = "duckdb"
    POSTGRESQL = "postgresql"

    @property
    def label(self) -> str:
        return _BACKEND_LABELS[self]

    @classmethod
    def parse(cls, value: "BackendKind | str") -> "BackendKind":
        """
        Resolve a kind from an enum member, its value or name, or a known alias.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            normalized = _BACKEND_ALIASES.get(normalized, normalized)
            for member in cls:
                if member.value == normalized:
                    return member
        accepted = ", ".join(member.label for member in cls)
        raise ArgumentError(f"Unsupported database type: {value!r}. Expected one of: {accepted}.")


_BACKEND_LABELS = {
    BackendKind.SQLITE: "SQLite",
    BackendKind.DUCKDB: "DuckDB",
    BackendKind.POSTGRESQL: "PostgreSQL",
}

_BACKEND_ALIASES = {
    "sqlite3": "sqlite",
    "postgres": "postgresql",
    "pg": "postgresql",
}


class ScalarKind(Enum):
    """
    Logical column types understood by every dialect.

    ``UUID`` can be described but no dialect maps it.
    """

    TEXT = "text"
    INT32 = "int32"
    INT64 = "int64"
    INT16 = "int16"
    INT8 = "int8"
    DECIMAL = "decimal"
    DOUBLE = "double"
    FLOAT = "float"
    TIMESTAMP = "timestamp"
    BOOLEAN = "boolean"
    BINARY = "binary"
    UUID = "uuid"

    @classmethod
    def from_python(cls, annotation: Any) -> "ScalarKind":
        """
        Map a Python type, or an optional annotation of one, to a scalar kind.

        ``int | None`` and ``Optional[int]`` resolve to the kind of ``int``;
        nullability is carried by :class:`ColumnSpec`, not by the kind.
        """

        if isinstance(annotation, cls):
            return annotation
        underlying = _unwrap_optional(annotation)
        kind = _PYTHON_KINDS.get(underlying)
        if kind is None:
            name = getattr(underlying, "__name__", repr(underlying))
            raise UnsupportedTypeError(f"Type '{name}' has no scalar kind mapping.")
        return kind


_PYTHON_KINDS: dict[Any, ScalarKind] = {
    str: ScalarKind.TEXT,
    int: ScalarKind.INT64,
    float: ScalarKind.DOUBLE,
    decimal.Decimal: ScalarKind.DECIMAL,
    datetime.datetime: ScalarKind.TIMESTAMP,
    datetime.date: ScalarKind.TIMESTAMP,
    bool: ScalarKind.BOOLEAN,
    bytes: ScalarKind.BINARY,
    bytearray: ScalarKind.BINARY,
    uuid.UUID: ScalarKind.UUID,
}


def _unwrap_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


class IsolationLevel(Enum):
    READ_UNCOMMITTED = "READ UNCOMMITTED"
    READ_COMMITTED = "READ COMMITTED"
    REPEATABLE_READ = "REPEATABLE READ"
    SERIALIZABLE = "SERIALIZABLE"


@dataclass(frozen=True)
class ColumnSpec:
    """
    A single column of a backend-agnostic table description.

    ``nullable`` left as ``None`` resolves to ``not is_key``.
    """

    name: str
    kind: ScalarKind
    is_key: bool = False
    nullable: Optional[bool] = None

    def __post_init__(self) -> None:
        require_value(self.name, "Column name", allow_blank=True)
        require_value(self.kind, f"Kind of column '{self.name}'")
        if not isinstance(self.kind, ScalarKind):
            object.__setattr__(self, "kind", ScalarKind.from_python(self.kind))
        if self.is_key and self.nullable:
            raise ArgumentError(f"Key column '{self.name}' cannot be nullable.")

    @property
    def is_nullable(self) -> bool:
        if self.nullable is None:
            return not self.is_key
        return self.nullable
