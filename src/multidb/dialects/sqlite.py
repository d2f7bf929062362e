"""
SQLite dialect implementation.
"""

from __future__ import annotations

from typing import Final, Mapping

from ..core.types import BackendKind, IsolationLevel, ScalarKind
from .base import BaseDialect, DialectCapabilities


class SQLiteDialect(BaseDialect):
    """
    SQLite dialect using named (``:name``) driver parameters and SQLite's
    storage classes.
    """

    name: Final[str] = "sqlite"
    kind: Final[BackendKind] = BackendKind.SQLITE
    param_style: Final[str] = "named"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(supports_isolation_levels=False)
    type_mappings: Final[Mapping[ScalarKind, str]] = {
        ScalarKind.TEXT: "TEXT",
        ScalarKind.INT32: "INTEGER",
        ScalarKind.INT64: "INTEGER",
        ScalarKind.INT16: "INTEGER",
        ScalarKind.INT8: "INTEGER",
        ScalarKind.DECIMAL: "REAL",
        ScalarKind.DOUBLE: "REAL",
        ScalarKind.FLOAT: "REAL",
        ScalarKind.TIMESTAMP: "TEXT",
        ScalarKind.BOOLEAN: "INTEGER",
        ScalarKind.BINARY: "BLOB",
    }

    def begin_transaction_sql(self, isolation_level: IsolationLevel = IsolationLevel.READ_COMMITTED) -> str:
        # SQLite transactions are always serializable; only lock timing varies.
        if isolation_level is IsolationLevel.SERIALIZABLE:
            return "BEGIN IMMEDIATE"
        return "BEGIN DEFERRED"
