"""
DuckDB dialect implementation.
"""

from __future__ import annotations

from typing import Final, Mapping

from ..core.types import BackendKind, IsolationLevel, ScalarKind
from .base import BaseDialect, DialectCapabilities


class DuckDBDialect(BaseDialect):
    """
    DuckDB dialect using ``$name`` driver parameters.
    """

    name: Final[str] = "duckdb"
    kind: Final[BackendKind] = BackendKind.DUCKDB
    param_style: Final[str] = "dollar"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(supports_isolation_levels=False)
    type_mappings: Final[Mapping[ScalarKind, str]] = {
        ScalarKind.TEXT: "VARCHAR",
        ScalarKind.INT32: "INTEGER",
        ScalarKind.INT64: "BIGINT",
        ScalarKind.INT16: "SMALLINT",
        ScalarKind.INT8: "TINYINT",
        ScalarKind.DECIMAL: "DECIMAL(18,6)",
        ScalarKind.DOUBLE: "DOUBLE",
        ScalarKind.FLOAT: "REAL",
        ScalarKind.TIMESTAMP: "TIMESTAMP",
        ScalarKind.BOOLEAN: "BOOLEAN",
        ScalarKind.BINARY: "BLOB",
    }

    def begin_transaction_sql(self, isolation_level: IsolationLevel = IsolationLevel.READ_COMMITTED) -> str:
        # DuckDB only offers snapshot isolation.
        return "BEGIN TRANSACTION"
