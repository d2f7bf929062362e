"""
PostgreSQL dialect implementation.
"""

from __future__ import annotations

from typing import Final, Mapping

from ..core.types import BackendKind, ScalarKind
from .base import BaseDialect, DialectCapabilities


class PostgresDialect(BaseDialect):
    """
    PostgreSQL dialect using psycopg's ``%(name)s`` parameters.
    """

    name: Final[str] = "postgresql"
    kind: Final[BackendKind] = BackendKind.POSTGRESQL
    param_style: Final[str] = "pyformat"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(supports_isolation_levels=True)
    type_mappings: Final[Mapping[ScalarKind, str]] = {
        ScalarKind.TEXT: "TEXT",
        ScalarKind.INT32: "INTEGER",
        ScalarKind.INT64: "BIGINT",
        ScalarKind.INT16: "SMALLINT",
        ScalarKind.INT8: "SMALLINT",
        ScalarKind.DECIMAL: "NUMERIC(18,6)",
        ScalarKind.DOUBLE: "DOUBLE PRECISION",
        ScalarKind.FLOAT: "REAL",
        ScalarKind.TIMESTAMP: "TIMESTAMP",
        ScalarKind.BOOLEAN: "BOOLEAN",
        ScalarKind.BINARY: "BYTEA",
    }
