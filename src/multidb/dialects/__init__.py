"""
Dialect strategy registry.
"""

from .base import STATEMENT_SEPARATOR, BaseDialect, Dialect, DialectCapabilities
from .duckdb import DuckDBDialect
from .postgres import PostgresDialect
from .sqlite import SQLiteDialect

__all__ = [
    "STATEMENT_SEPARATOR",
    "BaseDialect",
    "Dialect",
    "DialectCapabilities",
    "SQLiteDialect",
    "DuckDBDialect",
    "PostgresDialect",
]
