"""
Connection factories and handles for each supported backend.
"""

from .base import (
    ConnectionFactory,
    ConnectionHandle,
    FileConnectionFactory,
    ValidationResult,
)
from .duckdb import DuckDBConnectionFactory
from .postgres import PostgresConnectionFactory
from .sqlite import SQLiteConnectionFactory

__all__ = [
    "ConnectionFactory",
    "ConnectionHandle",
    "FileConnectionFactory",
    "ValidationResult",
    "SQLiteConnectionFactory",
    "DuckDBConnectionFactory",
    "PostgresConnectionFactory",
]
