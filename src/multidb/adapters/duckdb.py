"""
DuckDB connection factory.
"""

from __future__ import annotations

from typing import Any

from ..core.errors import DriverNotInstalledError
from ..core.types import BackendKind
from ..dialects.duckdb import DuckDBDialect
from ..security.descriptors import FileDescriptor
from .base import FileConnectionFactory


def _load_driver():
    try:
        import duckdb

        return duckdb
    except ImportError:
        return None


class DuckDBConnectionFactory(FileConnectionFactory):
    """
    Opens connections through the ``duckdb`` package.
    """

    kind = BackendKind.DUCKDB
    dialect_cls = DuckDBDialect

    def _open(self, descriptor: FileDescriptor) -> Any:
        driver = _load_driver()
        if driver is None:
            raise DriverNotInstalledError("duckdb is required to use DuckDB connections.")
        return driver.connect(database=descriptor.path)
