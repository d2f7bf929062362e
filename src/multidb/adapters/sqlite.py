"""
SQLite connection factory.
"""

from __future__ import annotations

import sqlite3

from ..core.types import BackendKind
from ..dialects.sqlite import SQLiteDialect
from ..security.descriptors import FileDescriptor
from ..utils import resolve_sqlite_timeout
from .base import FileConnectionFactory


class SQLiteConnectionFactory(FileConnectionFactory):
    """
    Opens connections through the stdlib ``sqlite3`` module.

    Connections run in autocommit mode; transactions are started explicitly
    by :class:`multidb.persistence.Transaction`.
    """

    kind = BackendKind.SQLITE
    dialect_cls = SQLiteDialect

    def _open(self, descriptor: FileDescriptor) -> sqlite3.Connection:
        connection = sqlite3.connect(
            descriptor.path,
            timeout=resolve_sqlite_timeout(),
            isolation_level=None,
            check_same_thread=False,
        )
        connection.row_factory = sqlite3.Row
        return connection
