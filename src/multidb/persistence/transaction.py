"""
Transaction handle returned by ``DatabaseProvider.begin_transaction``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.errors import InvalidStateError
from ..core.types import IsolationLevel

if TYPE_CHECKING:
    from ..adapters.base import ConnectionHandle


class Transaction:
    """
    One explicit transaction on an open connection.

    Used as a context manager it commits when the block succeeds and rolls
    back when it raises.
    """

    def __init__(self, connection: "ConnectionHandle", isolation_level: IsolationLevel) -> None:
        self.connection = connection
        self.isolation_level = isolation_level
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def begin(self) -> "Transaction":
        if self._active:
            raise InvalidStateError("Transaction has already begun.")
        self.connection.execute(self.connection.dialect.begin_transaction_sql(self.isolation_level))
        self._active = True
        return self

    def commit(self) -> None:
        """
        Commit the transaction. If COMMIT fails the transaction stays active
        so the caller can still roll it back.
        """

        if not self._active:
            raise InvalidStateError("No active transaction to commit.")
        self.connection.execute("COMMIT")
        self._active = False

    def rollback(self) -> None:
        if not self._active:
            raise InvalidStateError("No active transaction to roll back.")
        try:
            self.connection.execute("ROLLBACK")
        finally:
            self._active = False

    def __enter__(self) -> "Transaction":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._active:
            return
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def __repr__(self) -> str:
        state = "active" if self._active else "finished"
        return f"Transaction({self.isolation_level.name}, {state})"
