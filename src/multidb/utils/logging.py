"""Structured logging helpers for multidb."""

from __future__ import annotations

import logging
import os
import time
import uuid
from contextvars import ContextVar
from typing import Any, Iterable, Optional

LOG_LEVEL_ENV_VAR = "MULTIDB_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def _level_from_env(default: int) -> int:
    value = os.getenv(LOG_LEVEL_ENV_VAR)
    if not value:
        return default
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(level: int | None = None) -> None:
    """
    Install the package handler once. ``MULTIDB_LOG_LEVEL`` applies when no
    level is passed.
    """

    logger = logging.getLogger("multidb")
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    logger.setLevel(level if level is not None else _level_from_env(logging.INFO))


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"multidb.{name}")


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or str(uuid.uuid4())
    _correlation_id.set(token)
    return token


def get_correlation_id() -> str:
    cid = _correlation_id.get()
    if cid is None:
        cid = set_correlation_id()
    return cid


class SqlTimer:
    """
    Context manager logging how long a block of SQL work took.
    """

    def __init__(
        self,
        name: str,
        logger: logging.Logger,
        *,
        sql: str | None = None,
        params: Iterable[Any] | None = None,
        backend: str | None = None,
        threshold_ms: int = 100,
    ) -> None:
        self.name = name
        self.logger = logger
        self.sql = sql
        self.params = params
        self.backend = backend
        self.threshold_ms = threshold_ms
        self.elapsed_ms: float | None = None
        self._start = 0.0

    def __enter__(self) -> "SqlTimer":
        self._start = time.monotonic()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed_ms = (time.monotonic() - self._start) * 1000
        level = logging.WARNING if self.elapsed_ms >= self.threshold_ms else logging.DEBUG
        extra = {
            "sql": self.sql,
            "params": self.params,
            "backend": self.backend,
            "elapsed_ms": self.elapsed_ms,
        }
        self.logger.log(level, "%s took %.2fms", self.name, self.elapsed_ms, extra=extra)


def time_call(
    name: str,
    logger: logging.Logger,
    *,
    sql: str | None = None,
    params: Iterable[Any] | None = None,
    backend: str | None = None,
    threshold_ms: int = 100,
) -> SqlTimer:
    return SqlTimer(
        name, logger, sql=sql, params=params, backend=backend, threshold_ms=threshold_ms
    )
