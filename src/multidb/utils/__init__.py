"""
Utility helpers shared across multidb packages.
"""

from .config import resolve_slow_query_ms, resolve_sqlite_timeout
from .logging import configure_logging, get_logger, time_call

__all__ = [
    "configure_logging",
    "get_logger",
    "resolve_slow_query_ms",
    "resolve_sqlite_timeout",
    "time_call",
]
