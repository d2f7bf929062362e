"""
Heuristic secondary-index planning from column naming conventions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence

from ..core.types import ColumnSpec

if TYPE_CHECKING:
    from ..dialects.base import Dialect


@dataclass(frozen=True)
class IndexRule:
    name: str
    matches: Callable[[str], bool]


# Order matters: the first matching rule decides. Changing this table changes
# generated DDL for databases that already exist.
INDEX_RULES: tuple[IndexRule, ...] = (
    IndexRule("foreign_key", lambda name: name.endswith(("_id", "_code"))),
    IndexRule("temporal", lambda name: "date" in name or "time" in name),
    IndexRule("frequent_filter", lambda name: name in ("sex", "affiliation", "distance")),
)


def match_rule(column_name: str) -> IndexRule | None:
    """Return the first rule selecting ``column_name``, compared lower-cased."""
    lowered = column_name.lower()
    for rule in INDEX_RULES:
        if rule.matches(lowered):
            return rule
    return None


def plan_indexes(columns: Sequence[ColumnSpec]) -> tuple[str, ...]:
    """
    Select non-key columns worth a secondary index, in declaration order.

    A lower-cased name is selected at most once per call.
    """

    selected: list[str] = []
    seen: set[str] = set()
    for column in columns:
        if column.is_key:
            continue
        lowered = column.name.lower()
        if lowered in seen:
            continue
        if match_rule(lowered) is not None:
            selected.append(column.name)
            seen.add(lowered)
    return tuple(selected)


def index_statements(dialect: "Dialect", table_name: str, columns: Sequence[ColumnSpec]) -> list[str]:
    table = dialect.quote_identifier(table_name)
    return [
        f"CREATE INDEX IF NOT EXISTS {dialect.quote_identifier(f'idx_{column}')} "
        f"ON {table}({dialect.quote_identifier(column)})"
        for column in plan_indexes(columns)
    ]
