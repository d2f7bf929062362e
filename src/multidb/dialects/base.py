"""
Dialect strategy interfaces and the SQL generation shared by every backend.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Protocol, Sequence

from ..core.errors import ArgumentError, UnsupportedTypeError, require_value
from ..core.types import BackendKind, ColumnSpec, IsolationLevel, ScalarKind
from ..schema.indexes import index_statements

STATEMENT_SEPARATOR = ";\n"

_TOKEN_RE = re.compile(
    r"(?P<literal>'(?:[^']|'')*')"
    r"|(?P<quoted>\"(?:[^\"]|\"\")*\")"
    r"|@(?P<param>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<percent>%)"
)


# Driver placeholder per DB-API paramstyle.
_PLACEHOLDER_FORMATS: dict[str, str] = {
    "named": ":{name}",
    "dollar": "${name}",
    "pyformat": "%({name})s",
}


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Feature flags describing backend capabilities.
    """

    supports_isolation_levels: bool = False


class Dialect(Protocol):
    """
    Strategy interface consumed by providers, adapters and the index planner.
    """

    @property
    def name(self) -> str: ...

    @property
    def kind(self) -> BackendKind: ...

    @property
    def identifier_quote_char(self) -> str: ...

    @property
    def parameter_prefix(self) -> str: ...

    def map_type(self, kind: ScalarKind | Any) -> str: ...

    def quote_identifier(self, identifier: str) -> str: ...

    def parameter_name(self, field: str) -> str: ...

    def generate_create_table_ddl(self, table_name: str, columns: Sequence[ColumnSpec]) -> str: ...

    def generate_insert_sql(self, table_name: str, columns: Sequence[ColumnSpec]) -> str: ...

    def begin_transaction_sql(self, isolation_level: IsolationLevel) -> str: ...

    def to_driver_sql(self, sql: str) -> str: ...


class BaseDialect:
    """
    Text generation common to all dialects.

    Subclasses supply ``name``, ``kind``, ``param_style``, ``capabilities`` and
    ``type_mappings``. Every dialect quotes with ``"`` and names parameters
    with ``@`` so callers write one placeholder style for all backends;
    :meth:`to_driver_sql` converts it for the driver.
    """

    name: ClassVar[str]
    kind: ClassVar[BackendKind]
    param_style: ClassVar[str]
    capabilities: ClassVar[DialectCapabilities]
    type_mappings: ClassVar[Mapping[ScalarKind, str]]

    identifier_quote_char: ClassVar[str] = '"'
    parameter_prefix: ClassVar[str] = "@"

    # ------------------------------------------------------------------ #
    # Types, identifiers, parameters
    # ------------------------------------------------------------------ #
    def map_type(self, kind: ScalarKind | Any) -> str:
        require_value(kind, "Type")
        scalar = ScalarKind.from_python(kind)
        sql_type = self.type_mappings.get(scalar)
        if sql_type is None:
            supported = ", ".join(k.value for k in self.type_mappings)
            raise UnsupportedTypeError(
                f"Type '{scalar.value}' is not supported by {self.kind.label}. "
                f"Supported types: {supported}."
            )
        return sql_type

    def quote_identifier(self, identifier: str) -> str:
        require_value(identifier, "Identifier", allow_blank=True)
        quote = self.identifier_quote_char
        escaped = identifier.replace(quote, quote * 2)
        return f"{quote}{escaped}{quote}"

    def parameter_name(self, field: str) -> str:
        require_value(field, "Field name", allow_blank=True)
        return f"{self.parameter_prefix}{field}"

    # ------------------------------------------------------------------ #
    # DDL
    # ------------------------------------------------------------------ #
    def render_column_definition(self, column: ColumnSpec) -> str:
        null_clause = "" if column.is_nullable else " NOT NULL"
        return f"{self.quote_identifier(column.name)} {self.map_type(column.kind)}{null_clause}"

    def create_table_statements(self, table_name: str, columns: Sequence[ColumnSpec]) -> list[str]:
        """
        CREATE TABLE followed by the planned CREATE INDEX statements.
        """

        table = self.quote_identifier(table_name)
        self._check_columns(table_name, columns)
        lines = [self.render_column_definition(column) for column in columns]
        keys = [self.quote_identifier(column.name) for column in columns if column.is_key]
        if keys:
            lines.append(f"PRIMARY KEY ({', '.join(keys)})")
        body = ",\n".join(f"    {line}" for line in lines)
        create = f"CREATE TABLE IF NOT EXISTS {table} (\n{body}\n)"
        return [create, *index_statements(self, table_name, columns)]

    def generate_create_table_ddl(self, table_name: str, columns: Sequence[ColumnSpec]) -> str:
        return STATEMENT_SEPARATOR.join(self.create_table_statements(table_name, columns))

    def drop_table_sql(self, table_name: str) -> str:
        return f"DROP TABLE IF EXISTS {self.quote_identifier(table_name)}"

    # ------------------------------------------------------------------ #
    # DML
    # ------------------------------------------------------------------ #
    def generate_insert_sql(self, table_name: str, columns: Sequence[ColumnSpec]) -> str:
        table = self.quote_identifier(table_name)
        self._check_columns(table_name, columns)
        names = ", ".join(self.quote_identifier(column.name) for column in columns)
        params = ", ".join(self.parameter_name(column.name) for column in columns)
        return f"INSERT INTO {table} ({names}) VALUES ({params})"

    def generate_select_sql(
        self, table_name: str, columns: Sequence[ColumnSpec], where: str | None = None
    ) -> str:
        table = self.quote_identifier(table_name)
        self._check_columns(table_name, columns)
        names = ", ".join(self.quote_identifier(column.name) for column in columns)
        sql = f"SELECT {names} FROM {table}"
        if where is not None and where.strip():
            sql += f" WHERE {where}"
        return sql

    def generate_update_sql(self, table_name: str, columns: Sequence[ColumnSpec], where: str) -> str:
        table = self.quote_identifier(table_name)
        require_value(where, "WHERE clause")
        self._check_columns(table_name, columns)
        assignments = ", ".join(
            f"{self.quote_identifier(column.name)} = {self.parameter_name(column.name)}"
            for column in columns
        )
        return f"UPDATE {table} SET {assignments} WHERE {where}"

    def generate_delete_sql(self, table_name: str, where: str) -> str:
        table = self.quote_identifier(table_name)
        require_value(where, "WHERE clause")
        return f"DELETE FROM {table} WHERE {where}"

    # ------------------------------------------------------------------ #
    # Execution helpers
    # ------------------------------------------------------------------ #
    def begin_transaction_sql(self, isolation_level: IsolationLevel = IsolationLevel.READ_COMMITTED) -> str:
        if self.capabilities.supports_isolation_levels:
            return f"BEGIN ISOLATION LEVEL {isolation_level.value}"
        return "BEGIN"

    def to_driver_sql(self, sql: str) -> str:
        """
        Rewrite ``@name`` placeholders into the driver's parameter style.

        Placeholders inside quoted literals and identifiers are left alone;
        ``%`` is escaped everywhere for drivers that treat it as a marker.
        """

        placeholder = _PLACEHOLDER_FORMATS[self.param_style]
        percent = "%%" if self.param_style == "pyformat" else "%"

        def _replace(match: re.Match[str]) -> str:
            param = match.group("param")
            if param is not None:
                return placeholder.format(name=param)
            if match.group("percent") is not None:
                return percent
            return match.group(0).replace("%", percent)

        return _TOKEN_RE.sub(_replace, sql)

    @staticmethod
    def _check_columns(table_name: str, columns: Sequence[ColumnSpec]) -> None:
        require_value(columns, "Columns")
        if not columns:
            raise ArgumentError(f"Table '{table_name}' must declare at least one column.")
        seen: set[str] = set()
        for column in columns:
            lowered = column.name.lower()
            if lowered in seen:
                raise ArgumentError(f"Column '{column.name}' is declared more than once in '{table_name}'.")
            seen.add(lowered)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
