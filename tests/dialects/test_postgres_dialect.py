from multidb.core import ColumnSpec, IsolationLevel, ScalarKind
from multidb.dialects import PostgresDialect


def test_postgres_dialect_quotes_identifiers():
    dialect = PostgresDialect()
    assert dialect.quote_identifier('table"name') == '"table""name"'
    assert dialect.quote_identifier("public.users") == '"public.users"'


def test_postgres_type_mapping():
    dialect = PostgresDialect()
    assert dialect.map_type(ScalarKind.TEXT) == "TEXT"
    assert dialect.map_type(ScalarKind.INT32) == "INTEGER"
    assert dialect.map_type(ScalarKind.INT64) == "BIGINT"
    assert dialect.map_type(ScalarKind.INT16) == "SMALLINT"
    assert dialect.map_type(ScalarKind.INT8) == "SMALLINT"
    assert dialect.map_type(ScalarKind.DECIMAL) == "NUMERIC(18,6)"
    assert dialect.map_type(ScalarKind.DOUBLE) == "DOUBLE PRECISION"
    assert dialect.map_type(ScalarKind.FLOAT) == "REAL"
    assert dialect.map_type(ScalarKind.TIMESTAMP) == "TIMESTAMP"
    assert dialect.map_type(ScalarKind.BOOLEAN) == "BOOLEAN"
    assert dialect.map_type(ScalarKind.BINARY) == "BYTEA"


def test_postgres_begin_transaction_sql_names_isolation_level():
    dialect = PostgresDialect()
    assert dialect.begin_transaction_sql() == "BEGIN ISOLATION LEVEL READ COMMITTED"
    assert (
        dialect.begin_transaction_sql(IsolationLevel.REPEATABLE_READ)
        == "BEGIN ISOLATION LEVEL REPEATABLE READ"
    )


def test_postgres_driver_sql_uses_pyformat_and_escapes_percent():
    dialect = PostgresDialect()
    sql = "SELECT \"a\" FROM \"t\" WHERE \"b\" = @b AND \"c\" > 5 % 2"
    assert dialect.to_driver_sql(sql) == (
        "SELECT \"a\" FROM \"t\" WHERE \"b\" = %(b)s AND \"c\" > 5 %% 2"
    )


def test_postgres_update_select_delete():
    dialect = PostgresDialect()
    columns = [ColumnSpec("race_id", ScalarKind.TEXT), ColumnSpec("distance", ScalarKind.INT32)]
    assert dialect.generate_select_sql("race", columns) == 'SELECT "race_id", "distance" FROM "race"'
    assert (
        dialect.generate_select_sql("race", columns, where='"distance" > @min')
        == 'SELECT "race_id", "distance" FROM "race" WHERE "distance" > @min'
    )
    assert (
        dialect.generate_update_sql("race", columns, '"race_id" = @key')
        == 'UPDATE "race" SET "race_id" = @race_id, "distance" = @distance WHERE "race_id" = @key'
    )
    assert dialect.generate_delete_sql("race", '"race_id" = @key') == (
        'DELETE FROM "race" WHERE "race_id" = @key'
    )
