import pytest

from multidb.core import ArgumentError, BackendKind, DetectionError, InvalidArgumentError
from multidb.providers import detect_backend


@pytest.mark.parametrize(
    "descriptor, expected",
    [
        (":memory:", BackendKind.SQLITE),
        ("  :MEMORY:  ", BackendKind.SQLITE),
        ("race.db", BackendKind.SQLITE),
        ("race.DB", BackendKind.SQLITE),
        ("/data/race.sqlite", BackendKind.SQLITE),
        ("Data Source=race.db", BackendKind.SQLITE),
        ("Data Source=race.db;Cache=Shared", BackendKind.SQLITE),
        ("..\\data\\race.db", BackendKind.SQLITE),
        ("analytics.duckdb", BackendKind.DUCKDB),
        ("Data Source=analytics.duckdb", BackendKind.DUCKDB),
        ("DataSource=analytics.DuckDB;threads=4", BackendKind.DUCKDB),
        ("Host=localhost;Database=jvlink", BackendKind.POSTGRESQL),
        ("Server=db;Database=jvlink", BackendKind.POSTGRESQL),
        ("host=localhost", BackendKind.POSTGRESQL),
        ("Host = localhost ; Database = jvlink", BackendKind.POSTGRESQL),
    ],
)
def test_detect_backend(descriptor, expected):
    assert detect_backend(descriptor) is expected


def test_server_key_wins_over_file_extension():
    assert detect_backend("Host=localhost;Database=mydb.db") is BackendKind.POSTGRESQL


def test_missing_descriptor_is_rejected():
    with pytest.raises(InvalidArgumentError):
        detect_backend(None)
    with pytest.raises(ArgumentError):
        detect_backend("")
    with pytest.raises(ArgumentError):
        detect_backend("   ")


def test_unknown_descriptor_lists_expected_forms():
    with pytest.raises(DetectionError) as excinfo:
        detect_backend("data.txt")
    message = str(excinfo.value)
    assert "'data.txt'" in message
    for expected in (".db", ".sqlite", ".duckdb", "Host="):
        assert expected in message


def test_detection_error_redacts_secrets():
    with pytest.raises(DetectionError) as excinfo:
        detect_backend("Database=jvlink;Password=hunter2")
    assert "hunter2" not in str(excinfo.value)
