import pytest

from multidb.adapters import PostgresConnectionFactory
from multidb.adapters.postgres import _load_driver
from multidb.core import (
    ArgumentError,
    BackendKind,
    ConnectionFailedError,
    DriverNotInstalledError,
)
from multidb.security import LEGACY_PASSWORD_ENV_VAR, PASSWORD_ENV_VAR, StaticSecretResolver

DESCRIPTOR = "Host=localhost;Port=5432;Database=jvlink;Username=app"


class FakeConnection:
    def __init__(self, options):
        self.options = options
        self.statements = []
        self.closed = False

    def execute(self, sql, params=None):
        self.statements.append((sql, params))
        return self

    def fetchone(self):
        return (1,)

    def close(self):
        self.closed = True


class FakeDriver:
    def __init__(self):
        self.connections = []

    def connect(self, **options):
        conn = FakeConnection(options)
        self.connections.append(conn)
        return conn


@pytest.fixture
def fake_driver(monkeypatch):
    driver = FakeDriver()
    monkeypatch.setattr("multidb.adapters.postgres._load_driver", lambda: driver)
    return driver


@pytest.fixture
def factory(monkeypatch):
    monkeypatch.delenv(PASSWORD_ENV_VAR, raising=False)
    monkeypatch.delenv(LEGACY_PASSWORD_ENV_VAR, raising=False)
    return PostgresConnectionFactory()


def test_factory_kind(factory):
    assert factory.kind is BackendKind.POSTGRESQL


@pytest.mark.parametrize(
    "descriptor, missing",
    [
        ("Database=jvlink;Username=app", "Host"),
        ("Host=localhost;Username=app", "Database"),
        ("Host=localhost;Database=jvlink", "Username"),
    ],
)
def test_validation_reports_missing_required_keys(factory, descriptor, missing):
    result = factory.validate_connection_string(descriptor)
    assert result.is_valid is False
    assert missing in result.error_message
    assert "required" in result.error_message


def test_validation_accepts_aliases_without_password(factory):
    assert factory.validate_connection_string("Server=db;DB=jvlink;User Id=app").is_valid


def test_validation_reports_malformed_descriptor(factory):
    result = factory.validate_connection_string("Host=localhost;Port=abc;Database=d;Username=u")
    assert result.is_valid is False
    assert result.error_message.startswith("Invalid PostgreSQL connection string")
    assert not factory.validate_connection_string("").is_valid


def test_create_connection_does_not_connect(factory, fake_driver):
    handle = factory.create_connection(DESCRIPTOR)
    assert handle.is_open is False
    assert fake_driver.connections == []


def test_open_passes_autocommit_and_parameters(factory, fake_driver):
    with factory.create_connection(DESCRIPTOR) as handle:
        handle.execute("SELECT 1")
    options = fake_driver.connections[0].options
    assert options == {
        "autocommit": True,
        "host": "localhost",
        "dbname": "jvlink",
        "user": "app",
        "port": 5432,
    }
    assert fake_driver.connections[0].closed is True


def test_password_from_secret_resolver(fake_driver):
    factory = PostgresConnectionFactory(secret_resolver=StaticSecretResolver("s3cret"))
    handle = factory.create_connection(DESCRIPTOR)
    assert "s3cret" not in handle.label
    handle.open()
    assert fake_driver.connections[0].options["password"] == "s3cret"
    handle.close()


def test_password_from_environment(monkeypatch, fake_driver):
    monkeypatch.setenv(PASSWORD_ENV_VAR, "env-secret")
    factory = PostgresConnectionFactory()
    with factory.create_connection(DESCRIPTOR):
        pass
    assert fake_driver.connections[0].options["password"] == "env-secret"


def test_descriptor_password_wins_over_resolver(fake_driver):
    factory = PostgresConnectionFactory(secret_resolver=StaticSecretResolver("other"))
    with factory.create_connection(DESCRIPTOR + ";Password=inline"):
        pass
    assert fake_driver.connections[0].options["password"] == "inline"


def test_execute_rewrites_named_parameters_to_pyformat(factory, fake_driver):
    with factory.create_connection(DESCRIPTOR) as handle:
        handle.execute(
            "SELECT * FROM race WHERE name LIKE 'D%' AND race_id = @race_id",
            {"race_id": "R1"},
        )
        sql, params = fake_driver.connections[0].statements[-1]
    assert sql == "SELECT * FROM race WHERE name LIKE 'D%%' AND race_id = %(race_id)s"
    assert params == {"race_id": "R1"}


def test_invalid_descriptor_raises_argument_error(factory):
    with pytest.raises(ArgumentError) as excinfo:
        factory.create_connection("Host=localhost;Database=jvlink")
    assert "Username" in str(excinfo.value)


def test_missing_driver_raises(monkeypatch, factory):
    monkeypatch.setattr("multidb.adapters.postgres._load_driver", lambda: None)
    handle = factory.create_connection(DESCRIPTOR)
    with pytest.raises(DriverNotInstalledError):
        handle.open()


def test_driver_failure_is_wrapped(monkeypatch, factory):
    class BrokenDriver:
        def connect(self, **options):
            raise OSError("connection refused")

    monkeypatch.setattr("multidb.adapters.postgres._load_driver", lambda: BrokenDriver())
    handle = factory.create_connection(DESCRIPTOR + ";Password=secret")
    with pytest.raises(ConnectionFailedError) as excinfo:
        handle.open()
    assert isinstance(excinfo.value.__cause__, OSError)
    assert "secret" not in str(excinfo.value)


def test_load_driver_returns_module_or_none():
    driver = _load_driver()
    assert driver is None or hasattr(driver, "connect")


def test_password_from_legacy_environment_variable(factory, monkeypatch, fake_driver):
    monkeypatch.setenv(LEGACY_PASSWORD_ENV_VAR, "legacy-secret")
    with factory.create_connection(DESCRIPTOR):
        pass
    assert fake_driver.connections[0].options["password"] == "legacy-secret"


def test_npgsql_options_are_translated_for_libpq(factory, fake_driver):
    descriptor = DESCRIPTOR + ";Timeout=15;SSL Mode=VerifyFull;Application Name=jvlink;Pooling=true;Maximum Pool Size=5"
    assert factory.validate_connection_string(descriptor).is_valid
    with factory.create_connection(descriptor):
        pass
    options = fake_driver.connections[0].options
    assert options["connect_timeout"] == "15"
    assert options["sslmode"] == "verify-full"
    assert options["application_name"] == "jvlink"
    for dropped in ("pooling", "maximumpoolsize", "maxpoolsize", "timeout"):
        assert dropped not in options


def test_unknown_option_fails_validation(factory, fake_driver):
    result = factory.validate_connection_string(DESCRIPTOR + ";Frobnicate=yes")
    assert result.is_valid is False
    assert "frobnicate" in result.error_message
    with pytest.raises(ArgumentError):
        factory.create_connection(DESCRIPTOR + ";Frobnicate=yes")
    assert fake_driver.connections == []
