import pytest

from multidb.core import (
    ArgumentError,
    ConnectionFailedError,
    DatabaseProviderError,
    DetectionError,
    DriverNotInstalledError,
    InvalidArgumentError,
    InvalidStateError,
    ProviderConfigurationError,
    UnsupportedTypeError,
    require_value,
)


def test_error_hierarchy_matches_builtin_families():
    assert issubclass(ArgumentError, ValueError)
    assert issubclass(InvalidArgumentError, ArgumentError)
    assert issubclass(DetectionError, ArgumentError)
    assert issubclass(UnsupportedTypeError, TypeError)
    assert issubclass(InvalidStateError, RuntimeError)
    assert issubclass(DriverNotInstalledError, ProviderConfigurationError)
    assert issubclass(ConnectionFailedError, ConnectionError)
    for error in (
        ArgumentError,
        UnsupportedTypeError,
        InvalidStateError,
        ProviderConfigurationError,
        ConnectionFailedError,
    ):
        assert issubclass(error, DatabaseProviderError)


def test_require_value():
    assert require_value("x", "Name") == "x"
    assert require_value(" ", "Name", allow_blank=True) == " "
    with pytest.raises(InvalidArgumentError) as excinfo:
        require_value(None, "Name")
    assert "Name" in str(excinfo.value)
    with pytest.raises(ArgumentError):
        require_value("", "Name", allow_blank=True)
    with pytest.raises(ArgumentError):
        require_value("   ", "Name")
