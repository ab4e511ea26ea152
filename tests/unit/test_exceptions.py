"""Unit tests for domain exception hierarchy."""

import pytest


@pytest.mark.core
class TestImportGateError:
    """Tests for base exception class."""

    def test_is_exception_subclass(self) -> None:
        """ImportGateError should be an Exception subclass."""
        from importgate.core.exceptions import ImportGateError

        assert issubclass(ImportGateError, Exception)

    def test_recovery_hint_returns_none_by_default(self) -> None:
        """Base exception should return None for recovery_hint."""
        from importgate.core.exceptions import ImportGateError

        err = ImportGateError("something went wrong")
        assert err.recovery_hint is None

    @pytest.mark.parametrize(
        "name",
        [
            "PolicyDeniedError",
            "LocationNotFoundError",
            "InvalidLocationError",
            "MissingDependencyError",
            "TransportError",
            "TransportAccessError",
            "ConfigurationError",
        ],
    )
    def test_all_errors_share_base(self, name: str) -> None:
        """Every domain error can be caught as ImportGateError."""
        from importgate.core import exceptions

        assert issubclass(getattr(exceptions, name), exceptions.ImportGateError)


@pytest.mark.core
class TestPolicyDeniedError:
    """Tests for PolicyDeniedError."""

    def test_is_permission_error(self) -> None:
        """Callers handling PermissionError also catch policy denials."""
        from importgate.core.exceptions import PolicyDeniedError

        err = PolicyDeniedError("denied", location="/a", setting="x.enabled")
        assert isinstance(err, PermissionError)
        assert str(err) == "denied"

    def test_recovery_hint_names_setting(self) -> None:
        """The hint tells which setting to enable."""
        from importgate.core.exceptions import PolicyDeniedError

        err = PolicyDeniedError("denied", location="/a", setting="x.enabled")
        assert err.recovery_hint == "Set x.enabled=true in your configuration"


@pytest.mark.core
class TestLocationNotFoundError:
    """Tests for LocationNotFoundError."""

    def test_is_file_not_found_error(self) -> None:
        """Callers handling FileNotFoundError also catch this."""
        from importgate.core.exceptions import LocationNotFoundError

        err = LocationNotFoundError("Cannot open file /a for reading.", location="/a")
        assert isinstance(err, FileNotFoundError)
        assert err.location == "/a"
        assert "/a" in (err.recovery_hint or "")


@pytest.mark.core
class TestMissingDependencyError:
    """Tests for MissingDependencyError."""

    def test_message_lists_requirements_and_docs(self) -> None:
        """The message enumerates packages and points to the docs."""
        from importgate.core.exceptions import DOCUMENTATION_URL, MissingDependencyError

        err = MissingDependencyError("hdfs", ["hdfs-native"])
        message = str(err)

        assert "HDFS" in message
        assert "hdfs-native" in message
        assert DOCUMENTATION_URL in message

    def test_recovery_hint_is_install_command(self) -> None:
        """The hint is a pip command for all requirements."""
        from importgate.core.exceptions import MissingDependencyError

        err = MissingDependencyError("s3", ["boto3", "botocore"])
        assert err.recovery_hint == "pip install boto3 botocore"
        assert err.requirements == ["boto3", "botocore"]


@pytest.mark.core
class TestTransportError:
    """Tests for TransportError and subclasses."""

    def test_stores_location_and_cause(self) -> None:
        """The failing location and the underlying error are kept."""
        from importgate.core.exceptions import TransportError

        cause = ConnectionError("reset")
        err = TransportError("failed", location="hdfs://nn/a", cause=cause)

        assert err.location == "hdfs://nn/a"
        assert err.cause is cause

    def test_access_error_hint(self) -> None:
        """Access errors suggest checking credentials."""
        from importgate.core.exceptions import TransportAccessError, TransportError

        err = TransportAccessError("denied", location="s3://b/k")
        assert isinstance(err, TransportError)
        assert "credentials" in err.recovery_hint
