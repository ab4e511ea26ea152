"""Domain exceptions for importgate.

All library errors inherit from ImportGateError, allowing users to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.
"""

from __future__ import annotations


DOCUMENTATION_URL = (
    "https://neo4j-contrib.github.io/neo4j-apoc-procedures/"
    "#_loading_data_from_web_apis_json_xml_csv"
)


class ImportGateError(Exception):
    """Base class for all importgate exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class PolicyDeniedError(ImportGateError, PermissionError):
    """Raised when configuration forbids reading a location.

    Attributes:
        location: The location that was refused.
        setting: The configuration key that must be enabled.
    """

    def __init__(self, message: str, location: str, setting: str) -> None:
        self.location = location
        self.setting = setting
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Name the setting that has to be switched on."""
        return f"Set {self.setting}=true in your configuration"


class LocationNotFoundError(ImportGateError, FileNotFoundError):
    """Raised when a local file is missing, not a regular file, or unreadable.

    Attributes:
        location: The path that could not be opened.
    """

    def __init__(self, message: str, location: str) -> None:
        self.location = location
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest verifying the path."""
        return f"Verify the file exists and is readable: {self.location}"


class InvalidLocationError(ImportGateError, ValueError):
    """Raised when a location cannot be parsed as a path or URL.

    Attributes:
        location: The malformed location.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        location: str,
        cause: Exception | None = None,
    ) -> None:
        self.location = location
        self.cause = cause
        super().__init__(message)


class MissingDependencyError(ImportGateError):
    """Raised when the optional library behind a transport is not installed.

    Attributes:
        scheme: The URL scheme whose transport is unavailable.
        requirements: Distribution names that provide the transport.
    """

    def __init__(self, scheme: str, requirements: list[str]) -> None:
        self.scheme = scheme
        self.requirements = list(requirements)
        listing = "\n".join(f"  {name}" for name in self.requirements)
        super().__init__(
            f"Cannot find the {scheme.upper()} transport libraries.\n"
            f"Please install these packages:\n\n{listing}\n\n"
            f"See the documentation: {DOCUMENTATION_URL}"
        )

    @property
    def recovery_hint(self) -> str:
        """Give the install command."""
        return f"pip install {' '.join(self.requirements)}"


class TransportError(ImportGateError):
    """Raised when a transport fails to open or stream a location.

    Attributes:
        location: The location being accessed.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        location: str,
        cause: Exception | None = None,
    ) -> None:
        self.location = location
        self.cause = cause
        super().__init__(message)


class TransportAccessError(TransportError):
    """Raised when a remote transport denies access (permissions, credentials)."""

    @property
    def recovery_hint(self) -> str:
        """Suggest checking permissions."""
        return "Check credentials and bucket/path permissions"


class ConfigurationError(ImportGateError):
    """Raised for configuration problems (unreadable file, bad values)."""

    pass
