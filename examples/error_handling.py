"""Error handling patterns with recovery hints.

This example demonstrates how to handle common errors and use
the recovery_hint property to provide actionable guidance.
"""

from importgate import (
    FileGateway,
    GatewayConfig,
    # Exceptions
    ImportGateError,
    LocationNotFoundError,
    MissingDependencyError,
    PolicyDeniedError,
    TransportAccessError,
    create_gateway,
)


# File import is disabled until the host enables it
gateway = create_gateway(GatewayConfig())


# Pattern 1: Policy denials name the setting to change
def read_or_explain(gateway: FileGateway, location: str) -> str | None:
    """Read a location, explaining policy denials."""
    try:
        with gateway.open_reader(location) as reader:
            return reader.read()
    except PolicyDeniedError as e:
        print(f"Reading {location} is not allowed.")
        print(f"Hint: {e.recovery_hint}")
        return None


# Pattern 2: Optional transports report the package to install
def read_hdfs(gateway: FileGateway, location: str) -> bytes:
    """Read from HDFS, pointing at the missing extra if needed."""
    try:
        with gateway.open_input_stream(location) as stream:
            return stream.read()
    except MissingDependencyError as e:
        print(e)
        print(f"Run: {e.recovery_hint}")
        raise


# Pattern 3: Missing local files and remote access problems
def read_with_fallback(gateway: FileGateway, location: str, default: str) -> str:
    """Read a location, returning default when it does not exist."""
    try:
        with gateway.open_reader(location) as reader:
            return reader.read()
    except LocationNotFoundError:
        return default
    except TransportAccessError as e:
        print(f"Access denied for {e.location}: {e.recovery_hint}")
        raise


# Pattern 4: Catch-all for any importgate error
def safe_read(gateway: FileGateway, location: str) -> str | None:
    """Read a location, reporting any gateway error."""
    try:
        with gateway.open_reader(location) as reader:
            return reader.read()
    except ImportGateError as e:
        print(f"Error: {e}")
        if e.recovery_hint:
            print(f"Hint: {e.recovery_hint}")
        return None


if __name__ == "__main__":
    read_or_explain(gateway, "people.csv")
    safe_read(gateway, "s3://my-bucket/missing.csv")
