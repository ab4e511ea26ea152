"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import IO, TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from importgate.core.models import StreamConnection

ProgressCallback = Callable[[int, int], None]


@runtime_checkable
class ConfigPort(Protocol):
    """Read access to the host configuration store.

    Implementations must read the backing store on every call so that
    configuration changes take effect immediately.
    """

    def get_boolean(self, key: str, default: bool = False) -> bool:
        """Return a boolean setting, or default when it is not set."""
        ...

    def get_string(self, key: str, default: str = "") -> str:
        """Return a string setting, or default when it is not set."""
        ...

    def check_read_allowed(self, location: str) -> None:
        """Raise PolicyDeniedError if reading location is not allowed."""
        ...

    def is_import_folder_configured(self) -> bool:
        """Return True if an import directory is configured."""
        ...


@runtime_checkable
class TransportPort(Protocol):
    """A transport able to open streams for locations of one scheme."""

    def open_input(self, location: str) -> StreamConnection:
        """Open location for reading.

        Args:
            location: Path or URL handled by this transport.

        Returns:
            A StreamConnection owned by the caller.

        Raises:
            LocationNotFoundError: If the location does not exist.
            TransportError: For any other transport failure.
        """
        ...

    def open_output(self, location: str) -> IO[bytes]:
        """Open location for writing, truncating existing content.

        Args:
            location: Path or URL handled by this transport.

        Returns:
            A binary output stream owned by the caller.

        Raises:
            TransportError: If the location cannot be opened for writing.
        """
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """Reports transfer progress to the user.

    This protocol defines the contract for progress display adapters.
    The core domain uses this to report progress without depending
    on any specific UI library.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Start tracking a transfer.

        Args:
            name: Human-readable name for the task (usually the location).
            total: Total bytes to transfer.

        Returns:
            A ProgressCallback to call with (bytes_done, total_bytes).
        """
        ...

    def finish_task(self, name: str) -> None:
        """Mark a task as complete.

        Args:
            name: The task name passed to start_task().
        """
        ...


class NullProgressReporter:
    """A ProgressReporter that produces no output.

    Used as the default when no progress reporting is desired.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:  # noqa: ARG002
        """Return a no-op callback."""
        return lambda _done, _total: None

    def finish_task(self, name: str) -> None:
        """Do nothing."""
        _ = name  # Unused but required by protocol
