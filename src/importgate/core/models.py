"""Core domain models for importgate.

These models are plain dataclasses and enums with no I/O of their own.
They describe what a location is and what opening one produces.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import IO, TYPE_CHECKING, Self


if TYPE_CHECKING:
    from types import TracebackType


class LocationKind(Enum):
    """Classification of a location string by its prefix."""

    LOCAL = "local"
    FILE_URL = "file"
    HDFS = "hdfs"
    OTHER_URL = "other"


class OperationalDirectory(Enum):
    """Host directories exposed for operational tooling.

    The value is the directory name used under the home directory when
    no explicit setting is configured.
    """

    LOGS = "logs"
    METRICS = "metrics"


@dataclass(frozen=True, slots=True)
class StreamConnection:
    """An open transport stream together with what is known about it.

    The caller that opened the connection owns it and must close it.

    Attributes:
        stream: Binary file-like object positioned at the start of the content.
        length: Declared content length in bytes, if the transport reports one.
        encoding: Character encoding advertised by the transport, if any.

    Example:
        >>> import io
        >>> with StreamConnection(io.BytesIO(b"abc"), length=3) as conn:
        ...     conn.stream.read()
        b'abc'
    """

    stream: IO[bytes]
    length: int | None = None
    encoding: str | None = None

    def __post_init__(self) -> None:
        """Validate the declared length."""
        if self.length is not None and self.length < 0:
            raise ValueError("StreamConnection length cannot be negative")

    def close(self) -> None:
        """Release the underlying transport resource."""
        self.stream.close()

    def __enter__(self) -> Self:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the stream on exit."""
        self.close()
