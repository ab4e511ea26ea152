"""Counting stream wrappers.

CountingInputStream and CountingReader decorate a binary or text stream
with a running count of the units read, and optionally a known total, so
callers can report progress regardless of where the stream came from.
Neither wrapper is safe for use by more than one reader at a time.
"""

from __future__ import annotations

import io
import logging
from typing import IO, TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Buffer
    from types import TracebackType

    from importgate.core.ports import ProgressCallback


logger = logging.getLogger(__name__)


class _Counter:
    """Shared counting state for the stream wrappers."""

    _count: int
    _total: int | None
    _progress: ProgressCallback | None

    def _init_counter(
        self, total: int | None, progress: ProgressCallback | None
    ) -> None:
        if total is not None and total < 0:
            raise ValueError("total cannot be negative")
        self._count = 0
        self._total = total
        self._progress = progress

    def _advance(self, n: int) -> None:
        if n <= 0:
            return
        self._count += n
        if self._progress is not None:
            self._progress(self._count, self._total if self._total is not None else 0)

    @property
    def count(self) -> int:
        """Number of units read so far."""
        return self._count

    @property
    def total(self) -> int | None:
        """Total length declared at construction, if known."""
        return self._total

    @property
    def fraction_read(self) -> float | None:
        """Fraction of the declared total read so far, or None if unknown."""
        if self._total is None:
            return None
        if self._total == 0:
            return 1.0
        return min(self._count / self._total, 1.0)


class CountingInputStream(_Counter, io.RawIOBase):
    """Binary stream that counts the bytes read from the wrapped stream.

    Args:
        raw: Binary stream to wrap. Closed when this stream is closed.
        total: Declared length in bytes, if known.
        progress: Optional callback(bytes_read, total_bytes) called after
            every successful read.

    Example:
        >>> stream = CountingInputStream(io.BytesIO(b"hello"), total=5)
        >>> stream.read(2)
        b'he'
        >>> stream.count, stream.total
        (2, 5)
    """

    def __init__(
        self,
        raw: IO[bytes],
        total: int | None = None,
        progress: ProgressCallback | None = None,
    ) -> None:
        super().__init__()
        self._raw = raw
        self._init_counter(total, progress)

    def readable(self) -> bool:
        """Return True; counting streams are read-only."""
        return True

    def read(self, size: int | None = -1) -> bytes:
        """Read up to size bytes, or everything when size is negative or None."""
        self._checkClosed()
        if size is None or size < 0:
            data = self._raw.read()
        else:
            data = self._raw.read(size)
        self._advance(len(data))
        return data

    def readall(self) -> bytes:
        """Read until end of stream."""
        return self.read()

    def readinto(self, buffer: Buffer) -> int:
        """Read bytes into a pre-allocated buffer, returning the count."""
        view = memoryview(buffer).cast("B")
        data = self.read(len(view))
        n = len(data)
        view[:n] = data
        return n

    def readline(self, size: int | None = -1) -> bytes:
        """Read one line, up to size bytes."""
        self._checkClosed()
        line = self._raw.readline(-1 if size is None else size)
        self._advance(len(line))
        return line

    def close(self) -> None:
        """Close the wrapped stream. Safe to call more than once."""
        if self.closed:
            return
        try:
            self._raw.close()
        finally:
            super().close()


class CountingReader(_Counter, io.TextIOBase):
    """Text stream that counts the characters read from the wrapped stream.

    Args:
        raw: Text stream to wrap. Closed when this reader is closed.
        total: Declared length of the source, if known.
        progress: Optional callback(chars_read, total) called after every
            successful read.
    """

    def __init__(
        self,
        raw: IO[str],
        total: int | None = None,
        progress: ProgressCallback | None = None,
    ) -> None:
        super().__init__()
        self._raw = raw
        self._init_counter(total, progress)

    @classmethod
    def from_binary(
        cls,
        stream: IO[bytes],
        encoding: str = "utf-8",
        total: int | None = None,
        progress: ProgressCallback | None = None,
    ) -> CountingReader:
        """Decode a binary stream and wrap it in a CountingReader.

        Args:
            stream: Binary stream to decode. Closed with the reader.
            encoding: Character encoding of the stream.
            total: Declared length of the source in bytes, if known.
            progress: Optional progress callback.

        Returns:
            A CountingReader over the decoded text.
        """
        if not isinstance(stream, io.BufferedIOBase):
            stream = io.BufferedReader(stream)  # type: ignore[arg-type]
        text = io.TextIOWrapper(stream, encoding=encoding, newline="")
        return cls(text, total=total, progress=progress)

    @property
    def encoding(self) -> Any:
        """Encoding of the wrapped stream, if it reports one."""
        return getattr(self._raw, "encoding", None)

    def readable(self) -> bool:
        """Return True; counting readers are read-only."""
        return True

    def read(self, size: int | None = -1) -> str:
        """Read up to size characters, or everything when size is negative."""
        self._checkClosed()
        text = self._raw.read(-1 if size is None else size)
        self._advance(len(text))
        return text

    def readline(self, size: int = -1) -> str:  # type: ignore[override]
        """Read one line, up to size characters."""
        self._checkClosed()
        line = self._raw.readline(size)
        self._advance(len(line))
        return line

    def close(self) -> None:
        """Close the wrapped stream. Safe to call more than once."""
        if self.closed:
            return
        try:
            self._raw.close()
        finally:
            super().close()


def close_safely(stream: IO[Any] | None) -> None:
    """Close a stream, logging instead of raising if closing fails.

    Used on cleanup paths where a close error must not mask the result
    (or the exception) of the operation itself.
    """
    if stream is None:
        return
    try:
        stream.close()
    except OSError as e:
        logger.warning("Ignoring error while closing %r: %s", stream, e)


def discard_output(stream: IO[Any]) -> None:
    """Close an output stream whose content must not be committed.

    Streams with an ``abort()`` method, such as S3 uploads, drop what was
    written. Other streams are closed with close_safely().
    """
    abort = getattr(stream, "abort", None)
    if abort is not None:
        abort()
    else:
        close_safely(stream)


class TextWriter(io.TextIOWrapper):
    """TextIOWrapper that discards its output when its with block fails."""

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
        else:
            # A closed buffer makes the wrapper's own close() a no-op.
            discard_output(self.buffer)
