"""Raw I/O adapters for transport client objects.

Client libraries hand back their own stream types (botocore's
StreamingBody, hdfs-native's FileReader, httpx byte iterators). These
adapters give them the io.RawIOBase interface so the rest of the gateway
can buffer, decode and count them like any local file.

Each adapter is told which exception types its client library raises.
Those are re-raised as TransportError naming the location, except for
OSError subclasses, which pass through unchanged.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any, NoReturn

from importgate.core.exceptions import TransportError


if TYPE_CHECKING:
    from collections.abc import Buffer, Callable, Iterator


ErrorTypes = tuple[type[Exception], ...]


def _reraise(error: Exception, action: str, location: str) -> NoReturn:
    if isinstance(error, OSError):
        raise error
    raise TransportError(
        f"Error {action} {location}: {error}", location=location, cause=error
    ) from error


class ReadableStream(io.RawIOBase):
    """Adapt an object with ``read(n)`` and ``close()`` to io.RawIOBase.

    Args:
        source: Object whose ``read(n)`` returns bytes, empty at EOF.
        location: Location being read, for error messages.
        errors: Exception types raised by the client library.
    """

    def __init__(self, source: Any, location: str, errors: ErrorTypes = ()) -> None:
        super().__init__()
        self._source = source
        self._location = location
        self._errors = errors

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Buffer) -> int:
        view = memoryview(buffer).cast("B")
        try:
            data = self._source.read(len(view))
        except self._errors as e:
            _reraise(e, "reading", self._location)
        n = len(data)
        view[:n] = data
        return n

    def close(self) -> None:
        if self.closed:
            return
        try:
            close = getattr(self._source, "close", None)
            if close is not None:
                close()
        finally:
            super().close()


class IteratorStream(io.RawIOBase):
    """Adapt an iterator of byte chunks to io.RawIOBase.

    Args:
        chunks: Iterator yielding bytes. Empty chunks are skipped.
        location: Location being read, for error messages.
        errors: Exception types raised by the client library.
        on_close: Called once when the stream is closed.
    """

    def __init__(
        self,
        chunks: Iterator[bytes],
        location: str,
        errors: ErrorTypes = (),
        on_close: Callable[[], None] | None = None,
    ) -> None:
        super().__init__()
        self._chunks = chunks
        self._location = location
        self._errors = errors
        self._pending = b""
        self._on_close = on_close

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Buffer) -> int:
        view = memoryview(buffer).cast("B")
        while not self._pending:
            try:
                chunk = next(self._chunks, None)
            except self._errors as e:
                _reraise(e, "reading", self._location)
            if chunk is None:
                return 0
            self._pending = chunk
        n = min(len(view), len(self._pending))
        view[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n

    def close(self) -> None:
        if self.closed:
            return
        try:
            if self._on_close is not None:
                self._on_close()
        finally:
            super().close()


class WritableStream(io.RawIOBase):
    """Adapt an object with ``write(data)`` and ``close()`` to io.RawIOBase.

    Closing the stream closes (and so commits) the target.

    Args:
        target: Object with ``write(data)`` and ``close()``.
        location: Location being written, for error messages.
        errors: Exception types raised by the client library.
    """

    def __init__(self, target: Any, location: str, errors: ErrorTypes = ()) -> None:
        super().__init__()
        self._target = target
        self._location = location
        self._errors = errors

    def writable(self) -> bool:
        return True

    def write(self, data: Buffer) -> int:
        self._checkClosed()
        payload = bytes(data)
        try:
            self._target.write(payload)
        except self._errors as e:
            _reraise(e, "writing", self._location)
        return len(payload)

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._target.close()
        except self._errors as e:
            _reraise(e, "writing", self._location)
        finally:
            super().close()
