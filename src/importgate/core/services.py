"""FileGateway: the public read/write entry points.

The gateway composes the read policy, import-directory containment,
transport dispatch and counting wrappers into streams that callers can
use the same way whatever the location's origin.
"""

from __future__ import annotations

import codecs
import logging
import os
import sys
from pathlib import Path
from typing import IO, TYPE_CHECKING

from importgate.core import settings
from importgate.core.containment import resolve_location
from importgate.core.exceptions import LocationNotFoundError
from importgate.core.locations import STANDARD_STREAM, is_hdfs
from importgate.core.models import OperationalDirectory
from importgate.core.streams import (
    CountingInputStream,
    CountingReader,
    TextWriter,
    close_safely,
    discard_output,
)


if TYPE_CHECKING:
    from importgate.adapters.transports.router import TransportRouter
    from importgate.core.models import StreamConnection
    from importgate.core.ports import ConfigPort, ProgressCallback


logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"

_DIRECTORY_SETTINGS = {
    OperationalDirectory.LOGS: settings.LOGS_DIRECTORY,
    OperationalDirectory.METRICS: settings.METRICS_DIRECTORY,
}


class FileGateway:
    """Opens readers, writers and streams for any supported location.

    Every call reads the configuration afresh, so changes to the import
    directory or the policy flags apply to the next call. The gateway
    keeps no per-call state and can be shared between threads; the
    streams it returns cannot.

    Example:
        >>> gateway = create_gateway(GatewayConfig({...}))  # doctest: +SKIP
        >>> with gateway.open_reader("file:///data/import/people.csv") as reader:
        ...     header = reader.readline()
    """

    def __init__(
        self,
        config: ConfigPort,
        router: TransportRouter,
        stdin: IO[bytes] | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            config: Host configuration.
            router: Dispatches locations to transports.
            stdin: Binary stream served for the location ``-``. Defaults to
                the process's standard input.
        """
        self._config = config
        self._router = router
        self._stdin = stdin

    @property
    def config(self) -> ConfigPort:
        """The configuration this gateway reads."""
        return self._config

    def resolve(self, location: str) -> str:
        """Return location rewritten for import-directory containment.

        Raises:
            PolicyDeniedError: If reading from the filesystem is disabled.
            InvalidLocationError: If location is a malformed file URL.
        """
        return resolve_location(location, self._config)

    def open_connection(self, location: str) -> StreamConnection:
        """Apply policy and containment, then open the raw transport stream.

        Args:
            location: Path or URL to read.

        Returns:
            StreamConnection owned by the caller.

        Raises:
            PolicyDeniedError: If configuration forbids the read.
            MissingDependencyError: If the transport is not installed.
            LocationNotFoundError: If a local file cannot be read.
            TransportError: For remote transport failures.
        """
        self._config.check_read_allowed(location)
        resolved = self.resolve(location)
        return self._router.open_input(resolved)

    def open_input_stream(
        self, location: str, progress: ProgressCallback | None = None
    ) -> CountingInputStream:
        """Open a location as a counting byte stream.

        Args:
            location: Path or URL to read, or ``-`` for standard input.
            progress: Optional callback(bytes_read, total_bytes).

        Returns:
            CountingInputStream whose total is the declared length, if known.
        """
        if location == STANDARD_STREAM:
            return CountingInputStream(self._standard_input(), progress=progress)
        connection = self.open_connection(location)
        return CountingInputStream(
            connection.stream, total=connection.length, progress=progress
        )

    def open_reader(
        self, location: str, progress: ProgressCallback | None = None
    ) -> CountingReader:
        """Open a location as a counting text reader.

        HDFS content is always decoded as UTF-8. Other transports use the
        encoding they advertise, falling back to UTF-8 when there is none or
        Python does not know it. The connection is closed if the reader
        cannot be created.

        Args:
            location: Path or URL to read, or ``-`` for standard input.
            progress: Optional callback(chars_read, declared_length).

        Returns:
            CountingReader whose total is the declared length, if known.
        """
        if location == STANDARD_STREAM:
            return CountingReader.from_binary(
                self._standard_input(), encoding=DEFAULT_ENCODING, progress=progress
            )
        connection = self.open_connection(location)
        try:
            return CountingReader.from_binary(
                connection.stream,
                encoding=self._text_encoding(location, connection),
                total=connection.length,
                progress=progress,
            )
        except BaseException:
            close_safely(connection.stream)
            raise

    def read_file(self, path: str | Path) -> CountingReader:
        """Open a local file directly, without policy or containment.

        Raises:
            LocationNotFoundError: If the file does not exist, is not a
                regular file, or is not readable.
        """
        file = Path(path)
        if not file.is_file() or not os.access(file, os.R_OK):
            raise LocationNotFoundError(
                f"Cannot open file {path} for reading.", location=str(path)
            )
        return CountingReader.from_binary(
            file.open("rb"), encoding=DEFAULT_ENCODING, total=file.stat().st_size
        )

    def open_output_stream(
        self, location: str, fallback: IO[bytes] | None = None
    ) -> IO[bytes]:
        """Open a location for writing bytes.

        Args:
            location: Path or URL to write, or ``-`` for the fallback.
            fallback: Stream returned unchanged for ``-``.

        Returns:
            A buffered binary stream, or fallback for ``-``.
        """
        return self._router.open_output(location, fallback)

    def open_writer(
        self,
        location: str,
        fallback: IO[str] | None = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> IO[str]:
        """Open a location for writing text.

        Args:
            location: Path or URL to write, or ``-`` for the fallback.
            fallback: Text stream returned unchanged for ``-``.
            encoding: Encoding used for the written text.

        Returns:
            A text stream over a buffered output stream, or fallback for ``-``.
            Leaving its with block because of an exception discards the
            output where the transport supports it (S3).
        """
        if location == STANDARD_STREAM:
            return self._router.open_output(location, fallback)  # type: ignore[arg-type, return-value]
        stream = self._router.open_output(location)
        try:
            return TextWriter(stream, encoding=encoding)  # type: ignore[arg-type]
        except BaseException:
            discard_output(stream)
            raise

    def operational_directory(self, kind: OperationalDirectory) -> Path | None:
        """Return a host operational directory if it can be listed.

        Uses the directory's own setting, else ``<home>/<kind>``.

        Returns:
            The directory if it exists, is readable and is a directory;
            otherwise None.
        """
        configured = self._config.get_string(_DIRECTORY_SETTINGS[kind])
        if configured:
            directory = Path(configured)
        else:
            directory = Path(self._config.get_string(settings.HOME_DIRECTORY)) / kind.value

        if directory.is_dir() and os.access(directory, os.R_OK):
            return directory
        logger.debug("%s directory %s is not available", kind.value, directory)
        return None

    def log_directory(self) -> Path | None:
        """Return the host's log directory, if it exists and is readable."""
        return self.operational_directory(OperationalDirectory.LOGS)

    def metrics_directory(self) -> Path | None:
        """Return the host's metrics directory, if it exists and is readable."""
        return self.operational_directory(OperationalDirectory.METRICS)

    def _text_encoding(self, location: str, connection: StreamConnection) -> str:
        """Return the encoding for decoding a connection's content.

        HDFS content is always UTF-8. Otherwise the advertised encoding is
        used if Python knows it, else UTF-8.
        """
        if is_hdfs(location) or not connection.encoding:
            return DEFAULT_ENCODING
        try:
            codecs.lookup(connection.encoding)
        except LookupError:
            logger.warning(
                "Unknown encoding %r for %s, decoding as %s",
                connection.encoding,
                location,
                DEFAULT_ENCODING,
            )
            return DEFAULT_ENCODING
        return connection.encoding

    def _standard_input(self) -> IO[bytes]:
        return self._stdin if self._stdin is not None else sys.stdin.buffer
