"""Filesystem transport for local paths and file: URLs."""

from __future__ import annotations

import os
from pathlib import Path
from typing import IO

from importgate.core.exceptions import LocationNotFoundError, TransportError
from importgate.core.locations import extract_path
from importgate.core.models import StreamConnection


class FilesystemTransport:
    """Transport for local filesystem locations.

    Implements TransportPort for bare paths and ``file:`` URLs. Relative
    paths are opened relative to the current working directory.
    """

    def open_input(self, location: str) -> StreamConnection:
        """Open a local file for reading.

        Args:
            location: Path or ``file:`` URL.

        Returns:
            StreamConnection whose length is the file size.

        Raises:
            LocationNotFoundError: If the file does not exist, is not a
                regular file, or is not readable.
        """
        path = Path(extract_path(location))
        if not path.is_file() or not os.access(path, os.R_OK):
            raise LocationNotFoundError(
                f"Cannot open file {location} for reading.",
                location=location,
            )
        try:
            stream = path.open("rb")
        except OSError as e:
            raise LocationNotFoundError(
                f"Cannot open file {location} for reading.",
                location=location,
            ) from e
        return StreamConnection(stream, length=os.fstat(stream.fileno()).st_size)

    def open_output(self, location: str) -> IO[bytes]:
        """Open a local file for writing, creating parent directories.

        Args:
            location: Path or ``file:`` URL.

        Returns:
            A buffered binary output stream.

        Raises:
            TransportError: If the file cannot be created.
        """
        path = Path(extract_path(location))
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            return path.open("wb")
        except OSError as e:
            raise TransportError(
                f"Cannot open file {location} for writing: {e}",
                location=location,
                cause=e,
            ) from e
