"""HDFS transport using hdfs-native."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hdfs_native import Client, WriteOptions

from importgate.adapters.transports.streams import ReadableStream, WritableStream
from importgate.core.exceptions import TransportError
from importgate.core.locations import split_hdfs_url
from importgate.core.models import StreamConnection


if TYPE_CHECKING:
    from collections.abc import Callable


logger = logging.getLogger(__name__)


class HdfsTransport:
    """Transport for ``hdfs://`` locations.

    Implements TransportPort. A client is created per NameNode URL for
    every call; the caller owns the returned streams.
    """

    def __init__(self, client_factory: Callable[[str], Client] | None = None) -> None:
        """Initialize HDFS transport.

        Args:
            client_factory: Builds a client from a NameNode URL. Defaults to
                hdfs_native.Client.
        """
        self._client_factory = client_factory or Client

    def open_input(self, location: str) -> StreamConnection:
        """Open an HDFS file for reading.

        Raises:
            TransportError: Wrapping any failure reported by the client.
        """
        url, path = split_hdfs_url(location)
        logger.debug("Opening %s on %s for reading", path, url)
        try:
            client = self._client_factory(url)
            status = client.get_file_info(path)
            reader = client.read(path)
        except Exception as e:  # noqa: BLE001
            raise TransportError(
                f"Cannot read {location} from HDFS: {e}",
                location=location,
                cause=e,
            ) from e
        return StreamConnection(
            ReadableStream(reader, location, errors=(Exception,)),
            length=status.length,
        )

    def open_output(self, location: str) -> WritableStream:
        """Create (or overwrite) an HDFS file for writing.

        Raises:
            TransportError: Wrapping any failure reported by the client.
        """
        url, path = split_hdfs_url(location)
        logger.debug("Opening %s on %s for writing", path, url)
        options = WriteOptions()
        options.overwrite = True
        try:
            client = self._client_factory(url)
            writer = client.create(path, options)
        except Exception as e:  # noqa: BLE001
            raise TransportError(
                f"Cannot write {location} to HDFS: {e}",
                location=location,
                cause=e,
            ) from e
        return WritableStream(writer, location, errors=(Exception,))
