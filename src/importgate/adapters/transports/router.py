"""TransportRouter: dispatch locations to transports by scheme."""

from __future__ import annotations

import io
import logging
import os
from pathlib import PurePath
from typing import IO, TYPE_CHECKING

from importgate.core import settings
from importgate.core.containment import (
    contain_path,
    import_directory,
    normalize_path,
    uses_import_semantics,
)
from importgate.core.locations import (
    STANDARD_STREAM,
    classify_location,
    extract_path,
    parse_scheme,
    to_file_url,
)
from importgate.core.models import LocationKind


if TYPE_CHECKING:
    from importgate.adapters.transports.registry import TransportRegistry
    from importgate.core.models import StreamConnection
    from importgate.core.ports import ConfigPort, TransportPort


logger = logging.getLogger(__name__)


def scheme_for(location: str) -> str:
    """Return the registry scheme that serves a location.

    Local paths and ``file:`` URLs map to 'file'.
    """
    kind = classify_location(location)
    if kind is LocationKind.HDFS:
        return "hdfs"
    scheme = parse_scheme(location)
    if kind is LocationKind.OTHER_URL and scheme is not None:
        return scheme
    return "file"


class TransportRouter:
    """Routes open requests to the transport registered for each scheme.

    Dependency checks happen in the registry before any transport is
    built, so an unavailable transport fails without I/O.
    """

    def __init__(self, registry: TransportRegistry, config: ConfigPort) -> None:
        """Initialize with a transport registry and configuration.

        Args:
            registry: Source of transports by scheme.
            config: Configuration, read on every write to locate the import
                directory.
        """
        self._registry = registry
        self._config = config

    def transport_for(self, location: str) -> TransportPort:
        """Return the transport serving location.

        Raises:
            MissingDependencyError: If the transport's libraries are missing.
            TransportError: If no transport is registered for the scheme.
        """
        scheme = scheme_for(location)
        logger.debug("Routing %s to %s transport", location, scheme)
        return self._registry.get(scheme)

    def open_input(self, location: str) -> StreamConnection:
        """Open location for reading via its transport."""
        return self.transport_for(location).open_input(location)

    def open_output(self, location: str, fallback: IO[bytes] | None = None) -> IO[bytes]:
        """Open location for writing via its transport.

        Args:
            location: Target location. ``-`` selects the fallback stream.
            fallback: Stream returned as-is for ``-``, such as stdout.

        Returns:
            The fallback for ``-``; otherwise a buffered output stream.

        Raises:
            ValueError: If location is ``-`` and no fallback was given.
        """
        if location == STANDARD_STREAM:
            if fallback is None:
                raise ValueError("A fallback stream is required to write to '-'")
            return fallback

        if scheme_for(location) == "file":
            location = self.local_output_location(location)

        stream = self.transport_for(location).open_output(location)
        if isinstance(stream, io.BufferedIOBase):
            return stream
        return io.BufferedWriter(stream)  # type: ignore[arg-type]

    def local_output_location(self, location: str) -> str:
        """Place a local write target inside the import directory when required.

        With import semantics enabled the target is nested under the import
        directory (DEFAULT_IMPORT_DIRECTORY when none is configured) unless
        it already lies inside it. Otherwise location is returned unchanged.
        """
        if not uses_import_semantics(self._config):
            return location
        root = import_directory(self._config)
        if root is None:
            root = PurePath(os.path.abspath(settings.DEFAULT_IMPORT_DIRECTORY))
        target = contain_path(normalize_path(extract_path(location)), root)
        return to_file_url(target)
