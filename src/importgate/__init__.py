"""importgate - protocol-dispatching, import-directory-confined file access.

This library opens local files and remote URLs (HDFS, S3, HTTP) through one
gateway that enforces the host's import policy and returns streams that
count the bytes or characters read.

Example:
    >>> from importgate import GatewayConfig, create_gateway
    >>> config = GatewayConfig({
    ...     "apoc.import.file.enabled": "true",
    ...     "apoc.import.file.use_neo4j_config": "true",
    ...     "apoc.import.file.allow_read_from_filesystem": "true",
    ...     "dbms.directories.import": "/data/import",
    ... })
    >>> gateway = create_gateway(config)
    >>> gateway.resolve("file:///etc/passwd")
    'file:///data/import/etc/passwd'
"""

from importgate.adapters.transports import (
    FilesystemTransport,
    TransportRegistry,
    TransportRouter,
    create_registry,
)
from importgate.config import GatewayConfig, directory_settings
from importgate.core.containment import resolve_location
from importgate.core.exceptions import (
    ConfigurationError,
    ImportGateError,
    InvalidLocationError,
    LocationNotFoundError,
    MissingDependencyError,
    PolicyDeniedError,
    TransportAccessError,
    TransportError,
)
from importgate.core.locations import (
    classify_location,
    is_hdfs,
    is_local_like,
    is_local_location,
)
from importgate.core.models import LocationKind, OperationalDirectory, StreamConnection
from importgate.core.ports import (
    ConfigPort,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
    TransportPort,
)
from importgate.core.services import FileGateway
from importgate.core.streams import (
    CountingInputStream,
    CountingReader,
    close_safely,
    discard_output,
)
from importgate.gateway import create_gateway
from importgate.progress import RichProgressReporter


__version__ = "0.1.0"

__all__ = [
    "ConfigPort",
    "ConfigurationError",
    "CountingInputStream",
    "CountingReader",
    "FileGateway",
    "FilesystemTransport",
    "GatewayConfig",
    "ImportGateError",
    "InvalidLocationError",
    "LocationKind",
    "LocationNotFoundError",
    "MissingDependencyError",
    "NullProgressReporter",
    "OperationalDirectory",
    "PolicyDeniedError",
    "ProgressCallback",
    "ProgressReporter",
    "RichProgressReporter",
    "StreamConnection",
    "TransportAccessError",
    "TransportError",
    "TransportPort",
    "TransportRegistry",
    "TransportRouter",
    "__version__",
    "classify_location",
    "close_safely",
    "create_gateway",
    "create_registry",
    "directory_settings",
    "discard_output",
    "is_hdfs",
    "is_local_like",
    "is_local_location",
    "resolve_location",
]
