"""Transport adapters and the scheme router."""

from importgate.adapters.transports.filesystem import FilesystemTransport
from importgate.adapters.transports.registry import (
    TransportRegistry,
    TransportSpec,
    create_registry,
)
from importgate.adapters.transports.router import TransportRouter, scheme_for


__all__ = [
    "FilesystemTransport",
    "TransportRegistry",
    "TransportRouter",
    "TransportSpec",
    "create_registry",
    "scheme_for",
]
