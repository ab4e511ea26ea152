"""Construction of ready-to-use gateways."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

from importgate.adapters.transports.registry import create_registry
from importgate.adapters.transports.router import TransportRouter
from importgate.core.services import FileGateway


if TYPE_CHECKING:
    from importgate.adapters.transports.registry import TransportRegistry
    from importgate.core.ports import ConfigPort


def create_gateway(
    config: ConfigPort,
    registry: TransportRegistry | None = None,
    stdin: IO[bytes] | None = None,
) -> FileGateway:
    """Create a FileGateway wired to the default transports.

    Args:
        config: Host configuration, read live on every call.
        registry: Optional transport registry. If not provided, uses
            create_registry().
        stdin: Optional stream served for the location ``-``.

    Returns:
        A FileGateway.

    Example:
        >>> from importgate import GatewayConfig, create_gateway
        >>> gateway = create_gateway(GatewayConfig())
    """
    router = TransportRouter(registry or create_registry(), config)
    return FileGateway(config, router, stdin=stdin)
