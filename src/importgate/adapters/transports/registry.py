"""Capability registry for optional transports.

Each transport registers a factory, the import names it needs and the
distributions that provide them. The registry checks that the imports are
available before building the transport, so a missing optional library is
reported as MissingDependencyError before any I/O is attempted.
"""

from __future__ import annotations

import importlib.util
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from importgate.core.exceptions import MissingDependencyError, TransportError


if TYPE_CHECKING:
    from collections.abc import Callable

    from importgate.core.ports import TransportPort


def module_available(name: str) -> bool:
    """Return True if the module name can be imported."""
    return importlib.util.find_spec(name) is not None


@dataclass(frozen=True, slots=True)
class TransportSpec:
    """How to build the transport for one scheme.

    Attributes:
        scheme: Lowercase URL scheme (e.g., 's3'), or 'file' for local paths.
        factory: Builds the transport. Called at most once.
        modules: Import names that must be available.
        requirements: Distribution names to install when modules are missing.
    """

    scheme: str
    factory: Callable[[], TransportPort]
    modules: tuple[str, ...] = ()
    requirements: tuple[str, ...] = ()


class TransportRegistry:
    """Registry mapping URL schemes to lazily built transports."""

    def __init__(self, module_check: Callable[[str], bool] = module_available) -> None:
        """Initialize an empty registry.

        Args:
            module_check: Returns True if an import name is available. Replaceable
                for tests and for platforms with other discovery mechanisms.
        """
        self._module_check = module_check
        self._specs: dict[str, TransportSpec] = {}
        self._instances: dict[str, TransportPort] = {}
        self._lock = threading.Lock()

    def register(
        self,
        scheme: str,
        factory: Callable[[], TransportPort],
        *,
        modules: tuple[str, ...] = (),
        requirements: tuple[str, ...] = (),
    ) -> None:
        """Register (or replace) the transport for a scheme."""
        scheme = scheme.lower()
        with self._lock:
            self._specs[scheme] = TransportSpec(scheme, factory, modules, requirements)
            self._instances.pop(scheme, None)

    def register_instance(self, scheme: str, transport: TransportPort) -> None:
        """Register an already built transport for a scheme."""
        scheme = scheme.lower()
        with self._lock:
            self._specs[scheme] = TransportSpec(scheme, lambda: transport)
            self._instances[scheme] = transport

    @property
    def schemes(self) -> list[str]:
        """Registered schemes, sorted."""
        return sorted(self._specs)

    def is_available(self, scheme: str) -> bool:
        """Return True if scheme is registered and its imports are present."""
        spec = self._specs.get(scheme.lower())
        if spec is None:
            return False
        return all(self._module_check(module) for module in spec.modules)

    def get(self, scheme: str) -> TransportPort:
        """Return the transport for scheme, building it on first use.

        Raises:
            MissingDependencyError: If the transport's libraries are not installed.
            TransportError: If no transport is registered for scheme.
        """
        scheme = scheme.lower()
        spec = self._specs.get(scheme)
        if spec is None:
            raise TransportError(
                f"No transport registered for scheme '{scheme}'",
                location=f"{scheme}://",
            )
        if not self.is_available(scheme):
            raise MissingDependencyError(scheme, list(spec.requirements or spec.modules))

        with self._lock:
            transport = self._instances.get(scheme)
            if transport is None:
                transport = spec.factory()
                self._instances[scheme] = transport
        return transport


def _filesystem() -> TransportPort:
    from importgate.adapters.transports.filesystem import FilesystemTransport

    return FilesystemTransport()


def _hdfs() -> TransportPort:
    from importgate.adapters.transports.hdfs import HdfsTransport

    return HdfsTransport()


def _s3() -> TransportPort:
    from importgate.adapters.transports.s3 import S3Transport

    return S3Transport()


def _http() -> TransportPort:
    from importgate.adapters.transports.http import HttpTransport

    return HttpTransport()


def create_registry(module_check: Callable[[str], bool] = module_available) -> TransportRegistry:
    """Create a TransportRegistry with the default transports.

    Args:
        module_check: Module availability check, see TransportRegistry.

    Returns:
        Registry with file, hdfs, s3, http and https transports.
    """
    registry = TransportRegistry(module_check=module_check)
    registry.register("file", _filesystem)
    registry.register(
        "hdfs", _hdfs, modules=("hdfs_native",), requirements=("hdfs-native",)
    )
    registry.register(
        "s3", _s3, modules=("boto3", "botocore"), requirements=("boto3", "botocore")
    )
    for scheme in ("http", "https"):
        registry.register(scheme, _http, modules=("httpx",), requirements=("httpx",))
    return registry
