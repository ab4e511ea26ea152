"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for the test suite.
"""

from __future__ import annotations

import io
from typing import IO, TYPE_CHECKING

import pytest

from importgate.config import GatewayConfig
from importgate.core import settings
from importgate.core.models import StreamConnection


if TYPE_CHECKING:
    from pathlib import Path

    from importgate.core.ports import TransportPort


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core locations, containment and streams")
    config.addinivalue_line("markers", "transport: Transport adapters and routing")
    config.addinivalue_line("markers", "progress: Rich progress integration")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


@pytest.fixture
def import_dir(tmp_path: Path) -> Path:
    """An existing import directory under tmp_path."""
    directory = tmp_path / "import"
    directory.mkdir()
    return directory


@pytest.fixture
def contained_config(import_dir: Path) -> GatewayConfig:
    """Config with file import enabled and confined to import_dir."""
    return GatewayConfig(
        {
            settings.IMPORT_FILE_ENABLED: "true",
            settings.USE_NEO4J_CONFIG: "true",
            settings.ALLOW_READ_FROM_FILESYSTEM: "true",
            settings.IMPORT_DIRECTORY: str(import_dir),
        }
    )


@pytest.fixture
def open_config() -> GatewayConfig:
    """Config with file import enabled and no import-directory semantics."""
    return GatewayConfig({settings.IMPORT_FILE_ENABLED: "true"})


@pytest.fixture
def fake_transport() -> TransportPort:
    """In-memory transport for routing tests.

    Serves the bytes of ``content`` for every location and records what was
    opened and written.
    """

    class FakeTransport:
        def __init__(self) -> None:
            self.content = b"remote data"
            self.opened: list[str] = []
            self.written: dict[str, io.BytesIO] = {}

        def open_input(self, location: str) -> StreamConnection:
            self.opened.append(location)
            return StreamConnection(io.BytesIO(self.content), length=len(self.content))

        def open_output(self, location: str) -> IO[bytes]:
            buffer = _KeepOpenBytesIO()
            self.written[location] = buffer
            return buffer

    return FakeTransport()


@pytest.fixture
def s3_client():
    """Create a mocked S3 client with a test bucket."""
    import boto3
    from moto import mock_aws

    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket="test-bucket")
        yield client


class _KeepOpenBytesIO(io.BytesIO):
    """BytesIO whose content survives close()."""

    def close(self) -> None:
        self.final = self.getvalue()
        super().close()
