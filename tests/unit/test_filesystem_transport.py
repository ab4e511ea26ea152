"""Unit tests for FilesystemTransport adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from pathlib import Path


@pytest.mark.transport
@pytest.mark.tra("Adapter.FilesystemTransport")
@pytest.mark.tier(1)
class TestOpenInput:
    """Tests for open_input()."""

    def test_reads_file_with_length(self, tmp_path: Path) -> None:
        """open_input() returns the content and the file size."""
        from importgate.adapters.transports import FilesystemTransport

        source = tmp_path / "people.csv"
        source.write_bytes(b"name\nAlice\n")

        with FilesystemTransport().open_input(str(source)) as connection:
            assert connection.length == 11
            assert connection.stream.read() == b"name\nAlice\n"

    def test_accepts_file_url(self, tmp_path: Path) -> None:
        """file: URLs are opened at their path."""
        from importgate.adapters.transports import FilesystemTransport

        source = tmp_path / "with space.csv"
        source.write_bytes(b"x")

        with FilesystemTransport().open_input(source.as_uri()) as connection:
            assert connection.stream.read() == b"x"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Missing files raise LocationNotFoundError."""
        from importgate.adapters.transports import FilesystemTransport
        from importgate.core.exceptions import LocationNotFoundError

        missing = str(tmp_path / "missing.csv")

        with pytest.raises(LocationNotFoundError) as exc_info:
            FilesystemTransport().open_input(missing)

        assert str(exc_info.value) == f"Cannot open file {missing} for reading."
        assert exc_info.value.location == missing

    def test_directory_raises_not_found(self, tmp_path: Path) -> None:
        """Directories cannot be opened as input."""
        from importgate.adapters.transports import FilesystemTransport
        from importgate.core.exceptions import LocationNotFoundError

        with pytest.raises(LocationNotFoundError):
            FilesystemTransport().open_input(str(tmp_path))


@pytest.mark.transport
@pytest.mark.tra("Adapter.FilesystemTransport")
@pytest.mark.tier(1)
class TestOpenOutput:
    """Tests for open_output()."""

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Missing parent directories are created."""
        from importgate.adapters.transports import FilesystemTransport

        target = tmp_path / "a" / "b" / "out.csv"

        with FilesystemTransport().open_output(target.as_uri()) as out:
            out.write(b"done")

        assert target.read_bytes() == b"done"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        """Existing content is replaced."""
        from importgate.adapters.transports import FilesystemTransport

        target = tmp_path / "out.csv"
        target.write_bytes(b"old content")

        with FilesystemTransport().open_output(str(target)) as out:
            out.write(b"new")

        assert target.read_bytes() == b"new"

    def test_unwritable_location_raises_transport_error(self, tmp_path: Path) -> None:
        """A path under a regular file cannot be created."""
        from importgate.adapters.transports import FilesystemTransport
        from importgate.core.exceptions import TransportError

        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"")

        with pytest.raises(TransportError) as exc_info:
            FilesystemTransport().open_output(str(blocker / "out.csv"))

        assert isinstance(exc_info.value.cause, OSError)
