"""Unit tests for counting stream wrappers."""

from __future__ import annotations

import io

import pytest


class _FailingStream(io.RawIOBase):
    """Serves its content, then fails on the next read."""

    def __init__(self, content: bytes) -> None:
        super().__init__()
        self._content = content
        self.close_calls = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray) -> int:
        if not self._content:
            raise OSError("connection reset")
        n = min(len(buffer), len(self._content))
        buffer[:n] = self._content[:n]
        self._content = self._content[n:]
        return n

    def close(self) -> None:
        self.close_calls += 1
        super().close()


@pytest.mark.core
@pytest.mark.tra("Core.Streams")
@pytest.mark.tier(0)
class TestCountingInputStream:
    """Tests for CountingInputStream."""

    def test_counts_bytes_read(self) -> None:
        """count equals the number of bytes consumed."""
        from importgate.core.streams import CountingInputStream

        stream = CountingInputStream(io.BytesIO(b"hello world"))
        assert stream.read(5) == b"hello"
        assert stream.read(1) == b" "
        assert stream.count == 6

    def test_count_after_full_read_equals_length(self) -> None:
        """Reading to EOF counts every byte exactly once."""
        from importgate.core.streams import CountingInputStream

        data = bytes(range(256)) * 40
        stream = CountingInputStream(io.BytesIO(data), total=len(data))
        chunks = list(iter(lambda: stream.read(1000), b""))

        assert b"".join(chunks) == data
        assert stream.count == len(data)
        assert stream.read(10) == b""
        assert stream.count == len(data)

    def test_read_all_and_readinto(self) -> None:
        """read() and readinto() both count."""
        from importgate.core.streams import CountingInputStream

        stream = CountingInputStream(io.BytesIO(b"abcdef"))
        buffer = bytearray(4)
        assert stream.readinto(buffer) == 4
        assert bytes(buffer) == b"abcd"
        assert stream.read() == b"ef"
        assert stream.count == 6

    def test_readline_and_iteration(self) -> None:
        """Lines read through readline or iteration are counted."""
        from importgate.core.streams import CountingInputStream

        stream = CountingInputStream(io.BytesIO(b"a,b\n1,2\n3,4\n"))
        assert stream.readline() == b"a,b\n"
        assert list(stream) == [b"1,2\n", b"3,4\n"]
        assert stream.count == 12

    def test_failed_read_does_not_change_count(self) -> None:
        """A read that raises leaves count at the bytes already consumed."""
        from importgate.core.streams import CountingInputStream

        stream = CountingInputStream(_FailingStream(b"12345"))
        assert stream.read(3) == b"123"
        assert stream.read(3) == b"45"

        with pytest.raises(OSError, match="connection reset"):
            stream.read(3)

        assert stream.count == 5

    def test_total_and_fraction(self) -> None:
        """total is reported and fraction_read tracks progress."""
        from importgate.core.streams import CountingInputStream

        stream = CountingInputStream(io.BytesIO(b"abcd"), total=4)
        assert stream.total == 4
        assert stream.fraction_read == 0.0
        stream.read(1)
        assert stream.fraction_read == 0.25

    def test_fraction_unknown_without_total(self) -> None:
        """fraction_read is None when no total was given."""
        from importgate.core.streams import CountingInputStream

        stream = CountingInputStream(io.BytesIO(b"abcd"))
        assert stream.total is None
        assert stream.fraction_read is None

    def test_progress_callback_receives_count_and_total(self) -> None:
        """The progress callback is called after each successful read."""
        from importgate.core.streams import CountingInputStream

        calls: list[tuple[int, int]] = []
        stream = CountingInputStream(
            io.BytesIO(b"abcdef"), total=6, progress=lambda n, t: calls.append((n, t))
        )
        stream.read(2)
        stream.read(4)
        stream.read(4)

        assert calls == [(2, 6), (6, 6)]

    def test_close_is_idempotent_and_closes_once(self) -> None:
        """close() closes the wrapped stream exactly once."""
        from importgate.core.streams import CountingInputStream

        raw = _FailingStream(b"x")
        stream = CountingInputStream(raw)
        stream.close()
        stream.close()

        assert stream.closed
        assert raw.close_calls == 1

    def test_read_after_close_raises(self) -> None:
        """Closed streams refuse reads."""
        from importgate.core.streams import CountingInputStream

        stream = CountingInputStream(io.BytesIO(b"x"))
        stream.close()

        with pytest.raises(ValueError):
            stream.read()

    def test_context_manager_closes(self) -> None:
        """Leaving a with block closes the wrapped stream."""
        from importgate.core.streams import CountingInputStream

        raw = io.BytesIO(b"x")
        with CountingInputStream(raw) as stream:
            stream.read()

        assert raw.closed

    def test_negative_total_rejected(self) -> None:
        """A negative total is a programming error."""
        from importgate.core.streams import CountingInputStream

        with pytest.raises(ValueError, match="total"):
            CountingInputStream(io.BytesIO(b""), total=-1)


@pytest.mark.core
@pytest.mark.tra("Core.Streams")
@pytest.mark.tier(0)
class TestCountingReader:
    """Tests for CountingReader."""

    def test_counts_characters(self) -> None:
        """count is in characters, not bytes."""
        from importgate.core.streams import CountingReader

        reader = CountingReader(io.StringIO("héllo"))
        assert reader.read(2) == "hé"
        assert reader.count == 2

    def test_from_binary_decodes_utf8(self) -> None:
        """from_binary decodes bytes and keeps the declared total."""
        from importgate.core.streams import CountingReader

        data = "naïve,ünïcode\n".encode()
        reader = CountingReader.from_binary(io.BytesIO(data), total=len(data))

        assert reader.read() == "naïve,ünïcode\n"
        assert reader.count == 14
        assert reader.total == len(data)

    def test_from_binary_wraps_raw_streams(self) -> None:
        """Unbuffered binary streams are buffered before decoding."""
        from importgate.core.streams import CountingReader

        reader = CountingReader.from_binary(_FailingStream(b"a\nb\n"))
        assert reader.readline() == "a\n"
        assert reader.readline() == "b\n"

    def test_iteration_yields_lines(self) -> None:
        """Iterating a reader yields lines and counts them."""
        from importgate.core.streams import CountingReader

        reader = CountingReader(io.StringIO("x\ny\n"))
        assert list(reader) == ["x\n", "y\n"]
        assert reader.count == 4

    def test_preserves_line_endings(self) -> None:
        """CRLF is not translated, so counts match the source."""
        from importgate.core.streams import CountingReader

        reader = CountingReader.from_binary(io.BytesIO(b"a\r\nb"))
        assert reader.read() == "a\r\nb"
        assert reader.count == 4

    def test_close_is_idempotent(self) -> None:
        """close() can be called repeatedly."""
        from importgate.core.streams import CountingReader

        raw = io.StringIO("abc")
        reader = CountingReader(raw)
        reader.close()
        reader.close()

        assert raw.closed
        assert reader.closed

    def test_encoding_reported_from_wrapped_stream(self) -> None:
        """encoding reflects the decoder in use."""
        from importgate.core.streams import CountingReader

        reader = CountingReader.from_binary(io.BytesIO(b""), encoding="latin-1")
        assert reader.encoding == "latin-1"


@pytest.mark.core
@pytest.mark.tra("Core.Streams")
@pytest.mark.tier(0)
class TestCloseSafely:
    """Tests for close_safely()."""

    def test_swallows_close_errors(self, caplog: pytest.LogCaptureFixture) -> None:
        """An OSError from close() is logged, not raised."""
        from importgate.core.streams import close_safely

        class Broken(io.BytesIO):
            failed = False

            def close(self) -> None:
                if not self.failed:
                    self.failed = True
                    raise OSError("disk gone")
                super().close()

        close_safely(Broken())

        assert "disk gone" in caplog.text

    def test_accepts_none(self) -> None:
        """None is ignored."""
        from importgate.core.streams import close_safely

        close_safely(None)
