"""HTTP(S) transport using httpx."""

from __future__ import annotations

from typing import IO

import httpx

from importgate.adapters.transports.streams import IteratorStream
from importgate.core.exceptions import TransportAccessError, TransportError
from importgate.core.models import StreamConnection


DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)


class HttpTransport:
    """Read-only transport for ``http://`` and ``https://`` locations."""

    def __init__(self, client: httpx.Client | None = None) -> None:
        """Initialize HTTP transport.

        Args:
            client: Optional httpx client. If not provided, creates one that
                follows redirects with DEFAULT_TIMEOUT.
        """
        self._client = client or httpx.Client(
            follow_redirects=True, timeout=DEFAULT_TIMEOUT
        )

    def open_input(self, location: str) -> StreamConnection:
        """Start a streaming GET request.

        The declared length is the Content-Length header, and is only
        reported when the body is not content-encoded.

        Raises:
            TransportAccessError: On 401 or 403 responses.
            TransportError: On other error statuses or network failures.
        """
        request = self._client.build_request("GET", location)
        try:
            response = self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise TransportError(
                f"Cannot fetch {location}: {e}", location=location, cause=e
            ) from e

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            response.close()
            status = e.response.status_code
            error_cls = TransportAccessError if status in (401, 403) else TransportError
            raise error_cls(
                f"HTTP {status} fetching {location}", location=location, cause=e
            ) from e

        length = None
        if "Content-Encoding" not in response.headers:
            content_length = response.headers.get("Content-Length")
            if content_length is not None and content_length.isdigit():
                length = int(content_length)

        return StreamConnection(
            IteratorStream(
                response.iter_bytes(),
                location,
                errors=(httpx.HTTPError,),
                on_close=response.close,
            ),
            length=length,
            encoding=response.charset_encoding,
        )

    def open_output(self, location: str) -> IO[bytes]:
        """HTTP locations cannot be written.

        Raises:
            TransportError: Always.
        """
        raise TransportError(
            f"Writing to HTTP locations is not supported: {location}",
            location=location,
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()
