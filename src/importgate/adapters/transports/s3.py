"""S3 transport using boto3."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from importgate.adapters.transports.streams import ReadableStream
from importgate.core.exceptions import (
    InvalidLocationError,
    TransportAccessError,
    TransportError,
)
from importgate.core.models import StreamConnection


if TYPE_CHECKING:
    from collections.abc import Buffer
    from types import TracebackType

    from mypy_boto3_s3 import S3Client


class S3Transport:
    """Transport for ``s3://bucket/key`` locations.

    Implements TransportPort for AWS S3. Credentials come from the usual
    boto3 chain; the gateway does not manage them.
    """

    def __init__(self, client: S3Client | None = None) -> None:
        """Initialize S3 transport.

        Args:
            client: Optional boto3 S3 client. If not provided, creates a default client.
        """
        self._client = client or boto3.client("s3")

    def open_input(self, location: str) -> StreamConnection:
        """Open an S3 object for streaming reads.

        Args:
            location: S3 URI (s3://bucket/key).

        Returns:
            StreamConnection over the object body with its ContentLength.

        Raises:
            TransportAccessError: If access is denied.
            TransportError: If the object is missing or for other S3 errors.
        """
        bucket, key = self._parse_s3_uri(location)
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
        except ClientError as e:
            raise self._translate_client_error(e, location) from e
        except BotoCoreError as e:
            raise TransportError(
                f"S3 error: {e}", location=location, cause=e
            ) from e

        return StreamConnection(
            ReadableStream(response["Body"], location, errors=(BotoCoreError,)),
            length=response.get("ContentLength"),
        )

    def open_output(self, location: str) -> S3UploadStream:
        """Open an S3 object for writing.

        The object is uploaded when the returned stream is closed.

        Args:
            location: S3 URI (s3://bucket/key).
        """
        bucket, key = self._parse_s3_uri(location)
        return S3UploadStream(self, bucket, key, location)

    def put(self, bucket: str, key: str, body: bytes, location: str) -> None:
        """Upload body to bucket/key, translating S3 errors."""
        try:
            self._client.put_object(Bucket=bucket, Key=key, Body=body)
        except ClientError as e:
            raise self._translate_client_error(e, location) from e
        except BotoCoreError as e:
            raise TransportError(
                f"S3 error: {e}", location=location, cause=e
            ) from e

    def _parse_s3_uri(self, uri: str) -> tuple[str, str]:
        """Parse an S3 URI into bucket and key.

        Args:
            uri: S3 URI in format s3://bucket/key.

        Returns:
            Tuple of (bucket, key).

        Raises:
            InvalidLocationError: If URI is not a valid S3 URI.
        """
        if not uri.lower().startswith("s3://"):
            raise InvalidLocationError(f"Invalid S3 URI: {uri}", location=uri)

        # Remove s3:// prefix
        path = uri[5:]

        # Split on first /
        parts = path.split("/", 1)
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise InvalidLocationError(f"Invalid S3 URI (missing key): {uri}", location=uri)

        bucket, key = parts
        return bucket, key

    def _translate_client_error(self, error: ClientError, location: str) -> TransportError:
        """Translate botocore ClientError to domain exception.

        Args:
            error: The botocore ClientError.
            location: The S3 URI for context.

        Returns:
            Appropriate TransportError subclass.
        """
        code = error.response.get("Error", {}).get("Code", "")

        if code in ("404", "NoSuchKey", "NoSuchBucket"):
            return TransportError(
                f"Object not found: {location}",
                location=location,
                cause=error,
            )

        if code in ("403", "AccessDenied"):
            return TransportAccessError(
                f"Access denied: {location}",
                location=location,
                cause=error,
            )

        return TransportError(
            f"S3 error ({code}): {error}",
            location=location,
            cause=error,
        )


class S3UploadStream(io.BufferedIOBase):
    """Write-only stream that uploads its content to S3 on close.

    Content is buffered in memory and only close() uploads it. A with block
    left by an exception discards the content, as does abort().
    """

    def __init__(self, transport: S3Transport, bucket: str, key: str, location: str) -> None:
        super().__init__()
        self._transport = transport
        self._bucket = bucket
        self._key = key
        self._location = location
        self._buffer = io.BytesIO()

    def writable(self) -> bool:
        return True

    def write(self, data: Buffer) -> int:
        self._checkClosed()
        return self._buffer.write(data)

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._transport.put(
                self._bucket, self._key, self._buffer.getvalue(), self._location
            )
        finally:
            self._buffer.close()
            super().close()

    def abort(self) -> None:
        """Discard the buffered content and close without uploading."""
        if self.closed:
            return
        self._buffer.close()
        super().close()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()

    def __del__(self) -> None:
        self.abort()
