"""Location classification helpers.

A location is any string a caller hands to the gateway: a bare path, a
``file:`` URL, an ``hdfs://`` URL or a URL of another scheme. Everything
here is a pure function of the string.
"""

from __future__ import annotations

import re
from pathlib import Path, PurePath
from urllib.parse import unquote, urlsplit

from importgate.core.exceptions import InvalidLocationError
from importgate.core.models import LocationKind


STANDARD_STREAM = "-"

HDFS_PATTERN = re.compile(r"^(hdfs://)(?:[^@/\n]+@)?([^/\n]+)", re.IGNORECASE)

# Single-letter schemes are Windows drive letters, not URLs.
_URL_PATTERN = re.compile(r"^(\w{2,}):/.+")


def parse_scheme(location: str) -> str | None:
    """Extract the URL scheme from a location.

    Args:
        location: Path or URL.

    Returns:
        The lowercased scheme (e.g., 's3', 'file') or None for plain paths.
    """
    match = _URL_PATTERN.match(location)
    if match:
        return match.group(1).lower()
    return None


def is_hdfs(location: str) -> bool:
    """Return True if location is an ``hdfs://[user@]host`` URL."""
    return HDFS_PATTERN.match(location) is not None


def is_file_url(location: str) -> bool:
    """Return True if location uses the ``file:`` scheme."""
    return location.lower().startswith("file:")


def classify_location(location: str) -> LocationKind:
    """Classify a location by its prefix.

    Args:
        location: Path or URL.

    Returns:
        The LocationKind of the location.

    Example:
        >>> classify_location("/tmp/a.csv")
        <LocationKind.LOCAL: 'local'>
        >>> classify_location("s3://bucket/a.csv")
        <LocationKind.OTHER_URL: 'other'>
    """
    if is_file_url(location):
        return LocationKind.FILE_URL
    if is_hdfs(location):
        return LocationKind.HDFS
    if parse_scheme(location) is not None:
        return LocationKind.OTHER_URL
    return LocationKind.LOCAL


def is_local_like(location: str | None) -> bool:
    """Return True unless location is an HTTP(S) or HDFS URL.

    Other URL schemes count as local-like here; use is_local_location()
    to test for an actual local file reference.
    """
    if location is None:
        return False
    if parse_scheme(location) in ("http", "https"):
        return False
    return not is_hdfs(location)


def is_local_location(location: str) -> bool:
    """Return True if location refers to the local filesystem."""
    return classify_location(location) in (LocationKind.LOCAL, LocationKind.FILE_URL)


def extract_path(location: str) -> str:
    """Return the filesystem path named by a local location.

    For ``file:`` URLs this is the decoded URL path. When the path is empty
    the authority is used instead, so ``file://name.csv`` names ``name.csv``.

    Args:
        location: Local path or ``file:`` URL.

    Returns:
        The path component as a string.

    Raises:
        InvalidLocationError: If the URL cannot be parsed or names no path.
    """
    if not is_file_url(location):
        return location

    try:
        parts = urlsplit(location)
    except ValueError as e:
        raise InvalidLocationError(
            f"Invalid file URL: {location}", location=location, cause=e
        ) from e

    path = unquote(parts.path)
    if not path:
        # file://name.csv parses name.csv as the host
        path = unquote(parts.netloc)
    if not path:
        raise InvalidLocationError(f"File URL has no path: {location}", location=location)
    return path


def to_file_url(path: PurePath) -> str:
    """Encode a path as a canonical ``file:///`` URL.

    Relative paths are anchored at the current working directory.
    """
    if not path.is_absolute():
        path = Path.cwd() / path
    return path.as_uri()


def split_hdfs_url(location: str) -> tuple[str, str]:
    """Split an HDFS URL into the NameNode URL and the file path.

    User info is dropped from the NameNode URL.

    Args:
        location: URL of the form ``hdfs://[user@]host[:port]/path``.

    Returns:
        Tuple of (namenode_url, path).

    Raises:
        InvalidLocationError: If location is not an HDFS URL.

    Example:
        >>> split_hdfs_url("hdfs://alice@nn:9000/data/a.csv")
        ('hdfs://nn:9000', '/data/a.csv')
    """
    match = HDFS_PATTERN.match(location)
    if match is None:
        raise InvalidLocationError(f"Invalid HDFS URL: {location}", location=location)
    path = location[match.end() :] or "/"
    return f"hdfs://{match.group(2)}", path
