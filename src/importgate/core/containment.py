"""Import directory containment.

When the host enables import-directory semantics, every local location
handed to the gateway is rewritten so that it resolves inside the
configured import directory. Locations that already point inside the
directory are kept; anything else is treated as relative and nested
under it, which neutralizes ``..`` escapes and absolute paths alike.

All functions here are lexical: they read configuration but never touch
the filesystem.
"""

from __future__ import annotations

import logging
import os
from pathlib import PurePath
from typing import TYPE_CHECKING

from importgate.core import settings
from importgate.core.exceptions import PolicyDeniedError
from importgate.core.locations import (
    extract_path,
    is_local_location,
    to_file_url,
)


if TYPE_CHECKING:
    from importgate.core.ports import ConfigPort


logger = logging.getLogger(__name__)


def normalize_path(path: str) -> PurePath:
    """Resolve ``.`` and ``..`` segments without touching the filesystem.

    Leading ``..`` segments of a relative path are kept, as there is
    nothing to resolve them against.
    """
    normalized = os.path.normpath(path)
    # POSIX keeps a leading double slash; it has no meaning here.
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return PurePath(normalized)


def contain_path(path: PurePath, root: PurePath) -> PurePath:
    """Return path if it lies inside root, else path re-rooted under root.

    Args:
        path: A normalized path.
        root: Absolute, normalized directory acting as the boundary.

    Returns:
        A path that is root itself or one of its descendants.

    Example:
        >>> contain_path(PurePath("/etc/passwd"), PurePath("/data/import"))
        PurePosixPath('/data/import/etc/passwd')
        >>> contain_path(PurePath("/data/import/a.csv"), PurePath("/data/import"))
        PurePosixPath('/data/import/a.csv')
    """
    if path.is_absolute() and path.is_relative_to(root):
        return path
    parts = [
        part
        for part in path.parts
        if part not in (path.anchor, os.curdir, os.pardir)
    ]
    return root.joinpath(*parts)


def import_directory(config: ConfigPort) -> PurePath | None:
    """Return the configured import directory as an absolute, normalized path.

    Args:
        config: Configuration to read. Read on every call, never cached.

    Returns:
        The import directory, or None if none is configured.
    """
    if not config.is_import_folder_configured():
        return None
    return PurePath(os.path.abspath(config.get_string(settings.IMPORT_DIRECTORY)))


def uses_import_semantics(config: ConfigPort) -> bool:
    """Return True if local locations are confined to the import directory."""
    return config.get_boolean(settings.USE_NEO4J_CONFIG)


def resolve_location(raw: str, config: ConfigPort) -> str:
    """Rewrite a location so it is confined to the import directory.

    Only local locations are affected, and only when import semantics are
    enabled. The result is a canonical ``file:///`` URL.

    Args:
        raw: Location supplied by the caller.
        config: Configuration supplying the flags and import directory.

    Returns:
        The contained location, or raw unchanged when containment does not
        apply.

    Raises:
        PolicyDeniedError: If containment applies but reading from the
            filesystem is disabled.
        InvalidLocationError: If raw is a malformed ``file:`` URL.

    Example:
        >>> resolve_location("file:///etc/passwd", config)  # doctest: +SKIP
        'file:///data/import/etc/passwd'
    """
    if not (is_local_location(raw) and uses_import_semantics(config)):
        return raw

    if not config.get_boolean(settings.ALLOW_READ_FROM_FILESYSTEM):
        raise PolicyDeniedError(
            f"Import file {raw} not enabled, please set "
            f"{settings.ALLOW_READ_FROM_FILESYSTEM}=true in your configuration",
            location=raw,
            setting=settings.ALLOW_READ_FROM_FILESYSTEM,
        )

    normalized = normalize_path(extract_path(raw))
    root = import_directory(config)
    result = normalized if root is None else contain_path(normalized, root)

    resolved = to_file_url(result)
    if resolved != raw:
        logger.debug("Resolved %s to %s", raw, resolved)
    return resolved
