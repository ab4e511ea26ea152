"""Configuration for importgate.

GatewayConfig implements ConfigPort over a plain mutable mapping. Values
are looked up on every call, so updating the mapping changes the behavior
of gateways that already hold the config.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import TYPE_CHECKING

from importgate.core import settings
from importgate.core.exceptions import ConfigurationError, PolicyDeniedError
from importgate.core.locations import is_local_location


if TYPE_CHECKING:
    from importgate.core.ports import ConfigPort


ENV_PREFIX = "IMPORTGATE_"

_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})
_FALSE_VALUES = frozenset({"false", "no", "off", "0"})


def parse_boolean(key: str, value: str) -> bool:
    """Parse a configuration value as a boolean.

    Args:
        key: The setting name, used in the error message.
        value: Raw value such as "true", "No" or "1".

    Returns:
        The boolean value.

    Raises:
        ConfigurationError: If value is not a recognized boolean.
    """
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Setting {key} must be a boolean, got {value!r}")


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``key=value`` lines in the style of neo4j.conf.

    Blank lines and lines starting with ``#`` are ignored. Whitespace
    around keys and values is stripped.

    Raises:
        ConfigurationError: If a non-comment line has no ``=``.
    """
    values: dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), 1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition("=")
        if not sep:
            raise ConfigurationError(f"Line {lineno}: expected key=value, got {stripped!r}")
        values[key.strip()] = value.strip()
    return values


class GatewayConfig:
    """ConfigPort implementation backed by a mutable mapping.

    Example:
        >>> config = GatewayConfig({"dbms.directories.import": "/data/import"})
        >>> config.is_import_folder_configured()
        True
        >>> config["apoc.import.file.use_neo4j_config"] = "true"
        >>> config.get_boolean("apoc.import.file.use_neo4j_config")
        True
    """

    def __init__(self, values: MutableMapping[str, str] | None = None) -> None:
        """Initialize with an optional backing mapping.

        Args:
            values: Settings by key. The mapping is used directly, not copied,
                so later changes to it are visible through this config.
        """
        self._values: MutableMapping[str, str] = values if values is not None else {}

    @classmethod
    def from_file(cls, path: Path) -> GatewayConfig:
        """Load settings from a properties file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
        return cls(parse_properties(text))

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        prefix: str = ENV_PREFIX,
    ) -> GatewayConfig:
        """Load settings from environment variables.

        ``IMPORTGATE_DBMS_DIRECTORIES_IMPORT`` maps to
        ``dbms.directories.import``: the prefix is removed, the rest is
        lowercased and underscores become dots. Double underscores stand
        for a literal underscore (``ALLOW__READ`` -> ``allow_read``).
        """
        source = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for name, value in source.items():
            if not name.startswith(prefix):
                continue
            key = name[len(prefix) :].lower().replace("__", "\0").replace("_", ".")
            values[key.replace("\0", "_")] = value
        return cls(values)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        del self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def update(self, other: Mapping[str, str]) -> None:
        """Overlay settings from another mapping."""
        self._values.update(other)

    def as_dict(self) -> dict[str, str]:
        """Return a snapshot of all settings."""
        return dict(self._values)

    def get_boolean(self, key: str, default: bool = False) -> bool:
        """Return a boolean setting, or default when it is not set."""
        value = self._values.get(key)
        if value is None or not value.strip():
            return default
        return parse_boolean(key, value)

    def get_string(self, key: str, default: str = "") -> str:
        """Return a string setting, or default when it is not set."""
        value = self._values.get(key)
        return default if value is None else value

    def check_read_allowed(self, location: str) -> None:
        """Refuse local reads unless file import is enabled.

        Raises:
            PolicyDeniedError: If location is local and importing from
                files is not enabled.
        """
        if is_local_location(location) and not self.get_boolean(
            settings.IMPORT_FILE_ENABLED
        ):
            raise PolicyDeniedError(
                "Import from files not enabled, please set "
                f"{settings.IMPORT_FILE_ENABLED}=true in your configuration",
                location=location,
                setting=settings.IMPORT_FILE_ENABLED,
            )

    def is_import_folder_configured(self) -> bool:
        """Return True if an import directory is set to a non-empty value."""
        return bool(self.get_string(settings.IMPORT_DIRECTORY).strip())


def directory_settings(config: ConfigPort) -> dict[str, Path]:
    """Return every configured host directory setting.

    Args:
        config: Configuration to read.

    Returns:
        Mapping of setting name to path for each directory setting that has
        a non-empty value.
    """
    result: dict[str, Path] = {}
    for key in settings.NEO4J_DIRECTORY_SETTINGS:
        value = config.get_string(key).strip()
        if value:
            result[key] = Path(value)
    return result
