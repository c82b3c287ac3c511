"""Configuration loading for pytheme.

The configuration lives in a ``config.yml`` file at the theme root::

    api_key: 7a8da86d3dd730b67a357dedabaac5d6
    password: 552338ce0d3aba7fc501dcf99bc57a81
    store: example.myshopify.com
    theme_id: 12345
    whitelist_files:
      - layout/
      - assets/application.js
    ignore_files:
      - config/settings_data.json

A loaded :class:`ThemeConfig` is passed explicitly to every call that needs
it; nothing in pytheme reads a process-wide configuration.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .exceptions import ThemeConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yml"

_KNOWN_KEYS = (
    "store",
    "theme_id",
    "api_key",
    "password",
    "whitelist_files",
    "ignore_files",
)


def _pattern_list(data: Mapping, key: str) -> list[str]:
    """Read a list of patterns from raw config data.

    Args:
        data: Raw configuration mapping
        key: Key holding the pattern list

    Returns:
        List of patterns with ``None`` entries removed

    Raises:
        ThemeConfigError: If the value is not a list of strings
    """
    value = data.get(key)
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ThemeConfigError(
            f"'{key}' must be a list of patterns, got {type(value).__name__}"
        )

    patterns = []
    for item in value:
        if item is None:
            continue
        if not isinstance(item, str):
            raise ThemeConfigError(
                f"'{key}' entries must be strings, got {type(item).__name__}"
            )
        patterns.append(item)
    return patterns


def _credential(data: Mapping, key: str) -> Optional[str]:
    """Read a credential, accepting the integers YAML makes of all-digit values.

    Raises:
        ThemeConfigError: If the value is neither a string nor an integer
    """
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise ThemeConfigError(f"'{key}' must be a string, got {type(value).__name__}")


@dataclass
class ThemeConfig:
    """Settings for a single theme."""

    store: str = ""
    """Store host, e.g. ``example.myshopify.com``"""

    theme_id: Optional[Union[str, int]] = None
    """Theme to operate on (None targets the published theme)"""

    api_key: Optional[str] = None
    password: Optional[str] = None

    whitelist_files: list[str] = field(default_factory=list)
    """Patterns a path must match to be eligible (empty uses the default)"""

    ignore_files: list[str] = field(default_factory=list)
    """Patterns that exclude a path even if it is whitelisted"""

    extra: dict[str, Any] = field(default_factory=dict)
    """Unrecognized keys, kept so that saving does not drop them"""

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> "ThemeConfig":
        """Build a configuration from parsed YAML (or any mapping).

        Args:
            data: Mapping of configuration keys; None gives defaults

        Returns:
            ThemeConfig instance

        Raises:
            ThemeConfigError: If the data or one of its fields has the wrong type
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ThemeConfigError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )

        normalized = {str(k): v for k, v in data.items()}

        store = normalized.get("store") or ""
        if not isinstance(store, str):
            raise ThemeConfigError("'store' must be a string")

        theme_id = normalized.get("theme_id")
        if theme_id is not None and (
            isinstance(theme_id, bool) or not isinstance(theme_id, (str, int))
        ):
            raise ThemeConfigError("'theme_id' must be a string or an integer")

        return cls(
            store=store,
            theme_id=theme_id,
            api_key=_credential(normalized, "api_key"),
            password=_credential(normalized, "password"),
            whitelist_files=_pattern_list(normalized, "whitelist_files"),
            ignore_files=_pattern_list(normalized, "ignore_files"),
            extra={k: v for k, v in normalized.items() if k not in _KNOWN_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain mapping suitable for YAML output."""
        data: dict[str, Any] = dict(self.extra)
        if self.api_key:
            data["api_key"] = self.api_key
        if self.password:
            data["password"] = self.password
        data["store"] = self.store
        if self.theme_id not in (None, ""):
            data["theme_id"] = self.theme_id
        if self.whitelist_files:
            data["whitelist_files"] = list(self.whitelist_files)
        if self.ignore_files:
            data["ignore_files"] = list(self.ignore_files)
        return data

    def is_configured(self) -> bool:
        """Check whether store and credentials are present."""
        return bool(self.store and self.api_key and self.password)


def load_config(path: Union[str, Path] = DEFAULT_CONFIG_FILE) -> ThemeConfig:
    """Load a configuration file.

    Args:
        path: Path to the YAML configuration file

    Returns:
        Parsed configuration

    Raises:
        ThemeConfigError: If the file is missing, unreadable or malformed
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ThemeConfigError(
            f"Configuration file not found: {config_path}. "
            "Run 'pytheme configure' first."
        )

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ThemeConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ThemeConfigError(f"Cannot read {config_path}: {e}") from e

    logger.debug(f"Loaded configuration from {config_path}")
    return ThemeConfig.from_dict(data)


def save_config(
    config: ThemeConfig, path: Union[str, Path] = DEFAULT_CONFIG_FILE
) -> Path:
    """Write a configuration file.

    Args:
        config: Configuration to save
        path: Destination path

    Returns:
        The path that was written
    """
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    logger.debug(f"Saved configuration to {config_path}")
    return config_path
