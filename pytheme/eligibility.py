"""Rules deciding which local theme files are eligible for a sync action.

A path is eligible when it matches the whitelist, does not match the ignore
list and, if the caller passes one, matches the glob filter. Whitelist and
ignore patterns are plain string prefixes: ``layout/`` matches
``layout/theme.liquid`` and ``assets/application.js`` also matches
``assets/application.js.map``.

Examples:
    >>> resolve_eligible(["assets/a.png", "config.yml"], {})
    ['assets/a.png']
    >>> resolve_eligible(
    ...     ["assets/a.png", "layout/theme.liquid"],
    ...     {"whitelist_files": ["layout/"]},
    ... )
    ['layout/theme.liquid']
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Optional, Union

from .config import ThemeConfig
from .utils import glob_match

logger = logging.getLogger(__name__)

# Theme directories that are synced when no whitelist is configured
DEFAULT_WHITELIST: tuple[str, ...] = (
    "layout/",
    "assets/",
    "config/",
    "snippets/",
    "templates/",
    "locales/",
)

GlobFilter = Optional[Union[str, Sequence[str]]]


def matches_pattern(path: str, pattern: str) -> bool:
    """Check whether a whitelist/ignore pattern matches a path.

    Matching is character-wise prefix matching, not aware of path segments.

    Args:
        path: Relative path using forward slashes
        pattern: Whitelist or ignore pattern

    Returns:
        True if the path equals the pattern or starts with it
    """
    return path == pattern or path.startswith(pattern)


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    """Check whether any of the patterns matches the path."""
    return any(matches_pattern(path, pattern) for pattern in patterns)


def effective_whitelist(config: ThemeConfig) -> Sequence[str]:
    """Return the whitelist in force for a configuration.

    A non-empty configured whitelist replaces the default one entirely.
    """
    if config.whitelist_files:
        return config.whitelist_files
    return DEFAULT_WHITELIST


def _matches_glob(path: str, glob_pattern: GlobFilter) -> bool:
    if glob_pattern is None:
        return True
    if isinstance(glob_pattern, str):
        return glob_match(glob_pattern, path)
    if not glob_pattern:
        return True
    return any(glob_match(pattern, path) for pattern in glob_pattern)


def resolve_eligible(
    local_paths: Iterable[str],
    config: Union[ThemeConfig, Mapping, None],
    glob_pattern: GlobFilter = None,
) -> list[str]:
    """Compute the set of paths to act on.

    Args:
        local_paths: Relative paths of the local theme files
        config: Theme configuration (a plain mapping is converted)
        glob_pattern: Optional shell-style filter, e.g. ``assets/*``; a
            sequence of patterns keeps paths matching any of them

    Returns:
        Eligible paths in their original order, without duplicates

    Raises:
        ThemeConfigError: If a mapping config has malformed fields
    """
    if not isinstance(config, ThemeConfig):
        config = ThemeConfig.from_dict(config)

    whitelist = effective_whitelist(config)
    ignore = config.ignore_files

    eligible: list[str] = []
    seen: set[str] = set()

    for path in local_paths:
        if path in seen:
            continue
        seen.add(path)

        if not matches_any(path, whitelist):
            logger.debug(f"Not whitelisted: {path}")
            continue
        if matches_any(path, ignore):
            logger.debug(f"Ignored: {path}")
            continue
        if not _matches_glob(path, glob_pattern):
            continue
        eligible.append(path)

    return eligible
