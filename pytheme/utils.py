"""Utility functions for pytheme."""

import fnmatch
from typing import Optional, Union

# =============================================================================
# URL utilities
# =============================================================================


def build_preview_url(store: str, theme_id: Optional[Union[str, int]] = None) -> str:
    """Build the URL showing a store with a given theme.

    Args:
        store: Store host (passed through unchanged)
        theme_id: Theme to preview; None or an empty string means the
            published theme

    Returns:
        Preview URL

    Examples:
        >>> build_preview_url("example.myshopify.com", 12345)
        'example.myshopify.com?preview_theme_id=12345'
        >>> build_preview_url("example.myshopify.com", "")
        'example.myshopify.com'
    """
    if theme_id is None or str(theme_id) == "":
        return store
    return f"{store}?preview_theme_id={theme_id}"


def ensure_scheme(url: str, scheme: str = "https") -> str:
    """Prefix a URL with a scheme unless it already has one.

    Examples:
        >>> ensure_scheme("example.myshopify.com")
        'https://example.myshopify.com'
        >>> ensure_scheme("http://localhost:3000")
        'http://localhost:3000'
    """
    if "://" in url:
        return url
    return f"{scheme}://{url}"


# =============================================================================
# Glob utilities
# =============================================================================


def glob_match(pattern: str, name: str) -> bool:
    """Match a relative path against a shell-style pattern.

    Matching is case-sensitive and ``*`` also matches ``/``, so
    ``assets/*`` covers nested files.

    Examples:
        >>> glob_match("assets/*", "assets/app.js")
        True
        >>> glob_match("assets/*", "layout/theme.liquid")
        False
    """
    return fnmatch.fnmatchcase(name, pattern)


# =============================================================================
# Size formatting utilities
# =============================================================================


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"
