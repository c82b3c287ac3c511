"""Exceptions raised by pytheme."""


class ThemeError(Exception):
    """Base exception for all pytheme errors."""


class ThemeConfigError(ThemeError):
    """Raised when the configuration is missing or malformed."""


class ThemeAPIError(ThemeError):
    """Raised when a request to the theme store API fails."""


class ThemeAuthenticationError(ThemeAPIError):
    """Raised when the store rejects the configured credentials."""


class ThemePermissionError(ThemeAPIError):
    """Raised when the credentials lack access to a resource."""


class ThemeNotFoundError(ThemeAPIError):
    """Raised when a theme or asset does not exist."""


class ThemeValidationError(ThemeAPIError):
    """Raised when the store refuses an asset (e.g. a Liquid syntax error)."""


class ThemeRateLimitError(ThemeAPIError):
    """Raised when the store throttles requests."""


class ThemeNetworkError(ThemeAPIError):
    """Raised on connection failures and timeouts."""


class ThemeInvalidResponseError(ThemeAPIError):
    """Raised when the store returns something other than JSON."""


class ThemeUploadError(ThemeAPIError):
    """Raised when an asset cannot be prepared or sent."""


class ThemeDownloadError(ThemeAPIError):
    """Raised when an asset cannot be fetched or written locally."""
