"""pytheme - sync a local theme directory with a remote theme store."""

from .api import ThemeClient
from .classifier import is_binary, transfer_encoding
from .config import ThemeConfig, load_config, save_config
from .eligibility import DEFAULT_WHITELIST, matches_pattern, resolve_eligible
from .exceptions import (
    ThemeAPIError,
    ThemeAuthenticationError,
    ThemeConfigError,
    ThemeDownloadError,
    ThemeError,
    ThemeInvalidResponseError,
    ThemeNetworkError,
    ThemeNotFoundError,
    ThemePermissionError,
    ThemeRateLimitError,
    ThemeUploadError,
    ThemeValidationError,
)
from .protocols import RemoteStoreClient
from .utils import build_preview_url

__version__ = "0.1.0"

__all__ = [
    "ThemeClient",
    "ThemeConfig",
    "RemoteStoreClient",
    "DEFAULT_WHITELIST",
    "build_preview_url",
    "is_binary",
    "load_config",
    "matches_pattern",
    "resolve_eligible",
    "save_config",
    "transfer_encoding",
    "ThemeAPIError",
    "ThemeAuthenticationError",
    "ThemeConfigError",
    "ThemeDownloadError",
    "ThemeError",
    "ThemeInvalidResponseError",
    "ThemeNetworkError",
    "ThemeNotFoundError",
    "ThemePermissionError",
    "ThemeRateLimitError",
    "ThemeUploadError",
    "ThemeValidationError",
]
