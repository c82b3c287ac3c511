"""API client for the theme store."""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx

from .config import ThemeConfig
from .exceptions import (
    ThemeAPIError,
    ThemeAuthenticationError,
    ThemeConfigError,
    ThemeDownloadError,
    ThemeInvalidResponseError,
    ThemeNetworkError,
    ThemeNotFoundError,
    ThemePermissionError,
    ThemeRateLimitError,
    ThemeUploadError,
    ThemeValidationError,
)

logger = logging.getLogger(__name__)


class ThemeClient:
    """Client for the theme asset API of a store.

    Implements :class:`pytheme.protocols.RemoteStoreClient`.
    """

    def __init__(
        self,
        store: str,
        api_key: str | None,
        password: str | None,
        theme_id: str | int | None = None,
        timeout: float = 30.0,
    ):
        """Initialize the API client.

        Args:
            store: Store host, e.g. ``example.myshopify.com``
            api_key: API key (basic auth user)
            password: API password (basic auth password)
            theme_id: Theme whose assets are managed; None targets the
                published theme
            timeout: Request timeout in seconds (default: 30.0)
        """
        if not store:
            raise ThemeConfigError("Store not configured. Set 'store' in config.yml.")
        if not api_key or not password:
            raise ThemeConfigError(
                "API credentials not configured. "
                "Set 'api_key' and 'password' in config.yml."
            )

        self.store = store.rstrip("/")
        self.api_key = api_key
        self.password = password
        self.theme_id = theme_id
        self.timeout = timeout

        if "://" in self.store:
            self.api_url = f"{self.store}/admin"
        else:
            self.api_url = f"https://{self.store}/admin"

        self._client: httpx.Client | None = None

    @classmethod
    def from_config(cls, config: ThemeConfig, **kwargs: Any) -> ThemeClient:
        """Create a client from a loaded configuration."""
        return cls(
            store=config.store,
            api_key=config.api_key,
            password=config.password,
            theme_id=config.theme_id,
            **kwargs,
        )

    def __enter__(self) -> ThemeClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                auth=(self.api_key, self.password),
                headers={"Accept": "application/json"},
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
        return self._client

    def close(self) -> None:
        """Close the client and release connections."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    @property
    def assets_endpoint(self) -> str:
        """Asset endpoint for the configured theme."""
        if self.theme_id is None or str(self.theme_id) == "":
            return "assets.json"
        return f"themes/{self.theme_id}/assets.json"

    def _raise_for_status(self, e: httpx.HTTPStatusError) -> None:
        """Translate an HTTP error into a pytheme exception.

        Args:
            e: The HTTP error exception

        Raises:
            ThemeAPIError: Always, using the most specific subclass
        """
        status_code = e.response.status_code

        if status_code == 401:
            raise ThemeAuthenticationError(
                "Invalid API credentials or unauthorized access"
            ) from e
        elif status_code == 403:
            raise ThemePermissionError(
                "Access forbidden - check your permissions"
            ) from e
        elif status_code == 404:
            raise ThemeNotFoundError("Resource not found") from e
        elif status_code == 429:
            raise ThemeRateLimitError(
                "Rate limit exceeded - please try again later"
            ) from e

        error_msg = f"API request failed with status {status_code}"
        detail = None
        try:
            if e.response.content:
                error_data = e.response.json()
                if isinstance(error_data, dict):
                    detail = error_data.get("errors") or error_data.get("error")
        except ValueError:
            # Body is not JSON, keep the status-based message
            pass

        if detail:
            error_msg = f"{error_msg}: {_format_errors(detail)}"
        if status_code == 422:
            raise ThemeValidationError(error_msg) from e
        raise ThemeAPIError(error_msg) from e

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Make an API request.

        Args:
            method: HTTP method
            endpoint: API endpoint path
            **kwargs: Additional arguments passed to httpx

        Returns:
            Response JSON data

        Raises:
            ThemeAPIError: If the request fails
        """
        url = f"{self.api_url}/{endpoint.lstrip('/')}"
        client = self._get_client()
        logger.debug(f"{method} {url}")

        try:
            response = client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._raise_for_status(e)
        except httpx.RequestError as e:
            raise ThemeNetworkError(f"Network error: {e}") from e

        content_type = response.headers.get("Content-Type", "")
        if response.content and "application/json" not in content_type:
            # Login pages come back as HTML with a 200 status
            if "text/html" in content_type:
                raise ThemeAuthenticationError(
                    "Invalid API credentials - server returned HTML instead of JSON"
                )
            raise ThemeInvalidResponseError(
                f"Unexpected response type: {content_type}"
            )

        if response.content:
            try:
                return response.json()
            except ValueError as e:
                raise ThemeInvalidResponseError(
                    "Invalid JSON response from server"
                ) from e
        return {}

    # =========================
    # Asset Operations
    # =========================

    def send_asset(self, key: str, content: bytes, is_binary: bool) -> dict[str, Any]:
        """Create or update an asset.

        Args:
            key: Asset key (relative path, e.g. ``assets/app.js``)
            content: Raw file content
            is_binary: Send base64 ``attachment`` instead of text ``value``

        Returns:
            The stored asset as returned by the API

        Raises:
            ThemeUploadError: If text content is not valid UTF-8
            ThemeAPIError: If the request fails
        """
        asset: dict[str, Any] = {"key": key}
        if is_binary:
            asset["attachment"] = base64.b64encode(content).decode("ascii")
        else:
            try:
                asset["value"] = content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ThemeUploadError(f"{key} is not valid UTF-8 text") from e

        result = self._request("PUT", self.assets_endpoint, json={"asset": asset})
        return result.get("asset", {}) if isinstance(result, dict) else {}

    def remove_asset(self, key: str) -> dict[str, Any]:
        """Delete an asset.

        Args:
            key: Asset key

        Returns:
            API response
        """
        return self._request(
            "DELETE", self.assets_endpoint, params={"asset[key]": key}
        )

    def list_assets(self) -> list[dict[str, Any]]:
        """List the assets of the theme (metadata only, no content)."""
        result = self._request("GET", self.assets_endpoint)
        if not isinstance(result, dict) or "assets" not in result:
            raise ThemeInvalidResponseError("Asset list missing from response")
        return result["assets"]

    def get_asset(self, key: str) -> dict[str, Any]:
        """Fetch a single asset including its content.

        Args:
            key: Asset key

        Returns:
            Asset dictionary with either ``value`` or ``attachment``
        """
        result = self._request(
            "GET", self.assets_endpoint, params={"asset[key]": key}
        )
        if not isinstance(result, dict) or "asset" not in result:
            raise ThemeInvalidResponseError(f"Asset {key} missing from response")
        return result["asset"]

    def decode_asset(self, asset: dict[str, Any]) -> bytes:
        """Return the raw bytes of a fetched asset.

        Raises:
            ThemeDownloadError: If the asset carries no usable content
        """
        if asset.get("attachment") is not None:
            try:
                return base64.b64decode(asset["attachment"], validate=True)
            except ValueError as e:
                raise ThemeDownloadError(
                    f"Invalid attachment for {asset.get('key')}"
                ) from e
        if asset.get("value") is not None:
            return asset["value"].encode("utf-8")
        raise ThemeDownloadError(f"No content returned for {asset.get('key')}")

    # RemoteStoreClient protocol

    def send(self, path: str, content: bytes, is_binary: bool) -> dict[str, Any]:
        return self.send_asset(path, content, is_binary)

    def remove(self, path: str) -> dict[str, Any]:
        return self.remove_asset(path)


def _format_errors(errors: Any) -> str:
    """Flatten the ``errors`` field of an API response into one line."""
    if isinstance(errors, dict):
        parts = []
        for field_name, messages in errors.items():
            if isinstance(messages, list):
                messages = "; ".join(str(m) for m in messages)
            parts.append(f"{field_name}: {messages}")
        return ", ".join(parts)
    if isinstance(errors, list):
        return "; ".join(str(e) for e in errors)
    return str(errors)
