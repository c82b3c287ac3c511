"""Unit tests for the theme store API client."""

import base64
from unittest.mock import Mock, patch

import httpx
import pytest

from pytheme.api import ThemeClient
from pytheme.config import ThemeConfig
from pytheme.exceptions import (
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
from pytheme.protocols import RemoteStoreClient


def _json_response(data, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.content = b"{}" if data is not None else b""
    response.headers = {"Content-Type": "application/json; charset=utf-8"}
    response.json.return_value = data
    return response


def _error_response(status_code, data=None):
    response = _json_response(data, status_code)
    if data is None:
        response.json.side_effect = ValueError("no json")
    response.raise_for_status.side_effect = httpx.HTTPStatusError(
        f"status {status_code}", request=Mock(), response=response
    )
    return response


@pytest.fixture
def client():
    return ThemeClient(
        store="shop.example", api_key="key", password="secret", theme_id=42
    )


class TestThemeClient:
    """Tests for ThemeClient initialization."""

    def test_init(self, client):
        assert client.api_url == "https://shop.example/admin"
        assert client.assets_endpoint == "themes/42/assets.json"

    def test_published_theme_endpoint(self):
        client = ThemeClient(store="shop.example", api_key="k", password="p")
        assert client.assets_endpoint == "assets.json"

    def test_empty_theme_id_uses_published_theme(self):
        client = ThemeClient(
            store="shop.example", api_key="k", password="p", theme_id=""
        )
        assert client.assets_endpoint == "assets.json"

    def test_store_with_scheme(self):
        client = ThemeClient(store="http://localhost:3000/", api_key="k", password="p")
        assert client.api_url == "http://localhost:3000/admin"

    def test_missing_store_raises(self):
        with pytest.raises(ThemeConfigError, match="Store not configured"):
            ThemeClient(store="", api_key="k", password="p")

    def test_missing_credentials_raises(self):
        with pytest.raises(ThemeConfigError, match="credentials"):
            ThemeClient(store="shop.example", api_key="k", password=None)

    def test_from_config(self):
        config = ThemeConfig(
            store="shop.example", api_key="k", password="p", theme_id=7
        )
        client = ThemeClient.from_config(config)
        assert client.store == "shop.example"
        assert client.theme_id == 7

    def test_from_config_with_numeric_credentials(self):
        config = ThemeConfig.from_dict(
            {"store": "shop.example", "api_key": 1234, "password": 123456789}
        )
        with ThemeClient.from_config(config) as client:
            http_client = client._get_client()
        assert isinstance(http_client.auth, httpx.BasicAuth)
        assert client.password == "123456789"

    def test_implements_protocol(self, client):
        assert isinstance(client, RemoteStoreClient)

    def test_context_manager_closes(self):
        with ThemeClient(store="s", api_key="k", password="p") as client:
            http_client = client._get_client()
        assert http_client.is_closed
        assert client._client is None


class TestRequest:
    """Tests for the _request method."""

    @patch("pytheme.api.httpx.Client.request")
    def test_successful_json_response(self, mock_request, client):
        mock_request.return_value = _json_response({"data": "test"})

        assert client._request("GET", "/test") == {"data": "test"}
        args = mock_request.call_args[0]
        assert args == ("GET", "https://shop.example/admin/test")

    @patch("pytheme.api.httpx.Client.request")
    def test_empty_response(self, mock_request, client):
        mock_request.return_value = _json_response(None)
        assert client._request("DELETE", "assets.json") == {}

    @patch("pytheme.api.httpx.Client.request")
    def test_html_response_raises_error(self, mock_request, client):
        response = _json_response({})
        response.content = b"<html>Login</html>"
        response.headers = {"Content-Type": "text/html"}
        mock_request.return_value = response

        with pytest.raises(ThemeAuthenticationError, match="returned HTML"):
            client._request("GET", "/test")

    @patch("pytheme.api.httpx.Client.request")
    def test_unexpected_content_type(self, mock_request, client):
        response = _json_response({})
        response.headers = {"Content-Type": "text/plain"}
        mock_request.return_value = response

        with pytest.raises(ThemeInvalidResponseError, match="text/plain"):
            client._request("GET", "/test")

    @patch("pytheme.api.httpx.Client.request")
    def test_invalid_json(self, mock_request, client):
        response = _json_response({})
        response.json.side_effect = ValueError("bad json")
        mock_request.return_value = response

        with pytest.raises(ThemeInvalidResponseError, match="Invalid JSON"):
            client._request("GET", "/test")

    @pytest.mark.parametrize(
        "status_code,error_class",
        [
            (401, ThemeAuthenticationError),
            (403, ThemePermissionError),
            (404, ThemeNotFoundError),
            (429, ThemeRateLimitError),
            (500, ThemeAPIError),
        ],
    )
    @patch("pytheme.api.httpx.Client.request")
    def test_http_errors(self, mock_request, status_code, error_class, client):
        mock_request.return_value = _error_response(status_code)

        with pytest.raises(error_class):
            client._request("GET", "/test")

    @patch("pytheme.api.httpx.Client.request")
    def test_validation_error_message(self, mock_request, client):
        mock_request.return_value = _error_response(
            422, {"errors": {"asset": ["Liquid syntax error (line 3)"]}}
        )

        with pytest.raises(ThemeValidationError, match="Liquid syntax error"):
            client._request("PUT", "assets.json")

    @patch("pytheme.api.httpx.Client.request")
    def test_network_error(self, mock_request, client):
        mock_request.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(ThemeNetworkError, match="connection refused"):
            client._request("GET", "/test")


class TestAssetOperations:
    """Tests for asset endpoints."""

    def test_send_text_asset(self, client):
        response = {"asset": {"key": "k"}}
        with patch.object(client, "_request", return_value=response) as req:
            result = client.send("layout/theme.liquid", b"{{ content }}", False)

        assert result == {"key": "k"}
        req.assert_called_once_with(
            "PUT",
            "themes/42/assets.json",
            json={"asset": {"key": "layout/theme.liquid", "value": "{{ content }}"}},
        )

    def test_send_binary_asset(self, client):
        content = b"\x89PNG\r\n\x1a\n"
        with patch.object(client, "_request", return_value={}) as req:
            client.send_asset("assets/logo.png", content, True)

        payload = req.call_args.kwargs["json"]["asset"]
        assert payload["key"] == "assets/logo.png"
        assert base64.b64decode(payload["attachment"]) == content
        assert "value" not in payload

    def test_send_invalid_utf8_text_raises(self, client):
        with patch.object(client, "_request") as req:
            with pytest.raises(ThemeUploadError, match="not valid UTF-8"):
                client.send("assets/app.js", b"\xff\xfe", False)
        req.assert_not_called()

    def test_remove_asset(self, client):
        with patch.object(client, "_request", return_value={}) as req:
            client.remove("assets/old.js")

        req.assert_called_once_with(
            "DELETE", "themes/42/assets.json", params={"asset[key]": "assets/old.js"}
        )

    def test_list_assets(self, client):
        assets = [{"key": "layout/theme.liquid"}, {"key": "assets/a.css"}]
        with patch.object(client, "_request", return_value={"assets": assets}):
            assert client.list_assets() == assets

    def test_list_assets_invalid_response(self, client):
        with patch.object(client, "_request", return_value={}):
            with pytest.raises(ThemeInvalidResponseError):
                client.list_assets()

    def test_get_asset(self, client):
        asset = {"key": "layout/theme.liquid", "value": "x"}
        with patch.object(client, "_request", return_value={"asset": asset}) as req:
            assert client.get_asset("layout/theme.liquid") == asset

        req.assert_called_once_with(
            "GET",
            "themes/42/assets.json",
            params={"asset[key]": "layout/theme.liquid"},
        )


class TestDecodeAsset:
    """Tests for decode_asset."""

    def test_value(self, client):
        assert client.decode_asset({"key": "a.css", "value": "body {}"}) == b"body {}"

    def test_attachment(self, client):
        encoded = base64.b64encode(b"\x00\x01").decode()
        asset = {"key": "a.png", "attachment": encoded}
        assert client.decode_asset(asset) == b"\x00\x01"

    def test_invalid_attachment(self, client):
        with pytest.raises(ThemeDownloadError, match="Invalid attachment"):
            client.decode_asset({"key": "a.png", "attachment": "!!"})

    def test_no_content(self, client):
        with pytest.raises(ThemeDownloadError, match="No content"):
            client.decode_asset({"key": "a.png"})
