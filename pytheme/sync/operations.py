"""Asset operations wrapping a remote store client."""

import logging
from pathlib import Path, PurePosixPath
from typing import Any

from ..classifier import is_binary
from ..exceptions import ThemeDownloadError
from ..protocols import RemoteAssetSource, RemoteStoreClient
from .scanner import LocalFile

logger = logging.getLogger(__name__)


class AssetOperations:
    """Single-asset upload, removal and download."""

    def __init__(self, client: RemoteStoreClient):
        """Initialize asset operations.

        Args:
            client: Remote store client
        """
        self.client = client

    def upload_file(self, local_file: LocalFile) -> Any:
        """Send a local file, choosing the encoding from its name.

        Args:
            local_file: File to upload

        Returns:
            Client response
        """
        binary = is_binary(local_file.relative_path)
        logger.debug(
            f"Uploading {local_file.relative_path} as {'binary' if binary else 'text'}"
        )
        return self.client.send(
            local_file.relative_path, local_file.read_bytes(), binary
        )

    def remove_key(self, key: str) -> Any:
        """Delete a remote asset."""
        logger.debug(f"Removing {key}")
        return self.client.remove(key)

    def download_key(self, key: str, root: Path) -> Path:
        """Fetch a remote asset and write it below the theme root.

        Args:
            key: Asset key
            root: Theme root directory

        Returns:
            Path the asset was written to

        Raises:
            ThemeDownloadError: If the key escapes the theme root or the
                client cannot fetch assets
        """
        if not isinstance(self.client, RemoteAssetSource):
            raise ThemeDownloadError("Client does not support downloading assets")

        relative = PurePosixPath(key)
        if relative.is_absolute() or ".." in relative.parts:
            raise ThemeDownloadError(f"Refusing to write outside theme root: {key}")

        asset = self.client.get_asset(key)
        content = self.client.decode_asset(asset)

        local_path = root.joinpath(*relative.parts)
        # Ensure parent directory exists
        local_path.parent.mkdir(parents=True, exist_ok=True)
        local_path.write_bytes(content)
        logger.debug(f"Downloaded {key} ({len(content)} bytes)")
        return local_path
