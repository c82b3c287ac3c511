"""Sync engine running upload, remove, replace and download batches."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from ..config import ThemeConfig
from ..eligibility import GlobFilter, resolve_eligible
from ..exceptions import ThemeAPIError, ThemeError
from ..output import OutputFormatter
from ..protocols import RemoteAssetSource, RemoteStoreClient
from .operations import AssetOperations
from .scanner import DirectoryScanner, LocalFile

logger = logging.getLogger(__name__)


class ThemeSync:
    """Synchronizes a local theme directory with the remote store.

    Every batch first resolves the full set of eligible paths against the
    configuration and only then starts talking to the store. A failure on
    one file is reported and counted; the rest of the batch still runs.
    """

    def __init__(
        self,
        client: RemoteStoreClient,
        config: ThemeConfig,
        root: Path,
        output: Optional[OutputFormatter] = None,
        scanner: Optional[DirectoryScanner] = None,
    ):
        """Initialize sync engine.

        Args:
            client: Remote store client
            config: Theme configuration (whitelist and ignore patterns)
            root: Theme root directory
            output: Output formatter for displaying progress/status
            scanner: Local file scanner (defaults to DirectoryScanner())
        """
        self.client = client
        self.config = config
        self.root = Path(root)
        self.output = output or OutputFormatter()
        self.scanner = scanner or DirectoryScanner()
        self.operations = AssetOperations(client)

    def _create_empty_stats(self) -> dict:
        return {
            "uploads": 0,
            "removals": 0,
            "downloads": 0,
            "skips": 0,
            "errors": 0,
            "failed": [],
        }

    def _record_failure(self, stats: dict, action: str, key: str, error: Exception):
        logger.warning(f"Failed to {action} {key}: {error}")
        self.output.error(f"Failed to {action} {key}: {error}")
        stats["errors"] += 1
        stats["failed"].append(key)

    def local_files(self) -> list[LocalFile]:
        """Scan the theme root."""
        if not self.root.is_dir():
            raise ValueError(f"Theme directory does not exist: {self.root}")
        return self.scanner.scan_local(self.root)

    def eligible_local_files(self, glob_pattern: GlobFilter = None) -> list[LocalFile]:
        """Local files that pass the whitelist, ignore list and glob filter."""
        by_path = {f.relative_path: f for f in self.local_files()}
        eligible = resolve_eligible(list(by_path), self.config, glob_pattern)
        return [by_path[path] for path in eligible]

    def upload(self, glob_pattern: GlobFilter = None, dry_run: bool = False) -> dict:
        """Upload eligible local files.

        Args:
            glob_pattern: Optional filter such as ``assets/*``
            dry_run: Only report what would be uploaded

        Returns:
            Dictionary with sync statistics
        """
        files = self.eligible_local_files(glob_pattern)
        stats = self._create_empty_stats()

        if not files:
            self.output.warning("No eligible files to upload.")
            return stats

        for local_file in files:
            if dry_run:
                self.output.info(f"Would upload: {local_file.relative_path}")
                stats["uploads"] += 1
                continue

            self.output.progress_message(
                f"Uploading {local_file.relative_path} "
                f"({self.output.format_size(local_file.size)})"
            )
            try:
                self.operations.upload_file(local_file)
                stats["uploads"] += 1
            except (ThemeAPIError, OSError) as e:
                self._record_failure(stats, "upload", local_file.relative_path, e)

        return stats

    def remove(self, keys: Iterable[str], dry_run: bool = False) -> dict:
        """Remove assets from the store.

        Keys that are not whitelisted or that are ignored are skipped.

        Args:
            keys: Asset keys to remove
            dry_run: Only report what would be removed

        Returns:
            Dictionary with sync statistics
        """
        keys = list(dict.fromkeys(keys))
        eligible = resolve_eligible(keys, self.config)
        stats = self._create_empty_stats()

        for key in keys:
            if key not in eligible:
                self.output.warning(f"Skipping {key}: not eligible for sync")
                stats["skips"] += 1

        for key in eligible:
            if dry_run:
                self.output.info(f"Would remove: {key}")
                stats["removals"] += 1
                continue

            self.output.progress_message(f"Removing {key}")
            try:
                self.operations.remove_key(key)
                stats["removals"] += 1
            except ThemeAPIError as e:
                self._record_failure(stats, "remove", key, e)

        return stats

    def _remote_keys(self) -> list[str]:
        if not isinstance(self.client, RemoteAssetSource):
            raise ThemeError("Client does not support listing assets")
        return [asset["key"] for asset in self.client.list_assets() if "key" in asset]

    def replace(self, dry_run: bool = False) -> dict:
        """Make the remote theme match the local one.

        Uploads every eligible local file, then removes eligible remote
        assets that do not exist locally.

        Args:
            dry_run: Only report what would change

        Returns:
            Dictionary with sync statistics
        """
        local_paths = {f.relative_path for f in self.eligible_local_files()}
        remote_keys = resolve_eligible(self._remote_keys(), self.config)
        stale = [key for key in remote_keys if key not in local_paths]

        stats = self.upload(dry_run=dry_run)
        if stale:
            removal_stats = self.remove(stale, dry_run=dry_run)
            stats["removals"] += removal_stats["removals"]
            stats["errors"] += removal_stats["errors"]
            stats["failed"].extend(removal_stats["failed"])
        return stats

    def download(self, keys: Optional[Iterable[str]] = None) -> dict:
        """Download assets into the theme root.

        Args:
            keys: Asset keys to fetch; None downloads every eligible asset

        Returns:
            Dictionary with sync statistics
        """
        if keys is None:
            targets = resolve_eligible(self._remote_keys(), self.config)
        else:
            targets = list(dict.fromkeys(keys))

        stats = self._create_empty_stats()
        for key in targets:
            self.output.progress_message(f"Downloading {key}")
            try:
                self.operations.download_key(key, self.root)
                stats["downloads"] += 1
            except (ThemeAPIError, OSError) as e:
                self._record_failure(stats, "download", key, e)

        return stats
