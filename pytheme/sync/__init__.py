"""Theme sync - upload/remove/replace/download batches."""

from .engine import ThemeSync
from .operations import AssetOperations
from .scanner import DirectoryScanner, LocalFile, list_local_files

__all__ = [
    "ThemeSync",
    "AssetOperations",
    "DirectoryScanner",
    "LocalFile",
    "list_local_files",
]
