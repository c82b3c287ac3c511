"""Directory scanning utilities for theme sync."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class LocalFile:
    """Represents a local theme file."""

    path: Path
    """Absolute path to the file"""

    relative_path: str
    """Relative path (using forward slashes for cross-platform compatibility)"""

    size: int = 0
    """File size in bytes"""

    @classmethod
    def from_path(cls, file_path: Path, base_path: Path) -> "LocalFile":
        """Create LocalFile from a path.

        Args:
            file_path: Absolute path to the file
            base_path: Theme root for calculating relative paths

        Returns:
            LocalFile instance
        """
        # Use as_posix() to ensure forward slashes on all platforms
        relative_path = file_path.relative_to(base_path).as_posix()
        return cls(
            path=file_path,
            relative_path=relative_path,
            size=file_path.stat().st_size,
        )

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


class DirectoryScanner:
    """Lists the files of a theme directory.

    Examples:
        >>> scanner = DirectoryScanner()
        >>> files = scanner.scan_local(Path("/themes/dawn"))
        >>> [f.relative_path for f in files][:2]
        ['assets/base.css', 'assets/global.js']
    """

    def __init__(self, exclude_dot_files: bool = True):
        """Initialize directory scanner.

        Args:
            exclude_dot_files: Whether to skip files/folders starting with a dot
        """
        self.exclude_dot_files = exclude_dot_files

    def should_skip(self, path: Path) -> bool:
        return self.exclude_dot_files and path.name.startswith(".")

    def scan_local(
        self, directory: Path, base_path: Optional[Path] = None
    ) -> list[LocalFile]:
        """Recursively scan a local directory.

        Args:
            directory: Directory to scan
            base_path: Base path for relative paths (defaults to directory)

        Returns:
            LocalFile objects sorted by relative path
        """
        top_level = base_path is None
        if base_path is None:
            base_path = directory

        files: list[LocalFile] = []

        try:
            for item in directory.iterdir():
                if self.should_skip(item):
                    continue

                if item.is_file():
                    try:
                        files.append(LocalFile.from_path(item, base_path))
                    except OSError as e:
                        logger.warning(f"Skipping unreadable file {item}: {e}")
                elif item.is_dir():
                    files.extend(self.scan_local(item, base_path))
        except PermissionError as e:
            logger.warning(f"Permission denied: {e}")

        if top_level:
            files.sort(key=lambda f: f.relative_path)
        return files


def list_local_files(root: Path, exclude_dot_files: bool = True) -> list[str]:
    """Return the relative paths of all files below a theme root."""
    scanner = DirectoryScanner(exclude_dot_files=exclude_dot_files)
    return [f.relative_path for f in scanner.scan_local(root)]
