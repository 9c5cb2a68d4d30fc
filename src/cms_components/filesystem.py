"""
Filesystem access for component discovery.

Every component reads the project tree through this interface so the
discovery and resolution logic can run against an in-memory tree.
"""

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """Read-only view of a project tree."""

    def cwd(self) -> Path:
        ...

    def exists(self, path: Path) -> bool:
        ...

    def is_dir(self, path: Path) -> bool:
        ...

    def list_dir(self, path: Path) -> list[Path]:
        ...

    def read_text(self, path: Path) -> str:
        ...


class LocalFileSystem:
    """FileSystem backed by the real disk."""

    def cwd(self) -> Path:
        return Path.cwd()

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def is_dir(self, path: Path) -> bool:
        return Path(path).is_dir()

    def list_dir(self, path: Path) -> list[Path]:
        """List directory children sorted by name.

        Args:
            path: Directory to list.

        Returns:
            Child paths, or an empty list if path is not a readable directory.
        """
        path = Path(path)
        if not path.is_dir():
            return []

        try:
            return sorted(path.iterdir(), key=lambda p: p.name)
        except PermissionError:
            return []

    def read_text(self, path: Path) -> str:
        with open(path, encoding="utf-8") as f:
            return f.read()
