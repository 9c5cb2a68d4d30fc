"""Locate the Magento project root."""

from pathlib import Path

from .filesystem import FileSystem, LocalFileSystem

CONFIG_PATH = Path("app/etc/config.php")


def find_project_root(fs: FileSystem | None = None) -> Path | None:
    """Walk upward from the working directory to the project root.

    Args:
        fs: Filesystem to probe. Defaults to the local disk.

    Returns:
        First directory, starting at the working directory, that contains
        app/etc/config.php, or None if the filesystem root is reached.
    """
    fs = fs or LocalFileSystem()
    directory = fs.cwd()

    while True:
        if fs.exists(directory / CONFIG_PATH):
            return directory

        parent = directory.parent
        if parent == directory:
            return None
        directory = parent
