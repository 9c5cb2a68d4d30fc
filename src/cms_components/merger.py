"""
Components merger for Hyva CMS.

Merges components.json fragments in module load order into a single
component list.
"""

import json
import re
import sys
from pathlib import Path
from typing import Any

from .filesystem import FileSystem, LocalFileSystem

# Keys PHP would store as integers
_INDEX_KEY_RE = re.compile(r"^(?:0|-?[1-9][0-9]*)\Z")


class ComponentsMerger:
    """Merge module fragments in load order."""

    def __init__(self, fs: FileSystem | None = None):
        """Initialize the merger.

        Args:
            fs: Filesystem to read fragments from. Defaults to the local disk.
        """
        self.fs = fs or LocalFileSystem()
        self.merged_modules: list[str] = []
        self.skipped_files: list[Path] = []
        self._entries: dict[int | str, Any] = {}
        self._next_index = 0

    def merge(
        self,
        enabled_modules: list[str],
        fragment_map: dict[str, Path],
    ) -> list[Any] | dict[str, Any]:
        """Merge the fragments of enabled modules.

        Args:
            enabled_modules: Active module names in load order.
            fragment_map: Module name to fragment path.

        Returns:
            Merged components. A list unless a fragment contributed named keys.
        """
        for module_name in enabled_modules:
            components_file = fragment_map.get(module_name)
            if components_file is None:
                continue

            if self.add_fragment(components_file):
                self.merged_modules.append(module_name)

        return self.result()

    def add_fragment(self, components_file: str | Path) -> bool:
        """Load one fragment and merge its components.

        Args:
            components_file: Path to components.json.

        Returns:
            True if the fragment was merged, False if it was skipped.
        """
        path = Path(components_file)

        try:
            content = self.fs.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Warning: Could not read {path}: {e}", file=sys.stderr)
            self.skipped_files.append(path)
            return False

        try:
            components = json.loads(content)
        except ValueError as e:
            print(f"Warning: Invalid JSON in {path}: {e}", file=sys.stderr)
            self.skipped_files.append(path)
            return False

        self.add_components(components)
        return True

    def add_components(self, components: Any) -> None:
        """Merge decoded fragment content.

        List items are appended. Object members replace an existing key in
        place or are appended; integer-like keys are always appended.
        Scalars contribute nothing.
        """
        if isinstance(components, list):
            items = [(None, value) for value in components]
        elif isinstance(components, dict):
            items = list(components.items())
        else:
            return

        for key, value in items:
            if key is None or _is_index_key(key):
                self._entries[self._next_index] = value
                self._next_index += 1
            else:
                self._entries[key] = value

    def result(self) -> list[Any] | dict[str, Any]:
        """Get the merged components."""
        if all(isinstance(key, int) for key in self._entries):
            return list(self._entries.values())

        return {str(key): value for key, value in self._entries.items()}


def _is_index_key(key: str) -> bool:
    return bool(_INDEX_KEY_RE.match(key))
