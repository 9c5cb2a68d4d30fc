#!/usr/bin/env python3
"""
Hyva CMS components dumper.

Reads app/etc/config.php to get active modules in load order, finds all
etc/hyva_cms/components.json files, and prints them merged as one JSON
document.
"""

import json
import sys
from typing import Any, TextIO

from .collector import ComponentsCollector
from .filesystem import FileSystem, LocalFileSystem
from .locator import find_project_root
from .merger import ComponentsMerger
from .registry import ModuleRegistry
from .resolver import ModuleNameResolver

JSON_INDENT = 4


class ComponentsDumper:
    """Run the discovery and merge pipeline for one project."""

    def __init__(self, fs: FileSystem | None = None):
        self.fs = fs or LocalFileSystem()
        self.merger: ComponentsMerger | None = None

    def dump(self) -> list[Any] | dict[str, Any]:
        """Collect and merge components of the enclosing Magento project.

        Returns:
            Merged components.

        Raises:
            RuntimeError: If no project root is found above the working directory.
        """
        project_root = find_project_root(self.fs)
        if project_root is None:
            raise RuntimeError(
                "app/etc/config.php not found. Run from within a Magento project directory."
            )

        enabled_modules = ModuleRegistry(project_root, self.fs).enabled_modules()

        components_files = ComponentsCollector(project_root, self.fs).discover()
        fragment_map = ModuleNameResolver(project_root, self.fs).map_fragments(components_files)

        self.merger = ComponentsMerger(self.fs)
        return self.merger.merge(enabled_modules, fragment_map)


def format_components(merged: list[Any] | dict[str, Any]) -> str:
    """Serialize merged components as indented JSON with literal unicode."""
    return json.dumps(merged, indent=JSON_INDENT, ensure_ascii=False)


def write_components(merged: list[Any] | dict[str, Any], stream: TextIO | None = None) -> None:
    """Write merged components followed by a newline.

    Args:
        merged: Merged components.
        stream: Output stream. Defaults to stdout.
    """
    stream = stream or sys.stdout
    stream.write(format_components(merged) + "\n")


def main(argv: list[str] | None = None):
    """CLI entry point for dumping merged CMS components."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Print the Hyva CMS components of all active modules, merged in load order"
    )
    parser.parse_args(argv)

    encoding = (getattr(sys.stdout, "encoding", None) or "").lower().replace("-", "")
    if encoding != "utf8" and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")

    dumper = ComponentsDumper()

    try:
        merged = dumper.dump()
    except (RuntimeError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    write_components(merged)


if __name__ == "__main__":
    main()
