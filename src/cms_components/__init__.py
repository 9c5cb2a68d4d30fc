"""Hyva CMS component discovery and merging."""

from .collector import ComponentsCollector
from .dumper import ComponentsDumper
from .filesystem import FileSystem, LocalFileSystem
from .locator import find_project_root
from .merger import ComponentsMerger
from .registry import ModuleEntry, ModuleRegistry
from .resolver import ModuleDescriptor, ModuleNameResolver

__all__ = [
    "ComponentsCollector",
    "ComponentsDumper",
    "ComponentsMerger",
    "FileSystem",
    "LocalFileSystem",
    "ModuleDescriptor",
    "ModuleEntry",
    "ModuleNameResolver",
    "ModuleRegistry",
    "find_project_root",
]
