"""
Module name resolver.

Maps a components.json fragment back to the module that owns it, using the
module's etc/module.xml declaration.
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from .collector import SOURCE_DIR
from .filesystem import FileSystem, LocalFileSystem

DESCRIPTOR_FILE = Path("etc/module.xml")

# components.json -> hyva_cms -> etc -> module root
FRAGMENT_DEPTH = 3

_APP_CODE_RE = re.compile(r"^app/code/([^/]+)/([^/]+)/")


@dataclass
class ModuleDescriptor:
    """Declaration read from a module's etc/module.xml."""
    name: str | None = None
    setup_version: str | None = None
    sequence: list[str] = field(default_factory=list)

    @classmethod
    def from_xml(cls, content: str) -> "ModuleDescriptor":
        """Parse a module.xml document.

        Args:
            content: XML source.

        Returns:
            Descriptor for the first <module> element. Fields are None when
            the element or attribute is absent.

        Raises:
            xml.etree.ElementTree.ParseError: If the XML is malformed.
        """
        root = ET.fromstring(content)
        module = root.find("module")
        if module is None:
            return cls()

        sequence = [
            dep.get("name")
            for dep in module.findall("sequence/module")
            if dep.get("name")
        ]

        return cls(
            name=module.get("name") or None,
            setup_version=module.get("setup_version") or None,
            sequence=sequence,
        )


class ModuleNameResolver:
    """Resolve fragment paths to declared module names."""

    def __init__(self, project_root: str | Path, fs: FileSystem | None = None):
        """Initialize the resolver.

        Args:
            project_root: Magento project root.
            fs: Filesystem to read from. Defaults to the local disk.
        """
        self.project_root = Path(project_root)
        self.fs = fs or LocalFileSystem()
        self.collisions: list[tuple[str, Path, Path]] = []

    def resolve(self, components_file: Path) -> str | None:
        """Determine which module owns a components.json file.

        Args:
            components_file: Path to the fragment.

        Returns:
            Declared module name, or None if the owner cannot be determined.
        """
        module_root = self.module_root(components_file)
        descriptor_path = self.find_descriptor(module_root)

        if descriptor_path is None:
            return self._name_from_path(components_file)

        try:
            descriptor = ModuleDescriptor.from_xml(self.fs.read_text(descriptor_path))
        except (ET.ParseError, OSError, UnicodeDecodeError):
            return None

        return descriptor.name

    def module_root(self, components_file: Path) -> Path:
        """Get the module root directory for a fragment.

        Args:
            components_file: Path to the fragment.

        Returns:
            Module root, stepping out of a src/ staging directory.
        """
        module_root = Path(components_file).parents[FRAGMENT_DEPTH - 1]

        if module_root.name == SOURCE_DIR:
            module_root = module_root.parent

        return module_root

    def find_descriptor(self, module_root: Path) -> Path | None:
        """Locate etc/module.xml, trying src/etc/module.xml second."""
        for candidate in (
            module_root / DESCRIPTOR_FILE,
            module_root / SOURCE_DIR / DESCRIPTOR_FILE,
        ):
            if self.fs.exists(candidate):
                return candidate

        return None

    def map_fragments(self, components_files: list[Path]) -> dict[str, Path]:
        """Build the module name to fragment map.

        When two fragments resolve to the same module the later one wins;
        every displaced fragment is recorded in self.collisions.

        Args:
            components_files: Fragment paths in discovery order.

        Returns:
            Dictionary mapping module name to fragment path.
        """
        self.collisions = []
        fragment_map: dict[str, Path] = {}

        for components_file in components_files:
            module_name = self.resolve(components_file)
            if not module_name:
                continue

            previous = fragment_map.get(module_name)
            if previous is not None and previous != components_file:
                self.collisions.append((module_name, previous, components_file))

            fragment_map[module_name] = components_file

        return fragment_map

    def _name_from_path(self, components_file: Path) -> str | None:
        """Infer Vendor_Module from an app/code path."""
        try:
            relative = Path(components_file).relative_to(self.project_root)
        except ValueError:
            return None

        match = _APP_CODE_RE.match(relative.as_posix())
        if not match:
            return None

        return f"{match.group(1)}_{match.group(2)}"
