"""
Components collector for Hyva CMS.

Finds etc/hyva_cms/components.json files contributed by modules under
app/code and vendor.
"""

from pathlib import Path

from .filesystem import FileSystem, LocalFileSystem

COMPONENTS_FILE = Path("etc/hyva_cms/components.json")
SOURCE_DIR = "src"


class ComponentsCollector:
    """Discover components.json fragments in a Magento project."""

    def __init__(self, project_root: str | Path, fs: FileSystem | None = None):
        """Initialize the collector.

        Args:
            project_root: Magento project root.
            fs: Filesystem to scan. Defaults to the local disk.
        """
        self.project_root = Path(project_root)
        self.fs = fs or LocalFileSystem()

    def discover(self) -> list[Path]:
        """Find every components.json fragment.

        Returns:
            Fragment paths in discovery order, app/code first.
        """
        found = self._discover_app_code() + self._discover_vendor()
        return _keep_last_occurrence(found)

    def _discover_app_code(self) -> list[Path]:
        """Scan app/code/<Vendor>/<Module>/etc/hyva_cms/components.json."""
        found = []

        for vendor_dir in self._subdirs(self.project_root / "app" / "code"):
            for module_dir in self._subdirs(vendor_dir):
                components_file = module_dir / COMPONENTS_FILE
                if self.fs.exists(components_file):
                    found.append(components_file)

        return found

    def _discover_vendor(self) -> list[Path]:
        """Scan vendor/<vendor>/<package> for fragments."""
        found = []

        for vendor_dir in self._subdirs(self.project_root / "vendor"):
            for package_dir in self._subdirs(vendor_dir):
                found.extend(self._package_fragments(package_dir))

        return found

    def _package_fragments(self, package_dir: Path) -> list[Path]:
        """Probe every location a composer package may keep its fragment.

        Args:
            package_dir: vendor/<vendor>/<package> directory.

        Returns:
            Existing fragment paths in probe order.
        """
        source_dir = package_dir / SOURCE_DIR
        candidates = [
            package_dir / COMPONENTS_FILE,
            source_dir / COMPONENTS_FILE,
        ]

        # Packages bundling several modules nest them one level deeper
        candidates += [d / COMPONENTS_FILE for d in self._subdirs(package_dir)]
        candidates += [d / COMPONENTS_FILE for d in self._subdirs(source_dir)]

        return [path for path in candidates if self.fs.exists(path)]

    def _subdirs(self, path: Path) -> list[Path]:
        # glob() skips hidden directories
        return [
            child for child in self.fs.list_dir(path)
            if not child.name.startswith(".") and self.fs.is_dir(child)
        ]


def _keep_last_occurrence(paths: list[Path]) -> list[Path]:
    """Drop repeated paths, keeping each one at its last position."""
    last_index = {path: i for i, path in enumerate(paths)}
    return [path for i, path in enumerate(paths) if last_index[path] == i]
