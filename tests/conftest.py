"""Pytest configuration and fixtures."""

import json
import pytest
from pathlib import Path


PROJECT_ROOT = Path("/srv/magento")

CONFIG_PHP = """<?php
return [
    'modules' => [
        'Magento_Store' => 1,
        'Acme_Banner' => 1,
        // 'Acme_Commented' => 1,
        'Acme_Legacy' => 0,
        'Hyva_CmsBase' => 1,
        'Vendor_Multi' => 1,
    ],
    'system' => [
        'default' => ['web' => ['unsecure' => ['base_url' => 'http://magento.test/']]],
    ],
];
"""


def module_xml(name, setup_version=None):
    """Return a minimal etc/module.xml declaring a module."""
    version = f' setup_version="{setup_version}"' if setup_version else ""
    return (
        '<?xml version="1.0"?>\n'
        '<config xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
        'xsi:noNamespaceSchemaLocation="urn:magento:framework:Module/etc/module.xsd">\n'
        f'    <module name="{name}"{version}/>\n'
        "</config>\n"
    )


class FakeFileSystem:
    """In-memory FileSystem for discovery tests."""

    def __init__(self, files, cwd="/"):
        self.files = {Path(path): content for path, content in files.items()}
        self.dirs = {Path("/")}
        for path in self.files:
            self.dirs.update(path.parents)
        self.working_dir = Path(cwd)
        self.reads = []

    def cwd(self):
        return self.working_dir

    def exists(self, path):
        path = Path(path)
        return path in self.files or path in self.dirs

    def is_dir(self, path):
        return Path(path) in self.dirs

    def list_dir(self, path):
        path = Path(path)
        children = {
            child for child in (*self.files, *self.dirs)
            if child.parent == path and child != path
        }
        return sorted(children, key=lambda p: p.name)

    def read_text(self, path):
        path = Path(path)
        if path not in self.files:
            raise FileNotFoundError(f"No such file: {path}")
        self.reads.append(path)
        return self.files[path]


@pytest.fixture
def project_files():
    """Return a Magento project tree as a path -> content mapping."""
    return {
        "app/etc/config.php": CONFIG_PHP,
        "app/code/Acme/Banner/etc/hyva_cms/components.json": json.dumps(
            [{"code": "banner", "label": "Banner"}]
        ),
        "app/code/Acme/Legacy/etc/module.xml": module_xml("Acme_Legacy"),
        "app/code/Acme/Legacy/etc/hyva_cms/components.json": json.dumps(
            [{"code": "legacy"}]
        ),
        "vendor/hyva-themes/magento2-cms-base/src/etc/module.xml": module_xml(
            "Hyva_CmsBase", "1.0.0"
        ),
        "vendor/hyva-themes/magento2-cms-base/src/etc/hyva_cms/components.json": json.dumps(
            [{"code": "text"}, {"code": "image"}]
        ),
        "vendor/acme/multi/ModuleA/etc/module.xml": module_xml("Vendor_Multi"),
        "vendor/acme/multi/ModuleA/etc/hyva_cms/components.json": json.dumps(
            [{"code": "multi"}]
        ),
        "vendor/acme/orphan/etc/hyva_cms/components.json": json.dumps(
            [{"code": "orphan"}]
        ),
    }


@pytest.fixture
def make_fs():
    """Return a factory building a FakeFileSystem rooted at PROJECT_ROOT."""
    def factory(files, cwd=PROJECT_ROOT):
        return FakeFileSystem(
            {PROJECT_ROOT / relative: content for relative, content in files.items()},
            cwd=cwd,
        )

    return factory


@pytest.fixture
def project_fs(make_fs, project_files):
    """Return the sample project as an in-memory filesystem."""
    return make_fs(project_files)


@pytest.fixture
def project_dir(tmp_path, project_files):
    """Write the sample project to a temporary directory."""
    root = tmp_path / "magento"
    for relative, content in project_files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)

    return root
