"""Shared fixtures for the nova-installer test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from nova_installer.output import BufferedOutput
from nova_installer.registry.types import Package


@pytest.fixture
def make_package() -> Callable[..., Package]:
    """Factory for module packages with a psr-4 autoload section."""

    def factory(
        name: str,
        namespace_map: dict[str, Any] | None = None,
        version: str = "1.0.0",
        type: str = "novaphp-module",
    ) -> Package:
        return Package(
            name=name,
            type=type,
            version=version,
            autoload={"psr-4": namespace_map} if namespace_map is not None else {},
        )

    return factory


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project directory with an empty vendor directory."""
    (tmp_path / "vendor").mkdir()
    return tmp_path


@pytest.fixture
def vendor_dir(project_root: Path) -> Path:
    return project_root / "vendor"


@pytest.fixture
def registry_file(vendor_dir: Path) -> Path:
    return vendor_dir / "novaphp-modules.yaml"


@pytest.fixture
def output() -> BufferedOutput:
    """Output sink that records written lines."""
    return BufferedOutput()


@pytest.fixture
def local_module(project_root: Path) -> Callable[..., Path]:
    """Factory creating ``modules/<name>`` with an optional module.json version."""

    def factory(name: str, version: str | None = None) -> Path:
        module_dir = project_root / "modules" / name
        module_dir.mkdir(parents=True)
        if version is not None:
            (module_dir / "module.json").write_text(json.dumps({"name": name, "version": version}))
        return module_dir

    return factory
