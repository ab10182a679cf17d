"""Registry types: ModuleEntry, ModuleRegistry, Package, RootProject."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

__all__ = [
    "ORIGIN_VENDOR",
    "ORIGIN_LOCAL",
    "DEFAULT_VERSION",
    "ModuleEntry",
    "ModuleRegistry",
    "Package",
    "RootProject",
]

ORIGIN_VENDOR = "vendor"
ORIGIN_LOCAL = "local"
DEFAULT_VERSION = "0.0.0"


@dataclass
class ModuleEntry:
    """A single discovered module.

    Attributes:
        identifier: Canonical namespace, ``\\`` converted to ``/``.
        path: Module directory, forward-slashed with one trailing ``/``.
        version: Declared version, ``"0.0.0"`` when unknown.
        location: ``"vendor"`` or ``"local"``.
    """

    identifier: str
    path: str
    version: str = DEFAULT_VERSION
    location: str = ORIGIN_VENDOR


@dataclass
class ModuleRegistry:
    """Identifier-indexed module mapping persisted in the registry file.

    ``base_dir`` locates the project root relative to the directory holding
    the registry file; relative entry paths are resolved against it.
    """

    modules: dict[str, ModuleEntry] = field(default_factory=dict)
    base_dir: str = ".."

    def sorted(self) -> ModuleRegistry:
        """Return a copy with entries ordered by identifier."""
        return ModuleRegistry(
            modules={key: self.modules[key] for key in sorted(self.modules)},
            base_dir=self.base_dir,
        )

    @property
    def identifiers(self) -> list[str]:
        """Sorted list of registered identifiers."""
        return sorted(self.modules)

    def resolve_path(self, identifier: str, registry_file: str | Path) -> Path | None:
        """Return the absolute directory of a module, or None if not registered."""
        entry = self.modules.get(identifier)
        if entry is None:
            return None
        if PurePosixPath(entry.path).is_absolute():
            return Path(entry.path)
        root = Path(registry_file).resolve().parent / self.base_dir
        return (root / entry.path).resolve()


@dataclass
class Package:
    """Package metadata as exposed by the host package manager."""

    name: str
    type: str = "library"
    version: str = DEFAULT_VERSION
    autoload: dict[str, Any] = field(default_factory=dict)
    pretty_name: str | None = None

    def __post_init__(self) -> None:
        if self.pretty_name is None:
            self.pretty_name = self.name


@dataclass
class RootProject:
    """The project whose manifest drives the install run."""

    type: str = "project"
    scripts: dict[str, list[str]] = field(default_factory=dict)
