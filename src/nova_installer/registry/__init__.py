"""Module registry: namespace inference, local discovery and the registry file.

Usage::

    from nova_installer.registry import RegistryWriter

    writer = RegistryWriter(vendor_dir="./vendor")
    registry = writer.rebuild(packages)
"""

from __future__ import annotations

from nova_installer.registry.namespace import primary_namespace, resolve_namespace
from nova_installer.registry.paths import normalize_identifier, normalize_path, to_relocatable
from nova_installer.registry.scanner import read_module_version, scan_local_modules
from nova_installer.registry.serializer import dump_registry, load_registry, read_registry
from nova_installer.registry.types import (
    DEFAULT_VERSION,
    ORIGIN_LOCAL,
    ORIGIN_VENDOR,
    ModuleEntry,
    ModuleRegistry,
    Package,
    RootProject,
)
from nova_installer.registry.writer import RegistryWriter, determine_modules

__all__ = [
    "DEFAULT_VERSION",
    "ORIGIN_LOCAL",
    "ORIGIN_VENDOR",
    "ModuleEntry",
    "ModuleRegistry",
    "Package",
    "RegistryWriter",
    "RootProject",
    "determine_modules",
    "dump_registry",
    "load_registry",
    "normalize_identifier",
    "normalize_path",
    "primary_namespace",
    "read_module_version",
    "read_registry",
    "resolve_namespace",
    "scan_local_modules",
    "to_relocatable",
]
