"""YAML serialization of the module registry file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from nova_installer.errors import RegistryCorruptError
from nova_installer.registry.paths import normalize_identifier, normalize_path, to_relocatable
from nova_installer.registry.types import (
    DEFAULT_VERSION,
    ORIGIN_VENDOR,
    ModuleEntry,
    ModuleRegistry,
)

logger = logging.getLogger(__name__)

__all__ = [
    "HEADER",
    "RegistryDocument",
    "dump_registry",
    "relocate",
    "load_registry",
    "read_registry",
]

HEADER = "# This file is generated by nova-installer. Do not edit it manually.\n"


class EntryDocument(BaseModel):
    """Serialized form of a ModuleEntry (the identifier is the mapping key)."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    path: str
    version: str = DEFAULT_VERSION
    location: Literal["vendor", "local"] = ORIGIN_VENDOR


class RegistryDocument(BaseModel):
    """Top-level structure of the registry file."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    base_dir: str = ".."
    modules: dict[str, EntryDocument] = Field(default_factory=dict)

    @field_validator("modules", mode="before")
    @classmethod
    def accept_path_only_entries(cls, value: Any) -> Any:
        # Older registries map identifiers straight to a path string.
        if value is None:
            return {}
        if isinstance(value, dict):
            return {key: {"path": item} if isinstance(item, str) else item for key, item in value.items()}
        return value


def relocate(registry: ModuleRegistry, root: str | os.PathLike[str] | None) -> ModuleRegistry:
    """Return a sorted copy whose absolute paths below ``root`` are root-relative."""
    modules: dict[str, ModuleEntry] = {}
    for identifier in sorted(registry.modules):
        entry = registry.modules[identifier]
        modules[identifier] = ModuleEntry(
            identifier=identifier,
            path=to_relocatable(normalize_path(entry.path), root),
            version=str(entry.version),
            location=entry.location,
        )
    return ModuleRegistry(modules=modules, base_dir=registry.base_dir)


def dump_registry(registry: ModuleRegistry, root: str | os.PathLike[str] | None = None) -> str:
    """Render a registry as the text of a registry file.

    Entries are emitted in identifier order. Absolute paths below ``root``
    are stored relative to it so the file survives moving the project.
    """
    registry = relocate(registry, root)
    modules = {
        identifier: {"path": entry.path, "version": entry.version, "location": entry.location}
        for identifier, entry in registry.modules.items()
    }

    data = {"base_dir": registry.base_dir, "modules": modules}
    return HEADER + yaml.safe_dump(data, default_flow_style=False, sort_keys=True, allow_unicode=True)


def load_registry(content: str, source: str = "<string>") -> ModuleRegistry:
    """Parse registry file text.

    Raises:
        RegistryCorruptError: If the text is not YAML, is empty, is not a
            mapping, or does not match the registry structure.
    """
    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise RegistryCorruptError(registry_path=source, reason=f"invalid YAML: {e}", cause=e) from e

    if not isinstance(parsed, dict):
        kind = "empty document" if parsed is None else f"expected a mapping, got {type(parsed).__name__}"
        raise RegistryCorruptError(registry_path=source, reason=kind)

    try:
        document = RegistryDocument.model_validate(parsed)
    except ValidationError as e:
        raise RegistryCorruptError(registry_path=source, reason=str(e), cause=e) from e

    modules: dict[str, ModuleEntry] = {}
    for key, item in document.modules.items():
        identifier = normalize_identifier(key)
        modules[identifier] = ModuleEntry(
            identifier=identifier,
            path=normalize_path(item.path),
            version=item.version,
            location=item.location,
        )
    logger.debug("Loaded %d modules from %s", len(modules), source)

    return ModuleRegistry(modules=modules, base_dir=document.base_dir).sorted()


def read_registry(path: str | os.PathLike[str]) -> ModuleRegistry:
    """Read and parse a registry file from disk.

    Raises:
        RegistryCorruptError: If the file is not valid UTF-8 or its content
            is not a valid registry.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise RegistryCorruptError(registry_path=str(path), reason="not valid UTF-8", cause=e) from e
    return load_registry(content, source=str(path))
