"""Directory scanner for modules placed in the project's local modules directory."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from nova_installer.registry.paths import normalize_path
from nova_installer.registry.types import DEFAULT_VERSION, ORIGIN_LOCAL, ModuleEntry

logger = logging.getLogger(__name__)

__all__ = ["scan_local_modules", "read_module_version", "DESCRIPTOR_NAME"]

DESCRIPTOR_NAME = "module.json"


def read_module_version(module_dir: Path) -> str:
    """Read the ``version`` field of a module's ``module.json`` descriptor.

    A missing, unreadable or malformed descriptor is not an error; the
    module simply reports ``"0.0.0"``.
    """
    descriptor = Path(module_dir) / DESCRIPTOR_NAME
    if not descriptor.is_file():
        return DEFAULT_VERSION

    try:
        parsed = json.loads(descriptor.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.debug("Ignoring unreadable descriptor %s: %s", descriptor, e)
        return DEFAULT_VERSION

    if not isinstance(parsed, dict):
        return DEFAULT_VERSION
    version = parsed.get("version")
    if version is None or version == "":
        return DEFAULT_VERSION
    return str(version)


def scan_local_modules(modules_dir: str | os.PathLike[str]) -> list[ModuleEntry]:
    """List the immediate subdirectories of ``modules_dir`` as local modules.

    The directory name is used verbatim as the identifier. Returns an empty
    list when ``modules_dir`` does not exist.
    """
    root = Path(modules_dir)
    if not root.is_dir():
        logger.debug("No local modules directory at %s", root)
        return []

    results: list[ModuleEntry] = []
    try:
        entries = sorted(os.scandir(root), key=lambda e: e.name)
    except PermissionError as e:
        logger.error("Permission denied scanning %s: %s", root, e)
        return []

    for entry in entries:
        name = entry.name
        try:
            if not entry.is_dir():
                continue
        except OSError as e:
            logger.error("OS error accessing %s: %s", entry.path, e)
            continue

        results.append(
            ModuleEntry(
                identifier=name,
                path=normalize_path(os.path.join(os.fspath(modules_dir), name)),
                version=read_module_version(Path(entry.path)),
                location=ORIGIN_LOCAL,
            )
        )

    return results
