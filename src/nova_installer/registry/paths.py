"""Path normalization and relocation helpers for registry entries."""

from __future__ import annotations

import os
import re
from pathlib import Path, PurePosixPath

__all__ = ["normalize_identifier", "normalize_path", "to_relocatable", "relative_base_dir"]

_DUPLICATE_SLASHES = re.compile(r"/{2,}")


def normalize_identifier(identifier: str) -> str:
    """Convert namespace separators to ``/``."""
    return identifier.replace("\\", "/")


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Return ``path`` forward-slashed, without duplicate separators, ending in one ``/``."""
    text = os.fspath(path).replace("\\", "/")
    text = _DUPLICATE_SLASHES.sub("/", text)
    return text.rstrip("/") + "/"


def to_relocatable(path: str, root: str | os.PathLike[str] | None) -> str:
    """Rewrite an absolute path under ``root`` relative to it.

    Paths that are relative already, or that do not descend from ``root``,
    are returned unchanged. The comparison is component-wise, so
    ``/srv/app-old/x`` is not treated as lying under ``/srv/app``.
    """
    if root is None:
        return path

    candidate = PurePosixPath(path)
    if not candidate.is_absolute():
        return path

    base = PurePosixPath(normalize_path(root))
    try:
        relative = candidate.relative_to(base)
    except ValueError:
        return path

    if not relative.parts:
        return "./"
    return normalize_path(relative.as_posix())


def relative_base_dir(root: str | os.PathLike[str], registry_file: str | os.PathLike[str]) -> str:
    """Locate ``root`` relative to the directory that contains ``registry_file``."""
    start = Path(registry_file).absolute().parent
    return Path(os.path.relpath(Path(root).absolute(), start)).as_posix()
