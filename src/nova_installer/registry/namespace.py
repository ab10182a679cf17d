"""Primary namespace inference from a package's autoload section."""

from __future__ import annotations

import logging
import re
from typing import Any

from nova_installer.errors import DOCS_URL, AmbiguousNamespaceError

logger = logging.getLogger(__name__)

__all__ = ["resolve_namespace", "primary_namespace"]

_PSR4 = "psr-4"
_SRC_ROOT = re.compile(r"^(\./)?src/?$")
_PACKAGE_ROOTS = ("", ".")


def resolve_namespace(
    autoload: dict[str, Any],
    package_name: str = "",
    docs_url: str = DOCS_URL,
) -> str:
    """Infer the single namespace that represents a package.

    Only the first ``psr-4`` mapping is inspected. A lone entry wins outright;
    otherwise the first prefix rooted at ``src`` is taken, and failing that
    the last prefix rooted at the package directory (``""`` or ``"."``).

    Args:
        autoload: Autoload configuration, mechanism name to prefix mapping.
        package_name: Used in the error message only.
        docs_url: Documentation link included in the error message.

    Returns:
        The namespace with surrounding ``\\`` characters stripped.

    Raises:
        AmbiguousNamespaceError: If none of the rules selects a namespace.
    """
    namespace: str | None = None

    for mechanism, path_map in (autoload or {}).items():
        if mechanism != _PSR4:
            continue

        path_map = path_map or {}
        if len(path_map) == 1:
            namespace = next(iter(path_map))
            break

        for prefix, source in path_map.items():
            if isinstance(source, str) and _SRC_ROOT.match(source):
                namespace = prefix
                break
        if namespace is not None:
            break

        for prefix, source in path_map.items():
            if isinstance(source, str) and source in _PACKAGE_ROOTS:
                namespace = prefix
        break

    if namespace is None:
        raise AmbiguousNamespaceError(package_name=package_name, docs_url=docs_url)

    logger.debug("Primary namespace for %s: %s", package_name or "<unnamed>", namespace)
    return namespace.strip("\\")


def primary_namespace(package: Any, docs_url: str = DOCS_URL) -> str:
    """Resolve the primary namespace of a host package object."""
    return resolve_namespace(
        getattr(package, "autoload", None) or {},
        package_name=getattr(package, "name", ""),
        docs_url=docs_url,
    )
