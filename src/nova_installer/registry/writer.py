"""Registry writer: full rebuilds and incremental updates of the registry file."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable

from nova_installer.config import Config
from nova_installer.errors import RegistryCorruptError
from nova_installer.registry.namespace import primary_namespace
from nova_installer.registry.paths import normalize_identifier, normalize_path, relative_base_dir
from nova_installer.registry.scanner import scan_local_modules
from nova_installer.registry.serializer import dump_registry, read_registry, relocate
from nova_installer.registry.types import DEFAULT_VERSION, ORIGIN_VENDOR, ModuleEntry, ModuleRegistry

if TYPE_CHECKING:
    from nova_installer.output import OutputSink

logger = logging.getLogger(__name__)

__all__ = ["RegistryWriter", "determine_modules"]

# mkstemp creates 0600 files; the web server must be able to read the registry.
_FILE_MODE = 0o644


def determine_modules(
    packages: Iterable[Any],
    modules_dir: str | os.PathLike[str] = "modules",
    vendor_dir: str | os.PathLike[str] = "vendor",
    module_type: str = "novaphp-module",
    docs_url: str | None = None,
) -> ModuleRegistry:
    """Collect every module package plus every local module into one registry.

    Packages of ``module_type`` are mapped by primary namespace to
    ``vendor_dir/<pretty name>``. Subdirectories of ``modules_dir`` are
    added afterwards and replace vendor entries with the same identifier.

    Raises:
        AmbiguousNamespaceError: If a module package has no usable autoload
            section. The whole rebuild is aborted.
    """
    modules: dict[str, ModuleEntry] = {}
    ns_kwargs = {"docs_url": docs_url} if docs_url else {}

    for package in packages:
        if getattr(package, "type", None) != module_type:
            continue

        identifier = normalize_identifier(primary_namespace(package, **ns_kwargs))
        path = os.path.join(os.fspath(vendor_dir), package.pretty_name)
        modules[identifier] = ModuleEntry(
            identifier=identifier,
            path=normalize_path(path),
            version=str(getattr(package, "version", None) or DEFAULT_VERSION),
            location=ORIGIN_VENDOR,
        )

    for entry in scan_local_modules(modules_dir):
        if entry.identifier in modules:
            logger.debug("Local module %s overrides the vendor package", entry.identifier)
        modules[entry.identifier] = entry

    return ModuleRegistry(modules=modules).sorted()


class RegistryWriter:
    """Maintains the registry file that lives under the vendor directory.

    The project root is the parent of the vendor directory, with symlinks
    resolved. Paths below it are written relative to the root.
    """

    def __init__(
        self,
        vendor_dir: str | os.PathLike[str],
        output: OutputSink | None = None,
        config: Config | None = None,
    ) -> None:
        self._config = config or Config()
        self.vendor_dir = Path(vendor_dir).resolve()
        self.root = self.vendor_dir.parent
        self.registry_path = self.vendor_dir / self._config.get("registry.filename")
        self.legacy_path = self.root / self._config.get("registry.legacy_path")
        self._output = output

    # ----- Full rebuild -----

    def rebuild(
        self,
        packages: Iterable[Any],
        modules_dir: str | os.PathLike[str] | None = None,
    ) -> ModuleRegistry:
        """Recreate the registry file from the package list and the local modules directory."""
        if modules_dir is None:
            modules_dir = self.root / self._config.get("installer.modules_dir")

        registry = determine_modules(
            packages,
            modules_dir=modules_dir,
            vendor_dir=self.vendor_dir,
            module_type=self._config.get("installer.module_type"),
            docs_url=self._config.get("docs_url"),
        )
        persisted = self.write(registry)
        logger.info("Wrote %d modules to %s", len(persisted.modules), self.registry_path)
        return persisted

    # ----- Incremental updates -----

    def apply_change(self, identifier: str, path: str | os.PathLike[str] | None, version: str | None = None) -> bool:
        """Add, replace or remove a single module in the registry file.

        ``path=None`` removes ``identifier``. Removing an identifier that is
        not registered leaves the file as it is.

        Returns:
            False if the existing registry file could not be parsed. The file
            is left untouched in that case.
        """
        identifier = normalize_identifier(identifier)
        self.ensure_registry_file()

        try:
            registry = read_registry(self.registry_path)
        except RegistryCorruptError as e:
            logger.error("Registry not updated: %s", e)
            self._write_output(
                f"ERROR - `{self._display_path(self.registry_path)}` file is invalid. "
                "Module path configuration not updated."
            )
            return False

        if path is None:
            if registry.modules.pop(identifier, None) is None:
                logger.debug("Module %s is not registered, nothing to remove", identifier)
                return True
            logger.debug("Removed module %s", identifier)
        else:
            registry.modules[identifier] = ModuleEntry(
                identifier=identifier,
                path=normalize_path(path),
                version=str(version) if version else DEFAULT_VERSION,
                location=ORIGIN_VENDOR,
            )
            logger.debug("Registered module %s at %s", identifier, path)

        self.write(registry)
        return True

    def load(self) -> ModuleRegistry:
        """Read the current registry file, creating it first if needed."""
        self.ensure_registry_file()
        return read_registry(self.registry_path)

    # ----- File handling -----

    def ensure_registry_file(self) -> None:
        """Create the registry file if it does not exist yet.

        A registry at the legacy location is migrated by copying it verbatim;
        otherwise an empty registry is written.
        """
        display = self._display_path(self.registry_path)
        if self.registry_path.exists():
            self._verbose(f"{display} exists.")
            return

        self.registry_path.parent.mkdir(parents=True, exist_ok=True)

        if self.legacy_path.is_file():
            self._atomic_copy(self.legacy_path, self.registry_path)
            self._verbose(f"{self._display_path(self.legacy_path)} found and copied to {display}.")
            return

        self.write(ModuleRegistry())
        self._verbose(f"Created {display}")

    def write(self, registry: ModuleRegistry) -> ModuleRegistry:
        """Serialize ``registry`` and replace the registry file with it.

        Returns:
            The registry as persisted: sorted, with root-relative paths.
        """
        persisted = relocate(
            ModuleRegistry(
                modules=registry.modules,
                base_dir=relative_base_dir(self.root, self.registry_path),
            ),
            self.root,
        )
        self.registry_path.parent.mkdir(parents=True, exist_ok=True)
        self._atomic_write(self.registry_path, dump_registry(persisted))
        return persisted

    @staticmethod
    def _atomic_write(path: Path, content: str) -> None:
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            os.chmod(tmp, _FILE_MODE)
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    @staticmethod
    def _atomic_copy(source: Path, path: Path) -> None:
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        os.close(fd)
        try:
            shutil.copyfile(source, tmp)
            os.chmod(tmp, _FILE_MODE)
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    # ----- Output -----

    def _display_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return str(path)

    def _write_output(self, message: str) -> None:
        if self._output is not None:
            self._output.write(message)

    def _verbose(self, message: str) -> None:
        logger.debug("%s", message)
        if self._output is not None and self._output.is_verbose():
            self._output.write(message)
