"""Package-manager facing installer for module packages.

The host package manager drives this module: it asks :class:`ModuleInstaller`
whether it handles a package type, notifies it about installs, updates and
uninstalls, and calls :func:`post_autoload_dump` once the autoloader has been
regenerated.
"""

from __future__ import annotations

import logging
import os
import textwrap
from pathlib import Path
from typing import Any, Callable, Iterable

from nova_installer.config import Config
from nova_installer.output import LoggingOutput, OutputSink
from nova_installer.registry.namespace import primary_namespace
from nova_installer.registry.types import ModuleRegistry
from nova_installer.registry.writer import RegistryWriter

logger = logging.getLogger(__name__)

__all__ = [
    "InstallerPlugin",
    "ModuleInstaller",
    "UsageCheck",
    "format_warning",
    "post_autoload_dump",
]

_BOX_WIDTH = 75
_WRAP_WIDTH = 68


def format_warning(title: str, text: str) -> list[str]:
    """Lay out a boxed, padded warning as console lines."""

    def wrap(line: str) -> str:
        return "<error>     " + line.ljust(_BOX_WIDTH) + "</error>"

    messages = ["", "", wrap(""), wrap(title), wrap("")]
    for line in text.split("\n"):
        wrapped = textwrap.wrap(line, _WRAP_WIDTH, break_long_words=False, break_on_hyphens=False)
        messages.extend(wrap(part) for part in wrapped or [""])
    messages.extend([wrap(""), "", ""])
    return messages


class UsageCheck:
    """One-shot check that the root project registers the rebuild hook.

    The check runs the first time :meth:`run` is called and is a no-op
    afterwards.
    """

    def __init__(self) -> None:
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def run(self, project: Any, output: OutputSink, config: Config) -> bool:
        """Warn if the hook is missing. Returns True when a warning was written."""
        if self._done:
            return False
        self._done = True

        if project is None or getattr(project, "type", None) != "project":
            return False

        event = config.get("hooks.event")
        entry_point = config.get("hooks.entry_point")
        scripts = getattr(project, "scripts", None) or {}
        hooks = scripts.get(event) or []
        if isinstance(hooks, str):
            hooks = [hooks]

        if entry_point in hooks:
            return False

        logger.warning("Root project does not register %s for %s", entry_point, event)
        output.write(
            format_warning(
                "Action required!",
                f"Please update your application manifest to add the {event} hook.",
            )
        )
        return True


class ModuleInstaller:
    """Keeps the module registry in step with individual package operations."""

    def __init__(
        self,
        vendor_dir: str | os.PathLike[str],
        usage_check: UsageCheck,
        output: OutputSink | None = None,
        project: Any = None,
        config: Config | None = None,
        install_path: Callable[[Any], str | os.PathLike[str]] | None = None,
    ) -> None:
        """Initialize the installer.

        Args:
            vendor_dir: The package manager's vendor directory. Symlinks are
                resolved.
            usage_check: The one-shot check owned by the plugin registration,
                run against ``project``.
            output: Console sink; defaults to a logging-backed sink.
            project: The root project, checked once for the rebuild hook.
            config: Installer configuration.
            install_path: Host lookup of a package's install directory.
                Defaults to ``vendor_dir/<pretty name>``.
        """
        self.config = config or Config()
        self.output: OutputSink = output or LoggingOutput()
        self.vendor_dir = Path(vendor_dir).resolve()
        self.writer = RegistryWriter(self.vendor_dir, output=self.output, config=self.config)
        self._install_path = install_path

        usage_check.run(project, self.output, self.config)

    def supports(self, package_type: str) -> bool:
        """Only module packages are handled by this installer."""
        return package_type == self.config.get("installer.module_type")

    def get_install_path(self, package: Any) -> str:
        if self._install_path is None:
            return os.path.join(os.fspath(self.vendor_dir), package.pretty_name)
        path = Path(self._install_path(package))
        return os.fspath(path.resolve() if path.is_absolute() else path)

    def install(self, package: Any) -> bool:
        """Register a freshly installed package."""
        namespace = self._namespace(package)
        return self.writer.apply_change(namespace, self.get_install_path(package), package.version)

    def update(self, initial: Any, target: Any) -> bool:
        """Replace the entry of ``initial`` with one for ``target``.

        The old namespace is removed first so a renamed namespace does not
        leave a stale entry behind. Nothing more is attempted if the registry
        is corrupt.
        """
        if not self.writer.apply_change(self._namespace(initial), None):
            return False
        namespace = self._namespace(target)
        return self.writer.apply_change(namespace, self.get_install_path(target), target.version)

    def uninstall(self, package: Any) -> bool:
        """Drop a removed package from the registry."""
        return self.writer.apply_change(self._namespace(package), None)

    def rebuild(self, packages: Iterable[Any]) -> ModuleRegistry:
        return self.writer.rebuild(packages)

    def _namespace(self, package: Any) -> str:
        return primary_namespace(package, docs_url=self.config.get("docs_url"))


# Guard shared by every plugin registered in this process.
_usage_check = UsageCheck()


def _resolve_config(config: Config | None, config_path: str | os.PathLike[str] | None) -> Config | None:
    if config is None and config_path is not None:
        return Config.load(config_path)
    return config


class InstallerPlugin:
    """Plugin registration entry point.

    Every plugin shares the process-wide :class:`UsageCheck` unless one is
    passed in, so the root project is checked once per process no matter how
    often the host registers the plugin.
    """

    def __init__(
        self,
        config: Config | None = None,
        usage_check: UsageCheck | None = None,
        config_path: str | os.PathLike[str] | None = None,
    ) -> None:
        """Initialize the plugin.

        Args:
            config: Installer configuration.
            usage_check: One-shot check to share; defaults to the process-wide one.
            config_path: YAML file to load the configuration from when
                ``config`` is not given.

        Raises:
            ConfigNotFoundError: If ``config_path`` does not exist.
            ConfigError: If ``config_path`` is not a valid configuration file.
        """
        self.config = _resolve_config(config, config_path) or Config()
        self.usage_check = usage_check if usage_check is not None else _usage_check

    def create_installer(
        self,
        vendor_dir: str | os.PathLike[str],
        output: OutputSink | None = None,
        project: Any = None,
        install_path: Callable[[Any], str | os.PathLike[str]] | None = None,
    ) -> ModuleInstaller:
        return ModuleInstaller(
            vendor_dir,
            self.usage_check,
            output=output,
            project=project,
            config=self.config,
            install_path=install_path,
        )


def post_autoload_dump(
    packages: Iterable[Any],
    vendor_dir: str | os.PathLike[str],
    output: OutputSink | None = None,
    config: Config | None = None,
    config_path: str | os.PathLike[str] | None = None,
) -> ModuleRegistry:
    """Rebuild the registry after the host regenerated its autoloader.

    The local modules directory is ``modules`` next to the vendor directory.
    ``config_path`` names a YAML configuration file used when ``config`` is
    not given.
    """
    writer = RegistryWriter(vendor_dir, output=output, config=_resolve_config(config, config_path))
    return writer.rebuild(packages)
