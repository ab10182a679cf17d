"""nova-installer - module registry plugin for the Nova framework's package manager."""

from __future__ import annotations

# Registry
from nova_installer.registry import (
    ModuleEntry,
    ModuleRegistry,
    Package,
    RegistryWriter,
    RootProject,
    determine_modules,
    resolve_namespace,
)

# Installer
from nova_installer.installer import InstallerPlugin, ModuleInstaller, UsageCheck, post_autoload_dump

# Output
from nova_installer.output import BufferedOutput, LoggingOutput, OutputSink

# Config
from nova_installer.config import Config

# Errors
from nova_installer.errors import (
    AmbiguousNamespaceError,
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    InstallerError,
    RegistryCorruptError,
)

__version__ = "0.1.0"

__all__ = [
    # Registry
    "ModuleEntry",
    "ModuleRegistry",
    "Package",
    "RegistryWriter",
    "RootProject",
    "determine_modules",
    "resolve_namespace",
    # Installer
    "InstallerPlugin",
    "ModuleInstaller",
    "UsageCheck",
    "post_autoload_dump",
    # Output
    "OutputSink",
    "LoggingOutput",
    "BufferedOutput",
    # Config
    "Config",
    # Errors
    "ErrorCodes",
    "InstallerError",
    "AmbiguousNamespaceError",
    "RegistryCorruptError",
    "ConfigError",
    "ConfigNotFoundError",
]
