"""Error hierarchy for the nova-installer plugin."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "InstallerError",
    "ConfigNotFoundError",
    "ConfigError",
    "AmbiguousNamespaceError",
    "RegistryCorruptError",
    "ErrorCodes",
]

DOCS_URL = "https://github.com/nova-framework/module-installer"


class InstallerError(Exception):
    """Base error for all nova-installer errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(InstallerError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(InstallerError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class AmbiguousNamespaceError(InstallerError):
    """Raised when a package's primary namespace cannot be determined from its autoload section."""

    def __init__(self, package_name: str, docs_url: str = DOCS_URL, **kwargs: Any) -> None:
        super().__init__(
            code="AMBIGUOUS_NAMESPACE",
            message=(
                f"Unable to get primary namespace for package {package_name}."
                "\nEnsure you have added proper 'autoload' section to your module's config"
                f" as stated in README on {docs_url}"
            ),
            details={"package_name": package_name, "docs_url": docs_url},
            **kwargs,
        )

    @property
    def package_name(self) -> str:
        """The package whose namespace could not be resolved."""
        return self.details["package_name"]


class RegistryCorruptError(InstallerError):
    """Raised when the registry file cannot be parsed into a module mapping."""

    def __init__(self, registry_path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="REGISTRY_CORRUPT",
            message=f"Invalid registry file '{registry_path}': {reason}",
            details={"registry_path": registry_path, "reason": reason},
            **kwargs,
        )

    @property
    def registry_path(self) -> str:
        """Path of the unreadable registry file."""
        return self.details["registry_path"]


class ErrorCodes:
    """All installer error codes as constants.

    Example:
        if error.code == ErrorCodes.AMBIGUOUS_NAMESPACE:
            fix_autoload_section()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    AMBIGUOUS_NAMESPACE = "AMBIGUOUS_NAMESPACE"
    REGISTRY_CORRUPT = "REGISTRY_CORRUPT"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
