"""Exception hierarchy for claude-plugin-upgrade."""

from __future__ import annotations


class PluginUpgradeError(Exception):
    """Base class for every error raised by this package."""


class HomeDirectoryError(PluginUpgradeError):
    """Raised when the user's home directory cannot be determined."""


class ConfigError(PluginUpgradeError):
    """Raised when a configuration file is missing or invalid."""


class DiscoveryError(PluginUpgradeError):
    """Raised when the plugin directory exists but cannot be listed."""


class DescriptorError(PluginUpgradeError):
    """Raised when a plugin's ``package.json`` cannot be turned into a plugin entry."""


class DescriptorReadError(DescriptorError):
    """Raised when a descriptor file cannot be opened or read."""


class DescriptorParseError(DescriptorError):
    """Raised when a descriptor file is not a well-formed JSON object."""


class RegistryError(PluginUpgradeError):
    """Raised when the package registry cannot answer a version lookup.

    Examples
    --------
    >>> err = RegistryError("npm registry returned status 500", status_code=500)
    >>> err.status_code
    500
    >>> str(err)
    'npm registry returned status 500'
    >>> RegistryError("connection refused").status_code is None
    True
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
