"""Inventory and upgrade checks for locally installed Claude Code plugins."""

from __future__ import annotations

from .discovery import Discovery, PluginInfo, discover_plugins, read_plugin_info
from .paths import resolve_plugin_dir
from .registry import RegistryClient, is_registry_package
from .upgrade import UpdateCheck, UpdateStatus, check_for_update, find_plugin

__version__ = "0.1.0"

__all__ = [
    "Discovery",
    "PluginInfo",
    "RegistryClient",
    "UpdateCheck",
    "UpdateStatus",
    "__version__",
    "check_for_update",
    "discover_plugins",
    "find_plugin",
    "is_registry_package",
    "read_plugin_info",
    "resolve_plugin_dir",
]
