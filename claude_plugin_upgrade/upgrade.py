"""Update checks for installed plugins.

Installing a newer version is not implemented; a check only reports what an
upgrade would do.
"""

from __future__ import annotations

import enum
import typing as t

import pydantic

from .discovery import PluginInfo
from .errors import RegistryError

if t.TYPE_CHECKING:
    from .registry import RegistryClient


class UpdateStatus(enum.Enum):
    """Outcome of comparing an installed version with the registry."""

    NO_INFO = "no-info"
    UP_TO_DATE = "up-to-date"
    AVAILABLE = "available"


class UpdateCheck(pydantic.BaseModel):
    """Result of checking one plugin for updates."""

    model_config = pydantic.ConfigDict(frozen=True)

    plugin: PluginInfo
    latest: str
    status: UpdateStatus


def compare_versions(installed: str, latest: str) -> UpdateStatus:
    """Classify *latest* against *installed*.

    Versions are compared as plain strings, not as semantic versions.

    Examples
    --------
    >>> compare_versions("1.0.0", "")
    <UpdateStatus.NO_INFO: 'no-info'>
    >>> compare_versions("1.0.0", "1.0.0")
    <UpdateStatus.UP_TO_DATE: 'up-to-date'>
    >>> compare_versions("1.0.0", "1.0")
    <UpdateStatus.AVAILABLE: 'available'>
    """
    if not latest:
        return UpdateStatus.NO_INFO
    if latest == installed:
        return UpdateStatus.UP_TO_DATE
    return UpdateStatus.AVAILABLE


def check_for_update(plugin: PluginInfo, registry: RegistryClient) -> UpdateCheck:
    """Look up the latest version of *plugin* and classify it.

    Raises
    ------
    RegistryError
        If the registry lookup fails; the message is prefixed with
        ``failed to check latest version:``.
    """
    try:
        latest = registry.latest_version(plugin.name)
    except RegistryError as exc:
        msg = f"failed to check latest version: {exc}"
        raise RegistryError(msg, status_code=exc.status_code) from exc
    status = compare_versions(plugin.version, latest)
    return UpdateCheck(plugin=plugin, latest=latest, status=status)


def find_plugin(plugins: t.Iterable[PluginInfo], name: str) -> PluginInfo | None:
    """Return the first plugin whose name matches *name*, ignoring case.

    Examples
    --------
    >>> from pathlib import Path
    >>> plugins = [
    ...     PluginInfo(name="Foo", version="1.0.0", path=Path("/a")),
    ...     PluginInfo(name="foo", version="2.0.0", path=Path("/b")),
    ... ]
    >>> find_plugin(plugins, "FOO").version
    '1.0.0'
    >>> find_plugin(plugins, "bar") is None
    True
    """
    folded = name.casefold()
    for plugin in plugins:
        if plugin.name.casefold() == folded:
            return plugin
    return None
