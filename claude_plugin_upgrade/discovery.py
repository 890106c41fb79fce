"""Discovery of installed plugins and parsing of their ``package.json``.

A plugin is any immediate subdirectory of the plugin directory that has a
descriptor file at its root.
"""

from __future__ import annotations

import json
import logging
import typing as t
from pathlib import Path

import pydantic

from .errors import DescriptorError, DescriptorParseError, DescriptorReadError, DiscoveryError

logger = logging.getLogger(__name__)

DESCRIPTOR_NAME = "package.json"


class PackageDescriptor(pydantic.BaseModel):
    """Permissive view of a ``package.json`` document.

    Missing fields and fields that are not strings decode to ``""``.

    Examples
    --------
    >>> PackageDescriptor.model_validate({"name": "foo", "version": "1.0.0"})
    PackageDescriptor(name='foo', version='1.0.0')
    >>> PackageDescriptor.model_validate({"name": 42, "description": "ignored"})
    PackageDescriptor(name='', version='')
    """

    model_config = pydantic.ConfigDict(extra="ignore")

    name: str = ""
    version: str = ""

    @pydantic.field_validator("name", "version", mode="before")
    @classmethod
    def _string_or_empty(cls, value: object) -> str:
        return value if isinstance(value, str) else ""


class PluginInfo(pydantic.BaseModel):
    """A locally installed plugin.

    Examples
    --------
    >>> from pathlib import Path
    >>> info = PluginInfo(name="foo", version="1.0.0", path=Path("/plugins/foo"))
    >>> info.name, info.version
    ('foo', '1.0.0')
    """

    model_config = pydantic.ConfigDict(frozen=True)

    name: str
    version: str
    path: Path


class Discovery(t.NamedTuple):
    """Plugins found in a directory, plus warnings for entries that were skipped."""

    plugins: list[PluginInfo]
    warnings: list[str]


def read_plugin_info(descriptor_path: Path, plugin_path: Path) -> PluginInfo:
    r"""Build a :class:`PluginInfo` from a descriptor file.

    Parameters
    ----------
    descriptor_path : Path
        Path to the ``package.json`` file.
    plugin_path : Path
        Directory containing the descriptor; becomes ``PluginInfo.path``.

    Returns
    -------
    PluginInfo
        The parsed plugin entry.

    Raises
    ------
    DescriptorReadError
        If the file cannot be read.
    DescriptorParseError
        If the file is not a well-formed JSON object.

    Examples
    --------
    >>> from pathlib import Path
    >>> import tempfile
    >>> d = Path(tempfile.mkdtemp())
    >>> _ = (d / "package.json").write_text('{"name": "foo"}')
    >>> info = read_plugin_info(d / "package.json", d)
    >>> info.name, info.version, info.path == d
    ('foo', '', True)

    >>> _ = (d / "package.json").write_text("not json")
    >>> try:
    ...     read_plugin_info(d / "package.json", d)
    ... except DescriptorParseError:
    ...     print("rejected")
    rejected
    """
    try:
        text = descriptor_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"failed to parse {descriptor_path.name}: {exc}"
        raise DescriptorParseError(msg) from exc
    except OSError as exc:
        msg = f"failed to read {descriptor_path.name}: {exc}"
        raise DescriptorReadError(msg) from exc

    try:
        raw = t.cast("object", json.loads(text))
    except json.JSONDecodeError as exc:
        msg = f"failed to parse {descriptor_path.name}: {exc}"
        raise DescriptorParseError(msg) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        msg = f"failed to parse {descriptor_path.name}: top-level value must be an object"
        raise DescriptorParseError(msg)

    descriptor = PackageDescriptor.model_validate(raw)
    return PluginInfo(name=descriptor.name, version=descriptor.version, path=plugin_path)


def discover_plugins(plugin_dir: Path, descriptor_name: str = DESCRIPTOR_NAME) -> Discovery:
    """Find every plugin under *plugin_dir*.

    Entries keep the order of the directory listing. A missing directory
    means nothing is installed yet and yields an empty result.

    Parameters
    ----------
    plugin_dir : Path
        The plugin directory to scan.
    descriptor_name : str
        File name that marks a subdirectory as a plugin.

    Returns
    -------
    Discovery
        Plugins found, and one warning per descriptor that failed to load.

    Raises
    ------
    DiscoveryError
        If *plugin_dir* exists but cannot be listed.

    Examples
    --------
    >>> from pathlib import Path
    >>> import tempfile
    >>> root = Path(tempfile.mkdtemp())
    >>> discover_plugins(root / "missing")
    Discovery(plugins=[], warnings=[])
    >>> (root / "foo").mkdir()
    >>> _ = (root / "foo" / "package.json").write_text('{"name": "foo", "version": "1.0.0"}')
    >>> (root / "not-a-plugin").mkdir()
    >>> _ = (root / "README.md").write_text("# notes")
    >>> [p.name for p in discover_plugins(root).plugins]
    ['foo']
    """
    plugins: list[PluginInfo] = []
    warnings: list[str] = []

    if not plugin_dir.exists():
        logger.debug("Plugin directory %s does not exist", plugin_dir)
        return Discovery(plugins, warnings)

    try:
        entries = list(plugin_dir.iterdir())
    except OSError as exc:
        msg = f"failed to read plugin directory: {exc}"
        raise DiscoveryError(msg) from exc

    for entry in entries:
        if entry.is_symlink() or not entry.is_dir():
            continue

        descriptor_path = entry / descriptor_name
        if not descriptor_path.exists():
            logger.debug("Skipping %s: no %s", entry.name, descriptor_name)
            continue

        try:
            plugins.append(read_plugin_info(descriptor_path, entry))
        except DescriptorError as exc:
            warnings.append(f"failed to read plugin info for {entry.name}: {exc}")

    return Discovery(plugins, warnings)
