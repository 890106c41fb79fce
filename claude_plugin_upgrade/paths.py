"""Per-OS location of the Claude Code plugin directory.

Examples
--------
>>> from pathlib import Path
>>> resolve_plugin_dir("linux", home=Path("/home/me")).as_posix()
'/home/me/.config/claude-code/extensions'
>>> resolve_plugin_dir("sunos5", home=Path("/home/me")).as_posix()
'/home/me/.claude-code/extensions'
"""

from __future__ import annotations

import logging
import os
import sys
import typing as t
from pathlib import Path

from .errors import HomeDirectoryError

logger = logging.getLogger(__name__)

PLUGIN_SUBDIR = "extensions"
"""Directory under the application folder that holds one subfolder per plugin."""

APPDATA_ENV = "APPDATA"


def _home_dir() -> Path:
    try:
        return Path.home()
    except RuntimeError as exc:
        msg = f"failed to get home directory: {exc}"
        raise HomeDirectoryError(msg) from exc


def resolve_plugin_dir(
    platform: str | None = None,
    *,
    home: Path | None = None,
    environ: t.Mapping[str, str] | None = None,
) -> Path:
    """Return the plugin directory for *platform*.

    The directory is not checked for existence.

    Parameters
    ----------
    platform : str, optional
        A ``sys.platform`` style identifier. Defaults to the running platform.
    home : Path, optional
        Home directory. Defaults to :meth:`pathlib.Path.home`.
    environ : Mapping[str, str], optional
        Environment used for the Windows ``APPDATA`` override. Defaults to
        :data:`os.environ`.

    Returns
    -------
    Path
        The canonical plugin directory.

    Raises
    ------
    HomeDirectoryError
        If the home directory cannot be determined.

    Examples
    --------
    >>> from pathlib import Path
    >>> resolve_plugin_dir("darwin", home=Path("/Users/me")).as_posix()
    '/Users/me/Library/Application Support/Claude Code/extensions'

    ``APPDATA`` wins on Windows, with a fallback under the home directory:

    >>> resolve_plugin_dir("win32", home=Path("/h"), environ={"APPDATA": "/ad"}).as_posix()
    '/ad/Claude Code/extensions'
    >>> resolve_plugin_dir("win32", home=Path("/h"), environ={}).as_posix()
    '/h/AppData/Roaming/Claude Code/extensions'
    """
    if platform is None:
        platform = sys.platform
    if environ is None:
        environ = os.environ
    if home is None:
        home = _home_dir()

    if platform == "darwin":
        plugin_dir = home / "Library" / "Application Support" / "Claude Code" / PLUGIN_SUBDIR
    elif platform.startswith("linux"):
        plugin_dir = home / ".config" / "claude-code" / PLUGIN_SUBDIR
    elif platform == "win32":
        app_data = environ.get(APPDATA_ENV, "")
        base = Path(app_data) if app_data else home / "AppData" / "Roaming"
        plugin_dir = base / "Claude Code" / PLUGIN_SUBDIR
    else:
        plugin_dir = home / ".claude-code" / PLUGIN_SUBDIR

    logger.debug("Plugin directory for %s: %s", platform, plugin_dir)
    return plugin_dir
