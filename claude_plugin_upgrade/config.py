"""Optional YAML configuration.

Example ``config.yaml``::

    plugin_dir: ~/work/claude-extensions
    registry_url: https://registry.npmjs.org
    descriptor_name: package.json
"""

from __future__ import annotations

import logging
import os
import typing as t
from pathlib import Path

import pydantic
import yaml

from .discovery import DESCRIPTOR_NAME
from .errors import ConfigError
from .registry import NPM_REGISTRY_URL

logger = logging.getLogger(__name__)

CONFIG_ENV = "CLAUDE_PLUGIN_UPGRADE_CONFIG"
"""Environment variable naming a config file when ``--config`` is not given."""


class Settings(pydantic.BaseModel):
    """Runtime settings.

    Examples
    --------
    >>> Settings()
    Settings(plugin_dir=None, registry_url='https://registry.npmjs.org', descriptor_name='package.json')

    Unknown keys are rejected:

    >>> try:
    ...     Settings.model_validate({"registry": "https://example.com"})
    ... except pydantic.ValidationError:
    ...     print("rejected")
    rejected
    """

    model_config = pydantic.ConfigDict(extra="forbid")

    plugin_dir: Path | None = None
    registry_url: str = NPM_REGISTRY_URL
    descriptor_name: str = DESCRIPTOR_NAME

    @pydantic.field_validator("plugin_dir")
    @classmethod
    def _expand_user(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None


def load_settings(
    path: Path | None = None,
    environ: t.Mapping[str, str] | None = None,
) -> Settings:
    r"""Load settings from *path*, or from the file named by the environment.

    Parameters
    ----------
    path : Path, optional
        Explicit config file, as passed with ``--config``.
    environ : Mapping[str, str], optional
        Environment consulted for ``CLAUDE_PLUGIN_UPGRADE_CONFIG``. Defaults to
        :data:`os.environ`.

    Returns
    -------
    Settings
        Defaults when no file is configured.

    Raises
    ------
    ConfigError
        If the configured file is missing, is not YAML, is not a mapping, or
        holds invalid values.

    Examples
    --------
    >>> from pathlib import Path
    >>> import tempfile
    >>> load_settings(environ={}).registry_url
    'https://registry.npmjs.org'
    >>> p = Path(tempfile.mkdtemp()) / "config.yaml"
    >>> _ = p.write_text("registry_url: https://npm.example.com\n")
    >>> load_settings(p).registry_url
    'https://npm.example.com'
    """
    if path is None:
        if environ is None:
            environ = os.environ
        from_env = environ.get(CONFIG_ENV, "")
        if not from_env:
            return Settings()
        path = Path(from_env)

    logger.debug("Loading settings from %s", path)
    try:
        text = path.expanduser().read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"cannot read config file {path}: {exc}"
        raise ConfigError(msg) from exc

    try:
        loaded = t.cast("object", yaml.safe_load(text))
    except yaml.YAMLError as exc:
        msg = f"invalid YAML in {path}: {exc}"
        raise ConfigError(msg) from exc

    if loaded is None:
        return Settings()
    if not isinstance(loaded, dict):
        msg = f"config file {path} must contain a mapping"
        raise ConfigError(msg)

    try:
        return Settings.model_validate(loaded)
    except pydantic.ValidationError as exc:
        msg = f"invalid config file {path}: {exc}"
        raise ConfigError(msg) from exc
