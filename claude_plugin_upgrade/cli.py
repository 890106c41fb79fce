"""Command-line interface for claude-plugin-upgrade.

Lists installed Claude Code plugins and checks them against the npm registry.

Examples
--------
List installed plugins:

    claude-plugin-upgrade --list

Check every plugin for a newer version:

    claude-plugin-upgrade --upgrade

Check a single plugin (name matching ignores case):

    claude-plugin-upgrade --upgrade --plugin my-plugin
"""

from __future__ import annotations

import logging
import typing as t
from pathlib import Path

import rich.console
import rich.logging
import typer
from rich.markup import escape

from . import __version__
from .config import Settings, load_settings
from .discovery import PluginInfo, discover_plugins
from .errors import ConfigError, DiscoveryError, HomeDirectoryError, PluginUpgradeError
from .paths import resolve_plugin_dir
from .registry import RegistryClient
from .upgrade import UpdateStatus, check_for_update, find_plugin

app = typer.Typer(
    help="List installed Claude Code plugins and check them for updates.",
    add_completion=False,
)
console = rich.console.Console(soft_wrap=True, emoji=False, highlight=False)
err_console = rich.console.Console(stderr=True, soft_wrap=True, emoji=False, highlight=False)

_PACKAGE_LOGGER = "claude_plugin_upgrade"


def _configure_logging(*, verbose: bool) -> None:
    """Route package logs to stderr through rich."""
    logger = logging.getLogger(_PACKAGE_LOGGER)
    handler = rich.logging.RichHandler(console=err_console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"claude-plugin-upgrade version {__version__}")
        raise typer.Exit()


def _load_settings(config: Path | None) -> Settings:
    try:
        return load_settings(config)
    except ConfigError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from None


def _plugin_dir(settings: Settings) -> Path:
    if settings.plugin_dir is not None:
        return settings.plugin_dir
    try:
        return resolve_plugin_dir()
    except HomeDirectoryError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from None


def _discover(plugin_dir: Path, settings: Settings) -> list[PluginInfo]:
    """Discover plugins, printing skipped entries as warnings.

    Raises
    ------
    SystemExit
        If the plugin directory cannot be read.
    """
    try:
        discovery = discover_plugins(plugin_dir, settings.descriptor_name)
    except DiscoveryError as exc:
        err_console.print(f"[red]Error discovering plugins:[/red] {escape(str(exc))}")
        raise SystemExit(1) from None

    for warning in discovery.warnings:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
    return discovery.plugins


def list_plugins(plugin_dir: Path, settings: Settings) -> None:
    """Print every installed plugin with its version and location."""
    plugins = _discover(plugin_dir, settings)

    if not plugins:
        console.print("No Claude Code plugins found.")
        console.print(f"Plugin directory: {escape(str(plugin_dir))}")
        return

    console.print("Installed Claude Code plugins:")
    console.print("-------------------------------")
    for plugin in plugins:
        console.print(f"Name:    {escape(plugin.name)}")
        console.print(f"Version: {escape(plugin.version)}")
        console.print(f"Path:    {escape(str(plugin.path))}")
        console.print()


def upgrade_plugin(plugin: PluginInfo, registry: RegistryClient) -> None:
    """Check *plugin* for a newer version and report the outcome.

    Installing is not implemented; an available update is only reported.

    Raises
    ------
    RegistryError
        If the latest version cannot be looked up.
    """
    console.print(f"  Current version: {escape(plugin.version)}")
    check = check_for_update(plugin, registry)

    if check.status is UpdateStatus.NO_INFO:
        console.print("  No update information available (plugin may not be in registry)")
    elif check.status is UpdateStatus.UP_TO_DATE:
        console.print("  Already up to date!")
    else:
        console.print(f"  Latest version: {escape(check.latest)}")
        console.print("  Upgrade functionality would be implemented here")
        console.print("  (downloading and installing new version)")


def upgrade_all_plugins(plugin_dir: Path, settings: Settings, registry: RegistryClient) -> None:
    """Check every installed plugin, one at a time.

    A failing plugin is reported on stderr and does not stop the others.
    """
    plugins = _discover(plugin_dir, settings)

    if not plugins:
        console.print("No Claude Code plugins found to upgrade.")
        return

    console.print(f"Found {len(plugins)} plugin(s) to check for updates...\n")

    for plugin in plugins:
        console.print(f"Checking {escape(plugin.name)}...")
        try:
            upgrade_plugin(plugin, registry)
        except PluginUpgradeError as exc:
            err_console.print(
                f"[red]Failed to upgrade {escape(plugin.name)}:[/red] {escape(str(exc))}"
            )
        console.print()


def upgrade_named_plugin(
    name: str, plugin_dir: Path, settings: Settings, registry: RegistryClient
) -> None:
    """Check the plugin called *name*.

    Raises
    ------
    SystemExit
        If no plugin matches or the check fails.
    """
    plugin = find_plugin(_discover(plugin_dir, settings), name)
    if plugin is None:
        err_console.print(f"[red]Plugin '{escape(name)}' not found.[/red]")
        raise SystemExit(1)

    console.print(f"Upgrading {escape(plugin.name)}...")
    try:
        upgrade_plugin(plugin, registry)
    except PluginUpgradeError as exc:
        err_console.print(
            f"[red]Failed to upgrade {escape(plugin.name)}:[/red] {escape(str(exc))}"
        )
        raise SystemExit(1) from None


@app.command()
def main(
    ctx: typer.Context,
    list_: t.Annotated[
        bool, typer.Option("--list", help="List all installed Claude Code plugins.")
    ] = False,
    upgrade: t.Annotated[
        bool, typer.Option("--upgrade", help="Upgrade all plugins to latest versions.")
    ] = False,
    plugin: t.Annotated[
        str,
        typer.Option("--plugin", metavar="NAME", help="Specific plugin name to upgrade."),
    ] = "",
    config: t.Annotated[
        Path | None,
        typer.Option("--config", metavar="PATH", help="YAML configuration file."),
    ] = None,
    verbose: t.Annotated[
        bool, typer.Option("--verbose", "-v", help="Log debug output to stderr.")
    ] = False,
    version: t.Annotated[  # noqa: ARG001
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """List installed Claude Code plugins and check them for updates."""
    if not list_ and not upgrade:
        console.print(ctx.get_help())
        return

    _configure_logging(verbose=verbose)
    settings = _load_settings(config)
    plugin_dir = _plugin_dir(settings)

    if list_:
        list_plugins(plugin_dir, settings)
        return

    with RegistryClient(settings.registry_url) as registry:
        if plugin:
            upgrade_named_plugin(plugin, plugin_dir, settings, registry)
        else:
            upgrade_all_plugins(plugin_dir, settings, registry)


if __name__ == "__main__":
    app()
