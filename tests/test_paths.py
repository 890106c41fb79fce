"""Tests for plugin directory resolution."""

from pathlib import Path
from unittest.mock import patch

import pytest

from claude_plugin_upgrade.errors import HomeDirectoryError
from claude_plugin_upgrade.paths import resolve_plugin_dir

HOME = Path("/home/tester")


class TestResolvePluginDir:
    """Tests for the per-OS directory table."""

    def test_macos(self) -> None:
        """Test macOS uses Application Support."""
        assert resolve_plugin_dir("darwin", home=HOME, environ={}) == (
            HOME / "Library" / "Application Support" / "Claude Code" / "extensions"
        )

    def test_linux(self) -> None:
        """Test Linux uses ~/.config."""
        assert resolve_plugin_dir("linux", home=HOME, environ={}) == (
            HOME / ".config" / "claude-code" / "extensions"
        )

    def test_windows_appdata(self) -> None:
        """Test Windows honours APPDATA."""
        result = resolve_plugin_dir("win32", home=HOME, environ={"APPDATA": "/roaming"})
        assert result == Path("/roaming") / "Claude Code" / "extensions"

    def test_windows_without_appdata(self) -> None:
        """Test Windows falls back to AppData/Roaming under the home directory."""
        result = resolve_plugin_dir("win32", home=HOME, environ={})
        assert result == HOME / "AppData" / "Roaming" / "Claude Code" / "extensions"

    def test_windows_empty_appdata(self) -> None:
        """Test an empty APPDATA counts as unset."""
        result = resolve_plugin_dir("win32", home=HOME, environ={"APPDATA": ""})
        assert result == HOME / "AppData" / "Roaming" / "Claude Code" / "extensions"

    def test_appdata_ignored_off_windows(self) -> None:
        """Test APPDATA only matters on Windows."""
        result = resolve_plugin_dir("linux", home=HOME, environ={"APPDATA": "/roaming"})
        assert result == HOME / ".config" / "claude-code" / "extensions"

    @pytest.mark.parametrize("platform", ["freebsd14", "sunos5", "aix"])
    def test_fallback(self, platform: str) -> None:
        """Test unknown platforms use ~/.claude-code."""
        assert resolve_plugin_dir(platform, home=HOME, environ={}) == (
            HOME / ".claude-code" / "extensions"
        )

    def test_defaults_to_running_platform(self) -> None:
        """Test the running platform and home directory are used by default."""
        with (
            patch("claude_plugin_upgrade.paths.sys.platform", "linux"),
            patch.object(Path, "home", return_value=HOME),
        ):
            assert resolve_plugin_dir(environ={}) == (
                HOME / ".config" / "claude-code" / "extensions"
            )

    def test_no_existence_check(self, tmp_path: Path) -> None:
        """Test the directory is returned even when it does not exist."""
        result = resolve_plugin_dir("linux", home=tmp_path / "nobody", environ={})
        assert not result.exists()

    def test_home_directory_unavailable(self) -> None:
        """Test a missing home directory raises a descriptive error."""
        with (
            patch.object(Path, "home", side_effect=RuntimeError("Could not determine home")),
            pytest.raises(HomeDirectoryError, match="failed to get home directory"),
        ):
            resolve_plugin_dir("linux", environ={})
