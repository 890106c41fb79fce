"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from claude_plugin_upgrade.config import CONFIG_ENV, Settings, load_settings
from claude_plugin_upgrade.errors import ConfigError


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_without_file(self) -> None:
        """Test defaults are used when nothing is configured."""
        settings = load_settings(environ={})
        assert settings == Settings()
        assert settings.plugin_dir is None
        assert settings.registry_url == "https://registry.npmjs.org"
        assert settings.descriptor_name == "package.json"

    def test_explicit_file(self, tmp_path: Path) -> None:
        """Test values from an explicit file override defaults."""
        config = tmp_path / "config.yaml"
        config.write_text(
            f"plugin_dir: {tmp_path / 'ext'}\nregistry_url: https://npm.example.com\n",
            encoding="utf-8",
        )
        settings = load_settings(config)
        assert settings.plugin_dir == tmp_path / "ext"
        assert settings.registry_url == "https://npm.example.com"
        assert settings.descriptor_name == "package.json"

    def test_file_from_environment(self, tmp_path: Path) -> None:
        """Test the environment variable names a config file."""
        config = tmp_path / "config.yaml"
        config.write_text("descriptor_name: plugin.json\n", encoding="utf-8")
        settings = load_settings(environ={CONFIG_ENV: str(config)})
        assert settings.descriptor_name == "plugin.json"

    def test_home_expanded(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test ~ in plugin_dir is expanded."""
        monkeypatch.setenv("HOME", str(tmp_path))
        config = tmp_path / "config.yaml"
        config.write_text("plugin_dir: ~/ext\n", encoding="utf-8")
        assert load_settings(config).plugin_dir == tmp_path / "ext"

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file means defaults."""
        config = tmp_path / "config.yaml"
        config.write_text("", encoding="utf-8")
        assert load_settings(config) == Settings()

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a named file that does not exist is an error."""
        with pytest.raises(ConfigError, match="cannot read config file"):
            load_settings(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test YAML syntax errors are reported."""
        config = tmp_path / "config.yaml"
        config.write_text("plugin_dir: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_settings(config)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """Test a top-level list is rejected."""
        config = tmp_path / "config.yaml"
        config.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_settings(config)

    def test_unknown_key(self, tmp_path: Path) -> None:
        """Test unknown keys are rejected."""
        config = tmp_path / "config.yaml"
        config.write_text("registry: https://npm.example.com\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="invalid config file"):
            load_settings(config)
