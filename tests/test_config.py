"""
Tests for bookmarker/config.py configuration management.

Covers defaults, base-directory resolution, file loading, environment
variables and command-line overrides.
"""
from pathlib import Path

import pytest
import tomli

from bookmarker import config as config_module
from bookmarker.config import BookmarkerConfig, get_base_dir, get_config, init_config
from bookmarker.errors import ConfigError


class TestBaseDir:
    """Test platform data-directory resolution."""

    def test_linux_uses_xdg_data_home(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config_module.sys, "platform", "linux")
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))

        assert get_base_dir() == tmp_path / "xdg"

    def test_linux_falls_back_to_local_share(self, monkeypatch):
        monkeypatch.setattr(config_module.sys, "platform", "linux")
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)

        assert get_base_dir() == Path.home() / ".local" / "share"

    def test_windows_uses_appdata(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config_module.sys, "platform", "win32")
        monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))

        assert get_base_dir() == tmp_path / "appdata"

    def test_macos_uses_application_support(self, monkeypatch):
        monkeypatch.setattr(config_module.sys, "platform", "darwin")

        assert get_base_dir() == Path.home() / "Library" / "Application Support"


class TestBookmarkerConfigDefaults:
    """Test default configuration values."""

    def test_default_database_in_data_dir(self, tmp_path):
        config = BookmarkerConfig()
        assert config.database == str(tmp_path / "home" / "data" / "bookmarker" / "bm.db")

    def test_default_output_format_is_text(self):
        assert BookmarkerConfig().output_format == "text"

    def test_default_timeout_is_10(self):
        assert BookmarkerConfig().timeout == 10

    def test_default_fetch_titles_is_true(self):
        assert BookmarkerConfig().fetch_titles is True

    def test_default_log_level_is_warning(self):
        assert BookmarkerConfig().log_level == "WARNING"


class TestConfigLoading:
    """Test configuration loading from files and environment."""

    def test_load_user_config(self):
        user_config = Path.home() / ".config" / "bookmarker" / "config.toml"
        user_config.parent.mkdir(parents=True)
        user_config.write_text('output_format = "json"\ntimeout = 3\n')

        config = BookmarkerConfig.load()

        assert config.output_format == "json"

    def test_non_integer_env_var_raises_config_error(self, monkeypatch):
        monkeypatch.setenv("BOOKMARKER_TIMEOUT", "abc")

        with pytest.raises(ConfigError, match="BOOKMARKER_TIMEOUT"):
            BookmarkerConfig.load()
        assert config.timeout == 3

    def test_local_config_overrides_user_config(self, tmp_path):
        user_config = Path.home() / ".config" / "bookmarker" / "config.toml"
        user_config.parent.mkdir(parents=True)
        user_config.write_text('output_format = "json"\n')
        (tmp_path / "bookmarker.toml").write_text('output_format = "md"\n')

        assert BookmarkerConfig.load().output_format == "md"

    def test_explicit_config_file(self, tmp_path):
        config_file = tmp_path / "custom.toml"
        config_file.write_text('database = "custom.db"\n')

        assert BookmarkerConfig.load(config_file).database == "custom.db"

    def test_unknown_keys_are_ignored(self, tmp_path):
        (tmp_path / "bookmarker.toml").write_text('no_such_setting = 1\n')

        config = BookmarkerConfig.load()
        assert not hasattr(config, "no_such_setting")

    def test_env_vars_override_files(self, tmp_path, monkeypatch):
        (tmp_path / "bookmarker.toml").write_text('timeout = 3\n')
        monkeypatch.setenv("BOOKMARKER_TIMEOUT", "7")
        monkeypatch.setenv("BOOKMARKER_FETCH_TITLES", "false")
        monkeypatch.setenv("BOOKMARKER_OUTPUT_FORMAT", "json")

        config = BookmarkerConfig.load()

        assert config.timeout == 7
        assert config.fetch_titles is False
        assert config.output_format == "json"

    def test_database_path_is_expanded(self, monkeypatch):
        monkeypatch.setenv("BOOKMARKER_DATABASE", "~/bm.db")

        assert BookmarkerConfig.load().database == str(Path.home() / "bm.db")

    def test_relative_database_path_resolves_to_cwd(self, tmp_path):
        config = BookmarkerConfig(database="relative.db")
        assert config.get_database_path() == tmp_path / "relative.db"


class TestConfigSave:
    def test_save_round_trip(self, tmp_path):
        path = tmp_path / "saved.toml"
        config = BookmarkerConfig(timeout=42)

        assert config.save(path) == path
        with open(path, "rb") as f:
            data = tomli.load(f)
        assert data["timeout"] == 42
        assert BookmarkerConfig.load(path).timeout == 42

    def test_save_defaults_to_user_config(self):
        path = BookmarkerConfig().save()
        assert path == Path.home() / ".config" / "bookmarker" / "config.toml"
        assert path.exists()


class TestGlobalConfig:
    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_get_config_reload(self):
        first = get_config()
        assert get_config(reload=True) is not first

    def test_init_config_overrides(self):
        config = init_config(database="override.db", output_format="json", timeout=None)

        assert config.database == "override.db"
        assert config.output_format == "json"
        assert config.timeout == 10
        assert get_config() is config

    @pytest.mark.parametrize("database", [None, ""])
    def test_init_config_keeps_default_database(self, database):
        default = BookmarkerConfig().database
        assert init_config(database=database).database == default
