"""
Configuration management for bookmarker.

Settings are layered: dataclass defaults, the user config file
(~/.config/bookmarker/config.toml), a local ./bookmarker.toml, an explicit
config file, then BOOKMARKER_* environment variables. Command-line flags are
applied last through init_config().
"""
import os
import sys
import tomli
import tomli_w
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field, asdict

from bookmarker.errors import ConfigError

APP_DIR_NAME = "bookmarker"
DB_FILENAME = "bm.db"
ENV_PREFIX = "BOOKMARKER_"


def get_base_dir() -> Path:
    """
    Resolve the per-user data directory for the current platform.

    Returns:
        %APPDATA% on Windows, ~/Library/Application Support on macOS,
        $XDG_DATA_HOME (or ~/.local/share) elsewhere
    """
    if sys.platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"

    xdg_data_home = os.environ.get("XDG_DATA_HOME")
    if xdg_data_home:
        return Path(xdg_data_home)
    return Path.home() / ".local" / "share"


def default_database_path() -> str:
    """Default location of the bookmark database file."""
    return str(get_base_dir() / APP_DIR_NAME / DB_FILENAME)


def user_config_path() -> Path:
    return Path.home() / ".config" / APP_DIR_NAME / "config.toml"


@dataclass
class BookmarkerConfig:
    """
    bookmarker configuration with sensible defaults.

    Configuration hierarchy (highest to lowest priority):
    1. Command-line arguments
    2. Environment variables (BOOKMARKER_*)
    3. Explicit config file (--config)
    4. Local config file (./bookmarker.toml)
    5. User config file (~/.config/bookmarker/config.toml)
    6. Defaults
    """

    # Database settings
    database: str = field(default_factory=default_database_path)
    database_echo: bool = field(default=False)  # SQLAlchemy echo for debugging

    # Display settings
    output_format: str = field(default="text")  # text, json, md
    color_output: bool = field(default=True)

    # Network settings (page title lookup)
    fetch_titles: bool = field(default=True)
    timeout: int = field(default=10)  # seconds
    user_agent: str = field(default="bookmarker/1.0")
    verify_ssl: bool = field(default=True)

    log_level: str = field(default="WARNING")

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "BookmarkerConfig":
        """
        Load configuration from files and environment.

        Args:
            config_file: Specific config file to load after the standard ones

        Returns:
            Merged configuration object
        """
        config = cls()

        user_path = user_config_path()
        if user_path.exists():
            config._merge(cls._load_toml(user_path))

        local_path = Path.cwd() / "bookmarker.toml"
        if local_path.exists():
            config._merge(cls._load_toml(local_path))

        if config_file and Path(config_file).exists():
            config._merge(cls._load_toml(Path(config_file)))

        config._apply_env_vars()
        config._expand_paths()

        return config

    @staticmethod
    def _load_toml(path: Path) -> Dict[str, Any]:
        """Load TOML configuration file."""
        with open(path, "rb") as f:
            return tomli.load(f)

    def _merge(self, data: Dict[str, Any]):
        """Merge configuration data into this instance, ignoring unknown keys."""
        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def _apply_env_vars(self):
        """Apply environment variables with the BOOKMARKER_ prefix."""
        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX):
                config_key = key[len(ENV_PREFIX):].lower()
                if hasattr(self, config_key):
                    current_value = getattr(self, config_key)
                    if isinstance(current_value, bool):
                        setattr(self, config_key, value.lower() in ("true", "1", "yes"))
                    elif isinstance(current_value, int):
                        try:
                            setattr(self, config_key, int(value))
                        except ValueError:
                            raise ConfigError(f"{key} must be an integer, got {value!r}") from None
                    else:
                        setattr(self, config_key, value)

    def _expand_paths(self):
        """Expand ~ and environment variables in the database path."""
        self.database = os.path.expanduser(os.path.expandvars(self.database))

    def save(self, path: Optional[Path] = None) -> Path:
        """
        Save current configuration to a TOML file.

        Args:
            path: Path to save to (defaults to the user config file)

        Returns:
            The path written
        """
        if path is None:
            path = user_config_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as f:
            tomli_w.dump(asdict(self), f)
        return path

    def get_database_path(self) -> Path:
        """Get the resolved database path."""
        path = Path(self.database)
        if not path.is_absolute():
            path = Path.cwd() / path
        return path


# Global configuration instance
_config: Optional[BookmarkerConfig] = None


def get_config(reload: bool = False, config_file: Optional[Path] = None) -> BookmarkerConfig:
    """
    Get the global configuration instance.

    Args:
        reload: Force reload configuration from files
        config_file: Specific config file to load

    Returns:
        Global configuration instance
    """
    global _config
    if _config is None or reload or config_file:
        _config = BookmarkerConfig.load(config_file)
    return _config


def init_config(database: Optional[str] = None, config_file: Optional[Path] = None,
                **kwargs) -> BookmarkerConfig:
    """
    Initialize configuration with command-line overrides.

    Args:
        database: Database path override
        config_file: Extra config file to merge
        **kwargs: Other configuration overrides (None values are ignored)

    Returns:
        Configured instance
    """
    config = get_config(config_file=config_file)

    if database:
        config.database = database

    for key, value in kwargs.items():
        if hasattr(config, key) and value is not None:
            setattr(config, key, value)

    return config
