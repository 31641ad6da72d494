"""
Configuration management for Tabshelf
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger


@dataclass
class LibraryConfig:
    """Configuration for the tab library."""

    root_path: Optional[str] = None  # Library root (artist folders live here)


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/tabshelf/tabshelf.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = False  # Also output to console (for debugging)


@dataclass
class Config:
    """Main configuration object."""

    library: LibraryConfig = field(default_factory=LibraryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "tabshelf"
    return Path.home() / ".config" / "tabshelf"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/tabshelf (or ~/.config/tabshelf)
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "tabshelf"
    return Path.home() / ".local" / "share" / "tabshelf"


def get_log_file_path(config: Config) -> Path:
    """Get the log file path, honouring a custom path from the config."""
    if config.logging.log_file:
        return Path(config.logging.log_file)
    return get_data_dir() / "tabshelf.log"


def _apply_env_overrides(config: Config) -> Config:
    root_path = os.environ.get("TABSHELF_LIBRARY_ROOT")
    if root_path:
        config.library.root_path = str(Path(root_path).expanduser())

    log_level = os.environ.get("TABSHELF_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    The file is never created or rewritten here. Environment variables
    override TOML values:
    - TABSHELF_LIBRARY_ROOT
    - TABSHELF_LOG_LEVEL

    Args:
        config_path: Explicit config file (default: see get_config_path)

    Returns:
        Config object
    """
    # Load .env file from config directory if it exists
    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()

    if not config_path.exists():
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Error loading configuration from {config_path}: {e}")
        logger.warning("Using default configuration.")
        return _apply_env_overrides(Config())

    config = Config()

    if "library" in toml_data:
        library_data = toml_data["library"]
        root_path = library_data.get("root_path")
        if root_path:
            root_path = str(Path(root_path).expanduser())
        config.library = LibraryConfig(root_path=root_path)

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            max_file_size_mb=logging_data.get(
                "max_file_size_mb", config.logging.max_file_size_mb
            ),
            backup_count=logging_data.get("backup_count", config.logging.backup_count),
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    return _apply_env_overrides(config)


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Tabshelf Configuration

[library]
# Folder holding one sub-folder per artist, each holding one folder per song
# root_path = "~/Tabs"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/tabshelf/tabshelf.log)
# log_file = "/path/to/custom/tabshelf.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to console (useful for debugging)
console_output = false
""".strip()
