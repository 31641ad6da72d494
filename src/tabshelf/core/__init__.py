"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging (Loguru)
- Console management (Rich)
"""

# Configuration
from .config import (
    Config,
    LibraryConfig,
    LoggingConfig,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_log_file_path,
    create_default_config,
)

# Console and output
from .console import get_console, set_console
from .output import log, setup_loguru

__all__ = [
    # Config
    "Config",
    "LibraryConfig",
    "LoggingConfig",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_log_file_path",
    "create_default_config",
    # Console and output
    "get_console",
    "set_console",
    "log",
    "setup_loguru",
]
