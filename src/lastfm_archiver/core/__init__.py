"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Database schema and connections (SQLite)
- Logging (Loguru) and console output (Rich)
"""

# Configuration
from .config import (
    Config,
    DatabaseConfig,
    LastFMConfig,
    LoggingConfig,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    create_default_config,
    write_default_config,
)

# Database
from .database import (
    get_database_path,
    get_db_connection,
    init_database,
    open_database,
)

# Output
from .console import get_console, safe_print, print_error
from .output import log, set_quiet, setup_loguru

__all__ = [
    # Config
    "Config",
    "DatabaseConfig",
    "LastFMConfig",
    "LoggingConfig",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "create_default_config",
    "write_default_config",
    # Database
    "get_database_path",
    "get_db_connection",
    "init_database",
    "open_database",
    # Output
    "get_console",
    "safe_print",
    "print_error",
    "log",
    "set_quiet",
    "setup_loguru",
]
