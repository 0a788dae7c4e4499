"""
Configuration management for lastfm-archiver
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger

# Last.fm caps user.getrecenttracks at 200 scrobbles per page
MAX_PAGE_SIZE = 200

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LastFMConfig:
    """Configuration for the Last.fm web service."""

    api_key: str = ""
    user: str = ""
    api_root: str = "https://ws.audioscrobbler.com/2.0/"
    page_size: int = MAX_PAGE_SIZE
    timeout: float = 30.0

    def validate(self) -> None:
        """Validate Last.fm configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int):
            raise ValueError(f"Invalid page_size: {self.page_size!r}. Must be an integer")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            raise ValueError(f"Invalid timeout: {self.timeout!r}. Must be a number")
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(
                f"Invalid page_size: {self.page_size}. "
                f"Must be between 1 and {MAX_PAGE_SIZE}"
            )
        if self.timeout <= 0:
            raise ValueError(f"Invalid timeout: {self.timeout}. Must be positive")


@dataclass
class DatabaseConfig:
    """Configuration for the play database."""

    path: Optional[str] = None  # Default: ~/.local/share/lastfm-archiver/plays.db


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/lastfm-archiver/lastfm-archiver.log)
    )
    console_output: bool = False  # Also output to stderr

    def validate(self) -> None:
        """Validate logging configuration values.

        Raises:
            ValueError: If the level is not a known level name
        """
        if not isinstance(self.level, str) or self.level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {self.level!r}. Valid levels are: {LOG_LEVELS}"
            )


@dataclass
class Config:
    """Main configuration object."""

    lastfm: LastFMConfig = field(default_factory=LastFMConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "lastfm-archiver"
    return Path.home() / ".config" / "lastfm-archiver"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "lastfm-archiver"
    return Path.home() / ".local" / "share" / "lastfm-archiver"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/lastfm-archiver (or ~/.config/lastfm-archiver)
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# lastfm-archiver configuration

[lastfm]
# Last.fm API credentials (https://www.last.fm/api/account/create)
# Can also be set with LASTFM_API_KEY / LASTFM_USER
# api_key = "your-api-key-here"
# user = "your-username"

# Scrobbles requested per page (1-200)
page_size = 200

# HTTP timeout in seconds
timeout = 30.0

[database]
# SQLite database path (default: ~/.local/share/lastfm-archiver/plays.db)
# path = "~/plays.db"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/lastfm-archiver/lastfm-archiver.log)
# log_file = "/path/to/lastfm-archiver.log"

# Also output logs to stderr
console_output = false
""".strip()


def write_default_config(config_path: Optional[Path] = None) -> Path:
    """Write the default configuration file unless one already exists.

    Returns:
        Path of the configuration file
    """
    if config_path is None:
        config_path = get_config_dir() / "config.toml"

    if config_path.exists():
        return config_path

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(create_default_config() + "\n")
    logger.info(f"Created default configuration at: {config_path}")
    return config_path


def _apply_env_overrides(config: Config) -> Config:
    """Override credentials and database path with environment variables."""
    api_key = os.environ.get("LASTFM_API_KEY")
    user = os.environ.get("LASTFM_USER")
    database = os.environ.get("LASTFM_ARCHIVER_DATABASE")

    if api_key:
        config.lastfm.api_key = api_key
    if user:
        config.lastfm.user = user
    if database:
        config.database.path = str(Path(database).expanduser())

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    Environment variables override TOML values:
    - LASTFM_API_KEY
    - LASTFM_USER
    - LASTFM_ARCHIVER_DATABASE

    Args:
        config_path: Explicit config file (default: see get_config_path)

    Returns:
        Loaded configuration
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        logger.debug(f"No configuration file at {config_path}, using defaults")
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Error loading configuration from {config_path}: {e}")
        logger.warning("Using default configuration.")
        return _apply_env_overrides(Config())

    config = Config()

    if isinstance(toml_data.get("lastfm"), dict):
        lastfm_data = toml_data["lastfm"]
        config.lastfm = LastFMConfig(
            api_key=lastfm_data.get("api_key", config.lastfm.api_key),
            user=lastfm_data.get("user", config.lastfm.user),
            api_root=lastfm_data.get("api_root", config.lastfm.api_root),
            page_size=lastfm_data.get("page_size", config.lastfm.page_size),
            timeout=lastfm_data.get("timeout", config.lastfm.timeout),
        )
        try:
            config.lastfm.validate()
        except ValueError as e:
            logger.warning(f"Invalid lastfm configuration: {e}")
            logger.warning("Using default page_size and timeout.")
            config.lastfm.page_size = MAX_PAGE_SIZE
            config.lastfm.timeout = LastFMConfig.timeout

    if isinstance(toml_data.get("database"), dict):
        database_path = toml_data["database"].get("path")
        if isinstance(database_path, str) and database_path:
            database_path = str(Path(database_path).expanduser())
        else:
            if database_path:
                logger.warning(f"Invalid database path: {database_path!r}. Using default.")
            database_path = None
        config.database = DatabaseConfig(path=database_path)

    if isinstance(toml_data.get("logging"), dict):
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if isinstance(log_file, str) and log_file:
            log_file = str(Path(log_file).expanduser())
        else:
            if log_file:
                logger.warning(f"Invalid log_file: {log_file!r}. Using default log file.")
            log_file = None
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level),
            log_file=log_file,
            console_output=bool(
                logging_data.get("console_output", config.logging.console_output)
            ),
        )
        try:
            config.logging.validate()
            config.logging.level = config.logging.level.upper()
        except ValueError as e:
            logger.warning(f"Invalid logging configuration: {e}")
            logger.warning("Using log level INFO.")
            config.logging.level = LoggingConfig.level

    return _apply_env_overrides(config)
