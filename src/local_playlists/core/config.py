"""
Configuration management for Local Playlists
"""

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

EXPORT_FORMATS = ("json", "csv", "m3u", "txt")


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "local-playlists"
    return Path.home() / ".config" / "local-playlists"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "local-playlists"
    return Path.home() / ".local" / "share" / "local-playlists"


@dataclass
class StorageConfig:
    """Configuration for the playlist record directory."""

    playlists_dir: str = field(
        default_factory=lambda: str(get_data_dir() / "local-playlists")
    )


@dataclass
class ExportConfig:
    """Configuration for playlist export."""

    default_format: str = "csv"

    def validate(self) -> None:
        """Validate export configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if self.default_format not in EXPORT_FORMATS:
            raise ValueError(
                f"Invalid default export format: {self.default_format!r}. "
                f"Valid formats are: {', '.join(EXPORT_FORMATS)}"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/local-playlists/local-playlists.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = False  # Also output to console (for debugging)


@dataclass
class IPCConfig:
    """Configuration for IPC (Inter-Process Communication)."""

    enabled: bool = True


@dataclass
class NotificationsConfig:
    """Configuration for desktop notifications."""

    enabled: bool = True
    show_success: bool = True
    show_errors: bool = True


@dataclass
class Config:
    """Main configuration object."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    ipc: IPCConfig = field(default_factory=IPCConfig)
    notifications: NotificationsConfig = field(default_factory=NotificationsConfig)

    @property
    def playlists_path(self) -> Path:
        """Playlist record directory as a Path."""
        return Path(self.storage.playlists_dir).expanduser()


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/local-playlists (or ~/.config/local-playlists)
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_log_file_path(config: Config) -> Path:
    """Get the path to the log file."""
    if config.logging.log_file:
        return Path(config.logging.log_file).expanduser()
    return get_data_dir() / "local-playlists.log"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Local Playlists Configuration

[storage]
# Directory holding one JSON file per playlist
# (default: ~/.local/share/local-playlists/local-playlists)
# playlists_dir = "~/Music/local-playlists"

[export]
# Format offered first when exporting (json, csv, m3u, txt)
default_format = "csv"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/local-playlists/local-playlists.log)
# log_file = "/path/to/custom/local-playlists.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to console (useful for debugging)
console_output = false

[ipc]
# Accept requests from other processes over a Unix socket
enabled = true

[notifications]
# Enable desktop notifications
enabled = true

# Show success notifications
show_success = true

# Show error notifications
show_errors = true
""".strip()


def _expand_path(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return str(Path(value).expanduser())


def _read_section(section_cls, defaults, table: Dict[str, Any]):
    """Build a section dataclass from a TOML table.

    Keys missing from the table keep their value from defaults; unknown
    keys are ignored with a warning.
    """
    known = {f.name for f in fields(section_cls)}
    for key in table:
        if key not in known:
            print(f"Warning: Unknown configuration key '{key}' ignored")
    values = {name: table.get(name, getattr(defaults, name)) for name in known}
    return section_cls(**values)


def _parse_config(toml_data: Dict[str, Any]) -> Config:
    config = Config()

    storage = _read_section(StorageConfig, config.storage, toml_data.get("storage", {}))
    storage.playlists_dir = _expand_path(storage.playlists_dir) or config.storage.playlists_dir
    config.storage = storage

    export = _read_section(ExportConfig, config.export, toml_data.get("export", {}))
    export.default_format = str(export.default_format).lower()
    try:
        export.validate()
        config.export = export
    except ValueError as e:
        print(f"Warning: Invalid export configuration: {e}")
        print("Using default export configuration.")

    logging_config = _read_section(LoggingConfig, config.logging, toml_data.get("logging", {}))
    logging_config.level = str(logging_config.level).upper()
    logging_config.log_file = _expand_path(logging_config.log_file)
    config.logging = logging_config

    config.ipc = _read_section(IPCConfig, config.ipc, toml_data.get("ipc", {}))
    config.notifications = _read_section(
        NotificationsConfig, config.notifications, toml_data.get("notifications", {})
    )
    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, writing the default file on first run.

    A .env file in the config directory is loaded first. Environment
    variables override TOML values:
    - LOCAL_PLAYLISTS_DIR
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(create_default_config(), encoding="utf-8")
        print(f"Created default configuration at: {config_path}")
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            config = _parse_config(tomllib.load(f))
    except (tomllib.TOMLDecodeError, OSError) as e:
        print(f"Error loading configuration: {e}")
        print("Using default configuration.")
        config = Config()

    return _apply_env_overrides(config)


def _apply_env_overrides(config: Config) -> Config:
    playlists_dir = os.environ.get("LOCAL_PLAYLISTS_DIR")
    if playlists_dir:
        config.storage = StorageConfig(
            playlists_dir=str(Path(playlists_dir).expanduser())
        )
    return config


def ensure_directories(config: Config) -> None:
    """Create the playlist directory and the data directory if missing."""
    config.playlists_path.mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
