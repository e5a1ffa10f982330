"""
Configuration management for Sparkle Stories
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


VALID_BACKENDS = {"mpv", "silent"}


@dataclass
class CatalogConfig:
    """Configuration for the story catalog and music library files."""

    stories_path: str = "data/stories.json"
    music_path: str = "data/music.json"


@dataclass
class PlayerConfig:
    """Configuration for the background music player."""

    backend: str = "mpv"  # 'mpv' or 'silent'
    mpv_socket_path: Optional[str] = None
    default_volume: float = 0.7
    poll_interval: float = 0.5  # Seconds between end-of-track checks

    def validate(self) -> None:
        """Validate player configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if self.backend not in VALID_BACKENDS:
            raise ValueError(
                f"Invalid player backend: {self.backend!r}. "
                f"Valid backends are: {VALID_BACKENDS}"
            )
        if not 0.0 <= self.default_volume <= 1.0:
            raise ValueError(
                f"default_volume must be between 0 and 1, got {self.default_volume}"
            )
        if self.poll_interval <= 0:
            raise ValueError(
                f"poll_interval must be positive, got {self.poll_interval}"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/sparkle-stories/sparkle-stories.log)
    )
    max_file_size_mb: int = 10
    backup_count: int = 5
    console_output: bool = False


@dataclass
class WebConfig:
    """Configuration for the web API."""

    host: str = "127.0.0.1"
    port: int = 8000
    allowed_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:3000"]
    )


@dataclass
class Config:
    """Main configuration object."""

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "sparkle-stories"
    return Path.home() / ".config" / "sparkle-stories"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in the project root (the directory holding pyproject.toml).

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            if config_path.exists():
                return config_path
            return None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/sparkle-stories (or ~/.config/sparkle-stories)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "sparkle-stories"
    return Path.home() / ".local" / "share" / "sparkle-stories"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Sparkle Stories Configuration

[catalog]
# JSON array of stories (id, title, labels, characterPhoto, coverImage,
# description, story, author, createdAt, featured)
stories_path = "data/stories.json"

# JSON array of music tracks (id, title, artist, filePath, duration, coverArt)
music_path = "data/music.json"

[player]
# Audio backend: "mpv" (requires mpv on PATH) or "silent"
backend = "mpv"

# Path for mpv socket (auto-detected if not specified)
# mpv_socket_path = "/tmp/sparkle-mpv-socket"

# Volume used when no saved preference exists (0.0 - 1.0)
default_volume = 0.7

# Seconds between end-of-track checks
poll_interval = 0.5

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/sparkle-stories/sparkle-stories.log)
# log_file = "/path/to/sparkle-stories.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to console (useful for debugging)
console_output = false

[web]
host = "127.0.0.1"
port = 8000
allowed_origins = ["http://localhost:3000"]
""".strip()


def parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML data, falling back to defaults per key."""
    config = Config()

    if "catalog" in toml_data:
        catalog_data = toml_data["catalog"]
        config.catalog = CatalogConfig(
            stories_path=str(
                Path(
                    catalog_data.get("stories_path", config.catalog.stories_path)
                ).expanduser()
            ),
            music_path=str(
                Path(
                    catalog_data.get("music_path", config.catalog.music_path)
                ).expanduser()
            ),
        )

    if "player" in toml_data:
        player_data = toml_data["player"]
        config.player = PlayerConfig(
            backend=player_data.get("backend", config.player.backend),
            mpv_socket_path=player_data.get("mpv_socket_path"),
            default_volume=float(
                player_data.get("default_volume", config.player.default_volume)
            ),
            poll_interval=float(
                player_data.get("poll_interval", config.player.poll_interval)
            ),
        )
        try:
            config.player.validate()
        except ValueError as e:
            print(f"Warning: Invalid player configuration: {e}")
            print("Using default player configuration.")
            config.player = PlayerConfig()

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
            backup_count=logging_data.get(
                "backup_count", config.logging.backup_count
            ),
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    if "web" in toml_data:
        web_data = toml_data["web"]
        config.web = WebConfig(
            host=web_data.get("host", config.web.host),
            port=int(web_data.get("port", config.web.port)),
            allowed_origins=list(
                web_data.get("allowed_origins", config.web.allowed_origins)
            ),
        )

    return config


def apply_env_overrides(config: Config) -> Config:
    """Override file-based settings with environment variables if present.

    - SPARKLE_STORIES_PATH
    - SPARKLE_MUSIC_PATH
    - ALLOWED_ORIGINS (comma-separated)
    """
    stories_path = os.environ.get("SPARKLE_STORIES_PATH")
    music_path = os.environ.get("SPARKLE_MUSIC_PATH")
    allowed_origins = os.environ.get("ALLOWED_ORIGINS", "")

    if stories_path:
        config.catalog.stories_path = stories_path
    if music_path:
        config.catalog.music_path = music_path
    if allowed_origins:
        config.web.allowed_origins = [
            origin.strip() for origin in allowed_origins.split(",") if origin.strip()
        ]

    return config


def load_config() -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values (see apply_env_overrides).
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
        return apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
        config = parse_config(toml_data)
    except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        config = Config()

    return apply_env_overrides(config)


def ensure_directories() -> None:
    """Ensure all necessary directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
