"""Configuration management for tsk.

Reads configuration from ~/.config/tsk.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass, field
from importlib import metadata
from typing import List, Optional
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    host: str = "0.0.0.0"
    port: int = 8080
    static_dir: Optional[Path] = None
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "tsk"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="tsk.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "tsk.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def get_version() -> str:
    """Get the installed tsk version, or "dev" when running from a checkout."""
    try:
        return metadata.version("tsk")
    except metadata.PackageNotFoundError:
        return "dev"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "tsk"))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "tsk.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    server_config = data.get("server", {})
    static_dir = server_config.get("static_dir", "")

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        host=server_config.get("host", "0.0.0.0"),
        port=int(server_config.get("port", 8080)),
        static_dir=Path(static_dir) if static_dir else None,
        cors_origins=list(server_config.get("cors_origins", ["*"])),
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # TOML has no null, so an unset static dir is written as ""
    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "server": {
            "host": config.host,
            "port": config.port,
            "static_dir": str(config.static_dir) if config.static_dir else "",
            "cors_origins": list(config.cors_origins),
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
