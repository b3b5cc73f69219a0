"""Configuration file management for monthlies."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from monthlies.domain.expenses import DEFAULT_CAPITAL_RATIO
from monthlies.store.schema import get_db_path

DB_ENV_VAR = "MONTHLIES_DB"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings."""

    database: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = DEFAULT_LOG_LEVEL
    capital_ratio: float = DEFAULT_CAPITAL_RATIO


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "monthlies" / "config.toml"


def default_config() -> dict[str, Any]:
    return {
        "database": str(get_db_path()),
        "log_level": DEFAULT_LOG_LEVEL,
        "capital_ratio": DEFAULT_CAPITAL_RATIO,
        "server": {
            "host": DEFAULT_HOST,
            "port": DEFAULT_PORT,
            "cors_origins": ["*"],
        },
    }


def create_default_config(config_path: Path | None = None, database: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
        database: Database path to record. If None, the default is kept.
    """
    config = default_config()
    if database is not None:
        config["database"] = str(database)
    save_config(config, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def load_settings(config_path: Path | None = None) -> Settings:
    """Resolve settings from defaults, the config file and the environment.

    A missing config file means defaults. MONTHLIES_DB overrides the
    database path from the file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Resolved settings.

    Raises:
        tomllib.TOMLDecodeError: If the config file is not valid TOML.
        ValueError: If a value has the wrong type.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}

    server = config.get("server", {})
    if not isinstance(server, dict):
        raise ValueError("[server] must be a table")

    database = os.environ.get(DB_ENV_VAR) or config.get("database")
    db_path = Path(database).expanduser() if database else get_db_path()

    port = server.get("port", DEFAULT_PORT)
    if isinstance(port, bool) or not isinstance(port, int):
        raise ValueError(f"server.port must be an integer, got {port!r}")

    capital_ratio = config.get("capital_ratio", DEFAULT_CAPITAL_RATIO)
    if isinstance(capital_ratio, bool) or not isinstance(capital_ratio, (int, float)):
        raise ValueError(f"capital_ratio must be a number, got {capital_ratio!r}")

    origins = server.get("cors_origins", ["*"])
    if isinstance(origins, str):
        origins = [origins]

    return Settings(
        database=db_path,
        host=str(server.get("host", DEFAULT_HOST)),
        port=port,
        cors_origins=tuple(str(origin) for origin in origins),
        log_level=str(config.get("log_level", DEFAULT_LOG_LEVEL)).upper(),
        capital_ratio=float(capital_ratio),
    )
