"""TOML configuration loader with deep merge support."""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "STRATUM_CONFIG_DIR"
ENVIRONMENT_ENV = "STRATUM_ENV"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    STRATUM_CONFIG_DIR overrides the lookup; otherwise the nearest
    'config/' directory in the current directory or its parents is used.
    """
    config_dir_env = os.environ.get(CONFIG_DIR_ENV)
    if config_dir_env:
        path = Path(config_dir_env)
        if not path.exists():
            raise FileNotFoundError(f"Config directory not found: {config_dir_env}")
        return path

    current = Path.cwd()
    for _ in range(5):  # Look up to 5 levels
        config_path = current / "config"
        if config_path.exists():
            return config_path
        current = current.parent

    return Path("config")


def get_environment() -> str:
    """Get the current environment from STRATUM_ENV, 'development' by default."""
    return os.environ.get(ENVIRONMENT_ENV, "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    Nested dictionaries merge recursively; any other value in override
    replaces the one in base. Neither argument is modified.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def resolve_config_path(path: str | Path, config_dir: Path | None = None) -> Path:
    """Resolve a path from configuration relative to the config directory."""
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return (config_dir or get_config_dir()) / candidate


def load_config(config_dir: Path | None = None, env: str | None = None) -> dict[str, Any]:
    """Load configuration from TOML files.

    Loading order:
    1. config/default.toml (required)
    2. config/{STRATUM_ENV}.toml (optional)

    Args:
        config_dir: Directory to read from instead of get_config_dir()
        env: Environment name instead of get_environment()

    Returns:
        Merged configuration dictionary
    """
    config_dir = config_dir or get_config_dir()
    env = env or get_environment()

    default_path = config_dir / "default.toml"
    if not default_path.exists():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            f"Create config/default.toml or set {CONFIG_DIR_ENV}."
        )

    config = load_toml(default_path)

    env_path = config_dir / f"{env}.toml"
    if env_path.exists():
        config = deep_merge(config, load_toml(env_path))

    return config
