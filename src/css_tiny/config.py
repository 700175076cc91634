"""Configuration management for CSS::Tiny."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator

from .utils.errors import ConfigurationError


class StorageConfig(BaseModel):
    """Configuration for reading and writing stylesheet files."""

    encoding: str = "utf-8"
    file_mode: int = 0o666  # before umask
    lock: bool = True

    @field_validator("file_mode")
    @classmethod
    def _check_file_mode(cls, value: int) -> int:
        if not 0 <= value <= 0o7777:
            raise ValueError(f"file_mode must be between 0 and 0o7777, got {oct(value)}")
        return value


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "WARNING"
    format: str = "text"
    file: Optional[str] = None


class CssTinyConfig(BaseModel):
    """Main configuration class for CSS::Tiny."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    current_dir = Path.cwd()
    config_files = [
        current_dir / "css-tiny.yaml",
        current_dir / "css-tiny.yml",
        current_dir / "config" / "css-tiny.yaml",
    ]

    for config_file in config_files:
        if config_file.exists():
            return config_file

    return current_dir / "config" / "css-tiny.yaml"


def load_config(config_path: Optional[str] = None) -> CssTinyConfig:
    """Load configuration from file or environment variables."""
    path: Path
    if config_path is None:
        path = get_default_config_path()
    else:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Config file {path} does not exist")

    config_dict: Dict[str, Any] = {}

    if path.exists():
        try:
            with open(path, "r") as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {path}: {e}")
        if file_config:
            if not isinstance(file_config, dict):
                raise ConfigurationError(f"Config file {path} must contain a mapping")
            config_dict.update(file_config)

    env_overrides = _get_env_overrides()
    _deep_update(config_dict, env_overrides)

    try:
        return CssTinyConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _get_env_overrides() -> Dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: Dict[str, Any] = {}

    # Storage configuration
    if os.getenv("CSS_TINY_ENCODING"):
        overrides.setdefault("storage", {})["encoding"] = os.getenv("CSS_TINY_ENCODING")

    if os.getenv("CSS_TINY_FILE_MODE"):
        try:
            overrides.setdefault("storage", {})["file_mode"] = int(
                os.getenv("CSS_TINY_FILE_MODE", ""), 8
            )
        except ValueError:
            raise ConfigurationError(
                f"CSS_TINY_FILE_MODE must be an octal number, got {os.getenv('CSS_TINY_FILE_MODE')!r}"
            )

    if os.getenv("CSS_TINY_LOCK"):
        overrides.setdefault("storage", {})["lock"] = os.getenv("CSS_TINY_LOCK", "").lower() not in (
            "0",
            "false",
            "no",
            "off",
        )

    # Logging configuration
    if os.getenv("LOG_LEVEL"):
        overrides.setdefault("logging", {})["level"] = os.getenv("LOG_LEVEL")

    if os.getenv("LOG_FILE"):
        overrides.setdefault("logging", {})["file"] = os.getenv("LOG_FILE")

    if os.getenv("LOG_FORMAT"):
        overrides.setdefault("logging", {})["format"] = os.getenv("LOG_FORMAT")

    return overrides


def _deep_update(base_dict: Dict[str, Any], update_dict: Dict[str, Any]) -> None:
    """Deep update a dictionary with another dictionary."""
    for key, value in update_dict.items():
        if key in base_dict and isinstance(base_dict[key], dict) and isinstance(value, dict):
            _deep_update(base_dict[key], value)
        else:
            base_dict[key] = value


def save_config(config: CssTinyConfig, config_path: Optional[str] = None) -> None:
    """Save configuration to file."""
    path: Path
    if config_path is None:
        path = get_default_config_path()
    else:
        path = Path(config_path)

    path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.model_dump()

    with open(path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, indent=2)
