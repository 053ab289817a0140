"""
Configuration for pedmeta.

Settings come from, in increasing precedence:

1. Defaults
2. A YAML file (``config_path`` argument or ``PEDMETA_CONFIG``)
3. Environment variables, including those in a ``.env`` file:
   ``PEDMETA_METADATA_DIRS`` (separated by ``os.pathsep``) and
   ``PEDMETA_LOG_LEVEL``
"""

import logging
import os
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import PedMetaError
from .models import MAX_COMPONENT_INDEX

logger = logging.getLogger("pedmeta.config")


def default_metadata_dir() -> Path:
    return Path.cwd() / "Plugins" / "PedMeta" / "PedModelMeta"


class PedMetaSettings(BaseModel):
    """Runtime settings."""

    metadata_dirs: list[Path] = Field(
        default_factory=lambda: [default_metadata_dir()],
        description="Directories searched for model metadata files, in priority order"
    )
    max_component_index: int = Field(
        default=MAX_COMPONENT_INDEX,
        ge=1,
        description="Component slots below this index are inspected when matching"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level for the command line tool"
    )

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


class ConfigError(PedMetaError):
    """The configuration file or environment is invalid."""
    pass


def load_settings(config_path: Path | str | None = None) -> PedMetaSettings:
    """
    Load settings from a YAML file and the environment.

    Args:
        config_path: Optional YAML file; defaults to ``PEDMETA_CONFIG`` if set

    Raises:
        ConfigError: If the file is missing or the values are invalid
    """
    load_dotenv(find_dotenv(usecwd=True))

    data: dict = {}
    config_path = config_path or os.getenv("PEDMETA_CONFIG")
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        logger.debug(f"Loaded config from {path}")

    env_dirs = os.getenv("PEDMETA_METADATA_DIRS")
    if env_dirs:
        data["metadata_dirs"] = [d for d in env_dirs.split(os.pathsep) if d]
    env_level = os.getenv("PEDMETA_LOG_LEVEL")
    if env_level:
        data["log_level"] = env_level

    try:
        return PedMetaSettings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
