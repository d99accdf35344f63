"""
Configuration management for LocalBase.

Handles loading, validation, and access to configuration settings.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from enum import Enum

import yaml
from pydantic import BaseModel, Field, field_validator, ValidationError, ConfigDict

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    """Valid log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: LogLevel = LogLevel.INFO
    format: str = "json"
    file: Optional[str] = None
    rotation_size: str = "10MB"
    rotation_count: int = 5
    module_levels: Optional[Dict[str, str]] = Field(
        default=None,
        description="Per-module log levels, e.g., {'localbase.database': 'DEBUG'}"
    )


class DatabaseConfig(BaseModel):
    """In-memory store configuration."""
    seed_file: Optional[str] = Field(
        default=None,
        description="YAML or JSON file mapping table names to lists of rows"
    )
    tables: List[str] = Field(
        default_factory=list,
        description="Tables to create empty when the store is built"
    )


class LocalBaseConfig(BaseModel):
    """Main LocalBase configuration schema."""

    version: str = Field(default="0.1.0", description="Configuration version")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate version format."""
        parts = v.split(".")
        if len(parts) != 3:
            raise ValueError("Version must be in format x.y.z")
        for part in parts:
            if not part.isdigit():
                raise ValueError("Version components must be numeric")
        return v

    model_config = ConfigDict(use_enum_values=True)


def load_structured_file(file_path: str) -> Any:
    """
    Load a YAML or JSON document from disk.

    Args:
        file_path: Path ending in .yaml, .yml or .json

    Returns:
        Parsed document (None for an empty YAML file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the suffix is not supported
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    with open(path, 'r') as f:
        if path.suffix in ['.yaml', '.yml']:
            return yaml.safe_load(f)
        elif path.suffix == '.json':
            return json.load(f)
        else:
            raise ValueError(f"Unsupported file format: {path.suffix}")


class ConfigManager:
    """
    Manages LocalBase configuration loading and validation.

    Configuration precedence (highest to lowest):
    1. Explicit overrides
    2. Environment variables (LOCALBASE_*)
    3. Configuration file (YAML/JSON)
    4. Defaults
    """

    def __init__(self):
        self._config: Optional[LocalBaseConfig] = None
        self._config_file: Optional[Path] = None

    def load(
        self,
        config_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None
    ) -> LocalBaseConfig:
        """
        Load and validate configuration from multiple sources.

        Args:
            config_file: Path to configuration file (YAML or JSON)
            overrides: Dictionary of explicit overrides

        Returns:
            Validated LocalBaseConfig instance

        Raises:
            ValidationError: If configuration is invalid
            FileNotFoundError: If specified config file doesn't exist
        """
        logger.info("Loading LocalBase configuration")

        config_dict: Dict[str, Any] = {}

        if config_file:
            config_dict = load_structured_file(config_file) or {}
            self._config_file = Path(config_file)
            logger.info(f"Loaded configuration from file: {config_file}")

        env_config = self._load_from_env()
        config_dict = self._merge_configs(config_dict, env_config)
        if env_config:
            logger.info(f"Applied {len(env_config)} environment variable overrides")

        if overrides:
            config_dict = self._merge_configs(config_dict, overrides)
            logger.info(f"Applied {len(overrides)} explicit overrides")

        try:
            self._config = LocalBaseConfig(**config_dict)
            logger.info("Configuration validated successfully")
            logger.debug(f"Active configuration: {json.dumps(self._config.model_dump(), indent=2)}")
            return self._config
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        if log_level := os.getenv("LOCALBASE_LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level.upper()
        if log_format := os.getenv("LOCALBASE_LOG_FORMAT"):
            config.setdefault("logging", {})["format"] = log_format.lower()
        if log_file := os.getenv("LOCALBASE_LOG_FILE"):
            config.setdefault("logging", {})["file"] = log_file

        if seed_file := os.getenv("LOCALBASE_SEED_FILE"):
            config.setdefault("database", {})["seed_file"] = seed_file

        return config

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def get_config(self) -> LocalBaseConfig:
        """
        Get the loaded configuration.

        Returns:
            LocalBaseConfig instance

        Raises:
            RuntimeError: If configuration hasn't been loaded
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._config

    def reload(self) -> LocalBaseConfig:
        """Reload configuration from the same sources."""
        config_file = str(self._config_file) if self._config_file else None
        return self.load(config_file=config_file)
