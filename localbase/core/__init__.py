"""Core module initialization."""

from .config_manager import (
    ConfigManager,
    LocalBaseConfig,
    LoggingConfig,
    DatabaseConfig,
    LogLevel,
    load_structured_file,
)
from .logging_config import setup_logging, setup_logging_from_config, get_logger, log_with_context

__all__ = [
    "ConfigManager",
    "LocalBaseConfig",
    "LoggingConfig",
    "DatabaseConfig",
    "LogLevel",
    "load_structured_file",
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "log_with_context",
]
