"""
Configuration management for nippou.

Usage:
    from nippou.core.config import ConfigManager

    config = ConfigManager().load_config()
    backend = config.general.storage.backend
"""

from ...exceptions.config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)
from .manager import ConfigManager, default_config_file
from .models import (
    GeneralConfig,
    LoggingConfig,
    LogLevel,
    NippouConfig,
    NippouSettings,
    SalesforceConfig,
    StorageBackend,
    StorageConfig,
)


__all__ = [
    "NippouConfig",
    "GeneralConfig",
    "LoggingConfig",
    "StorageConfig",
    "StorageBackend",
    "SalesforceConfig",
    "LogLevel",
    "NippouSettings",
    "ConfigManager",
    "default_config_file",
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "ConfigurationValidationError",
]
