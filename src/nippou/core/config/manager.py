"""
Configuration manager for nippou.

Loads the TOML configuration file, applies NIPPOU_* environment overrides
and validates the result into a NippouConfig.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import tomli_w
from pydantic import ValidationError as PydanticValidationError

from nippou.constants import ConfigDefaults
from nippou.exceptions.config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
)

from .models import NippouConfig, NippouSettings


@dataclass
class EnvironmentOverride:
    """Helper for applying environment variable overrides."""

    config_section: Dict[str, Any]
    settings: NippouSettings

    def apply_if_set(self, setting_name: str, config_key: str) -> None:
        """Apply setting if it's set in environment."""
        value = getattr(self.settings, setting_name, None)
        if value is not None:
            self.config_section[config_key] = value

    def apply_string_if_set(self, setting_name: str, config_key: str) -> None:
        """Apply string setting if it's set to a non-empty value."""
        value = getattr(self.settings, setting_name, None)
        if value:
            self.config_section[config_key] = value


def _validation_messages(error: PydanticValidationError) -> list:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        messages.append(f"{location}: {item.get('msg')}" if location else item.get("msg"))
    return messages


def default_config_file() -> Optional[Path]:
    """User config file location, falling back to the working directory."""
    candidates = [
        Path.home() / ".config" / ConfigDefaults.CONFIG_DIRECTORY_NAME,
        Path.cwd() / f".{ConfigDefaults.CONFIG_DIRECTORY_NAME}",
    ]
    for config_dir in candidates:
        try:
            config_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            continue
        return config_dir / ConfigDefaults.CONFIG_FILE_NAME
    return None


class ConfigManager:
    """Load, cache, save and export the nippou configuration."""

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to a config file. If None, uses the user config directory.
        """
        self.config_file = Path(config_file) if config_file else default_config_file()
        self._config: Optional[NippouConfig] = None

    @property
    def config_directory(self) -> Path:
        return self.config_file.parent if self.config_file else Path.cwd()

    def load_config(self) -> NippouConfig:
        """Load and validate configuration from file and environment."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}
        if self.config_file and self.config_file.exists():
            config_data = self._load_toml_file(self.config_file)

        config_data = self._apply_env_overrides(config_data)

        try:
            self._config = NippouConfig(**config_data)
        except PydanticValidationError as e:
            raise ConfigurationValidationError(_validation_messages(e)) from e
        except (ValueError, TypeError) as e:
            raise ConfigurationValidationError([f"Configuration validation failed: {e}"]) from e

        return self._config

    def _load_toml_file(self, file_path: Path) -> Dict[str, Any]:
        try:
            with open(file_path, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise InvalidConfigurationError(
                str(file_path), f"Invalid TOML syntax: {e}", "valid TOML format"
            ) from e
        except PermissionError as e:
            raise ConfigurationError(
                f"Permission denied reading configuration file: {file_path}",
                help_text="Check file permissions",
            ) from e
        except FileNotFoundError:
            return {}

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        settings = NippouSettings()

        general = config_data.setdefault("general", {})
        logging_section = general.setdefault("logging", {})
        storage_section = general.setdefault("storage", {})
        salesforce_section = config_data.setdefault("salesforce", {})

        logging_override = EnvironmentOverride(logging_section, settings)
        logging_override.apply_string_if_set("nippou_logging_level", "level")
        logging_override.apply_string_if_set("nippou_logging_format", "format")
        logging_override.apply_string_if_set("nippou_logging_file_path", "file_path")
        if settings.nippou_logging_output:
            # Comma-separated outputs
            logging_section["output"] = [
                o.strip() for o in settings.nippou_logging_output.split(",") if o.strip()
            ]

        storage_override = EnvironmentOverride(storage_section, settings)
        storage_override.apply_string_if_set("nippou_storage_backend", "backend")
        storage_override.apply_string_if_set("nippou_data_dir", "data_directory")

        sf_override = EnvironmentOverride(salesforce_section, settings)
        sf_override.apply_string_if_set("nippou_salesforce_instance_url", "instance_url")
        sf_override.apply_string_if_set("nippou_salesforce_api_version", "api_version")
        sf_override.apply_string_if_set("nippou_salesforce_login_url", "login_url")
        sf_override.apply_if_set("nippou_salesforce_timeout", "timeout")
        sf_override.apply_if_set("nippou_salesforce_max_retries", "max_retries")
        sf_override.apply_string_if_set("nippou_salesforce_access_token", "access_token")
        sf_override.apply_string_if_set("nippou_salesforce_client_id", "client_id")
        sf_override.apply_string_if_set("nippou_salesforce_client_secret", "client_secret")
        sf_override.apply_string_if_set("nippou_salesforce_username", "username")
        sf_override.apply_string_if_set("nippou_salesforce_password", "password")

        return config_data

    def _filter_none_values(self, data: Any) -> Any:
        """Recursively drop None values, which TOML cannot represent."""
        if isinstance(data, dict):
            return {k: self._filter_none_values(v) for k, v in data.items() if v is not None}
        if isinstance(data, list):
            return [self._filter_none_values(item) for item in data if item is not None]
        return data

    def _write_toml(self, config: NippouConfig, file_path: Path) -> None:
        config_dict = self._filter_none_values(config.model_dump(mode="json"))
        file_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(file_path, "wb") as f:
                tomli_w.dump(config_dict, f)
        except PermissionError as e:
            raise ConfigurationError(
                f"Permission denied writing configuration file: {file_path}",
                help_text="Check file permissions",
            ) from e

    def save_config(self, config: Optional[NippouConfig] = None) -> None:
        """Save configuration to the TOML file."""
        if config is None:
            config = self.load_config()
        if self.config_file is None:
            return
        self._write_toml(config, self.config_file)
        self._config = config

    def export_config(self, file_path: Path) -> None:
        """Export current configuration to a TOML file."""
        self._write_toml(self.load_config(), Path(file_path))

    def import_config(self, file_path: Path) -> NippouConfig:
        """Import configuration from another TOML file and save it."""
        file_path = Path(file_path)
        if not file_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {file_path}",
                help_text="Check that the file path is correct",
            )

        imported_data = self._load_toml_file(file_path)
        try:
            imported_config = NippouConfig(**imported_data)
        except PydanticValidationError as e:
            raise ConfigurationValidationError(_validation_messages(e)) from e

        self.save_config(imported_config)
        return imported_config

    def reset_config(self) -> None:
        """Reset configuration to defaults."""
        self._config = NippouConfig()
        self.save_config()
