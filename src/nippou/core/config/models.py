"""
Configuration models for nippou.

Pydantic models validate the TOML configuration file; NippouSettings maps
NIPPOU_* environment variables that override it.
"""

import re
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nippou.constants import LoggingDefaults, SalesforceConstants, StorageConstants

_API_VERSION = re.compile(r"v[0-9]+\.[0-9]+")


class LogLevel(str, Enum):
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class StorageBackend(str, Enum):
    """Where reports are persisted."""

    SALESFORCE = "salesforce"
    FILE = "file"
    MEMORY = "memory"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel(LoggingDefaults.LEVEL), description="Logging level")
    format: str = Field(LoggingDefaults.FORMAT, description="Log format: console, json, rich")
    output: List[str] = Field(["console"], description="Log outputs: console, file")
    file_path: Optional[Path] = Field(None, description="Log file path")
    max_file_size: int = Field(
        LoggingDefaults.FILE_SIZE_BYTES,
        ge=LoggingDefaults.MIN_FILE_SIZE_BYTES,
        description="Maximum log file size in bytes",
    )
    backup_count: int = Field(
        LoggingDefaults.BACKUP_COUNT,
        ge=1,
        le=20,
        description="Number of backup log files to keep",
    )

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ["console", "json", "rich"]:
            raise ValueError("format must be one of: console, json, rich")
        return v

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: List[str]) -> List[str]:
        valid_outputs = {"console", "file"}
        for output in v:
            if output not in valid_outputs:
                raise ValueError(f"output must contain only: {', '.join(sorted(valid_outputs))}")
        return v


class StorageConfig(BaseModel):
    """Report storage configuration."""

    backend: StorageBackend = Field(
        StorageBackend.FILE, description="Storage backend: salesforce, file, memory"
    )
    data_directory: Path = Field(
        Path(StorageConstants.DEFAULT_DATA_DIRECTORY),
        description="Directory for the file backend",
    )

    @field_validator("data_directory")
    @classmethod
    def validate_directory(cls, v: Path) -> Path:
        if isinstance(v, str):
            v = Path(v)

        v = v.expanduser()
        if not v.is_absolute():
            v = Path.cwd() / v
        return v


class GeneralConfig(BaseModel):
    """General application configuration."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    storage: StorageConfig = Field(
        default_factory=StorageConfig, description="Storage configuration"
    )


class SalesforceConfig(BaseModel):
    """Salesforce REST API configuration.

    Authenticate either with a static ``access_token`` or with the OAuth
    username-password flow (``client_id``, ``client_secret``, ``username``,
    ``password``).
    """

    instance_url: Optional[str] = Field(None, description="Org instance URL")
    api_version: str = Field(SalesforceConstants.DEFAULT_API_VERSION, description="REST API version")
    login_url: str = Field(SalesforceConstants.DEFAULT_LOGIN_URL, description="OAuth login host")
    timeout: int = Field(
        SalesforceConstants.REQUEST_TIMEOUT_SECONDS, ge=1, le=300, description="Request timeout in seconds"
    )
    max_retries: int = Field(
        SalesforceConstants.MAX_RETRIES, ge=0, le=10, description="Retries for transient failures"
    )
    retry_base_delay: float = Field(
        SalesforceConstants.RETRY_BASE_DELAY_SECONDS,
        ge=0.0,
        le=60.0,
        description="Base delay for exponential backoff in seconds",
    )
    retry_jitter: bool = Field(False, description="Add up to 10% random jitter to retry delays")
    object_name: str = Field(SalesforceConstants.REPORT_OBJECT_NAME, description="Custom object API name")
    external_id_field: str = Field(
        SalesforceConstants.REPORT_EXTERNAL_ID_FIELD, description="External id field holding the report id"
    )
    access_token: Optional[str] = Field(None, description="Static access token")
    client_id: Optional[str] = Field(None, description="Connected app consumer key")
    client_secret: Optional[str] = Field(None, description="Connected app consumer secret")
    username: Optional[str] = Field(None, description="Salesforce username")
    password: Optional[str] = Field(None, description="Salesforce password (with security token)")

    @field_validator("access_token", "client_id", "client_secret", "username", "password", "instance_url")
    @classmethod
    def validate_optional_text(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v.strip()) == 0:
            return None
        return v

    @field_validator("instance_url", "login_url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.startswith(("https://", "http://")):
            raise ValueError("URL must start with https:// or http://")
        return v.rstrip("/")

    @field_validator("api_version")
    @classmethod
    def validate_api_version(cls, v: str) -> str:
        if not v.startswith("v"):
            v = f"v{v}"
        if not _API_VERSION.fullmatch(v):
            raise ValueError("api_version must look like v59.0")
        return v

    @model_validator(mode="after")
    def validate_credentials_together(self) -> "SalesforceConfig":
        if (self.username is None) != (self.password is None):
            raise ValueError("Both username and password must be provided together")
        return self

    def uses_password_flow(self) -> bool:
        return self.access_token is None and self.username is not None

    def missing_credentials(self) -> List[str]:
        """Names of settings still required to reach the API."""
        if self.access_token:
            return [] if self.instance_url else ["instance_url"]
        return [
            name
            for name in ("client_id", "client_secret", "username", "password")
            if not getattr(self, name)
        ]


class NippouConfig(BaseModel):
    """Main nippou configuration model."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    salesforce: SalesforceConfig = Field(default_factory=SalesforceConfig)

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
        "str_strip_whitespace": True,
    }


class NippouSettings(BaseSettings):
    """Settings that can be overridden by environment variables."""

    # Logging settings
    nippou_logging_level: Optional[str] = Field(None, alias="NIPPOU_LOGGING_LEVEL")
    nippou_logging_format: Optional[str] = Field(None, alias="NIPPOU_LOGGING_FORMAT")
    nippou_logging_output: Optional[str] = Field(None, alias="NIPPOU_LOGGING_OUTPUT")
    nippou_logging_file_path: Optional[str] = Field(None, alias="NIPPOU_LOGGING_FILE_PATH")

    # Storage settings
    nippou_storage_backend: Optional[str] = Field(None, alias="NIPPOU_STORAGE_BACKEND")
    nippou_data_dir: Optional[str] = Field(None, alias="NIPPOU_DATA_DIR")

    # Salesforce settings
    nippou_salesforce_instance_url: Optional[str] = Field(None, alias="NIPPOU_SALESFORCE_INSTANCE_URL")
    nippou_salesforce_api_version: Optional[str] = Field(None, alias="NIPPOU_SALESFORCE_API_VERSION")
    nippou_salesforce_login_url: Optional[str] = Field(None, alias="NIPPOU_SALESFORCE_LOGIN_URL")
    nippou_salesforce_timeout: Optional[int] = Field(None, alias="NIPPOU_SALESFORCE_TIMEOUT")
    nippou_salesforce_max_retries: Optional[int] = Field(None, alias="NIPPOU_SALESFORCE_MAX_RETRIES")
    nippou_salesforce_access_token: Optional[str] = Field(None, alias="NIPPOU_SALESFORCE_ACCESS_TOKEN")
    nippou_salesforce_client_id: Optional[str] = Field(None, alias="NIPPOU_SALESFORCE_CLIENT_ID")
    nippou_salesforce_client_secret: Optional[str] = Field(None, alias="NIPPOU_SALESFORCE_CLIENT_SECRET")
    nippou_salesforce_username: Optional[str] = Field(None, alias="NIPPOU_SALESFORCE_USERNAME")
    nippou_salesforce_password: Optional[str] = Field(None, alias="NIPPOU_SALESFORCE_PASSWORD")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )
