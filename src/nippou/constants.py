"""
Application constants and configuration values.

This module centralizes limits, formats and Salesforce defaults so the
domain model, the adapters and the CLI agree on the same values.
"""


class ReportLimits:
    """Validation limits for reports and their value objects."""

    # Content is a long text area (64KB)
    MAX_CONTENT_LENGTH = 65536
    MAX_ADDRESS_LENGTH = 500
    MAX_MODEL_NAME_LENGTH = 100
    MAX_TAG_LENGTH = 50
    MAX_TAG_COUNT = 20

    MIN_LATITUDE = -90.0
    MAX_LATITUDE = 90.0
    MIN_LONGITUDE = -180.0
    MAX_LONGITUDE = 180.0


class DateFormats:
    """Canonical text formats."""

    DATE = "%Y-%m-%d"
    TIMESTAMP = "%Y-%m-%dT%H:%M:%S%z"
    # Salesforce audit fields, e.g. 2026-01-08T09:30:00.000+0000
    SALESFORCE_TIMESTAMP = "%Y-%m-%dT%H:%M:%S.%f%z"


class SalesforceConstants:
    """Salesforce REST API defaults."""

    DEFAULT_API_VERSION = "v59.0"
    DEFAULT_LOGIN_URL = "https://login.salesforce.com"
    TOKEN_ENDPOINT = "/services/oauth2/token"

    REQUEST_TIMEOUT_SECONDS = 30
    MAX_RETRIES = 3
    RETRY_BASE_DELAY_SECONDS = 0.5
    RETRY_MAX_DELAY_SECONDS = 30.0

    # Status codes worth retrying
    RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})

    REPORT_OBJECT_NAME = "Nippou__c"
    REPORT_EXTERNAL_ID_FIELD = "ExternalId__c"
    TAG_SEPARATOR = ","


class StorageConstants:
    """Local storage defaults."""

    DEFAULT_DATA_DIRECTORY = "./data/nippou"
    RECORD_SUFFIX = ".json"
    JSON_INDENT = 2


class HttpStatus:
    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    TOO_MANY_REQUESTS = 429
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504


class LoggingDefaults:
    """Logging defaults shared by the config models and the logging package."""

    LEVEL = "WARNING"
    FORMAT = "console"
    FILE_SIZE_BYTES = 10 * 1024 * 1024
    MIN_FILE_SIZE_BYTES = 1024
    BACKUP_COUNT = 5


class ConfigDefaults:
    """Configuration file locations and environment prefix."""

    CONFIG_DIRECTORY_NAME = "nippou"
    CONFIG_FILE_NAME = "config.toml"
    ENV_PREFIX = "NIPPOU_"
