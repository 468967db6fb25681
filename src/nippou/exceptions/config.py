"""
Configuration-related exceptions.

All exceptions related to configuration loading, validation, and management.
"""

from typing import Any, List, Optional

from .base import ExceptionContext, NippouError


class ConfigurationError(NippouError):
    """Base class for configuration-related errors."""

    def __init__(self, message: str, help_text: Optional[str] = None):
        context = ExceptionContext(help_text=help_text, error_code="CONFIGURATION_ERROR")
        super().__init__(message, context)


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration contains invalid values."""

    def __init__(self, field: str, value: Any, expected: str):
        self.field = field
        self.value = value
        self.expected = expected
        message = f"Invalid configuration for '{field}': got {value!r}, expected {expected}"
        help_text = f"Check the configuration for '{field}' and use {expected}"
        super().__init__(message, help_text)
        self.error_code = "INVALID_CONFIGURATION"


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, help_text: Optional[str] = None):
        self.field = field
        message = f"Missing required configuration: '{field}'"
        if not help_text:
            help_text = (
                f"Provide a value for '{field}' in your configuration file "
                "or environment variables"
            )
        super().__init__(message, help_text)
        self.error_code = "MISSING_CONFIGURATION"


class ConfigurationValidationError(ConfigurationError):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        message = "Configuration validation failed:"
        for error in errors:
            message += f"\n  - {error}"
        help_text = "Check your configuration file and fix the validation errors listed above"
        super().__init__(message, help_text)
        self.error_code = "CONFIGURATION_VALIDATION_ERROR"
