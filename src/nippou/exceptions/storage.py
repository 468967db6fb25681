"""
Storage-related exceptions.

All exceptions raised by repository adapters and the Salesforce REST layer.
"""

from typing import List, Optional

from ..constants import HttpStatus, SalesforceConstants
from .base import ExceptionContext, NippouError


class StorageError(NippouError):
    """Base class for storage-related errors."""


class RepositoryError(StorageError):
    """Raised when a repository operation fails."""

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        message = f"repository {operation} failed: {cause}"
        context = ExceptionContext(
            help_text="Check storage connectivity and the stored record format",
            error_code="REPOSITORY_ERROR",
            context={"operation": operation},
            technical_details=repr(cause),
        )
        super().__init__(message, context)


class SalesforceAPIError(StorageError):
    """Raised when the Salesforce REST API answers with an error status."""

    def __init__(
        self,
        status_code: int,
        message: str,
        sf_error_code: Optional[str] = None,
        fields: Optional[List[str]] = None,
    ):
        self.status_code = status_code
        self.sf_error_code = sf_error_code
        self.fields = list(fields or [])

        if sf_error_code:
            text = f"salesforce API error [{status_code}] {sf_error_code}: {message}"
        else:
            text = f"salesforce API error [{status_code}]: {message}"

        context = ExceptionContext(
            error_code="SALESFORCE_API_ERROR",
            context={"status_code": status_code, "sf_error_code": sf_error_code},
        )
        super().__init__(text, context)
        self.api_message = message

    def is_not_found(self) -> bool:
        return self.status_code == HttpStatus.NOT_FOUND

    def is_unauthorized(self) -> bool:
        return self.status_code == HttpStatus.UNAUTHORIZED

    def is_forbidden(self) -> bool:
        return self.status_code == HttpStatus.FORBIDDEN

    def is_rate_limited(self) -> bool:
        return self.status_code == HttpStatus.TOO_MANY_REQUESTS

    def is_retryable(self) -> bool:
        return self.status_code in SalesforceConstants.RETRYABLE_STATUS_CODES


class AuthenticationError(StorageError):
    """Raised when an access token cannot be obtained."""

    def __init__(self, provider: str, details: Optional[str] = None):
        message = f"Authentication failed for {provider}"
        if details:
            message += f": {details}"
        context = ExceptionContext(
            help_text="Check the Salesforce credentials with 'nippou config --show'",
            error_code="AUTHENTICATION_ERROR",
            context={"provider": provider},
        )
        super().__init__(message, context)
