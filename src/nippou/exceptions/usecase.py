"""
Application (use case) layer exceptions.

Use cases wrap lower-level failures so callers can map each code to an
external response. The original failure stays available as ``cause`` and
through normal exception chaining.
"""

from typing import Optional

from .base import ExceptionContext, NippouError


class UseCaseError(NippouError):
    """Base class for application-level errors."""

    code = "USE_CASE_ERROR"

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        help_text: Optional[str] = None,
    ):
        self.cause = cause
        context = ExceptionContext(
            help_text=help_text,
            error_code=self.code,
            technical_details=repr(cause) if cause is not None else None,
        )
        super().__init__(message, context)

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.code}: {self.message} (caused by: {self.cause})"
        return f"{self.code}: {self.message}"


class InvalidInputError(UseCaseError):
    """Raised when request data fails early validation."""

    code = "INVALID_INPUT"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class DomainViolationError(UseCaseError):
    """Raised when the domain model rejects the request."""

    code = "DOMAIN_VIOLATION"

    def __init__(self, cause: BaseException):
        super().__init__("domain validation failed", cause)


class RepositoryOperationError(UseCaseError):
    """Raised when persisting or loading a report fails."""

    code = "REPOSITORY_ERROR"

    def __init__(self, cause: BaseException, operation: str = "persist"):
        self.operation = operation
        super().__init__(f"failed to {operation} nippou", cause)


class NotFoundError(UseCaseError):
    """Raised when a requested report does not exist."""

    code = "NOT_FOUND"

    def __init__(self, report_id: str):
        self.report_id = report_id
        super().__init__(
            f"nippou '{report_id}' not found",
            help_text="Use 'nippou list --date YYYY-MM-DD' to find report ids",
        )


def is_domain_violation(error: BaseException) -> bool:
    return isinstance(error, DomainViolationError)
