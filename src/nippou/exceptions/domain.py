"""
Domain validation exceptions.

Every invariant violation in the report model is raised as a DomainError
carrying a machine-readable kind, the offending field and a message.
"""

from enum import Enum
from typing import Optional

from .base import ExceptionContext, NippouError


class ErrorKind(str, Enum):
    """Machine-readable failure kinds for the domain model."""

    VALIDATION = "VALIDATION_ERROR"
    INVALID_FORMAT = "INVALID_FORMAT"
    DUPLICATE = "DUPLICATE_ERROR"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
    NIL_RECEIVER = "NIL_RECEIVER"

    def __str__(self) -> str:
        return self.value


class DomainError(NippouError):
    """Base class for report model failures."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, field: str, message: str, help_text: Optional[str] = None):
        self.field = field
        context = ExceptionContext(
            help_text=help_text,
            error_code=self.kind.value,
            context={"field": field} if field else {},
        )
        super().__init__(message, context)

    def __str__(self) -> str:
        if self.field:
            return f"{self.error_code}: {self.field} - {self.message}"
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field!r}, message={self.message!r})"

    def to_dict(self):
        result = super().to_dict()
        result["kind"] = self.kind.value
        result["field"] = self.field
        return result


class ValidationError(DomainError):
    """A value is missing or outside its allowed range."""

    kind = ErrorKind.VALIDATION


class InvalidFormatError(DomainError):
    """A value does not match its required syntax."""

    kind = ErrorKind.INVALID_FORMAT


class DuplicateError(DomainError):
    """A value already exists where uniqueness is required."""

    kind = ErrorKind.DUPLICATE


class LimitExceededError(DomainError):
    """A length or count limit was exceeded."""

    kind = ErrorKind.LIMIT_EXCEEDED


class NilReceiverError(DomainError):
    """An operation required a report but was handed none.

    This is a programming error and should be surfaced, not recovered from.
    """

    kind = ErrorKind.NIL_RECEIVER


def is_validation_error(error: BaseException) -> bool:
    """Check whether ``error`` is a domain error of kind VALIDATION."""
    return isinstance(error, DomainError) and error.kind is ErrorKind.VALIDATION
