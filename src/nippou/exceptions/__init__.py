"""
nippou Exception Hierarchy

Exception Hierarchy:
    NippouError (base)
    ├── DomainError
    │   ├── ValidationError
    │   ├── InvalidFormatError
    │   ├── DuplicateError
    │   ├── LimitExceededError
    │   └── NilReceiverError
    ├── UseCaseError
    │   ├── InvalidInputError
    │   ├── DomainViolationError
    │   ├── RepositoryOperationError
    │   └── NotFoundError
    ├── StorageError
    │   ├── RepositoryError
    │   ├── SalesforceAPIError
    │   └── AuthenticationError
    └── ConfigurationError
        ├── InvalidConfigurationError
        ├── MissingConfigurationError
        └── ConfigurationValidationError
"""

from .base import ExceptionContext, NippouError

from .config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)

from .domain import (
    DomainError,
    DuplicateError,
    ErrorKind,
    InvalidFormatError,
    LimitExceededError,
    NilReceiverError,
    ValidationError,
    is_validation_error,
)

from .storage import (
    AuthenticationError,
    RepositoryError,
    SalesforceAPIError,
    StorageError,
)

from .usecase import (
    DomainViolationError,
    InvalidInputError,
    NotFoundError,
    RepositoryOperationError,
    UseCaseError,
    is_domain_violation,
)

__all__ = [
    # Base
    "NippouError",
    "ExceptionContext",
    # Domain
    "ErrorKind",
    "DomainError",
    "ValidationError",
    "InvalidFormatError",
    "DuplicateError",
    "LimitExceededError",
    "NilReceiverError",
    "is_validation_error",
    # Use cases
    "UseCaseError",
    "InvalidInputError",
    "DomainViolationError",
    "RepositoryOperationError",
    "NotFoundError",
    "is_domain_violation",
    # Storage
    "StorageError",
    "RepositoryError",
    "SalesforceAPIError",
    "AuthenticationError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "ConfigurationValidationError",
]
