"""
Unit tests for the exception hierarchy.
"""

import pytest

from nippou.exceptions import (
    AuthenticationError,
    ConfigurationValidationError,
    DomainError,
    DomainViolationError,
    DuplicateError,
    ErrorKind,
    ExceptionContext,
    InvalidFormatError,
    InvalidInputError,
    LimitExceededError,
    MissingConfigurationError,
    NilReceiverError,
    NippouError,
    NotFoundError,
    RepositoryError,
    RepositoryOperationError,
    SalesforceAPIError,
    StorageError,
    UseCaseError,
    ValidationError,
    is_domain_violation,
    is_validation_error,
)


class TestNippouError:
    """Test the base error."""

    def test_str_lists_context_and_hint(self):
        error = NippouError(
            "save failed",
            ExceptionContext(help_text="retry later", context={"operation": "save", "status": None}),
        )

        assert str(error) == "save failed (operation=save) Hint: retry later"

    def test_add_context_and_to_dict(self):
        error = NippouError("boom", ExceptionContext(error_code="X", correlation_id="abc123"))

        raised = error.add_context(report_id="r-1")

        assert raised is error
        data = error.to_dict()
        assert data["error_type"] == "NippouError"
        assert data["error_code"] == "X"
        assert data["context"] == {"report_id": "r-1"}
        assert data["correlation_id"] == "abc123"


class TestDomainErrors:
    """Test domain error kinds and formatting."""

    @pytest.mark.parametrize(
        "cls,kind",
        [
            (ValidationError, ErrorKind.VALIDATION),
            (InvalidFormatError, ErrorKind.INVALID_FORMAT),
            (DuplicateError, ErrorKind.DUPLICATE),
            (LimitExceededError, ErrorKind.LIMIT_EXCEEDED),
            (NilReceiverError, ErrorKind.NIL_RECEIVER),
        ],
    )
    def test_kind_and_code(self, cls, kind):
        error = cls("field", "message")

        assert isinstance(error, DomainError)
        assert isinstance(error, NippouError)
        assert error.kind == kind
        assert error.error_code == kind.value

    def test_string_with_field(self):
        error = ValidationError("content", "content cannot be empty")

        assert str(error) == "VALIDATION_ERROR: content - content cannot be empty"

    def test_string_without_field(self):
        assert str(DuplicateError("", "already there")) == "DUPLICATE_ERROR: already there"

    def test_is_validation_error(self):
        assert is_validation_error(ValidationError("f", "m"))
        assert not is_validation_error(InvalidFormatError("f", "m"))
        assert not is_validation_error(ValueError("x"))


class TestUseCaseErrors:
    """Test application error wrapping."""

    def test_invalid_input(self):
        error = InvalidInputError("location.latitude", "must be between -90 and 90")

        assert error.field == "location.latitude"
        assert error.code == "INVALID_INPUT"
        assert str(error) == "INVALID_INPUT: location.latitude: must be between -90 and 90"

    def test_domain_violation_keeps_cause(self):
        cause = DuplicateError("tag", "tag already exists")
        error = DomainViolationError(cause)

        assert error.cause is cause
        assert "caused by" in str(error)
        assert is_domain_violation(error)
        assert not is_domain_violation(cause)

    def test_repository_operation(self):
        error = RepositoryOperationError(RuntimeError("boom"), "persist")

        assert error.message == "failed to persist nippou"
        assert isinstance(error, UseCaseError)

    def test_not_found(self):
        error = NotFoundError("abc")

        assert error.report_id == "abc"
        assert error.help_text


class TestStorageErrors:
    """Test Salesforce and repository errors."""

    @pytest.mark.parametrize("status", [429, 502, 503, 504])
    def test_retryable_statuses(self, status):
        assert SalesforceAPIError(status, "x").is_retryable()

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 500])
    def test_non_retryable_statuses(self, status):
        assert not SalesforceAPIError(status, "x").is_retryable()

    def test_status_helpers(self):
        assert SalesforceAPIError(404, "x").is_not_found()
        assert SalesforceAPIError(401, "x").is_unauthorized()
        assert SalesforceAPIError(403, "x").is_forbidden()
        assert SalesforceAPIError(429, "x").is_rate_limited()

    def test_api_error_fields(self):
        error = SalesforceAPIError(400, "bad field", "INVALID_FIELD", ["Tags__c"])

        assert error.status_code == 400
        assert error.sf_error_code == "INVALID_FIELD"
        assert error.fields == ["Tags__c"]
        assert error.api_message == "bad field"

    def test_repository_error(self):
        cause = OSError("disk full")
        error = RepositoryError("save", cause)

        assert isinstance(error, StorageError)
        assert error.operation == "save"
        assert error.cause is cause

    def test_authentication_error(self):
        error = AuthenticationError("salesforce", "invalid_grant")

        assert "invalid_grant" in error.message
        assert isinstance(error, StorageError)


class TestConfigurationErrors:
    """Test configuration error messages."""

    def test_missing_configuration(self):
        error = MissingConfigurationError("salesforce.client_id")

        assert "salesforce.client_id" in error.message
        assert error.error_code == "MISSING_CONFIGURATION"

    def test_validation_errors_are_listed(self):
        error = ConfigurationValidationError(["a: bad", "b: worse"])

        assert error.errors == ["a: bad", "b: worse"]
        assert "  - a: bad" in error.message
