"""
Tests for the CLI error decorator.
"""

import pytest

from nippou.cli.error_handlers import EXIT_FAILURE, handle_cli_errors
from nippou.exceptions import (
    DomainViolationError,
    InvalidInputError,
    NotFoundError,
    RepositoryError,
    RepositoryOperationError,
    ValidationError,
)


def _raising(error):
    @handle_cli_errors
    def command():
        raise error

    return command


@pytest.mark.usefixtures("restore_logging")
class TestHandleCliErrors:
    """Test that each error family exits with status 1 and a readable message."""

    def test_passes_result_through(self):
        @handle_cli_errors
        def command():
            return "ok"

        assert command() == "ok"

    @pytest.mark.parametrize(
        "error,expected",
        [
            (InvalidInputError("date", "cannot be empty"), "Invalid input: date: cannot be empty"),
            (
                DomainViolationError(ValidationError("content", "content cannot be empty")),
                "Rejected: VALIDATION_ERROR: content - content cannot be empty",
            ),
            (NotFoundError("abc"), "Not found"),
            (
                RepositoryOperationError(RepositoryError("save", OSError("disk full")), "persist"),
                "Storage error",
            ),
            (OSError("broken pipe"), "System error: broken pipe"),
        ],
    )
    def test_exit_status_and_message(self, error, expected, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _raising(error)()

        assert exc_info.value.code == EXIT_FAILURE
        assert expected in capsys.readouterr().err

    def test_keyboard_interrupt(self, capsys):
        with pytest.raises(SystemExit):
            _raising(KeyboardInterrupt())()

        assert "cancelled" in capsys.readouterr().err

    def test_unexpected_errors_propagate(self):
        with pytest.raises(ZeroDivisionError):
            _raising(ZeroDivisionError())()
