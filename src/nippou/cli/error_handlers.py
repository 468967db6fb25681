"""
Centralized error handling for the CLI.

Every command is wrapped with ``handle_cli_errors`` so failures are shown
consistently and the process exits with status 1.
"""

import functools
import sys

from rich.console import Console

from ..exceptions import (
    AuthenticationError,
    ConfigurationError,
    DomainError,
    DomainViolationError,
    InvalidInputError,
    NippouError,
    NotFoundError,
    RepositoryOperationError,
    StorageError,
)
from ..logging_integration import get_logger

EXIT_FAILURE = 1

console = Console(stderr=True)


def handle_cli_errors(func):
    """Decorator to render nippou errors and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            _print_error("\nOperation cancelled by user", "yellow")
            sys.exit(EXIT_FAILURE)
        except InvalidInputError as e:
            _print_error(f"Invalid input: {e.field}: {e.reason}")
            _fail(e)
        except DomainViolationError as e:
            _print_error(f"Rejected: {_describe_cause(e)}")
            _fail(e)
        except NotFoundError as e:
            _print_error(f"Not found: {e.message}")
            _fail(e)
        except RepositoryOperationError as e:
            _print_error(f"Storage error: {e.message}: {_describe_cause(e)}")
            _fail(e)
        except AuthenticationError as e:
            _print_error(f"Authentication failed: {e.message}")
            _fail(e)
        except ConfigurationError as e:
            _print_error(f"Configuration error: {e.message}")
            _fail(e)
        except StorageError as e:
            _print_error(f"Storage error: {e.message}")
            _fail(e)
        except NippouError as e:
            _print_error(f"Error: {e.message}")
            _fail(e)
        except OSError as e:
            _print_error(f"System error: {e}")
            get_logger("nippou.cli.error").error("System error", error=str(e))
            sys.exit(EXIT_FAILURE)

    return wrapper


def _describe_cause(error: NippouError) -> str:
    cause = getattr(error, "cause", None)
    if cause is None:
        return error.message
    if isinstance(cause, DomainError):
        return str(cause)
    if isinstance(cause, NippouError):
        return cause.message
    return str(cause)


def _print_error(message: str, style: str = "red") -> None:
    console.print(f"[{style}]{message}[/{style}]", highlight=False)


def _fail(error: NippouError) -> None:
    if error.help_text:
        console.print(f"[blue]Hint: {error.help_text}[/blue]", highlight=False)
    get_logger("nippou.cli.error").error(
        "Command failed",
        error_code=error.error_code,
        error=str(error),
        correlation_id=error.correlation_id,
    )
    sys.exit(EXIT_FAILURE)
