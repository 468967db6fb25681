"""
nippou logging package.

- config: runtime logging configuration
- formatters: JSON, console and Rich output
- loggers: NippouLogger with correlation ids and structured context
- manager: LoggingManager singleton that installs handlers
- context: LoggingContext for entry, success and failure messages
"""

from .config import LoggingConfig, create_default_config
from .context import LoggingContext
from .formatters import StructuredFormatter, create_console_formatter
from .loggers import NippouLogger
from .manager import LoggingManager, configure_logging, logging_manager

get_logger = logging_manager.get_logger

__all__ = [
    "LoggingConfig",
    "create_default_config",
    "LoggingManager",
    "configure_logging",
    "logging_manager",
    "NippouLogger",
    "get_logger",
    "LoggingContext",
    "StructuredFormatter",
    "create_console_formatter",
]
