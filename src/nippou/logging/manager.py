"""
Process-wide logging setup.

LoggingManager owns the handlers it installs on the root logger, so
configuring again (for example after ``-v`` raises the level) swaps them
out without touching handlers installed by anyone else, such as pytest.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import List, Optional

from .config import LoggingConfig
from .formatters import StructuredFormatter, create_console_formatter, create_rich_handler
from .loggers import NippouLogger

DEFAULT_LOG_FILE = Path("logs/nippou.log")


def _text_or_json_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format_type == "json":
        return StructuredFormatter(config.service_name, config.version)
    return create_console_formatter()


def _console_handler(config: LoggingConfig) -> logging.Handler:
    if config.format_type == "rich":
        return create_rich_handler()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_text_or_json_formatter(config))
    return handler


def _file_handler(config: LoggingConfig) -> logging.Handler:
    path = config.file_path or DEFAULT_LOG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=config.max_file_size,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    # Rich markup is meaningless in a file
    handler.setFormatter(_text_or_json_formatter(config))
    return handler


_HANDLER_FACTORIES = {
    "console": _console_handler,
    "file": _file_handler,
}


class LoggingManager:
    """Singleton holding the active logging configuration."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self.config: Optional[LoggingConfig] = None
        self.handlers: List[logging.Handler] = []
        self._initialized = True

    def configure(self, config: LoggingConfig):
        root = logging.getLogger()
        self._remove_handlers(root)

        self.config = config
        root.setLevel(config.level)
        for output in config.output:
            factory = _HANDLER_FACTORIES.get(output)
            if factory is None:
                continue
            handler = factory(config)
            handler.setLevel(config.level)
            root.addHandler(handler)
            self.handlers.append(handler)

        logging.getLogger("nippou").setLevel(config.level)
        # urllib3 logs every connection at DEBUG
        logging.getLogger("urllib3").setLevel(max(config.level, logging.INFO))

    def _remove_handlers(self, root: logging.Logger):
        while self.handlers:
            handler = self.handlers.pop()
            root.removeHandler(handler)
            handler.close()

    def get_logger(self, name: str, correlation_id: Optional[str] = None) -> NippouLogger:
        return NippouLogger(name, correlation_id)


logging_manager = LoggingManager()


def configure_logging(config: LoggingConfig):
    """Configure the global logging system."""
    logging_manager.configure(config)
