"""
Formatters for nippou log output.

JSON entries carry the service identity and whatever context the caller
passed to NippouLogger; credentials in that context are redacted before
the entry is written.
"""

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict

from rich.console import Console
from rich.logging import RichHandler

from nippou.core.security.sanitizer import SensitiveDataSanitizer

CONSOLE_FORMAT = "%(asctime)s [%(levelname)8s] %(name)s: %(message)s"
CONSOLE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class StructuredFormatter(logging.Formatter):
    """One JSON object per log record."""

    def __init__(self, service_name: str = "nippou", version: str = "unknown"):
        super().__init__()
        self.service_name = service_name
        self.version = version

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "service": self.service_name,
            "version": self.version,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        for attribute in ("correlation_id", "operation"):
            value = getattr(record, attribute, None)
            if value is not None:
                entry[attribute] = value

        extra = getattr(record, "extra_context", None)
        if extra:
            entry.update(SensitiveDataSanitizer.sanitize_payload(extra))

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        return json.dumps(entry, default=str, ensure_ascii=False)


def create_console_formatter() -> logging.Formatter:
    return logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATE_FORMAT)


def create_rich_handler() -> logging.Handler:
    """Rich handler on stderr so stdout stays free for command output."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler
