"""
Logger wrapper with correlation ids and structured context.
"""

import logging
from typing import Any, Dict, Optional
from uuid import uuid4


class NippouLogger:
    """Logger that attaches a correlation id and keyword context to each record.

    Keyword arguments given to the log methods, together with any context
    bound through ``with_context``, become ``extra_context`` on the record.
    The JSON formatter merges that dictionary into the log entry.
    """

    def __init__(self, name: str, correlation_id: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id or uuid4().hex[:8]
        self.extra_context: Dict[str, Any] = {}

    @property
    def name(self) -> str:
        return self.logger.name

    def with_context(self, **kwargs) -> "NippouLogger":
        """Return a logger sharing this correlation id with more bound context."""
        bound = NippouLogger(self.name, self.correlation_id)
        bound.extra_context = {**self.extra_context, **kwargs}
        return bound

    def debug(self, msg: str, **kwargs):
        self._emit(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs):
        self._emit(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs):
        self._emit(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs):
        self._emit(logging.ERROR, msg, kwargs)

    def _emit(self, level: int, msg: str, fields: Dict[str, Any]):
        if not self.logger.isEnabledFor(level):
            return
        extra: Dict[str, Any] = {"correlation_id": self.correlation_id}
        context = {**self.extra_context, **fields}
        if context:
            extra["extra_context"] = context
        # Attribute the record to the caller of debug()/info()/...
        self.logger.log(level, msg, extra=extra, stacklevel=3)
