"""
Scoped logging around a unit of work.
"""

import logging
from typing import Optional, Union

from .loggers import NippouLogger
from .manager import logging_manager

_LEVEL_METHODS = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
}


class LoggingContext:
    """Log a message on entry, on success and on failure of a block.

    Keyword arguments are attached to every message. The exception that
    ends the block is logged with its type and then re-raised.
    """

    def __init__(
        self,
        entry_msg: Optional[str] = None,
        success_msg: Optional[str] = None,
        failure_msg: Optional[str] = None,
        logger: Union[NippouLogger, logging.Logger, None] = None,
        entry_level: int = logging.DEBUG,
        success_level: int = logging.INFO,
        failure_level: int = logging.ERROR,
        **context,
    ):
        if isinstance(logger, NippouLogger):
            self.logger = logger
        else:
            self.logger = logging_manager.get_logger(logger.name if logger else __name__)
        self.messages = {
            "entry": (entry_level, entry_msg),
            "success": (success_level, success_msg),
            "failure": (failure_level, failure_msg),
        }
        self.context = context

    def _log(self, stage: str, suffix: str = "", **fields):
        level, msg = self.messages[stage]
        if not msg:
            return
        method = getattr(self.logger, _LEVEL_METHODS.get(level, "info"))
        method(msg + suffix, **self.context, **fields)

    def __enter__(self):
        self._log("entry")
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            self._log("success")
        else:
            self._log("failure", f": {exc_value}", error_type=exc_type.__name__)
        return False
