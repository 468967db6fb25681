"""
Integration between the nippou configuration and the logging system.
"""

from typing import Optional

from .core.config import NippouConfig
from .logging import LoggingConfig as LogConfig
from .logging import NippouLogger, configure_logging, create_default_config
from .logging import get_logger as _get_logger

_logging_configured = False


def configure_logging_from_config(
    config: NippouConfig, service_name: str = "nippou", version: str = "unknown"
):
    """Configure logging from the ``general.logging`` section."""
    global _logging_configured

    logging_config = config.general.logging
    log_config = LogConfig(
        level=logging_config.level.value,
        format_type=logging_config.format,
        output=logging_config.output,
        file_path=logging_config.file_path,
        max_file_size=logging_config.max_file_size,
        backup_count=logging_config.backup_count,
        service_name=service_name,
        version=version,
    )

    configure_logging(log_config)
    _logging_configured = True


def ensure_logging_configured():
    """Install the default configuration unless logging was configured already."""
    global _logging_configured

    if not _logging_configured:
        configure_logging(create_default_config())
        _logging_configured = True


def get_logger(name: str, correlation_id: Optional[str] = None) -> NippouLogger:
    """Get a nippou logger, ensuring logging is configured."""
    ensure_logging_configured()
    return _get_logger(name, correlation_id)
