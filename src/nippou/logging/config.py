"""
Logging configuration.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from nippou.constants import LoggingDefaults


class LoggingConfig:
    """Runtime configuration for the logging system."""

    def __init__(
        self,
        level: Union[str, int] = logging.INFO,
        format_type: str = LoggingDefaults.FORMAT,  # "console", "json", "rich"
        output: Union[str, List[str]] = "console",  # "console", "file", or both
        file_path: Optional[Path] = None,
        max_file_size: int = LoggingDefaults.FILE_SIZE_BYTES,
        backup_count: int = LoggingDefaults.BACKUP_COUNT,
        service_name: str = "nippou",
        version: str = "unknown",
    ):
        self.level = level if isinstance(level, int) else getattr(logging, level.upper())
        self.format_type = format_type
        self.output = output if isinstance(output, list) else [output]
        self.file_path = Path(file_path) if file_path else None
        self.max_file_size = max_file_size
        self.backup_count = backup_count
        self.service_name = service_name
        self.version = version


def create_default_config() -> LoggingConfig:
    """Create a default logging configuration."""
    return LoggingConfig(
        level=LoggingDefaults.LEVEL,
        format_type=LoggingDefaults.FORMAT,
        output="console",
    )
