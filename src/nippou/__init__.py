"""
nippou: daily report (日報) management.

Architecture Overview:
- models: Validated report aggregate and value objects
- usecase: Application operations over the repository port
- infrastructure: Salesforce, JSON file and in-memory storage adapters
- cli: Command-line interface
- core, logging, shared: Configuration, logging and resilience helpers
"""

__version__ = "0.1.0"

from .exceptions import NippouError
from .models import (
    Geolocation,
    Report,
    ReportBuilder,
    ReportId,
    ReportRepository,
    Tag,
    VoiceConfig,
    new_report,
    reconstruct,
)

__all__ = [
    "__version__",
    "NippouError",
    "Report",
    "ReportBuilder",
    "ReportId",
    "Geolocation",
    "VoiceConfig",
    "Tag",
    "ReportRepository",
    "new_report",
    "reconstruct",
]
