"""Local report storage: in-memory and JSON files."""

from .file_repository import JsonFileReportRepository
from .memory import InMemoryReportRepository
from .serialization import record_to_report, report_to_record

__all__ = [
    "InMemoryReportRepository",
    "JsonFileReportRepository",
    "record_to_report",
    "report_to_record",
]
