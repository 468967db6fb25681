"""
Application use cases for daily reports.

Each use case takes a repository port and translates domain and storage
failures into UseCaseError subclasses.
"""

from .create import CreateReportUseCase
from .delete import DeleteReportUseCase
from .dto import (
    CreateReportInput,
    ListReportsInput,
    LocationInput,
    LocationOutput,
    ReportOutput,
    UpdateReportInput,
    VoiceInput,
    VoiceOutput,
    format_timestamp,
)
from .query import GetReportUseCase, ListReportsUseCase
from .update import UpdateReportUseCase

__all__ = [
    "CreateReportUseCase",
    "GetReportUseCase",
    "ListReportsUseCase",
    "UpdateReportUseCase",
    "DeleteReportUseCase",
    "CreateReportInput",
    "UpdateReportInput",
    "ListReportsInput",
    "LocationInput",
    "VoiceInput",
    "ReportOutput",
    "LocationOutput",
    "VoiceOutput",
    "format_timestamp",
]
