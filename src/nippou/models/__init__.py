"""
Validated daily-report model.

Value objects (ReportId, Geolocation, VoiceConfig, Tag) validate on
construction and never change afterwards. Report is the aggregate root;
new reports come from ReportBuilder, stored ones from reconstruct().
"""

from .builder import ReportBuilder, new_report, parse_report_date
from .identifier import (
    DEFAULT_ID_GENERATOR,
    IdGenerator,
    ReportId,
    UUIDGenerator,
    new_report_id,
)
from .location import Geolocation
from .report import Clock, Report, TagLike, require_report, sanitize_content, utc_now
from .repository import (
    ReconstructedReport,
    ReportReader,
    ReportRepository,
    ReportWriter,
    reconstruct,
)
from .tag import Tag
from .voice import VoiceConfig

__all__ = [
    "ReportId",
    "IdGenerator",
    "UUIDGenerator",
    "DEFAULT_ID_GENERATOR",
    "new_report_id",
    "Geolocation",
    "VoiceConfig",
    "Tag",
    "TagLike",
    "Clock",
    "utc_now",
    "Report",
    "require_report",
    "sanitize_content",
    "ReportBuilder",
    "new_report",
    "parse_report_date",
    "ReportReader",
    "ReportWriter",
    "ReportRepository",
    "ReconstructedReport",
    "reconstruct",
]
