"""
Persistence port and reconstruction of stored reports.

Storage adapters implement ReportRepository and rebuild entities through
reconstruct(), which trusts previously validated fields but still parses
the identifier and tags.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Protocol, runtime_checkable

from nippou.constants import ReportLimits
from nippou.exceptions.domain import DomainError

from .identifier import ReportId
from .location import Geolocation
from .report import Clock, Report
from .tag import Tag
from .voice import VoiceConfig


@runtime_checkable
class ReportReader(Protocol):
    """Read side of report persistence."""

    def find_by_id(self, report_id: ReportId) -> Optional[Report]:
        """Return the report or None when it does not exist."""
        ...

    def find_by_date(self, report_date: date) -> List[Report]:
        """Return every report for a calendar date."""
        ...


@runtime_checkable
class ReportWriter(Protocol):
    """Write side of report persistence."""

    def save(self, report: Report) -> None:
        """Insert or update by id."""
        ...

    def delete(self, report_id: ReportId) -> None:
        """Delete by id. Deleting an absent id succeeds."""
        ...


@runtime_checkable
class ReportRepository(ReportReader, ReportWriter, Protocol):
    """Full persistence port."""


@dataclass
class ReconstructedReport:
    """Flat record a storage adapter produces from its native format."""

    id: str
    date: date
    content: str
    created_at: datetime
    updated_at: datetime
    location: Optional[Geolocation] = None
    voice: Optional[VoiceConfig] = None
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_report(cls, report: Report) -> "ReconstructedReport":
        return cls(
            id=report.id.value,
            date=report.date,
            content=report.content,
            created_at=report.created_at,
            updated_at=report.updated_at,
            location=report.location,
            voice=report.voice,
            tags=report.tag_strings,
        )


def reconstruct(data: ReconstructedReport, clock: Optional[Clock] = None) -> Report:
    """Rebuild a stored report.

    A malformed identifier is fatal. Tags that fail validation, repeat an
    earlier tag or exceed the tag limit are skipped so one bad tag does not
    make the record unloadable.

    Raises:
        ValidationError: Empty identifier
        InvalidFormatError: Identifier is not a UUID
    """
    report_id = ReportId.parse(data.id)

    tags: List[Tag] = []
    for text in data.tags or []:
        if len(tags) >= ReportLimits.MAX_TAG_COUNT:
            break
        try:
            tag = Tag.create(text)
        except DomainError:
            continue
        if tag not in tags:
            tags.append(tag)

    return Report(
        report_id=report_id,
        report_date=data.date,
        content=data.content,
        created_at=data.created_at,
        updated_at=data.updated_at,
        location=data.location,
        voice=data.voice,
        tags=tags,
        clock=clock,
    )
