"""
Request and response objects for the report use cases.

Input validation here checks raw request data early; the
domain model still enforces every invariant.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from nippou.constants import DateFormats, ReportLimits
from nippou.exceptions.usecase import InvalidInputError
from nippou.models import Report, require_report


@dataclass
class LocationInput:
    latitude: float
    longitude: float
    address: str = ""

    def validate(self, prefix: str = "location") -> None:
        if not (ReportLimits.MIN_LATITUDE <= self.latitude <= ReportLimits.MAX_LATITUDE):
            raise InvalidInputError(f"{prefix}.latitude", "must be between -90 and 90")
        if not (ReportLimits.MIN_LONGITUDE <= self.longitude <= ReportLimits.MAX_LONGITUDE):
            raise InvalidInputError(f"{prefix}.longitude", "must be between -180 and 180")
        if len(self.address or "") > ReportLimits.MAX_ADDRESS_LENGTH:
            raise InvalidInputError(
                f"{prefix}.address",
                f"exceeds maximum length of {ReportLimits.MAX_ADDRESS_LENGTH}",
            )


@dataclass
class VoiceInput:
    enabled: bool
    model_name: str = ""

    def validate(self, prefix: str = "voice") -> None:
        if self.enabled and not (self.model_name or "").strip():
            raise InvalidInputError(f"{prefix}.modelName", "cannot be empty when voice is enabled")
        if len(self.model_name or "") > ReportLimits.MAX_MODEL_NAME_LENGTH:
            raise InvalidInputError(
                f"{prefix}.modelName",
                f"exceeds maximum length of {ReportLimits.MAX_MODEL_NAME_LENGTH}",
            )


def _validate_content(content: str) -> None:
    if len(content) > ReportLimits.MAX_CONTENT_LENGTH:
        raise InvalidInputError(
            "content",
            f"exceeds maximum length of {ReportLimits.MAX_CONTENT_LENGTH} characters",
        )


def _validate_tags(tags: List[str], name: str = "tags") -> None:
    if len(tags) > ReportLimits.MAX_TAG_COUNT:
        raise InvalidInputError(name, f"exceeds maximum count of {ReportLimits.MAX_TAG_COUNT}")
    for index, tag in enumerate(tags):
        if len(tag) > ReportLimits.MAX_TAG_LENGTH:
            raise InvalidInputError(
                name,
                f"tag at index {index} exceeds maximum length of {ReportLimits.MAX_TAG_LENGTH}",
            )


@dataclass
class CreateReportInput:
    date: str
    content: str
    location: Optional[LocationInput] = None
    voice: Optional[VoiceInput] = None
    tags: List[str] = field(default_factory=list)

    def validate(self) -> None:
        """Raises InvalidInputError for the first problem found."""
        if not (self.date or "").strip():
            raise InvalidInputError("date", "cannot be empty")
        if not (self.content or "").strip():
            raise InvalidInputError("content", "cannot be empty")
        _validate_content(self.content)
        _validate_tags(self.tags)
        if self.location is not None:
            self.location.validate()
        if self.voice is not None:
            self.voice.validate()


@dataclass
class UpdateReportInput:
    """Changes to apply to an existing report. Unset fields are left alone."""

    report_id: str
    content: Optional[str] = None
    add_tags: List[str] = field(default_factory=list)
    remove_tags: List[str] = field(default_factory=list)
    location: Optional[LocationInput] = None
    remove_location: bool = False
    voice: Optional[VoiceInput] = None
    remove_voice: bool = False

    def has_changes(self) -> bool:
        return any(
            (
                self.content is not None,
                self.add_tags,
                self.remove_tags,
                self.location is not None,
                self.remove_location,
                self.voice is not None,
                self.remove_voice,
            )
        )

    def validate(self) -> None:
        if not (self.report_id or "").strip():
            raise InvalidInputError("id", "cannot be empty")
        if not self.has_changes():
            raise InvalidInputError("update", "no changes requested")
        if self.content is not None:
            if not self.content.strip():
                raise InvalidInputError("content", "cannot be empty")
            _validate_content(self.content)
        _validate_tags(self.add_tags, "addTags")
        if self.location is not None and self.remove_location:
            raise InvalidInputError("location", "cannot set and remove the location together")
        if self.voice is not None and self.remove_voice:
            raise InvalidInputError("voice", "cannot set and remove the voice settings together")
        if self.location is not None:
            self.location.validate()
        if self.voice is not None:
            self.voice.validate()


@dataclass
class ListReportsInput:
    date: Optional[str] = None
    end_date: Optional[str] = None
    tag: Optional[str] = None

    def validate(self) -> None:
        if not self.date and not self.tag:
            raise InvalidInputError("date", "cannot be empty unless a tag is given")
        if self.end_date and not self.date:
            raise InvalidInputError("endDate", "requires a start date")


def format_timestamp(value: datetime) -> str:
    """RFC 3339 with second precision; UTC is written as ``Z``."""
    if value.utcoffset() == timedelta(0):
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    return value.isoformat(timespec="seconds")


@dataclass
class LocationOutput:
    latitude: float
    longitude: float
    address: str


@dataclass
class VoiceOutput:
    enabled: bool
    model_name: str


@dataclass
class ReportOutput:
    id: str
    date: str
    content: str
    tags: List[str]
    created_at: str
    updated_at: str
    location: Optional[LocationOutput] = None
    voice: Optional[VoiceOutput] = None

    @classmethod
    def from_report(cls, report: Optional[Report]) -> "ReportOutput":
        report = require_report(report)
        output = cls(
            id=report.id.value,
            date=report.date.strftime(DateFormats.DATE),
            content=report.content,
            tags=list(report.tag_strings),
            created_at=format_timestamp(report.created_at),
            updated_at=format_timestamp(report.updated_at),
        )
        if report.location is not None:
            output.location = LocationOutput(
                report.location.latitude, report.location.longitude, report.location.address
            )
        if report.voice is not None:
            output.voice = VoiceOutput(report.voice.enabled, report.voice.model_name)
        return output

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys. Absent location and voice are omitted."""
        result: Dict[str, Any] = {
            "id": self.id,
            "date": self.date,
            "content": self.content,
            "tags": list(self.tags or []),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.location is not None:
            result["location"] = {
                "latitude": self.location.latitude,
                "longitude": self.location.longitude,
                "address": self.location.address,
            }
        if self.voice is not None:
            result["voice"] = {
                "enabled": self.voice.enabled,
                "modelName": self.voice.model_name,
            }
        return result
