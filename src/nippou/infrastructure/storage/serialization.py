"""
JSON-safe records for local report storage.

Record layout::

    {
      "id": "<uuid>",
      "date": "2026-01-08",
      "content": "...",
      "location": {"latitude": 35.68, "longitude": 139.76, "address": "..."} | null,
      "voice": {"enabled": true, "modelName": "..."} | null,
      "tags": ["sales", "tokyo"],
      "createdAt": "2026-01-08T09:30:00+00:00",
      "updatedAt": "2026-01-08T09:30:00+00:00"
    }
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from nippou.exceptions.domain import DomainError, InvalidFormatError
from nippou.models import (
    Clock,
    Geolocation,
    ReconstructedReport,
    Report,
    VoiceConfig,
    parse_report_date,
    reconstruct,
)

RECORD_FIELDS = ("id", "date", "content", "createdAt", "updatedAt")


def report_to_record(report: Report) -> Dict[str, Any]:
    location = report.location
    voice = report.voice
    return {
        "id": report.id.value,
        "date": report.date.isoformat(),
        "content": report.content,
        "location": (
            {
                "latitude": location.latitude,
                "longitude": location.longitude,
                "address": location.address,
            }
            if location is not None
            else None
        ),
        "voice": (
            {"enabled": voice.enabled, "modelName": voice.model_name}
            if voice is not None
            else None
        ),
        "tags": report.tag_strings,
        "createdAt": report.created_at.isoformat(),
        "updatedAt": report.updated_at.isoformat(),
    }


def _timestamp(value: Any, field: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise InvalidFormatError(field, f"invalid timestamp: {value!r}") from None


def _location(data: Any) -> Optional[Geolocation]:
    # Malformed locations load as absent, like out-of-range ones
    if not isinstance(data, dict) or not data:
        return None
    try:
        return Geolocation.create(
            data.get("latitude", 0.0), data.get("longitude", 0.0), data.get("address", "")
        )
    except DomainError:
        return None


def _voice(data: Any) -> Optional[VoiceConfig]:
    if not isinstance(data, dict) or not data:
        return None
    try:
        return VoiceConfig.create(bool(data.get("enabled")), data.get("modelName", ""))
    except DomainError:
        return None


def _tags(value: Any) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidFormatError("tags", f"expected a list, got {type(value).__name__}")
    return value


def record_to_report(record: Dict[str, Any], clock: Optional[Clock] = None) -> Report:
    """Rebuild a report from a stored record.

    Raises:
        DomainError: Not a JSON object, missing fields, malformed id, date,
            content, tags or timestamps
    """
    if not isinstance(record, dict):
        raise InvalidFormatError("record", "stored record must be a JSON object")
    for name in RECORD_FIELDS:
        if name not in record:
            raise InvalidFormatError(name, "missing from stored record")
    if not isinstance(record["content"], str):
        raise InvalidFormatError("content", "content must be a string")

    return reconstruct(
        ReconstructedReport(
            id=record["id"],
            date=parse_report_date(record["date"]),
            content=record["content"],
            created_at=_timestamp(record["createdAt"], "createdAt"),
            updated_at=_timestamp(record["updatedAt"], "updatedAt"),
            location=_location(record.get("location")),
            voice=_voice(record.get("voice")),
            tags=_tags(record.get("tags")),
        ),
        clock=clock,
    )
