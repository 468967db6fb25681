"""
Validated, all-or-nothing construction of new reports.
"""

import re
from datetime import date, datetime
from typing import Iterable, List, Optional

from nippou.constants import DateFormats, ReportLimits
from nippou.exceptions.domain import DuplicateError, InvalidFormatError, LimitExceededError

from .identifier import DEFAULT_ID_GENERATOR, IdGenerator
from .location import Geolocation
from .report import Clock, Report, TagLike, sanitize_content, utc_now
from .tag import Tag
from .voice import VoiceConfig

_DATE_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_report_date(text: str) -> date:
    """Parse a canonical ``YYYY-MM-DD`` date.

    Raises:
        InvalidFormatError: Wrong separators, field order or padding, or a
            calendar date that does not exist
    """
    if not isinstance(text, str) or not _DATE_SHAPE.fullmatch(text):
        raise InvalidFormatError("date", "date must be in YYYY-MM-DD format")
    try:
        return datetime.strptime(text, DateFormats.DATE).date()
    except ValueError:
        raise InvalidFormatError("date", "date must be in YYYY-MM-DD format") from None


class ReportBuilder:
    """Assemble a new Report.

    Example:
        >>> report = (
        ...     ReportBuilder("2026-01-08", "Visited the Osaka office")
        ...     .with_location(Geolocation.create(34.69, 135.50, "Osaka"))
        ...     .with_tags(["sales", "osaka"])
        ...     .build()
        ... )

    The id generator and clock are injectable so tests can build
    deterministic reports.
    """

    def __init__(
        self,
        date_text: str,
        content: str,
        *,
        location: Optional[Geolocation] = None,
        voice: Optional[VoiceConfig] = None,
        tags: Optional[Iterable[TagLike]] = None,
        id_generator: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
    ):
        self._date_text = date_text
        self._content = content
        self._location = location
        self._voice = voice
        self._tags: List[TagLike] = list(tags or [])
        self._id_generator = id_generator or DEFAULT_ID_GENERATOR
        self._clock = clock or utc_now

    def with_location(self, location: Optional[Geolocation]) -> "ReportBuilder":
        self._location = location
        return self

    def with_voice(self, voice: Optional[VoiceConfig]) -> "ReportBuilder":
        self._voice = voice
        return self

    def with_tags(self, tags: Iterable[TagLike]) -> "ReportBuilder":
        self._tags = list(tags)
        return self

    def with_id_generator(self, id_generator: IdGenerator) -> "ReportBuilder":
        self._id_generator = id_generator
        return self

    def with_clock(self, clock: Clock) -> "ReportBuilder":
        self._clock = clock
        return self

    def build(self) -> Report:
        """Validate every field and return the new report.

        Raises:
            DomainError: On the first failing field; no report is created
        """
        content = sanitize_content(self._content)
        report_date = parse_report_date(self._date_text)

        if len(self._tags) > ReportLimits.MAX_TAG_COUNT:
            raise LimitExceededError("tags", "maximum number of tags exceeded")

        tags: List[Tag] = []
        for raw in self._tags:
            tag = Tag.coerce(raw)
            if tag in tags:
                raise DuplicateError("tag", "tag already exists")
            tags.append(tag)

        report_id = self._id_generator.generate()
        now = self._clock()
        return Report(
            report_id=report_id,
            report_date=report_date,
            content=content,
            created_at=now,
            updated_at=now,
            location=self._location,
            voice=self._voice,
            tags=tags,
            clock=self._clock,
        )


def new_report(date_text: str, content: str) -> Report:
    """Build a report with default strategies and no optional fields."""
    return ReportBuilder(date_text, content).build()
