"""
Report aggregate root.

A Report is only ever produced by ReportBuilder or by reconstruct(); every
mutator validates its input before touching state, so a failed call leaves
the entity exactly as it was.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Callable, List, Optional, Sequence, Tuple, Union

from nippou.constants import ReportLimits
from nippou.core.security.sanitizer import TextSanitizer
from nippou.exceptions.domain import (
    DomainError,
    DuplicateError,
    LimitExceededError,
    NilReceiverError,
    ValidationError,
)

from .identifier import ReportId
from .location import Geolocation
from .tag import Tag
from .voice import VoiceConfig

Clock = Callable[[], datetime]
TagLike = Union[Tag, str]


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _checked_location(location) -> Optional[Geolocation]:
    if location is not None and not isinstance(location, Geolocation):
        raise ValidationError("location", "location must be a Geolocation")
    return location


def _checked_voice(voice) -> Optional[VoiceConfig]:
    if voice is not None and not isinstance(voice, VoiceConfig):
        raise ValidationError("voice", "voice must be a VoiceConfig")
    return voice


def sanitize_content(text: str) -> str:
    """Sanitize report content and enforce its emptiness and length rules."""
    sanitized = TextSanitizer.sanitize(text)
    if not sanitized:
        raise ValidationError("content", "content cannot be empty")
    if TextSanitizer.length(sanitized) > ReportLimits.MAX_CONTENT_LENGTH:
        raise LimitExceededError("content", "content exceeds maximum length")
    return sanitized


class Report:
    """A daily report (nippou).

    Use ReportBuilder to create new reports and reconstruct() to load stored
    ones. Instances are not synchronized; serialize concurrent mutation of
    the same report externally.
    """

    def __init__(
        self,
        report_id: ReportId,
        report_date: date,
        content: str,
        created_at: datetime,
        updated_at: datetime,
        location: Optional[Geolocation] = None,
        voice: Optional[VoiceConfig] = None,
        tags: Sequence[Tag] = (),
        clock: Optional[Clock] = None,
    ):
        self._id = report_id
        self._date = report_date
        self._content = content
        self._location = _checked_location(location)
        self._voice = _checked_voice(voice)
        self._tags: List[Tag] = []
        for tag in tags:
            self._append_tag(Tag.coerce(tag))
        self._created_at = _as_utc(created_at)
        self._updated_at = _as_utc(updated_at)
        self._clock = clock or utc_now

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def id(self) -> ReportId:
        return self._id

    @property
    def date(self) -> date:
        return self._date

    @property
    def content(self) -> str:
        return self._content

    @property
    def location(self) -> Optional[Geolocation]:
        return self._location

    @property
    def voice(self) -> Optional[VoiceConfig]:
        return self._voice

    @property
    def tags(self) -> Tuple[Tag, ...]:
        """Snapshot of the tags in insertion order."""
        return tuple(self._tags)

    @property
    def tag_strings(self) -> List[str]:
        return [tag.value for tag in self._tags]

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def has_tag(self, text: str) -> bool:
        """Check for a tag, case-insensitively. Malformed text is never present."""
        try:
            tag = Tag.create(text)
        except DomainError:
            return False
        return tag in self._tags

    def tag_count(self) -> int:
        return len(self._tags)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update_content(self, text: str) -> None:
        self._content = sanitize_content(text)
        self._touch()

    def attach_location(self, latitude: float, longitude: float, address: str = "") -> None:
        """Validate coordinates and replace the current location."""
        self._location = Geolocation.create(latitude, longitude, address)
        self._touch()

    def set_location(self, location: Optional[Geolocation]) -> None:
        self._location = _checked_location(location)
        self._touch()

    def remove_location(self) -> None:
        self._location = None
        self._touch()

    def set_voice_config(self, enabled: bool, model_name: str = "") -> None:
        """Validate voice settings and replace the current configuration."""
        self._voice = VoiceConfig.create(enabled, model_name)
        self._touch()

    def set_voice(self, voice: Optional[VoiceConfig]) -> None:
        self._voice = _checked_voice(voice)
        self._touch()

    def remove_voice(self) -> None:
        self._voice = None
        self._touch()

    def add_tag(self, text: str) -> Tag:
        """Add a tag from text.

        Format errors take precedence over the count limit, which takes
        precedence over duplicates.

        Returns:
            The normalized tag that was added
        """
        tag = Tag.create(text)
        self.add_validated_tag(tag)
        return tag

    def add_validated_tag(self, tag: Tag) -> None:
        self._append_tag(Tag.coerce(tag))
        self._touch()

    def _append_tag(self, tag: Tag) -> None:
        if len(self._tags) >= ReportLimits.MAX_TAG_COUNT:
            raise LimitExceededError("tags", "maximum number of tags exceeded")
        if tag in self._tags:
            raise DuplicateError("tag", "tag already exists")
        self._tags.append(tag)

    def remove_tag(self, text: str) -> bool:
        """Remove a tag if present.

        Malformed text raises the tag's format error. A well-formed tag that
        is not attached is ignored and the timestamp is left untouched.

        Returns:
            True if a tag was removed
        """
        tag = Tag.create(text)
        if tag not in self._tags:
            return False
        self._tags.remove(tag)
        self._touch()
        return True

    def _touch(self) -> None:
        now = _as_utc(self._clock())
        if now <= self._updated_at:
            # Coarse or frozen clocks still move updated_at forward
            now = self._updated_at + timedelta(microseconds=1)
        self._updated_at = now

    def __repr__(self) -> str:
        return (
            f"Report(id={self._id.value!r}, date={self._date.isoformat()!r}, "
            f"tags={self.tag_strings!r})"
        )


def require_report(report: Optional[Report]) -> Report:
    """Return ``report`` or raise NilReceiverError when it is absent."""
    if report is None:
        raise NilReceiverError("report", "operation requires a report but none was given")
    return report

