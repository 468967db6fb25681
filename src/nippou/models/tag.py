"""
Tag value object.
"""

import re
from dataclasses import dataclass

from nippou.constants import ReportLimits
from nippou.exceptions.domain import InvalidFormatError, LimitExceededError, ValidationError

TAG_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]*")


@dataclass(frozen=True)
class Tag:
    """A trimmed, lower-cased label such as ``sales`` or ``client-visit``.

    Two tags are equal when their normalized values are equal, so equality
    is case-insensitive with respect to the original input.
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValidationError("tag", "tag must be a string")

        trimmed = self.value.strip()
        if not trimmed:
            raise ValidationError("tag", "tag cannot be empty")
        if len(trimmed) > ReportLimits.MAX_TAG_LENGTH:
            raise LimitExceededError("tag", "tag exceeds maximum length")

        normalized = trimmed.lower()
        if not TAG_PATTERN.fullmatch(normalized):
            raise InvalidFormatError(
                "tag", "tag contains invalid characters (only alphanumeric, hyphen, underscore allowed)"
            )

        object.__setattr__(self, "value", normalized)

    @classmethod
    def create(cls, text: str) -> "Tag":
        return cls(text)

    @classmethod
    def coerce(cls, tag) -> "Tag":
        """Return ``tag`` unchanged if it is already a Tag, else parse it."""
        if isinstance(tag, cls):
            return tag
        return cls(tag)

    def __str__(self) -> str:
        return self.value
