"""
Report identifier value object and generation strategies.
"""

import uuid
from dataclasses import dataclass
from typing import Protocol

from nippou.exceptions.domain import InvalidFormatError, ValidationError


@dataclass(frozen=True)
class ReportId:
    """Immutable identifier wrapping the canonical text of a UUID.

    Use ``ReportId.parse`` for untrusted text; it keeps the exact input.
    """

    value: str

    @classmethod
    def parse(cls, text: str) -> "ReportId":
        if not text:
            raise ValidationError("id", "ID cannot be empty")
        try:
            uuid.UUID(text)
        except (ValueError, AttributeError, TypeError):
            raise InvalidFormatError("id", "invalid UUID format") from None
        return cls(text)

    @classmethod
    def empty(cls) -> "ReportId":
        return cls("")

    def is_empty(self) -> bool:
        return self.value == ""

    def equals(self, other: "ReportId") -> bool:
        return self == other

    def __str__(self) -> str:
        return self.value


class IdGenerator(Protocol):
    """Strategy producing fresh identifiers. Must be safe to call concurrently."""

    def generate(self) -> ReportId: ...


class UUIDGenerator:
    """Default generator: random UUID4 in canonical text form."""

    def generate(self) -> ReportId:
        return ReportId(str(uuid.uuid4()))


DEFAULT_ID_GENERATOR = UUIDGenerator()


def new_report_id() -> ReportId:
    """Generate an identifier with the default generator."""
    return DEFAULT_ID_GENERATOR.generate()
