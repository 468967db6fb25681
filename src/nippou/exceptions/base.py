"""
Root of the nippou exception hierarchy.

Every nippou error carries a short correlation id so a message shown by
the CLI can be matched with the log entry written for the same failure.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def new_correlation_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclass
class ExceptionContext:
    """Optional details attached to a NippouError.

    Attributes:
        help_text: Guidance shown to the user as a hint
        error_code: Stable code for programmatic handling
        context: Key facts about the failure (field, operation, status)
        technical_details: Debugging information such as the cause's repr
        correlation_id: Reuse an existing id instead of generating one
    """

    help_text: Optional[str] = None
    error_code: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    technical_details: Optional[str] = None
    correlation_id: Optional[str] = None


class NippouError(Exception):
    """Base exception for all nippou errors."""

    def __init__(self, message: str, context: Optional[ExceptionContext] = None):
        details = context or ExceptionContext()
        self.message = message
        self.help_text = details.help_text
        self.error_code = details.error_code
        self.context: Dict[str, Any] = dict(details.context)
        self.technical_details = details.technical_details
        self.correlation_id = details.correlation_id or new_correlation_id()
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        facts = ", ".join(f"{k}={v}" for k, v in self.context.items() if v is not None)
        if facts:
            parts.append(f"({facts})")
        if self.help_text:
            parts.append(f"Hint: {self.help_text}")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view used in structured log entries."""
        return {
            "error_type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": dict(self.context),
            "help_text": self.help_text,
            "technical_details": self.technical_details,
            "correlation_id": self.correlation_id,
            "timestamp": self.timestamp.isoformat(),
        }

    def add_context(self, **kwargs) -> "NippouError":
        """Attach more facts; returns self so it can be used in a raise."""
        self.context.update(kwargs)
        return self
