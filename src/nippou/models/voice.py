"""
Voice narration settings value object.
"""

from dataclasses import dataclass

from nippou.constants import ReportLimits
from nippou.core.security.sanitizer import TextSanitizer
from nippou.exceptions.domain import LimitExceededError, ValidationError


@dataclass(frozen=True)
class VoiceConfig:
    """Immutable voice settings.

    An enabled configuration always carries a non-empty model name. A
    disabled one may keep a model name for later re-enabling.
    """

    enabled: bool = False
    model_name: str = ""

    def __post_init__(self):
        if self.model_name is not None and not isinstance(self.model_name, str):
            raise ValidationError("modelName", "model name must be a string")
        enabled = bool(self.enabled)
        model_name = TextSanitizer.sanitize(self.model_name)

        if enabled and not model_name:
            raise ValidationError("modelName", "model name cannot be empty when voice is enabled")
        if TextSanitizer.length(model_name) > ReportLimits.MAX_MODEL_NAME_LENGTH:
            raise LimitExceededError("modelName", "model name exceeds maximum length")

        object.__setattr__(self, "enabled", enabled)
        object.__setattr__(self, "model_name", model_name)

    @classmethod
    def create(cls, enabled: bool, model_name: str = "") -> "VoiceConfig":
        return cls(enabled, model_name)

    @classmethod
    def disabled(cls) -> "VoiceConfig":
        return cls(False, "")

    def __str__(self) -> str:
        if not self.enabled:
            return "disabled"
        return f"enabled ({self.model_name})"
