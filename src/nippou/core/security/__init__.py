"""Security utilities: text sanitization and credential redaction."""

from .sanitizer import SensitiveDataSanitizer, TextSanitizer

__all__ = ["SensitiveDataSanitizer", "TextSanitizer"]
