"""
Geolocation value object.
"""

from dataclasses import dataclass

from nippou.constants import ReportLimits
from nippou.core.security.sanitizer import TextSanitizer
from nippou.exceptions.domain import LimitExceededError, ValidationError


def _coordinate(value, field: str, low: float, high: float, message: str) -> float:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool):
        raise ValidationError(field, "must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(field, "must be a number") from None
    # NaN fails both comparisons and is rejected here as well
    if not (low <= number <= high):
        raise ValidationError(field, message)
    return number


@dataclass(frozen=True)
class Geolocation:
    """Immutable geographical coordinates with a sanitized address.

    Every instance is valid: latitude in [-90, 90], longitude in
    [-180, 180], address trimmed, null-byte free, LF-normalized and at most
    500 code points. A report without a location holds ``None``.
    """

    latitude: float
    longitude: float
    address: str = ""

    def __post_init__(self):
        latitude = _coordinate(
            self.latitude,
            "latitude",
            ReportLimits.MIN_LATITUDE,
            ReportLimits.MAX_LATITUDE,
            "must be between -90 and 90",
        )
        longitude = _coordinate(
            self.longitude,
            "longitude",
            ReportLimits.MIN_LONGITUDE,
            ReportLimits.MAX_LONGITUDE,
            "must be between -180 and 180",
        )
        if self.address is not None and not isinstance(self.address, str):
            raise ValidationError("address", "address must be a string")
        address = TextSanitizer.sanitize(self.address)
        if TextSanitizer.length(address) > ReportLimits.MAX_ADDRESS_LENGTH:
            raise LimitExceededError("address", "address exceeds maximum length")

        # Normalized values (frozen dataclass)
        object.__setattr__(self, "latitude", latitude)
        object.__setattr__(self, "longitude", longitude)
        object.__setattr__(self, "address", address)

    @classmethod
    def create(cls, latitude: float, longitude: float, address: str = "") -> "Geolocation":
        return cls(latitude, longitude, address)

    def __str__(self) -> str:
        coordinates = f"{self.latitude:.7f},{self.longitude:.7f}"
        return f"{coordinates} ({self.address})" if self.address else coordinates
