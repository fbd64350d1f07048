"""
Location models: coordinates, search hits, reverse-geocode candidates and
the clinic address built from them, dood!
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from internal.services.clinic.models import SubmissionPayload


class AuthorizationStatus(StrEnum):
    """Device location authorization state"""

    NOT_DETERMINED = "not-determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_WHEN_IN_USE = "when-in-use"
    AUTHORIZED_ALWAYS = "always"


@dataclass(frozen=True)
class Coordinate:
    """WGS84 coordinate, validated on creation"""

    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude {self.latitude} is out of range [-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude {self.longitude} is out of range [-180, 180]")


@dataclass(frozen=True)
class PlaceResult:
    """Place lookup hit"""

    coordinate: Coordinate
    name: Optional[str] = None
    locality: Optional[str] = None


@dataclass(frozen=True)
class ReverseCandidate:
    """Reverse-geocode candidate, every field may be missing"""

    name: Optional[str] = None
    locality: Optional[str] = None
    administrativeArea: Optional[str] = None
    country: Optional[str] = None
    thoroughfare: Optional[str] = None
    postalCode: Optional[str] = None


@dataclass(frozen=True)
class Address:
    """Clinic postal address. Missing parts are empty strings, never None."""

    name: str = ""
    streetAddress: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    zipCode: str = ""

    @classmethod
    def fromCandidate(cls, candidate: ReverseCandidate) -> "Address":
        return cls(
            name=candidate.name or "",
            streetAddress=candidate.thoroughfare or "",
            city=candidate.locality or "",
            state=candidate.administrativeArea or "",
            country=candidate.country or "",
            zipCode=candidate.postalCode or "",
        )

    def toPayload(self) -> SubmissionPayload:
        return SubmissionPayload(
            city=self.city,
            country=self.country,
            name=self.name,
            state=self.state,
            streetAddress=self.streetAddress,
            zipCode=self.zipCode,
        )
