import enum
from dataclasses import dataclass
from typing import NamedTuple


class Coordinate(NamedTuple):
    latitude: float
    longitude: float


type PlaceName = str


class AuthorizationStatus(enum.Enum):
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    AUTHORIZED = "authorized"


@dataclass(frozen=True)
class Placemark:
    """A single reverse geocoding match."""

    locality: str | None
    country: str | None = None


class LocationError(enum.Enum):
    """
    The coarse location failure categories reported to callers of
    LocationProbe. Position and geocoding failures are folded into these.
    """

    SERVICES_DISABLED = "services_disabled"
    ACQUISITION_FAILED = "acquisition_failed"
    RESOLUTION_FAILED = "resolution_failed"
