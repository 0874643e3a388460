"""Current position and place name lookup."""

from .exceptions import (
    AcquisitionFailed,
    AcquisitionInProgress,
    GeocodingError,
    NoLocality,
    PositionError,
    ResolutionFailed,
    ServicesDisabled,
)
from .probe import LocationProbe, LocationService
from .provider import GeoPositionProvider, PositionDelegate, PositionSource
from .resolver import PlaceResolver, ReverseGeocoder
from .types import AuthorizationStatus, Coordinate, LocationError, Placemark, PlaceName

__all__ = [
    "AcquisitionFailed",
    "AcquisitionInProgress",
    "AuthorizationStatus",
    "Coordinate",
    "GeoPositionProvider",
    "GeocodingError",
    "LocationError",
    "LocationProbe",
    "LocationService",
    "NoLocality",
    "PlaceName",
    "PlaceResolver",
    "Placemark",
    "PositionDelegate",
    "PositionError",
    "PositionSource",
    "ResolutionFailed",
    "ReverseGeocoder",
    "ServicesDisabled",
]
