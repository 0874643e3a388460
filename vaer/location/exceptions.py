from ..exceptions import VaerError


class PositionError(VaerError):
    """Base exception for position acquisition errors."""

    pass


class ServicesDisabled(PositionError):
    """The platform location capability is turned off."""

    pass


class AcquisitionFailed(PositionError):
    """The platform reported an error, or delivered no position."""

    pass


class AcquisitionInProgress(AcquisitionFailed):
    """Another position request is already pending on this provider."""

    pass


class GeocodingError(VaerError):
    """Base exception for reverse geocoding errors."""

    pass


class ResolutionFailed(GeocodingError):
    """The reverse geocoding call itself failed."""

    pass


class NoLocality(GeocodingError):
    """Reverse geocoding succeeded, but without a usable locality."""

    pass
