from typing import Protocol

import structlog

from ..result import Err, Ok, Result
from .exceptions import GeocodingError, PositionError, ServicesDisabled
from .provider import GeoPositionProvider
from .resolver import PlaceResolver
from .types import LocationError, PlaceName

logger = structlog.get_logger()


class LocationService(Protocol):
    async def current_city_name(self) -> Result[PlaceName, LocationError]: ...


class LocationProbe:
    """
    Find the name of the city the device is currently in.

    Position and geocoding failures are folded into the three LocationError
    categories. This never raises, all failures are returned as Err values.
    """

    def __init__(self, provider: GeoPositionProvider, resolver: PlaceResolver) -> None:
        self.provider = provider
        self.resolver = resolver

    async def current_city_name(self) -> Result[PlaceName, LocationError]:
        try:
            coordinate = await self.provider.acquire_current_position()
        except ServicesDisabled:
            logger.info("Location services are disabled")
            return Err(LocationError.SERVICES_DISABLED)
        except PositionError as exc:
            logger.warning("Failed to acquire position", error=str(exc))
            return Err(LocationError.ACQUISITION_FAILED)
        except Exception:
            logger.exception("Unexpected error while acquiring position")
            return Err(LocationError.ACQUISITION_FAILED)

        try:
            place = await self.resolver.resolve_place_name(coordinate)
        except GeocodingError as exc:
            logger.warning(
                "Failed to resolve place name",
                latitude=coordinate.latitude,
                longitude=coordinate.longitude,
                error=str(exc),
            )
            return Err(LocationError.RESOLUTION_FAILED)
        except Exception:
            logger.exception("Unexpected error while resolving place name")
            return Err(LocationError.RESOLUTION_FAILED)

        return Ok(place)
