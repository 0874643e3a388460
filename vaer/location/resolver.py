import asyncio
from collections.abc import Callable, Sequence
from typing import Protocol

import structlog

from .exceptions import GeocodingError, NoLocality, ResolutionFailed
from .types import Coordinate, Placemark, PlaceName

logger = structlog.get_logger()

type GeocodeCompletion = Callable[
    [Sequence[Placemark] | None, BaseException | None], None
]


class ReverseGeocoder(Protocol):
    def reverse_geocode(
        self, coordinate: Coordinate, completion: GeocodeCompletion
    ) -> None:
        """
        Look up placemarks for a coordinate. The completion handler is called
        exactly once, with either a list of placemarks or an error.
        """
        ...


class PlaceResolver:
    """
    Resolve a coordinate to the name of its locality.

    Every call gets its own future, so independent coordinates can be
    resolved concurrently.
    """

    def __init__(self, geocoder: ReverseGeocoder) -> None:
        self.geocoder = geocoder

    async def resolve_place_name(self, coordinate: Coordinate) -> PlaceName:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[PlaceName] = loop.create_future()

        def completion(
            placemarks: Sequence[Placemark] | None, error: BaseException | None
        ) -> None:
            loop.call_soon_threadsafe(_complete, future, placemarks, error)

        try:
            self.geocoder.reverse_geocode(coordinate, completion)
        except Exception as exc:
            raise ResolutionFailed(f"Reverse geocoding failed: {exc}") from exc

        place = await future
        logger.debug(
            "Resolved place name",
            place=place,
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
        )
        return place


def _complete(
    future: "asyncio.Future[PlaceName]",
    placemarks: Sequence[Placemark] | None,
    error: BaseException | None,
) -> None:
    if future.done():
        return

    if error is not None:
        if isinstance(error, GeocodingError):
            future.set_exception(error)
        else:
            exc = ResolutionFailed(f"Reverse geocoding failed: {error}")
            exc.__cause__ = error
            future.set_exception(exc)
        return

    locality = placemarks[0].locality if placemarks else None
    if locality and locality.strip():
        future.set_result(locality.strip())
    else:
        future.set_exception(NoLocality("No locality found for the coordinate"))
