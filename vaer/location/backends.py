"""
Concrete position and geocoding backends.

These stand in for a device location stack: they answer through the same
callback interfaces, from background asyncio tasks.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any

import httpx
import pydantic
import structlog

from .exceptions import AcquisitionFailed, ResolutionFailed
from .provider import PositionDelegate
from .resolver import GeocodeCompletion
from .types import AuthorizationStatus, Coordinate, Placemark

logger = structlog.get_logger()

IP_GEOLOCATION_URL = "http://ip-api.com/json/"
NOMINATIM_URL = "https://nominatim.openstreetmap.org/reverse"

# HTTP timeout for backend requests (seconds)
REQUEST_TIMEOUT = 15.0


class _BackgroundTasks:
    """Keep references to running tasks so they aren't garbage collected."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    def spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)


class StaticPositionSource:
    """
    A position source that always reports the same, configured coordinate.
    """

    def __init__(self, coordinate: Coordinate, *, enabled: bool = True) -> None:
        self.coordinate = coordinate
        self.enabled = enabled

    def services_enabled(self) -> bool:
        return self.enabled

    def authorization_status(self) -> AuthorizationStatus:
        return AuthorizationStatus.AUTHORIZED

    def request_authorization(self) -> None:
        pass

    def request_location(self, delegate: PositionDelegate) -> None:
        asyncio.get_running_loop().call_soon(
            delegate.did_update_positions, [self.coordinate]
        )


class IPLookupResponse(pydantic.BaseModel):
    status: str
    message: str | None = None
    lat: float | None = None
    lon: float | None = None


class IPPositionSource:
    """
    Approximate the current position from the public IP address.
    """

    def __init__(
        self, *, url: str = IP_GEOLOCATION_URL, client: httpx.AsyncClient | None = None
    ) -> None:
        self.url = url
        self.client = client
        self._tasks = _BackgroundTasks()

    def services_enabled(self) -> bool:
        return True

    def authorization_status(self) -> AuthorizationStatus:
        return AuthorizationStatus.AUTHORIZED

    def request_authorization(self) -> None:
        pass

    def request_location(self, delegate: PositionDelegate) -> None:
        self._tasks.spawn(self._lookup(delegate))

    async def _lookup(self, delegate: PositionDelegate) -> None:
        try:
            response = await _get(self.client, self.url)
            response.raise_for_status()
            data = IPLookupResponse.model_validate_json(response.content)
        except (httpx.HTTPError, pydantic.ValidationError) as exc:
            logger.warning("IP geolocation request failed", error=str(exc))
            delegate.did_fail(exc)
            return
        except Exception as exc:
            logger.exception("Unexpected error in IP geolocation")
            delegate.did_fail(exc)
            return

        if data.status != "success" or data.lat is None or data.lon is None:
            reason = data.message or data.status
            delegate.did_fail(AcquisitionFailed(f"IP geolocation failed: {reason}"))
            return

        delegate.did_update_positions([Coordinate(data.lat, data.lon)])


class NominatimAddress(pydantic.BaseModel):
    city: str | None = None
    town: str | None = None
    village: str | None = None
    municipality: str | None = None
    country: str | None = None

    @property
    def locality(self) -> str | None:
        return self.city or self.town or self.village or self.municipality


class NominatimResponse(pydantic.BaseModel):
    error: str | None = None
    address: NominatimAddress | None = None


class NominatimGeocoder:
    """
    Reverse geocoding through the OpenStreetMap Nominatim API.

    Nominatim requires a User-Agent that identifies the application.
    """

    def __init__(
        self,
        *,
        user_agent: str,
        url: str = NOMINATIM_URL,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.user_agent = user_agent
        self.url = url
        self.client = client
        self._tasks = _BackgroundTasks()

    def reverse_geocode(
        self, coordinate: Coordinate, completion: GeocodeCompletion
    ) -> None:
        self._tasks.spawn(self._lookup(coordinate, completion))

    async def _lookup(
        self, coordinate: Coordinate, completion: GeocodeCompletion
    ) -> None:
        latitude, longitude = coordinate

        try:
            response = await _get(
                self.client,
                self.url,
                params={
                    "lat": round(latitude, 6),
                    "lon": round(longitude, 6),
                    "format": "jsonv2",
                    "zoom": 10,
                },
                headers={"User-Agent": self.user_agent},
            )
            response.raise_for_status()
            data = NominatimResponse.model_validate_json(response.content)
        except (httpx.HTTPError, pydantic.ValidationError) as exc:
            logger.warning(
                "Reverse geocoding request failed",
                latitude=latitude,
                longitude=longitude,
                error=str(exc),
            )
            completion(None, exc)
            return
        except Exception as exc:
            logger.exception(
                "Unexpected error in reverse geocoding",
                latitude=latitude,
                longitude=longitude,
            )
            completion(None, exc)
            return

        if data.error:
            completion(None, ResolutionFailed(f"Nominatim error: {data.error}"))
            return

        if data.address is None:
            completion([], None)
            return

        completion(
            [Placemark(locality=data.address.locality, country=data.address.country)],
            None,
        )


async def _get(
    client: httpx.AsyncClient | None, url: str, **kwargs: Any
) -> httpx.Response:
    if client is not None:
        return await client.get(url, **kwargs)

    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as _client:
        return await _client.get(url, **kwargs)
