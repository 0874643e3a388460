from typing import Any, Protocol, Self
from urllib.parse import quote

import httpx
import pydantic
import structlog

from ..config import Settings
from ..location.types import PlaceName
from .exceptions import (
    DecodingFailed,
    ForecastError,
    InvalidQuery,
    InvalidResponse,
    TransportFailed,
    UnknownError,
)
from .types import Forecast

logger = structlog.get_logger()

# HTTP timeout for weather service requests (seconds)
REQUEST_TIMEOUT = 15.0

# The period requested for each place, as a path segment after the place name
PERIOD = "today"


class ForecastService(Protocol):
    async def fetch_forecast(self, place: PlaceName) -> Forecast: ...


class ForecastClient:
    """
    A client for the weather service timeline API.

    Each call to `fetch_forecast` issues exactly one request, and every
    failure is raised as a ForecastError subclass.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        elements: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.elements = elements
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=REQUEST_TIMEOUT)

    @classmethod
    def from_settings(
        cls, settings: Settings, *, client: httpx.AsyncClient | None = None
    ) -> Self:
        return cls(
            base_url=settings.api_url,
            api_key=settings.api_key,
            elements=settings.api_elements,
            client=client,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def build_url(self, place: PlaceName) -> httpx.URL:
        """
        Build the request URL for a place. Raises InvalidQuery if the place
        can't be turned into a well-formed URL.
        """

        place = place.strip()
        if not place:
            raise InvalidQuery("The place name is empty")
        if not place.isprintable():
            raise InvalidQuery(f"Illegal characters in place name: {place!r}")

        url = (
            f"{self.base_url}/{quote(place, safe='')}/{PERIOD}"
            f"?unitGroup=metric"
            f"&elements={quote(self.elements, safe=',')}"
            f"&key={quote(self.api_key, safe='')}"
            f"&contentType=json"
        )

        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise InvalidQuery(f"Invalid URL: {exc}") from exc

        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise InvalidQuery(f"Not an absolute http(s) URL: {self.base_url}")

        return parsed

    async def fetch_forecast(self, place: PlaceName) -> Forecast:
        try:
            return await self._fetch_forecast(place)
        except ForecastError:
            raise
        except Exception as exc:
            logger.exception("Unexpected error when fetching forecast", place=place)
            raise UnknownError(str(exc)) from exc

    async def _fetch_forecast(self, place: PlaceName) -> Forecast:
        url = self.build_url(place)

        logger.info("Fetching forecast", place=place)
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("Forecast request failed", place=place, error=str(exc))
            raise TransportFailed(exc) from exc

        if response.status_code != 200:
            logger.warning(
                "Got unexpected status code from weather service",
                place=place,
                status_code=response.status_code,
            )
            raise InvalidResponse(response.status_code)

        try:
            forecast = Forecast.model_validate_json(response.content)
        except pydantic.ValidationError as exc:
            logger.warning(
                "Failed to decode forecast", place=place, errors=exc.error_count()
            )
            raise DecodingFailed(exc) from exc

        logger.info(
            "Fetched forecast",
            place=place,
            resolved_address=forecast.resolved_address,
            days=len(forecast.days),
        )
        return forecast
