import random
from collections.abc import AsyncIterator, Callable
from datetime import date
from typing import Any

import httpx
import pytest

from vaer.config import DEFAULT_API_ELEMENTS, Settings
from vaer.forecast.client import ForecastClient
from vaer.forecast.mock import random_forecast
from vaer.forecast.types import Forecast

type Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def start() -> date:
    return date(2024, 6, 1)


@pytest.fixture
def forecast(rng: random.Random, start: date) -> Forecast:
    return random_forecast(rng, days=10, start=start)


@pytest.fixture
def forecast_payload(forecast: Forecast) -> dict[str, Any]:
    """The forecast as the weather service would return it."""
    return forecast.model_dump(mode="json", by_alias=True)


############
# Settings #
############


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_url="https://weather.example.com/timeline",
        api_key="secret",
        api_elements=DEFAULT_API_ELEMENTS,
        location_timeout=1.0,
        user_agent="vaer-tests",
    )


########
# HTTP #
########


@pytest.fixture
def requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(
    requests: list[httpx.Request],
) -> Callable[[Handler], httpx.AsyncClient]:
    """
    Build an httpx client that routes every request to the given handler,
    recording the requests that were made.
    """

    def _make(handler: Handler) -> httpx.AsyncClient:
        def _handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(_handler))

    return _make


@pytest.fixture
async def forecast_client(
    settings: Settings,
    make_client: Callable[[Handler], httpx.AsyncClient],
    forecast_payload: dict[str, Any],
) -> AsyncIterator[ForecastClient]:
    """A forecast client whose weather service returns `forecast_payload`."""
    http = make_client(lambda request: httpx.Response(200, json=forecast_payload))
    async with http, ForecastClient.from_settings(settings, client=http) as client:
        yield client
