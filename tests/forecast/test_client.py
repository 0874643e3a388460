import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from pytest_mock import MockerFixture

from vaer.config import Settings
from vaer.forecast.client import ForecastClient
from vaer.forecast.exceptions import (
    DecodingFailed,
    InvalidQuery,
    InvalidResponse,
    TransportFailed,
    UnknownError,
)
from vaer.forecast.types import Forecast

pytestmark = pytest.mark.asyncio

type Handler = Callable[[httpx.Request], httpx.Response]


async def test_fetch_forecast(
    forecast_client: ForecastClient,
    forecast: Forecast,
    requests: list[httpx.Request],
) -> None:
    result = await forecast_client.fetch_forecast("Sofia")

    assert result == forecast

    # Exactly one request
    (request,) = requests
    assert request.method == "GET"
    assert request.url.path == "/timeline/Sofia/today"
    assert dict(request.url.params) == {
        "unitGroup": "metric",
        "elements": forecast_client.elements,
        "key": "secret",
        "contentType": "json",
    }


async def test_build_url() -> None:
    client = ForecastClient(
        base_url="https://weather.example.com/timeline/",
        api_key="secret",
        elements="datetime,temp",
        client=httpx.AsyncClient(),
    )

    assert str(client.build_url("Sofia")) == (
        "https://weather.example.com/timeline/Sofia/today"
        "?unitGroup=metric&elements=datetime,temp&key=secret&contentType=json"
    )


async def test_build_url_encodes_place(settings: Settings) -> None:
    client = ForecastClient.from_settings(settings, client=httpx.AsyncClient())

    url = client.build_url("New York")
    assert url.raw_path.startswith(b"/timeline/New%20York/today?")

    url = client.build_url("Paris/France")
    assert url.raw_path.startswith(b"/timeline/Paris%2FFrance/today?")


@pytest.mark.parametrize("place", ["", "   ", "Sof\nia", "So\x00fia"])
async def test_invalid_place(
    forecast_client: ForecastClient, requests: list[httpx.Request], place: str
) -> None:
    with pytest.raises(InvalidQuery):
        await forecast_client.fetch_forecast(place)

    assert requests == []


@pytest.mark.parametrize("base_url", ["", "weather.example.com", "ftp://example.com"])
async def test_invalid_base_url(
    base_url: str,
    make_client: Callable[[Handler], httpx.AsyncClient],
    requests: list[httpx.Request],
) -> None:
    http = make_client(lambda request: httpx.Response(200))
    client = ForecastClient(
        base_url=base_url, api_key="secret", elements="temp", client=http
    )

    with pytest.raises(InvalidQuery):
        await client.fetch_forecast("Sofia")

    assert requests == []


async def test_transport_error(
    settings: Settings, make_client: Callable[[Handler], httpx.AsyncClient]
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("Timed out", request=request)

    client = ForecastClient.from_settings(settings, client=make_client(handler))

    with pytest.raises(TransportFailed) as exc_info:
        await client.fetch_forecast("Sofia")

    assert isinstance(exc_info.value.cause, httpx.ConnectTimeout)


@pytest.mark.parametrize("status_code", [201, 301, 400, 401, 404, 429, 500, 503])
async def test_invalid_response(
    settings: Settings,
    make_client: Callable[[Handler], httpx.AsyncClient],
    forecast_payload: dict[str, Any],
    status_code: int,
) -> None:
    http = make_client(
        lambda request: httpx.Response(status_code, json=forecast_payload)
    )
    client = ForecastClient.from_settings(settings, client=http)

    with pytest.raises(InvalidResponse) as exc_info:
        await client.fetch_forecast("Sofia")

    assert exc_info.value.status_code == status_code


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"not json",
        b"[]",
        b'{"queryCost": 1}',
    ],
)
async def test_decoding_failed(
    settings: Settings,
    make_client: Callable[[Handler], httpx.AsyncClient],
    body: bytes,
) -> None:
    http = make_client(lambda request: httpx.Response(200, content=body))
    client = ForecastClient.from_settings(settings, client=http)

    with pytest.raises(DecodingFailed):
        await client.fetch_forecast("Sofia")


async def test_day_missing_a_field(
    settings: Settings,
    make_client: Callable[[Handler], httpx.AsyncClient],
    forecast_payload: dict[str, Any],
) -> None:
    del forecast_payload["days"][4]["sunset"]
    http = make_client(
        lambda request: httpx.Response(200, content=json.dumps(forecast_payload))
    )
    client = ForecastClient.from_settings(settings, client=http)

    with pytest.raises(DecodingFailed):
        await client.fetch_forecast("Sofia")


async def test_unknown_error(
    forecast_client: ForecastClient, mocker: MockerFixture
) -> None:
    mocker.patch.object(
        forecast_client.client, "get", side_effect=RuntimeError("Event loop closed")
    )

    with pytest.raises(UnknownError):
        await forecast_client.fetch_forecast("Sofia")


async def test_owned_client_is_closed(settings: Settings) -> None:
    async with ForecastClient.from_settings(settings) as client:
        assert not client.client.is_closed

    assert client.client.is_closed


async def test_injected_client_is_not_closed(settings: Settings) -> None:
    async with httpx.AsyncClient() as http:
        async with ForecastClient.from_settings(settings, client=http):
            pass

        assert not http.is_closed
