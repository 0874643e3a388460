import random
from contextlib import AsyncExitStack

import click
import structlog

from ..config import DEFAULT_LOCATION_TIMEOUT, DEFAULT_USER_AGENT, Settings
from ..forecast.client import ForecastClient, ForecastService
from ..forecast.exceptions import InvalidQuery
from ..forecast.mock import MockForecastClient
from ..location.backends import (
    IPPositionSource,
    NominatimGeocoder,
    StaticPositionSource,
)
from ..location.mock import MockLocationProbe
from ..location.probe import LocationProbe, LocationService
from ..location.provider import GeoPositionProvider, PositionSource
from ..location.resolver import PlaceResolver
from ..location.types import Coordinate
from .orchestrator import ForecastOrchestrator
from .state import Failed, Idle, Loading, NoData, PipelineState, Succeeded

logger = structlog.get_logger()


@click.group(name="forecast", help="Fetch weather forecasts")
def cli() -> None:
    pass


@cli.command(help="Fetch the forecast for the current location")
@click.option("--city", help="Use this city instead of looking up the location")
@click.option("--latitude", type=float, help="Use a fixed latitude")
@click.option("--longitude", type=float, help="Use a fixed longitude")
@click.option("--mock", is_flag=True, help="Use random data instead of the API")
@click.option("--seed", type=int, help="Seed for the random data")
@click.option("--days", type=int, default=10, show_default=True)
async def run(
    *,
    city: str | None,
    latitude: float | None,
    longitude: float | None,
    mock: bool,
    seed: int | None,
    days: int,
) -> None:
    if (latitude is None) != (longitude is None):
        raise click.UsageError("--latitude and --longitude must be given together")

    settings = None if mock else Settings.from_env()

    coordinate = None
    if latitude is not None and longitude is not None:
        coordinate = Coordinate(latitude, longitude)

    location_service = build_location_service(
        city=city, coordinate=coordinate, settings=settings
    )

    async with AsyncExitStack() as stack:
        forecast_service: ForecastService
        if settings is None:
            forecast_service = MockForecastClient.with_random_data(
                random.Random(seed), days=days
            )
        else:
            forecast_service = await stack.enter_async_context(
                ForecastClient.from_settings(settings)
            )

        orchestrator = ForecastOrchestrator(
            location_service=location_service, forecast_service=forecast_service
        )
        orchestrator.subscribe(
            lambda state: logger.debug("State changed", state=type(state).__name__)
        )
        state = await orchestrator.run()

    echo_state(state)
    if isinstance(state, Failed):
        raise SystemExit(1)


@cli.command(help="Print the request URL for a place")
@click.argument("place")
async def url(*, place: str) -> None:
    async with ForecastClient.from_settings(Settings.from_env()) as client:
        try:
            click.echo(client.build_url(place))
        except InvalidQuery as exc:
            raise click.ClickException(str(exc)) from exc


def build_location_service(
    *,
    city: str | None,
    coordinate: Coordinate | None,
    settings: Settings | None,
) -> LocationService:
    if city:
        return MockLocationProbe.succeeding(city)

    timeout = settings.location_timeout if settings else DEFAULT_LOCATION_TIMEOUT
    user_agent = settings.user_agent if settings else DEFAULT_USER_AGENT

    source: PositionSource
    if coordinate is not None:
        source = StaticPositionSource(coordinate)
    else:
        source = IPPositionSource()

    return LocationProbe(
        GeoPositionProvider(source, timeout=timeout),
        PlaceResolver(NominatimGeocoder(user_agent=user_agent)),
    )


def echo_state(state: PipelineState) -> None:
    match state:
        case Idle():
            click.echo("Ready to load weather data.")
        case Loading():
            click.echo("Fetching weather...")
        case NoData():
            click.echo("No weather data available.")
        case Failed(message=message):
            click.echo(f"Error: {message}", err=True)
        case Succeeded(forecast=forecast):
            click.echo(f"{forecast.resolved_address} ({forecast.timezone})")
            for alert in forecast.alerts:
                click.echo(f"  Alert: {alert}")
            click.echo(
                f"  Now: dew point {forecast.current_conditions.dew:.1f}°C, "
                f"sunrise {forecast.current_conditions.sunrise}, "
                f"sunset {forecast.current_conditions.sunset}"
            )
            for day in forecast.days:
                click.echo(
                    f"  {day.datetime}: {day.tempmin:.1f}°C to {day.tempmax:.1f}°C, "
                    f"dew point {day.dew:.1f}°C, "
                    f"sunrise {day.sunrise}, sunset {day.sunset}. {day.description}"
                )
