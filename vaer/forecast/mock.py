"""
A scripted stand-in for ForecastClient, and a generator of random but valid
forecasts.

All randomness comes from the `random.Random` instance passed in, so a fixed
seed (and start date) always produces the same forecast.
"""

import random
from datetime import UTC, date, datetime, time, timedelta

from ..location.types import PlaceName
from .exceptions import (
    DecodingFailed,
    ForecastError,
    InvalidQuery,
    InvalidResponse,
    UnknownError,
)
from .types import CurrentConditions, Forecast, ForecastDay, HourlySample

ADDRESSES: tuple[tuple[str, str, str], ...] = (
    # (address, resolved address, timezone)
    ("New York", "New York, NY, United States", "America/New_York"),
    ("London", "London, England, United Kingdom", "Europe/London"),
    ("Tokyo", "Tokyo, Japan", "Asia/Tokyo"),
    ("Paris", "Paris, Île-de-France, France", "Europe/Paris"),
    ("Berlin", "Berlin, Deutschland", "Europe/Berlin"),
    ("Sydney", "Sydney, NSW 2000, Australia", "Australia/Sydney"),
)

DESCRIPTION = "Partly cloudy throughout the day."


def random_time(rng: random.Random) -> str:
    """A random early morning time of day, formatted as HH:MM:SS."""
    hour, minute, second = rng.randint(5, 7), rng.randint(0, 59), rng.randint(0, 59)
    return f"{hour:02d}:{minute:02d}:{second:02d}"


def random_hours(rng: random.Random, *, count: int = 24) -> tuple[HourlySample, ...]:
    return tuple(HourlySample(dew=rng.uniform(-5, 10)) for _ in range(count))


def random_day(rng: random.Random, day: date) -> ForecastDay:
    epoch = int(datetime.combine(day, time(), tzinfo=UTC).timestamp())
    return ForecastDay(
        datetime=day.isoformat(),
        datetime_epoch=epoch,
        temp=rng.uniform(0, 20),
        tempmax=rng.uniform(15, 35),
        tempmin=rng.uniform(5, 15),
        dew=rng.uniform(5, 20),
        sunrise=random_time(rng),
        sunset=random_time(rng),
        description=DESCRIPTION,
        hours=random_hours(rng),
    )


def random_forecast(
    rng: random.Random, *, days: int = 10, start: date | None = None
) -> Forecast:
    """
    Generate a valid forecast with `days` consecutive days from `start`
    (today if not given).
    """

    start = start or date.today()
    address, resolved_address, timezone = rng.choice(ADDRESSES)

    return Forecast(
        query_cost=1,
        latitude=rng.uniform(-90, 90),
        longitude=rng.uniform(-180, 180),
        resolved_address=resolved_address,
        address=address,
        timezone=timezone,
        tzoffset=rng.uniform(-12, 12),
        days=tuple(
            random_day(rng, start + timedelta(days=offset)) for offset in range(days)
        ),
        alerts=(),
        current_conditions=CurrentConditions(
            dew=rng.uniform(0, 20),
            sunrise=random_time(rng),
            sunset=random_time(rng),
        ),
    )


def random_error(rng: random.Random) -> ForecastError:
    errors: list[ForecastError] = [
        InvalidQuery("Invalid URL"),
        InvalidResponse(500),
        DecodingFailed(ValueError("Unexpected end of input")),
        UnknownError(),
    ]
    return rng.choice(errors)


class MockForecastClient:
    """
    Replay a fixed forecast, or raise a fixed error, without any network.

    Usage:
        client = MockForecastClient(forecast)
        client = MockForecastClient(InvalidResponse(503))
        client = MockForecastClient.with_random_data(random.Random(42))
    """

    def __init__(self, behavior: Forecast | ForecastError) -> None:
        self.behavior = behavior
        self.places: list[PlaceName] = []

    @classmethod
    def with_random_data(
        cls, rng: random.Random, *, days: int = 10, start: date | None = None
    ) -> "MockForecastClient":
        return cls(random_forecast(rng, days=days, start=start))

    @classmethod
    def with_random_error(cls, rng: random.Random) -> "MockForecastClient":
        return cls(random_error(rng))

    async def fetch_forecast(self, place: PlaceName) -> Forecast:
        self.places.append(place)
        if isinstance(self.behavior, ForecastError):
            raise self.behavior
        return self.behavior
