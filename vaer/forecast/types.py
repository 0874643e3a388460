from datetime import date

import pydantic
from pydantic import ConfigDict, Field

# Days are local calendar dates, e.g. "2024-06-01"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

# Sunrise and sunset are local wall clock times, e.g. "06:42:10"
TIME_OF_DAY_PATTERN = r"^\d{2}:\d{2}:\d{2}$"


class _Model(pydantic.BaseModel):
    # Fields are given by their camelCase name in the JSON payload, and
    # nothing has a default: a missing field is a decoding error.
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class HourlySample(_Model):
    dew: float


class ForecastDay(_Model):
    datetime: str = Field(pattern=DATE_PATTERN)
    datetime_epoch: int = Field(alias="datetimeEpoch")
    temp: float
    tempmax: float
    tempmin: float
    dew: float
    sunrise: str = Field(pattern=TIME_OF_DAY_PATTERN)
    sunset: str = Field(pattern=TIME_OF_DAY_PATTERN)
    description: str
    hours: tuple[HourlySample, ...]

    @property
    def id(self) -> int:
        return self.datetime_epoch

    @property
    def calendar_date(self) -> date:
        return date.fromisoformat(self.datetime)

    @pydantic.field_validator("datetime")
    @classmethod
    def _is_calendar_date(cls, value: str) -> str:
        # The pattern allows impossible dates such as 2024-02-30
        date.fromisoformat(value)
        return value


class CurrentConditions(_Model):
    dew: float
    sunrise: str = Field(pattern=TIME_OF_DAY_PATTERN)
    sunset: str = Field(pattern=TIME_OF_DAY_PATTERN)


class Forecast(_Model):
    query_cost: int = Field(alias="queryCost")
    latitude: float
    longitude: float
    resolved_address: str = Field(alias="resolvedAddress")
    address: str
    timezone: str
    tzoffset: float  # Hours from UTC, may be fractional
    days: tuple[ForecastDay, ...]
    alerts: tuple[str, ...]
    current_conditions: CurrentConditions = Field(alias="currentConditions")

    @property
    def id(self) -> str:
        return self.resolved_address

    @pydantic.field_validator("days")
    @classmethod
    def _days_in_order(
        cls, days: tuple[ForecastDay, ...]
    ) -> tuple[ForecastDay, ...]:
        for previous, day in zip(days, days[1:]):
            if day.datetime_epoch <= previous.datetime_epoch:
                raise ValueError(
                    f"Days must be in chronological order without duplicates, "
                    f"{day.datetime} does not follow {previous.datetime}"
                )
        return days
