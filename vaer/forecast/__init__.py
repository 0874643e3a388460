"""Weather forecasts from the timeline API."""

from .client import ForecastClient, ForecastService
from .exceptions import (
    DecodingFailed,
    ForecastError,
    InvalidQuery,
    InvalidResponse,
    TransportFailed,
    UnknownError,
)
from .types import CurrentConditions, Forecast, ForecastDay, HourlySample

__all__ = [
    "CurrentConditions",
    "DecodingFailed",
    "Forecast",
    "ForecastClient",
    "ForecastDay",
    "ForecastError",
    "ForecastService",
    "HourlySample",
    "InvalidQuery",
    "InvalidResponse",
    "TransportFailed",
    "UnknownError",
]
