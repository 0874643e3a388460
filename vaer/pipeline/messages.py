"""
User facing messages for every pipeline failure.
"""

import pydantic

from ..forecast.exceptions import (
    DecodingFailed,
    ForecastError,
    InvalidQuery,
    InvalidResponse,
    TransportFailed,
    UnknownError,
)
from ..location.types import LocationError

LOCATION_ERROR_MESSAGES: dict[LocationError, str] = {
    LocationError.SERVICES_DISABLED: "Location services are disabled.",
    LocationError.ACQUISITION_FAILED: "Failed to get the current location.",
    LocationError.RESOLUTION_FAILED: "Failed to get the city name.",
}

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


def location_error_message(error: LocationError) -> str:
    return LOCATION_ERROR_MESSAGES[error]


def forecast_error_message(error: ForecastError) -> str:
    match error:
        case InvalidQuery():
            return "The weather service URL is invalid."
        case TransportFailed(cause=cause):
            return f"Network request failed: {describe(cause)}."
        case InvalidResponse():
            return "The weather service returned an invalid response."
        case DecodingFailed(cause=cause):
            return f"Failed to decode weather data: {describe(cause)}."
        case UnknownError():
            return UNKNOWN_ERROR_MESSAGE
        case _:
            return UNKNOWN_ERROR_MESSAGE


def describe(cause: BaseException) -> str:
    """
    A short, single line description of an underlying error.
    """

    if isinstance(cause, pydantic.ValidationError):
        return "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
            for error in cause.errors()
        )

    return str(cause).rstrip(".") or type(cause).__name__
