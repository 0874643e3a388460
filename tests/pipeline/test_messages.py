import pydantic
import pytest

from vaer.forecast.exceptions import DecodingFailed, ForecastError, TransportFailed
from vaer.forecast.types import HourlySample
from vaer.location.types import LocationError
from vaer.pipeline.messages import (
    LOCATION_ERROR_MESSAGES,
    describe,
    forecast_error_message,
    location_error_message,
)


def test_every_location_error_has_a_message() -> None:
    assert set(LOCATION_ERROR_MESSAGES) == set(LocationError)
    assert location_error_message(LocationError.RESOLUTION_FAILED) == (
        "Failed to get the city name."
    )


def test_describe_validation_error() -> None:
    with pytest.raises(pydantic.ValidationError) as exc_info:
        HourlySample.model_validate({})

    assert describe(exc_info.value) == "dew: Field required"


def test_describe_invalid_json() -> None:
    with pytest.raises(pydantic.ValidationError) as exc_info:
        HourlySample.model_validate_json("{")

    assert describe(exc_info.value).startswith("body: Invalid JSON")


def test_describe_without_message() -> None:
    assert describe(TimeoutError()) == "TimeoutError"


def test_decoding_message() -> None:
    error = DecodingFailed(ValueError("Expected a number."))

    assert forecast_error_message(error) == (
        "Failed to decode weather data: Expected a number."
    )


def test_transport_message() -> None:
    error = TransportFailed(OSError("Connection reset by peer"))

    assert forecast_error_message(error) == (
        "Network request failed: Connection reset by peer."
    )


def test_unclassified_forecast_error() -> None:
    assert forecast_error_message(ForecastError("?")) == "An unknown error occurred."
