from ..exceptions import VaerError


class ForecastError(VaerError):
    """Base exception for weather service errors."""

    pass


class InvalidQuery(ForecastError):
    """A well-formed request URL could not be built for the place."""

    pass


class TransportFailed(ForecastError):
    """The network request itself failed."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Request failed: {cause}")
        self.cause = cause


class InvalidResponse(ForecastError):
    """The weather service replied with something other than 200 OK."""

    def __init__(self, status_code: int | None = None) -> None:
        super().__init__(f"Unexpected status code: {status_code}")
        self.status_code = status_code


class DecodingFailed(ForecastError):
    """The response body could not be decoded into a forecast."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Decoding failed: {cause}")
        self.cause = cause


class UnknownError(ForecastError):
    """An unclassified failure."""

    pass
