"""
Runtime configuration, read from the environment.
"""

import os
from dataclasses import dataclass

DEFAULT_API_URL = (
    "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
)

# The fields requested from the weather service. These must cover every
# required field of the Forecast model, or decoding will fail.
DEFAULT_API_ELEMENTS = (
    "datetime,datetimeEpoch,temp,tempmax,tempmin,dew,sunrise,sunset,"
    "description"
)

DEFAULT_LOCATION_TIMEOUT = 30.0

DEFAULT_USER_AGENT = "vaer/0.1 (+https://github.com/vaer-weather/vaer)"


@dataclass(frozen=True, kw_only=True)
class Settings:
    api_url: str
    api_key: str
    api_elements: str
    location_timeout: float | None
    user_agent: str

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load settings from environment variables.

        Only the API key is required, everything else has a default.
        """

        timeout = os.getenv("VAER_LOCATION_TIMEOUT")
        location_timeout: float | None = DEFAULT_LOCATION_TIMEOUT
        if timeout is not None:
            # A timeout of 0 disables the timeout entirely
            location_timeout = float(timeout) or None

        return cls(
            api_url=os.getenv("VAER_API_URL", DEFAULT_API_URL),
            api_key=getenv("VAER_API_KEY"),
            api_elements=os.getenv("VAER_API_ELEMENTS", DEFAULT_API_ELEMENTS),
            location_timeout=location_timeout,
            user_agent=os.getenv("VAER_USER_AGENT", DEFAULT_USER_AGENT),
        )


def getenv(key: str) -> str:
    """
    Get a required environment variable.

    Raises KeyError if the variable is not set.
    """
    if value := os.getenv(key):
        return value

    raise KeyError(f"Environment variable {key} not set")
