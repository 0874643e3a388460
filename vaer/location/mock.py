"""
A scripted stand-in for LocationProbe, for tests and offline runs.
"""

import asyncio

from ..result import Err, Ok, Result
from .types import LocationError, PlaceName


class MockLocationProbe:
    """
    Replay a fixed outcome without touching any location hardware.

    Usage:
        probe = MockLocationProbe.succeeding("Sofia")
        probe = MockLocationProbe.failing(LocationError.SERVICES_DISABLED)
    """

    def __init__(
        self, result: Result[PlaceName, LocationError], *, delay: float = 0.0
    ) -> None:
        self.result = result
        self.delay = delay
        self.calls = 0

    @classmethod
    def succeeding(
        cls, city: str = "Sofia", *, delay: float = 0.0
    ) -> "MockLocationProbe":
        return cls(Ok(city), delay=delay)

    @classmethod
    def failing(
        cls,
        error: LocationError = LocationError.RESOLUTION_FAILED,
        *,
        delay: float = 0.0,
    ) -> "MockLocationProbe":
        return cls(Err(error), delay=delay)

    async def current_city_name(self) -> Result[PlaceName, LocationError]:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.result
