import time
from collections.abc import Callable

import structlog

from ..forecast.client import ForecastService
from ..forecast.exceptions import ForecastError, UnknownError
from ..location.probe import LocationService
from ..location.types import LocationError
from ..result import Err
from .messages import forecast_error_message, location_error_message
from .state import (
    Failed,
    Idle,
    Listener,
    Loading,
    NoData,
    PipelineState,
    StateCell,
    Succeeded,
)

logger = structlog.get_logger()


class ForecastOrchestrator:
    """
    Look up the current city, then fetch the forecast for it.

    The outcome of a run is published as the pipeline state, which the
    presentation layer can read or subscribe to. A run always ends in a
    terminal state, failures are turned into a message suitable for display.

    Only one run may be in flight at a time. Calling `run()` while a run is
    in progress does nothing and returns the current state.
    """

    def __init__(
        self,
        *,
        location_service: LocationService,
        forecast_service: ForecastService,
    ) -> None:
        self.location_service = location_service
        self.forecast_service = forecast_service
        self._state = StateCell(Idle())
        self._running = False

    @property
    def state(self) -> PipelineState:
        return self._state.value

    @property
    def running(self) -> bool:
        return self._running

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._state.subscribe(listener)

    async def run(self) -> PipelineState:
        if self._running:
            logger.warning("Forecast run already in progress, ignoring")
            return self.state

        self._running = True
        try:
            self._state.set(Loading())
            started = time.monotonic()
            state = await self._run()
            self._state.set(state)
        finally:
            self._running = False

        logger.info(
            "Forecast run finished",
            state=type(state).__name__,
            elapsed_ms=round((time.monotonic() - started) * 1000, 2),
        )
        return state

    async def _run(self) -> PipelineState:
        try:
            result = await self.location_service.current_city_name()
        except Exception:
            logger.exception("Location service raised instead of returning an error")
            result = Err(LocationError.ACQUISITION_FAILED)

        if isinstance(result, Err):
            return Failed(location_error_message(result.error))

        place = result.value
        try:
            forecast = await self.forecast_service.fetch_forecast(place)
        except ForecastError as exc:
            return Failed(forecast_error_message(exc))
        except Exception:
            logger.exception("Forecast service raised an unclassified error")
            return Failed(forecast_error_message(UnknownError()))

        if not forecast.days:
            logger.info("Forecast contains no days", place=place)
            return NoData()

        return Succeeded(forecast)
