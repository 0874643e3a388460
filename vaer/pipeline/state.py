"""
The observable state of a forecast pipeline.
"""

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from ..forecast.types import Forecast

logger = structlog.get_logger()


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Succeeded:
    forecast: Forecast


@dataclass(frozen=True)
class Failed:
    message: str


@dataclass(frozen=True)
class NoData:
    pass


type PipelineState = Idle | Loading | Succeeded | Failed | NoData

type Listener = Callable[[PipelineState], None]


class StateCell:
    """
    Holds the current pipeline state and notifies listeners when it changes.

    Only the owning orchestrator writes to the cell. Writes happen on the
    event loop thread, so listeners are called in order of the transitions.
    """

    def __init__(self, initial: PipelineState) -> None:
        self._value = initial
        self._listeners: list[Listener] = []

    @property
    def value(self) -> PipelineState:
        return self._value

    def set(self, value: PipelineState) -> None:
        self._value = value
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("State listener failed", state=type(value).__name__)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for state changes. Returns a function that
        removes the listener again.
        """

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
