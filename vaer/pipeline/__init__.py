"""The location to forecast pipeline."""

from .orchestrator import ForecastOrchestrator
from .state import Failed, Idle, Loading, NoData, PipelineState, Succeeded

__all__ = [
    "Failed",
    "ForecastOrchestrator",
    "Idle",
    "Loading",
    "NoData",
    "PipelineState",
    "Succeeded",
]
