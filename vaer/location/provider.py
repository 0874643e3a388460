"""
Awaitable access to a callback based platform location service.

The platform is asked for a single position and answers at some later point
by calling one of the delegate methods, possibly from another thread. The
provider keeps exactly one pending request slot and turns that answer into
the result of `acquire_current_position()`.
"""

import asyncio
from collections.abc import Sequence
from typing import Protocol

import structlog

from .exceptions import (
    AcquisitionFailed,
    AcquisitionInProgress,
    PositionError,
    ServicesDisabled,
)
from .types import AuthorizationStatus, Coordinate

logger = structlog.get_logger()


class PositionDelegate(Protocol):
    """Receives the outcome of a position request."""

    def did_update_positions(self, positions: Sequence[Coordinate]) -> None: ...

    def did_fail(self, error: BaseException) -> None: ...


class PositionSource(Protocol):
    """The platform location capability."""

    def services_enabled(self) -> bool: ...

    def authorization_status(self) -> AuthorizationStatus: ...

    def request_authorization(self) -> None: ...

    def request_location(self, delegate: PositionDelegate) -> None:
        """
        Request a one-shot position. Exactly one of the delegate methods
        must eventually be called for each request.
        """
        ...


class _PendingRequest:
    """
    The delegate for a single position request.

    Each request gets its own delegate bound to its own future, so an answer
    arriving after a timeout can only reach a future that is already done.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop
        self.future: asyncio.Future[Coordinate] = loop.create_future()

    def did_update_positions(self, positions: Sequence[Coordinate]) -> None:
        if positions:
            self._settle(result=Coordinate(*positions[0]))
        else:
            self._settle(error=AcquisitionFailed("No position was delivered"))

    def did_fail(self, error: BaseException) -> None:
        if isinstance(error, PositionError):
            self._settle(error=error)
            return

        exc = AcquisitionFailed(f"Position provider failed: {error}")
        exc.__cause__ = error
        self._settle(error=exc)

    def _settle(
        self, *, result: Coordinate | None = None, error: PositionError | None = None
    ) -> None:
        # Callbacks may come from a platform thread, so the future is only
        # ever touched from its own event loop
        self.loop.call_soon_threadsafe(self._resolve, result, error)

    def _resolve(
        self, result: Coordinate | None, error: PositionError | None
    ) -> None:
        if self.future.done():
            logger.debug("Ignoring position callback for a finished request")
            return

        if error is not None:
            self.future.set_exception(error)
        else:
            assert result is not None
            self.future.set_result(result)


class GeoPositionProvider:
    """
    Acquire the current position from a PositionSource.

    Only one acquisition may be pending at a time. A second, concurrent call
    is rejected with AcquisitionInProgress rather than replacing the pending
    request.
    """

    def __init__(
        self, source: PositionSource, *, timeout: float | None = 30.0
    ) -> None:
        self.source = source
        self.timeout = timeout
        self._pending: _PendingRequest | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    async def acquire_current_position(self) -> Coordinate:
        if not self.source.services_enabled():
            raise ServicesDisabled("Location services are disabled")

        if self._pending is not None:
            raise AcquisitionInProgress("A position request is already pending")

        status = self.source.authorization_status()
        if status is AuthorizationStatus.NOT_DETERMINED:
            logger.info("Requesting location authorization")
            self.source.request_authorization()
        elif status is AuthorizationStatus.DENIED:
            raise AcquisitionFailed("Location access has been denied")

        request = _PendingRequest(asyncio.get_running_loop())
        self._pending = request

        try:
            try:
                self.source.request_location(request)
            except Exception as exc:
                raise AcquisitionFailed(f"Position request failed: {exc}") from exc

            async with asyncio.timeout(self.timeout):
                coordinate = await request.future
        except TimeoutError as exc:
            raise AcquisitionFailed(
                f"No position received within {self.timeout} seconds"
            ) from exc
        finally:
            self._pending = None
            if not request.future.done():
                request.future.cancel()

        logger.debug(
            "Acquired position",
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
        )
        return coordinate
