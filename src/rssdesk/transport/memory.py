"""In-process control transport backed by a queue of futures."""

import asyncio
from collections import deque

import structlog

from rssdesk.exceptions import ControlTransportError
from rssdesk.models.control import ControlRequest, ControlResponse

logger = structlog.get_logger()


class PendingExchange:
    """A queued request whose response resolves an awaiting future."""

    def __init__(self, request: ControlRequest, future: asyncio.Future[ControlResponse]):
        self._request = request
        self._future = future
        self._read = False

    @property
    def answered(self) -> bool:
        return self._future.done()

    def read_request(self) -> ControlRequest:
        if self._read:
            raise ControlTransportError("Request already read")
        self._read = True
        return self._request

    def write_response(self, response: ControlResponse) -> None:
        if self._future.done():
            raise ControlTransportError("Client is no longer waiting for a response")
        self._future.set_result(response)

    def abandon(self) -> None:
        if not self._future.done():
            self._future.cancel()


class QueueTransport:
    """Control transport for callers living in the same event loop.

    ``submit()`` queues a request and returns a future that resolves once
    the engine has dispatched it on a later tick.
    """

    def __init__(self) -> None:
        self._pending: deque[PendingExchange] = deque()
        self._closed = False
        self.port: int | None = None

    async def listen(self, port: int) -> None:
        self.port = port
        self._closed = False

    def submit(self, request: ControlRequest) -> asyncio.Future[ControlResponse]:
        """Queue a request.

        Raises:
            ControlTransportError: If the transport has been closed.
        """
        if self._closed:
            raise ControlTransportError("Transport is closed")
        future: asyncio.Future[ControlResponse] = asyncio.get_running_loop().create_future()
        self._pending.append(PendingExchange(request, future))
        return future

    def drain_pending(self) -> list[PendingExchange]:
        drained = list(self._pending)
        self._pending.clear()
        return drained

    def pending_count(self) -> int:
        return len(self._pending)

    async def close(self) -> None:
        self._closed = True
        if self._pending:
            logger.info("Abandoning unanswered control requests", count=len(self._pending))
        for exchange in self.drain_pending():
            exchange.abandon()
