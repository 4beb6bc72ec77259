"""Control channel interfaces using Protocol.

A transport accepts connections and hands each one to the engine as a single
request/response exchange: read_request() then write_response(), once each.
"""

from typing import Protocol

from rssdesk.models.control import ControlRequest, ControlResponse


class ControlConnection(Protocol):
    """One pending control exchange."""

    def read_request(self) -> ControlRequest:
        """Return the decoded request.

        Raises:
            ControlTransportError: If the request cannot be read.
        """
        ...

    def write_response(self, response: ControlResponse) -> None:
        """Send the response back to the client.

        Raises:
            ControlTransportError: If the client can no longer be answered.
        """
        ...


class ControlTransport(Protocol):
    """Source of control exchanges polled by the engine."""

    async def listen(self, port: int) -> None:
        """Start accepting connections on a port."""
        ...

    def drain_pending(self) -> list[ControlConnection]:
        """Return every exchange queued since the last call, in arrival order."""
        ...

    async def close(self) -> None:
        """Stop accepting connections and abandon unanswered exchanges."""
        ...
