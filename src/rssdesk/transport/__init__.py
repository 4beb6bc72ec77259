"""Transport package."""

from rssdesk.transport.base import ControlConnection, ControlTransport
from rssdesk.transport.http import HttpControlTransport
from rssdesk.transport.memory import PendingExchange, QueueTransport

__all__ = [
    "ControlConnection",
    "ControlTransport",
    "PendingExchange",
    "QueueTransport",
    "HttpControlTransport",
]
