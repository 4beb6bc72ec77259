"""Models package."""

from rssdesk.models.control import ControlRequest, ControlResponse
from rssdesk.models.feed import Entry, Source

__all__ = [
    "Source",
    "Entry",
    "ControlRequest",
    "ControlResponse",
]
