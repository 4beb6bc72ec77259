"""Parsers package."""

from rssdesk.parsers.base import FeedParser
from rssdesk.parsers.syndication import SyndicationParser

__all__ = [
    "FeedParser",
    "SyndicationParser",
]
