"""Sources package."""

from rssdesk.sources.base import FeedFetcher
from rssdesk.sources.http import HttpFeedFetcher, validate_url

__all__ = [
    "FeedFetcher",
    "HttpFeedFetcher",
    "validate_url",
]
