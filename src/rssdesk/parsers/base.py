"""Abstract feed parser interface using Protocol."""

from typing import Protocol

from rssdesk.models.feed import Entry


class FeedParser(Protocol):
    """Feed parser abstraction protocol."""

    def parse(self, raw_content: bytes, url: str) -> list[Entry]:
        """Parse a raw feed body into entries.

        Args:
            raw_content: Raw bytes as returned by the fetcher.
            url: Feed URL, used for error context.

        Returns:
            Entries in document order, each with at least one link.

        Raises:
            ParseError: When the bytes are not a recognizable feed.
        """
        ...
