"""Feed parser for any syndication format feedparser understands."""

import io
import re
from datetime import datetime, timezone

import feedparser
import structlog

from rssdesk.exceptions import MalformedFeedError
from rssdesk.models.feed import Entry

logger = structlog.get_logger()


class SyndicationParser:
    """Parser for RSS, Atom, RDF and JSON feeds.

    Entries without any resolvable link are dropped, so a feed whose items
    all lack links parses to an empty list rather than an error.
    """

    def parse(self, raw_content: bytes, url: str) -> list[Entry]:
        """Parse feed bytes into Entry objects.

        Args:
            raw_content: Raw feed body.
            url: Feed URL for error context.

        Returns:
            List of entries in original order.

        Raises:
            MalformedFeedError: When no feed format is recognized.
        """
        # A stream is always read as content; raw bytes could be taken for a path
        try:
            feed = feedparser.parse(io.BytesIO(raw_content))
        except Exception as e:
            raise MalformedFeedError(url, f"Unexpected parse error: {e}") from e

        # feedparser sets bozo for recoverable issues too; only an
        # unrecognized document with nothing in it is treated as malformed
        if not feed.get("version") and not feed.entries:
            reason = feed.get("bozo_exception") or "not a recognizable feed format"
            raise MalformedFeedError(url, str(reason))

        entries: list[Entry] = []
        for position, item in enumerate(feed.entries):
            entry = self._parse_entry(item)
            if entry is None:
                logger.debug("Dropping entry without links", url=url, position=position)
                continue
            entries.append(entry)

        return entries

    def _parse_entry(self, item: feedparser.FeedParserDict) -> Entry | None:
        """Convert one feedparser item, or None when it has no link."""
        links = self._extract_links(item)
        if not links:
            return None

        return Entry(
            published=self._parse_date(item),
            title=self._clean_title(item.get("title")),
            links=links,
        )

    def _extract_links(self, item: feedparser.FeedParserDict) -> list[str]:
        """Collect hrefs in document order, then the ``link`` field, without repeats."""
        candidates = [
            link.get("href", "") for link in item.get("links", []) if isinstance(link, dict)
        ]
        candidates.append(item.get("link", ""))

        links: list[str] = []
        for href in candidates:
            href = (href or "").strip()
            if href and href not in links:
                links.append(href)
        return links

    def _parse_date(self, item: feedparser.FeedParserDict) -> datetime | None:
        """Publication date as UTC, falling back to the update date."""
        for key in ("published_parsed", "updated_parsed"):
            parsed = item.get(key)
            if not parsed:
                continue
            try:
                return datetime(*parsed[:6], tzinfo=timezone.utc)
            except (ValueError, TypeError):
                continue
        return None

    def _clean_title(self, title: str | None) -> str | None:
        if not title:
            return None
        title = re.sub(r"\s+", " ", title).strip()
        return title or None
