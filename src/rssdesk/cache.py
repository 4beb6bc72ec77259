"""Process-lifetime feed cache.

Maps a feed URL to its parsed entries. A URL is fetched and parsed at most
once per successful load; failures leave no trace, so a later call retries.
Entries are never invalidated.
"""

import asyncio

import structlog

from rssdesk.exceptions import CacheError, FetchError, ParseError
from rssdesk.models.feed import Entry
from rssdesk.parsers.base import FeedParser
from rssdesk.sources.base import FeedFetcher

logger = structlog.get_logger()


class FeedCache:
    """Lazy fetch-then-parse cache keyed by URL.

    Reason: Concurrent callers for the same URL share one in-flight load
    task, so the network is hit once no matter how many tasks ask.
    """

    def __init__(self, fetcher: FeedFetcher, parser: FeedParser):
        """Initialize cache.

        Args:
            fetcher: Retrieves raw feed bytes.
            parser: Turns raw bytes into entries.
        """
        self._fetcher = fetcher
        self._parser = parser
        self._entries: dict[str, list[Entry]] = {}
        self._in_flight: dict[str, asyncio.Task[list[Entry]]] = {}

    async def get_or_fetch(self, url: str) -> list[Entry]:
        """Return cached entries for a URL, loading them on first access.

        Args:
            url: Feed URL.

        Returns:
            The stored entry list (the same object on every hit).

        Raises:
            CacheError: Wrapping the FetchError or ParseError that stopped the load.
        """
        cached = self._entries.get(url)
        if cached is not None:
            logger.debug("Cache hit", url=url)
            return cached

        task = self._in_flight.get(url)
        if task is None:
            task = asyncio.create_task(self._populate(url))
            self._in_flight[url] = task
        else:
            logger.debug("Joining in-flight fetch", url=url)

        # A cancelled caller must not cancel the load other callers await
        return await asyncio.shield(task)

    async def _populate(self, url: str) -> list[Entry]:
        log = logger.bind(url=url)
        try:
            try:
                raw = await self._fetcher.fetch(url)
            except FetchError as e:
                log.warning("Feed fetch failed", error=str(e), error_type=type(e).__name__)
                raise CacheError(url, e) from e

            try:
                entries = self._parser.parse(raw, url)
            except ParseError as e:
                log.warning("Feed parse failed", error=str(e), error_type=type(e).__name__)
                raise CacheError(url, e) from e

            self._entries[url] = entries
            log.info("Feed cached", entries=len(entries))
            return entries
        finally:
            self._in_flight.pop(url, None)

    async def aclose(self) -> None:
        """Cancel in-flight loads and wait for them to finish."""
        tasks = list(self._in_flight.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._in_flight.clear()

    def peek(self, url: str) -> list[Entry] | None:
        """Return cached entries without triggering a fetch."""
        return self._entries.get(url)

    def is_loading(self, url: str) -> bool:
        """Whether a load for this URL is currently in flight."""
        return url in self._in_flight

    def urls(self) -> list[str]:
        """URLs with cached entries, in insertion order."""
        return list(self._entries)

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)
