"""Engine: owner of the source registry and feed cache.

One Engine is created at startup and handed to whatever drives the tick
loop and whatever renders feeds; nothing reaches the registry or the cache
through global state.

Each tick:

1. drains every pending control exchange and dispatches it, in order;
2. starts a background load when the selected source changed;
3. polls finished loads without blocking, turning a failure for the
   current selection into a notice and clearing the selection.
"""

import asyncio

import structlog

from rssdesk.cache import FeedCache
from rssdesk.config.settings import Settings
from rssdesk.dispatcher import CommandDispatcher
from rssdesk.exceptions import CacheError, ControlTransportError
from rssdesk.models.feed import Entry, Source
from rssdesk.parsers.syndication import SyndicationParser
from rssdesk.registry import SourceRegistry
from rssdesk.sources.base import FeedFetcher
from rssdesk.sources.http import HttpFeedFetcher
from rssdesk.transport.base import ControlTransport

logger = structlog.get_logger()


class Engine:
    """Feed engine driving control dispatch and feed loading."""

    def __init__(
        self,
        registry: SourceRegistry,
        cache: FeedCache,
        transport: ControlTransport | None = None,
        owned_fetcher: HttpFeedFetcher | None = None,
    ):
        """Initialize engine.

        Args:
            registry: Known feed sources.
            cache: Feed cache serving entries.
            transport: Optional control transport drained on every tick.
            owned_fetcher: Fetcher created for this engine, closed on shutdown.
        """
        self._registry = registry
        self._cache = cache
        self._transport = transport
        self._owned_fetcher = owned_fetcher
        self._dispatcher = CommandDispatcher(registry)

        self._selected: str | None = None
        self._selection_changed = False
        self._notice: str | None = None
        self._loads: dict[str, asyncio.Task[None]] = {}
        self._completions: asyncio.Queue[tuple[str, CacheError | None]] = asyncio.Queue()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        fetcher: FeedFetcher | None = None,
        transport: ControlTransport | None = None,
    ) -> "Engine":
        """Build the default engine from configuration.

        Args:
            settings: Application settings.
            fetcher: Optional fetcher override; an HttpFeedFetcher otherwise.
            transport: Optional control transport.
        """
        registry = SourceRegistry(
            (Source(name=s.name, url=s.url) for s in settings.sources),
            reject_duplicates=settings.reject_duplicate_urls,
        )
        owned_fetcher = None
        if fetcher is None:
            fetcher = owned_fetcher = HttpFeedFetcher(
                timeout=settings.fetch_timeout,
                max_response_bytes=settings.max_response_bytes,
                user_agent=settings.user_agent,
            )
        cache = FeedCache(fetcher, SyndicationParser())
        return cls(registry, cache, transport=transport, owned_fetcher=owned_fetcher)

    @property
    def registry(self) -> SourceRegistry:
        return self._registry

    @property
    def cache(self) -> FeedCache:
        return self._cache

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    def attach_transport(self, transport: ControlTransport) -> None:
        """Set the control transport drained by tick()."""
        self._transport = transport

    # Display-facing operations

    def list_sources(self) -> list[Source]:
        return self._registry.sources()

    @property
    def selected(self) -> str | None:
        return self._selected

    def select(self, url: str | None) -> None:
        """Select the source whose entries should be shown (None clears)."""
        self._selected = url
        self._selection_changed = url is not None

    async def current_entries(self) -> list[Entry]:
        """Entries of the selected source, fetching on first access.

        Returns an empty list when nothing is selected.

        Raises:
            CacheError: When the load fails; the selection is cleared and
                the error becomes the current notice.
        """
        url = self._selected
        if url is None:
            return []
        try:
            return await self._cache.get_or_fetch(url)
        except CacheError as e:
            self._report_failure(url, e)
            raise

    def ready_entries(self) -> list[Entry] | None:
        """Entries of the selected source if already cached, without fetching."""
        if self._selected is None:
            return None
        return self._cache.peek(self._selected)

    def is_loading(self) -> bool:
        """Whether the selected source is still being fetched."""
        return self._selected is not None and self._cache.is_loading(self._selected)

    def has_pending_loads(self) -> bool:
        """Whether any background load has not reported back yet."""
        return bool(self._loads)

    @property
    def notice(self) -> str | None:
        """Message of the last load failure, until dismissed."""
        return self._notice

    def dismiss_notice(self) -> None:
        self._notice = None

    # Tick loop

    async def tick(self) -> None:
        """Run one iteration of the cooperative loop."""
        self.process_control()

        if self._selection_changed:
            self._selection_changed = False
            if self._selected is not None:
                self._start_load(self._selected)

        self._poll_completions()

    def process_control(self) -> int:
        """Dispatch every pending control exchange.

        Returns:
            Number of exchanges answered.
        """
        if self._transport is None:
            return 0

        answered = 0
        for connection in self._transport.drain_pending():
            try:
                request = connection.read_request()
            except ControlTransportError as e:
                logger.warning("Dropping unreadable control request", error=str(e))
                continue

            response = self._dispatcher.dispatch(request)

            try:
                connection.write_response(response)
            except ControlTransportError as e:
                logger.warning(
                    "Control response not delivered", action=request.action, error=str(e)
                )
                continue
            answered += 1
        return answered

    def _start_load(self, url: str) -> None:
        if url in self._cache or url in self._loads:
            return
        self._loads[url] = asyncio.create_task(self._load(url))

    async def _load(self, url: str) -> None:
        try:
            await self._cache.get_or_fetch(url)
        except CacheError as e:
            self._completions.put_nowait((url, e))
        else:
            self._completions.put_nowait((url, None))
        finally:
            self._loads.pop(url, None)

    def _poll_completions(self) -> None:
        while True:
            try:
                url, error = self._completions.get_nowait()
            except asyncio.QueueEmpty:
                break
            if error is not None and url == self._selected:
                self._report_failure(url, error)

    def _report_failure(self, url: str, error: CacheError) -> None:
        logger.info("Clearing selection after failed load", url=url, stage=error.stage)
        if self._selected == url:
            self._selected = None
            self._selection_changed = False
        self._notice = str(error)

    async def close(self) -> None:
        """Cancel background and in-flight loads, then release the transport and fetcher."""
        loads = list(self._loads.values())
        for task in loads:
            task.cancel()
        await asyncio.gather(*loads, return_exceptions=True)
        await self._cache.aclose()

        if self._transport is not None:
            await self._transport.close()
        if self._owned_fetcher is not None:
            await self._owned_fetcher.aclose()
