"""Ordered registry of known feed sources."""

from collections.abc import Iterable, Iterator

import structlog

from rssdesk.exceptions import DuplicateSourceError
from rssdesk.models.feed import Source

logger = structlog.get_logger()


class SourceRegistry:
    """Insertion-ordered list of (name, url) sources.

    Appends unconditionally by default: the same URL added twice yields two
    rows (and still one cache entry). With ``reject_duplicates`` set, adding
    a known URL raises DuplicateSourceError instead of appending.
    """

    def __init__(self, sources: Iterable[Source] = (), reject_duplicates: bool = False):
        self._sources: list[Source] = list(sources)
        self.reject_duplicates = reject_duplicates

    def add(self, name: str, url: str) -> Source:
        """Append a source.

        Args:
            name: Display name.
            url: Feed URL.

        Returns:
            The appended Source.

        Raises:
            DuplicateSourceError: If duplicates are rejected and url is registered.
        """
        if self.reject_duplicates and url in self.urls():
            raise DuplicateSourceError(url)

        source = Source(name=name, url=url)
        self._sources.append(source)
        logger.info("Source added", name=name, url=url, total=len(self._sources))
        return source

    def sources(self) -> list[Source]:
        """Snapshot of all sources in order."""
        return list(self._sources)

    def urls(self) -> list[str]:
        return [source.url for source in self._sources]

    def __iter__(self) -> Iterator[Source]:
        return iter(list(self._sources))

    def __len__(self) -> int:
        return len(self._sources)
