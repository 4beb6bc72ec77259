"""Test configuration and fixtures."""

import asyncio

import pytest

from rssdesk.cache import FeedCache
from rssdesk.parsers.syndication import SyndicationParser


class StubFetcher:
    """Fetcher returning canned bodies (or raising canned errors) per URL."""

    def __init__(self, responses: dict | None = None):
        self.responses = dict(responses or {})
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    async def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        outcome = self.responses[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def sample_rss_content():
    """RSS 2.0 feed with three items; the second one has no link."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example News</title>
    <link>http://example.com/</link>
    <description>Top stories</description>
    <item>
      <title>First   story</title>
      <link>http://example.com/first</link>
      <pubDate>Thu, 19 Dec 2024 00:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Story without a link</title>
      <description>Nothing to open here.</description>
    </item>
    <item>
      <title>Third story</title>
      <link>http://example.com/third</link>
    </item>
  </channel>
</rss>"""


@pytest.fixture
def sample_atom_content():
    """Atom feed with one untitled entry carrying two links."""
    return b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example Atom</title>
  <id>urn:uuid:60a76c80-d399-11d9-b93C-0003939e0af6</id>
  <updated>2024-12-18T10:00:00Z</updated>
  <entry>
    <id>urn:uuid:1225c695-cfb8-4ebb-aaaa-80da344efa6a</id>
    <link rel="alternate" href="http://example.org/2024/12/18/post"/>
    <link rel="enclosure" type="audio/mpeg" length="1337" href="http://example.org/audio.mp3"/>
    <updated>2024-12-18T10:00:00Z</updated>
  </entry>
</feed>"""


@pytest.fixture
def empty_rss_content():
    """Valid RSS 2.0 channel without items."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Quiet feed</title>
    <link>http://example.com/</link>
    <description>Nothing yet</description>
  </channel>
</rss>"""


@pytest.fixture
def stub_fetcher():
    return StubFetcher()


@pytest.fixture
def cache(stub_fetcher):
    return FeedCache(stub_fetcher, SyndicationParser())


@pytest.fixture
def settle():
    """Let the event loop run until a condition holds."""

    async def _settle(predicate, timeout: float = 2.0) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not predicate():
            if loop.time() > deadline:
                raise AssertionError("Condition not reached before timeout")
            await asyncio.sleep(0.001)

    return _settle
