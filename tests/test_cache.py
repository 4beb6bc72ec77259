"""Tests for the feed cache."""

import asyncio

import httpx
import pytest

from rssdesk.cache import FeedCache
from rssdesk.exceptions import (
    CacheError,
    FetchTransportError,
    MalformedFeedError,
    ResponseTooLargeError,
)
from rssdesk.parsers.syndication import SyndicationParser
from rssdesk.sources.http import HttpFeedFetcher
from rssdesk.utils.http_client import create_http_client

URL = "http://example.com/feed"


async def test_first_access_fetches_and_stores(cache, stub_fetcher, sample_rss_content):
    stub_fetcher.responses[URL] = sample_rss_content

    entries = await cache.get_or_fetch(URL)

    assert len(entries) == 2
    assert URL in cache
    assert cache.peek(URL) is entries
    assert stub_fetcher.calls == [URL]


async def test_cache_hit_skips_fetcher(cache, stub_fetcher, sample_rss_content):
    stub_fetcher.responses[URL] = sample_rss_content

    first = await cache.get_or_fetch(URL)
    second = await cache.get_or_fetch(URL)
    third = await cache.get_or_fetch(URL)

    assert first is second is third
    assert len(stub_fetcher.calls) == 1


async def test_parse_failure_not_cached_and_retried(cache, stub_fetcher, sample_rss_content):
    stub_fetcher.responses[URL] = b"<html><body>not a feed</body></html>"

    with pytest.raises(CacheError) as exc_info:
        await cache.get_or_fetch(URL)

    assert exc_info.value.stage == "parse"
    assert isinstance(exc_info.value.cause, MalformedFeedError)
    assert URL not in cache
    assert len(cache) == 0

    stub_fetcher.responses[URL] = sample_rss_content
    entries = await cache.get_or_fetch(URL)

    assert len(entries) == 2
    assert len(stub_fetcher.calls) == 2


async def test_fetch_failure_wrapped(cache, stub_fetcher):
    stub_fetcher.responses[URL] = FetchTransportError(URL, "HTTP 503 Service Unavailable", 503)

    with pytest.raises(CacheError) as exc_info:
        await cache.get_or_fetch(URL)

    error = exc_info.value
    assert error.stage == "fetch"
    assert error.url == URL
    assert error.__cause__ is error.cause
    assert str(error) == str(error.cause)
    assert URL not in cache


async def test_oversize_response_reported_not_cached():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"x" * 100))
    fetcher = HttpFeedFetcher(
        max_response_bytes=64, client=create_http_client(transport=transport)
    )
    cache = FeedCache(fetcher, SyndicationParser())

    with pytest.raises(CacheError) as exc_info:
        await cache.get_or_fetch(URL)

    assert isinstance(exc_info.value.cause, ResponseTooLargeError)
    assert URL not in cache
    # The cache is still usable afterwards
    assert cache.peek(URL) is None


async def test_concurrent_requests_share_one_fetch(cache, stub_fetcher, sample_rss_content):
    stub_fetcher.responses[URL] = sample_rss_content
    stub_fetcher.gate = asyncio.Event()

    first = asyncio.create_task(cache.get_or_fetch(URL))
    second = asyncio.create_task(cache.get_or_fetch(URL))
    await asyncio.sleep(0)

    assert cache.is_loading(URL)

    stub_fetcher.gate.set()
    a, b = await asyncio.gather(first, second)

    assert a is b
    assert len(stub_fetcher.calls) == 1
    assert not cache.is_loading(URL)


async def test_concurrent_failure_shared_then_retry(cache, stub_fetcher, sample_rss_content):
    stub_fetcher.responses[URL] = FetchTransportError(URL, "Request failed")
    stub_fetcher.gate = asyncio.Event()

    tasks = [asyncio.create_task(cache.get_or_fetch(URL)) for _ in range(3)]
    await asyncio.sleep(0)
    stub_fetcher.gate.set()
    results = await asyncio.gather(*tasks, return_exceptions=True)

    assert all(isinstance(r, CacheError) for r in results)
    assert len(stub_fetcher.calls) == 1

    stub_fetcher.gate = None
    stub_fetcher.responses[URL] = sample_rss_content
    await cache.get_or_fetch(URL)
    assert len(stub_fetcher.calls) == 2


async def test_cancelled_caller_does_not_cancel_shared_load(
    cache, stub_fetcher, sample_rss_content
):
    stub_fetcher.responses[URL] = sample_rss_content
    stub_fetcher.gate = asyncio.Event()

    impatient = asyncio.create_task(cache.get_or_fetch(URL))
    patient = asyncio.create_task(cache.get_or_fetch(URL))
    await asyncio.sleep(0)
    impatient.cancel()
    stub_fetcher.gate.set()

    entries = await patient
    assert len(entries) == 2
    assert impatient.cancelled()
    assert URL in cache


async def test_urls_keep_insertion_order(cache, stub_fetcher, empty_rss_content):
    for url in ("http://b.example/feed", "http://a.example/feed"):
        stub_fetcher.responses[url] = empty_rss_content
        await cache.get_or_fetch(url)

    assert cache.urls() == ["http://b.example/feed", "http://a.example/feed"]


async def test_aclose_cancels_in_flight_loads(cache, stub_fetcher, sample_rss_content):
    stub_fetcher.responses[URL] = sample_rss_content
    stub_fetcher.gate = asyncio.Event()

    waiter = asyncio.create_task(cache.get_or_fetch(URL))
    await asyncio.sleep(0)
    assert cache.is_loading(URL)

    await cache.aclose()

    assert not cache.is_loading(URL)
    assert URL not in cache
    with pytest.raises(asyncio.CancelledError):
        await waiter
