"""Tests for the tick scheduler."""

from datetime import timedelta

from rssdesk.cache import FeedCache
from rssdesk.engine import Engine
from rssdesk.parsers.syndication import SyndicationParser
from rssdesk.registry import SourceRegistry
from rssdesk.scheduler import TICK_JOB_ID, create_scheduler


def test_tick_job_configured(stub_fetcher):
    engine = Engine(SourceRegistry(), FeedCache(stub_fetcher, SyndicationParser()))

    scheduler = create_scheduler(engine, interval=0.5)
    job = scheduler.get_job(TICK_JOB_ID)

    assert job is not None
    assert job.func == engine.tick
    assert job.max_instances == 1
    assert job.coalesce is True
    assert job.trigger.interval == timedelta(seconds=0.5)
