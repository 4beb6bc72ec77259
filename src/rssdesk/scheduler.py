"""Tick loop scheduling using APScheduler.

Drives Engine.tick at a fixed interval inside the running event loop.
"""

import logging

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from rssdesk.engine import Engine

logger = structlog.get_logger()

TICK_JOB_ID = "engine_tick"


def create_scheduler(engine: Engine, interval: float = 0.1) -> AsyncIOScheduler:
    """Create the scheduler that runs the engine's tick loop.

    Reason: Factory function keeps the engine injectable and the
    scheduler unstarted, so callers decide when ticking begins.

    Args:
        engine: Engine whose tick() is run.
        interval: Seconds between ticks.

    Returns:
        Configured (not yet started) AsyncIOScheduler.
    """
    scheduler = AsyncIOScheduler()

    # Every tick would otherwise be logged at INFO
    logging.getLogger("apscheduler.executors").setLevel(logging.WARNING)

    # One tick at a time; late ticks collapse into a single run
    scheduler.add_job(
        engine.tick,
        trigger=IntervalTrigger(seconds=interval),
        id=TICK_JOB_ID,
        name="Engine tick",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    logger.info("Scheduler configured", job_id=TICK_JOB_ID, interval=interval)

    return scheduler
