"""Main application entry point.

Subcommands:

* ``serve``: run the tick loop with the HTTP control channel.
* ``sources``: print the configured sources.
* ``show URL``: fetch a feed once and print its entries.
"""

import argparse
import asyncio
import sys

from rssdesk.config.settings import settings
from rssdesk.engine import Engine
from rssdesk.exceptions import CacheError
from rssdesk.models.feed import Entry
from rssdesk.scheduler import create_scheduler
from rssdesk.transport.http import HttpControlTransport
from rssdesk.utils.logger import configure_logging, get_logger


def format_entry(entry: Entry) -> str:
    """Render an entry as a date row and a title row."""
    if entry.published is not None:
        date = f"[{entry.published.isoformat()}]"
    else:
        date = "[No publish date]"
    return f"{date}\n{entry.display_title} <{entry.primary_link}>"


async def serve(host: str, port: int) -> None:
    """Run the engine until the control server stops."""
    logger = get_logger("serve")

    engine = Engine.from_settings(settings)
    transport = HttpControlTransport(
        host=host,
        list_sources=engine.list_sources,
        log_level=settings.log_level.lower(),
    )
    engine.attach_transport(transport)

    await transport.listen(port)
    scheduler = create_scheduler(engine, interval=settings.tick_interval)
    scheduler.start()
    logger.info("RssDesk started", sources=len(engine.registry))

    try:
        await transport.wait_closed()
    finally:
        scheduler.shutdown(wait=False)
        await engine.close()
        logger.info("RssDesk stopped")


async def show(url: str) -> int:
    """Print the entries of one feed, or the error that prevented loading it."""
    engine = Engine.from_settings(settings)
    engine.select(url)
    try:
        entries = await engine.current_entries()
    except CacheError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await engine.close()

    for entry in entries:
        print(format_entry(entry))
    return 0


def list_sources() -> int:
    for source in settings.sources:
        print(f"{source.name}\t{source.url}")
    return 0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="RssDesk - on-demand feed cache")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run with the HTTP control channel")
    serve_parser.add_argument(
        "--host",
        default=settings.control_host,
        help=f"Control channel host (default: {settings.control_host})",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=settings.control_port,
        help=f"Control channel port (default: {settings.control_port})",
    )

    subparsers.add_parser("sources", help="List configured feed sources")

    show_parser = subparsers.add_parser("show", help="Fetch a feed and print its entries")
    show_parser.add_argument("url", help="Feed URL")

    args = parser.parse_args()

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.log_json,
    )

    if args.command == "serve":
        try:
            asyncio.run(serve(args.host, args.port))
        except KeyboardInterrupt:
            pass
    elif args.command == "sources":
        sys.exit(list_sources())
    else:
        sys.exit(asyncio.run(show(args.url)))


if __name__ == "__main__":
    main()
