"""HTTP control transport using FastAPI and uvicorn.

Exposes ``POST /api/control`` (ControlRequest in, ControlResponse out) and a
read-only ``GET /api/sources``. Requests are only queued here; the engine
answers them on its next tick, in arrival order.
"""

import asyncio
from collections.abc import Callable

import structlog
import uvicorn
from fastapi import APIRouter, FastAPI, HTTPException, status

from rssdesk import __version__
from rssdesk.exceptions import ControlTransportError
from rssdesk.models.control import ControlRequest, ControlResponse
from rssdesk.models.feed import Source
from rssdesk.transport.memory import QueueTransport

logger = structlog.get_logger()


class HttpControlTransport(QueueTransport):
    """Control transport serving JSON over HTTP."""

    def __init__(
        self,
        host: str = "127.0.0.1",
        list_sources: Callable[[], list[Source]] | None = None,
        log_level: str = "info",
    ):
        """Initialize transport.

        Args:
            host: Interface to bind when listening.
            list_sources: Callable backing GET /api/sources.
            log_level: uvicorn log level.
        """
        super().__init__()
        self._host = host
        self._list_sources = list_sources
        self._log_level = log_level
        self._server: uvicorn.Server | None = None
        self._serve_task: asyncio.Task[None] | None = None
        self.app = self._create_app()

    def _create_app(self) -> FastAPI:
        app = FastAPI(
            title="RssDesk Control API",
            description="Runtime registration of feed sources",
            version=__version__,
        )
        router = APIRouter(prefix="/api", tags=["control"])

        @router.post("/control", response_model=ControlResponse)
        async def control(request: ControlRequest) -> ControlResponse:
            """Queue a command and wait for the engine to answer it."""
            try:
                future = self.submit(request)
            except ControlTransportError as e:
                raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, str(e)) from e
            try:
                return await future
            except asyncio.CancelledError:
                if self._closed:
                    raise HTTPException(
                        status.HTTP_503_SERVICE_UNAVAILABLE, "Server shutting down"
                    ) from None
                raise

        @router.get("/sources", response_model=list[Source])
        async def sources() -> list[Source]:
            """List registered sources in order."""
            if self._list_sources is None:
                return []
            return self._list_sources()

        app.include_router(router)
        return app

    async def listen(self, port: int) -> None:
        """Start serving on host:port inside the running event loop."""
        await super().listen(port)
        config = uvicorn.Config(
            self.app,
            host=self._host,
            port=port,
            log_level=self._log_level,
            lifespan="off",
        )
        self._server = uvicorn.Server(config)
        self._serve_task = asyncio.create_task(self._server.serve())
        logger.info("Control channel listening", host=self._host, port=port)

    async def wait_closed(self) -> None:
        """Block until the HTTP server stops."""
        if self._serve_task is not None:
            await self._serve_task

    async def close(self) -> None:
        await super().close()
        if self._server is not None:
            self._server.should_exit = True
        await self.wait_closed()
        self._server = None
        self._serve_task = None
