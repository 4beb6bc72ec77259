"""HTTP feed fetcher built on httpx."""

import httpx
import structlog

from rssdesk.exceptions import (
    FetchTransportError,
    InvalidURLError,
    ResponseTooLargeError,
)
from rssdesk.utils.http_client import DEFAULT_USER_AGENT, create_http_client

logger = structlog.get_logger()

ALLOWED_SCHEMES = ("http", "https")


def validate_url(url: str) -> httpx.URL:
    """Check that a URL is absolute http(s) with a host.

    Raises:
        InvalidURLError: If the URL cannot be fetched.
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidURLError(str(url), f"Invalid URL: {e}") from e

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise InvalidURLError(url, f"Unsupported or missing scheme: {parsed.scheme!r}")
    if not parsed.host:
        raise InvalidURLError(url, "URL has no host")
    return parsed


class HttpFeedFetcher:
    """Fetch feed bodies over HTTP(S).

    A single GET per call, no retry. Bodies are streamed so an oversized
    response is rejected without being held in memory in full.
    """

    def __init__(
        self,
        timeout: float = 30,
        max_response_bytes: int = 10 * 1024 * 1024,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds.
            max_response_bytes: Largest body accepted.
            user_agent: User-Agent header for requests.
            client: Optional shared client. Not closed by aclose().
        """
        self._max_response_bytes = max_response_bytes
        self._owns_client = client is None
        self._client = client or create_http_client(timeout=timeout, user_agent=user_agent)

    @property
    def max_response_bytes(self) -> int:
        return self._max_response_bytes

    async def fetch(self, url: str) -> bytes:
        """Fetch the raw feed body.

        Args:
            url: Absolute http(s) feed URL.

        Returns:
            Raw response body.

        Raises:
            InvalidURLError: When the URL is malformed (no request is made).
            FetchTransportError: On timeout, connection failure or non-2xx status.
            ResponseTooLargeError: When the body exceeds max_response_bytes.
        """
        validate_url(url)
        log = logger.bind(url=url)
        log.debug("Fetching feed")

        try:
            async with self._client.stream("GET", url) as response:
                response.raise_for_status()
                body = await self._read_limited(url, response)
        except httpx.TimeoutException as e:
            raise FetchTransportError(url, f"Request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise FetchTransportError(
                url, f"HTTP {status} {e.response.reason_phrase}", status_code=status
            ) from e
        except httpx.InvalidURL as e:
            raise InvalidURLError(url, f"Invalid URL: {e}") from e
        except httpx.HTTPError as e:
            raise FetchTransportError(url, f"Request failed: {e}") from e

        log.debug("Fetched feed", size=len(body))
        return body

    async def _read_limited(self, url: str, response: httpx.Response) -> bytes:
        """Read a streamed body, stopping once it passes the size limit."""
        declared = response.headers.get("Content-Length")
        if declared and declared.isdigit() and int(declared) > self._max_response_bytes:
            raise ResponseTooLargeError(url, self._max_response_bytes)

        body = bytearray()
        async for chunk in response.aiter_bytes():
            body.extend(chunk)
            if len(body) > self._max_response_bytes:
                raise ResponseTooLargeError(url, self._max_response_bytes)
        return bytes(body)

    async def aclose(self) -> None:
        """Close the underlying client if this fetcher created it."""
        if self._owns_client:
            await self._client.aclose()
