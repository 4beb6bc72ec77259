"""HTTP client utilities."""

import httpx

DEFAULT_USER_AGENT = "RssDesk/0.1 (+feed reader)"


def create_http_client(
    timeout: float = 30,
    user_agent: str = DEFAULT_USER_AGENT,
    follow_redirects: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create a configured async HTTP client for feed retrieval.

    Args:
        timeout: Request timeout in seconds, applied to connect, read and write.
        user_agent: User-Agent header value.
        follow_redirects: Whether to follow redirects.
        transport: Optional transport override (e.g. httpx.MockTransport in tests).

    Returns:
        Configured httpx.AsyncClient.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": user_agent},
        follow_redirects=follow_redirects,
        transport=transport,
    )
