"""Abstract feed fetcher interface using Protocol."""

from typing import Protocol


class FeedFetcher(Protocol):
    """Feed retrieval abstraction protocol.

    Reason: Using Protocol lets tests pass a stub with a call counter
    without subclassing the HTTP implementation.
    """

    async def fetch(self, url: str) -> bytes:
        """Retrieve the raw feed body for a URL.

        Args:
            url: Absolute feed URL.

        Returns:
            bytes: Raw response body.

        Raises:
            FetchError: InvalidURLError, FetchTransportError or ResponseTooLargeError.
        """
        ...
