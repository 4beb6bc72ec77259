"""Minimal RssDesk control client.

Registers a feed source on a running ``rssdesk serve`` instance and prints
the resulting source list.

Usage:
    python examples/control_client.py "Hacker News" https://news.ycombinator.com/rss
"""

import sys

import httpx


class ControlClient:
    """Client for the RssDesk HTTP control channel."""

    def __init__(self, base_url: str = "http://127.0.0.1:7878", timeout: float = 10):
        """Initialize client.

        Args:
            base_url: Control channel base URL.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def send(self, action: str, *params: str) -> dict:
        """Send one command and return the decoded ControlResponse.

        Raises:
            httpx.HTTPError: If the request fails.
        """
        response = httpx.post(
            f"{self.base_url}/api/control",
            json={"action": action, "params": list(params)},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def add_url(self, name: str, url: str) -> dict:
        return self.send("add_url", name, url)

    def sources(self) -> list[dict]:
        response = httpx.get(f"{self.base_url}/api/sources", timeout=self.timeout)
        response.raise_for_status()
        return response.json()


def main() -> int:
    if len(sys.argv) != 3:
        print(__doc__)
        return 2

    client = ControlClient()
    result = client.add_url(sys.argv[1], sys.argv[2])
    if result["error"]:
        print(f"Error: {'; '.join(result['error'])}")
        return 1

    for source in client.sources():
        print(f"{source['name']}\t{source['url']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
