"""Custom exceptions for RssDesk.

Provides a structured exception hierarchy for the fetch/parse pipeline,
the feed cache and the command dispatcher.
"""


class RssDeskError(Exception):
    """Base exception class for all RssDesk errors."""

    pass


class FetchError(RssDeskError):
    """Raised when retrieving a feed fails.

    Attributes:
        url: The feed URL that failed.
    """

    def __init__(self, url: str, message: str):
        self.url = url
        self.message = message
        super().__init__(f"Failed to fetch {url}: {message}")


class InvalidURLError(FetchError):
    """Raised when a feed URL is not an absolute http(s) URL."""

    pass


class FetchTransportError(FetchError):
    """Raised on connection, DNS, timeout or non-success status failures.

    Attributes:
        status_code: HTTP status of the response, if one was received.
    """

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(url, message)


class ResponseTooLargeError(FetchError):
    """Raised when a response body exceeds the configured size limit.

    Attributes:
        limit: The maximum number of bytes allowed.
    """

    def __init__(self, url: str, limit: int):
        self.limit = limit
        super().__init__(url, f"Response exceeds {limit} bytes")


class ParseError(RssDeskError):
    """Raised when feed content cannot be decoded.

    Attributes:
        url: The feed URL with the parse error.
    """

    def __init__(self, url: str, message: str):
        self.url = url
        self.message = message
        super().__init__(f"Failed to parse {url}: {message}")


class MalformedFeedError(ParseError):
    """Raised when bytes are not a recognizable feed format."""

    pass


class CacheError(RssDeskError):
    """Raised when the cache could not populate an entry.

    Attributes:
        url: The feed URL.
        cause: The originating FetchError or ParseError.
        stage: "fetch" or "parse", the pipeline stage that failed.
    """

    def __init__(self, url: str, cause: FetchError | ParseError):
        self.url = url
        self.cause = cause
        self.stage = "fetch" if isinstance(cause, FetchError) else "parse"
        super().__init__(str(cause))


class DispatchError(RssDeskError):
    """Base error for control commands that cannot be executed.

    Attributes:
        action: The requested action name.
    """

    def __init__(self, action: str, message: str):
        self.action = action
        super().__init__(message)


class UnknownActionError(DispatchError):
    """Raised when a control request names an unsupported action."""

    def __init__(self, action: str):
        super().__init__(action, f"Unknown command: {action}")


class MissingArgumentError(DispatchError):
    """Raised when a control request has fewer parameters than required.

    Attributes:
        expected: Names of the required parameters.
        received: Number of parameters actually given.
    """

    def __init__(self, action: str, expected: list[str], received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            action,
            f"Missing argument for {action}: expected {len(expected)} "
            f"({', '.join(expected)}), got {received}",
        )


class TooManyArgumentsError(DispatchError):
    """Raised when a control request has more parameters than accepted."""

    def __init__(self, action: str, expected: list[str], received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            action,
            f"Too many arguments for {action}: expected {len(expected)} "
            f"({', '.join(expected)}), got {received}",
        )


class DuplicateSourceError(DispatchError):
    """Raised when adding a URL that is already registered.

    Only used when the registry is configured to reject duplicates.
    """

    def __init__(self, url: str, action: str = "add_url"):
        self.url = url
        super().__init__(action, f"Source already registered: {url}")


class ControlTransportError(RssDeskError):
    """Raised when a control connection cannot be read or answered."""

    pass
