"""Configuration management using pydantic-settings.

Supports environment variables and .env file loading.
"""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SourceConfig(BaseModel):
    """A statically configured feed source."""

    name: str
    url: str


DEFAULT_SOURCES = [
    SourceConfig(name="CNN News", url="http://rss.cnn.com/rss/cnn_topstories.rss"),
    SourceConfig(name="Broken host", url="http://diwdiuwbdiwubdaiubdowqbdqwb.xyz"),
    SourceConfig(name="Not a feed", url="https://google.com"),
]


class Settings(BaseSettings):
    """Application configuration.

    Every field can be overridden with an environment variable of the same
    name, e.g. ``CONTROL_PORT=9000`` or
    ``SOURCES='[{"name": "HN", "url": "https://news.ycombinator.com/rss"}]'``.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),  # .env.local overrides .env
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "rssdesk"
    log_level: str = "INFO"
    log_json: bool = False

    # Control channel
    control_host: str = "127.0.0.1"
    control_port: int = Field(default=7878, ge=1, le=65535)

    # Fetching
    fetch_timeout: float = Field(
        default=30,
        gt=0,
        description="Per-request timeout in seconds",
    )
    max_response_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        description="Largest feed body accepted before the fetch is rejected",
    )
    user_agent: str = "RssDesk/0.1 (+feed reader)"

    # Tick loop
    tick_interval: float = Field(
        default=0.1,
        gt=0,
        description="Seconds between two ticks of the engine loop",
    )

    # Registry
    reject_duplicate_urls: bool = Field(
        default=False,
        description="Reject add_url for a URL that is already registered",
    )
    sources: list[SourceConfig] = Field(
        default_factory=lambda: [s.model_copy() for s in DEFAULT_SOURCES],
        description="Feed sources available at startup",
    )


# Global singleton instance
settings = Settings()
