"""Config package."""

from rssdesk.config.settings import Settings, SourceConfig, settings

__all__ = [
    "Settings",
    "SourceConfig",
    "settings",
]
