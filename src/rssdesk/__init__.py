"""RssDesk: on-demand feed cache with a runtime control channel."""

__version__ = "0.1.0"
