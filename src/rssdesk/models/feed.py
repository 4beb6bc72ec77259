"""Feed data models: sources and parsed entries."""

from datetime import datetime

from pydantic import BaseModel, Field


class Source(BaseModel):
    """A named feed subscription, keyed by its URL."""

    name: str = Field(..., description="Display name")
    url: str = Field(..., description="Feed URL, the key used by the cache")


class Entry(BaseModel):
    """One item of a parsed feed.

    Every entry carries at least one link; the parser drops items without one.
    """

    published: datetime | None = Field(default=None, description="Publication time (UTC)")
    title: str | None = Field(default=None)
    links: list[str] = Field(..., min_length=1, description="Links in document order")

    @property
    def primary_link(self) -> str:
        """The link a reader opens for this entry."""
        return self.links[0]

    @property
    def display_title(self) -> str:
        """Title to show, falling back to the primary link."""
        return self.title or self.primary_link
