"""News sync stage types and API response schemas."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.constants.news_sources import DEFAULT_FEEDS, DUBAI_KEYWORDS
from app.models.article import ArticleCategory


@dataclass(frozen=True)
class FeedSource:
    """One entry of the feed registry."""

    name: str
    url: str
    keywords: frozenset[str] = frozenset()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FeedSource":
        return cls(
            name=data["name"],
            url=data["url"],
            keywords=frozenset(kw.lower() for kw in data.get("keywords", [])),
        )


@dataclass(frozen=True)
class FeedRegistry:
    """Feeds to sync, in order, plus the keywords shared by all of them."""

    feeds: tuple[FeedSource, ...]
    global_keywords: frozenset[str] = frozenset()

    @classmethod
    def default(cls) -> "FeedRegistry":
        return cls(
            feeds=tuple(FeedSource.from_dict(feed) for feed in DEFAULT_FEEDS),
            global_keywords=frozenset(kw.lower() for kw in DUBAI_KEYWORDS),
        )

    def get(self, name: str) -> FeedSource | None:
        """Look up a feed by name (case-insensitive)."""
        for feed in self.feeds:
            if feed.name.lower() == name.lower():
                return feed
        return None

    def keywords_for(self, feed: FeedSource) -> frozenset[str]:
        return feed.keywords | self.global_keywords


@dataclass(frozen=True)
class FetchFailed:
    """Feed could not be retrieved. status is None for transport errors."""

    status: int | None
    message: str


@dataclass
class ParsedItem:
    """Candidate item extracted from a raw feed document."""

    title: str
    link: str
    description: str
    full_content: str | None = None
    published: str = ""
    image_url: str | None = None


@dataclass
class RelevantItem:
    """Parsed item that passed the relevance filter and got a category."""

    title: str
    excerpt: str
    source_name: str
    source_url: str
    source_hash: str
    category: ArticleCategory
    published_at: datetime
    image_url: str | None = None
    matched_keywords: list[str] = field(default_factory=list)


@dataclass
class Enrichment:
    """Output of the enrichment step, merged into the item before insert."""

    content: str | None = None
    image_url: str | None = None


@dataclass
class SyncSummary:
    """Counters accumulated over one pipeline run."""

    synced: int = 0
    enriched: int = 0
    skipped: int = 0
    with_images: int = 0
    errors: list[str] = field(default_factory=list)

    def to_response(self) -> dict[str, Any]:
        response: dict[str, Any] = {
            "success": True,
            "synced": self.synced,
            "enriched": self.enriched,
            "skipped": self.skipped,
            "withImages": self.with_images,
        }
        if self.errors:
            response["errors"] = list(self.errors)
        return response


class SyncResponse(BaseModel):
    """Schema for the sync trigger response."""

    success: bool
    synced: int = 0
    enriched: int = 0
    skipped: int = 0
    with_images: int = Field(default=0, alias="withImages")
    errors: list[str] | None = None
    error: str | None = None

    model_config = {"populate_by_name": True}
