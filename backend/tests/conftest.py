"""Shared fixtures for the news sync tests."""

from collections.abc import Callable

import httpx
import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.config import PipelineConfig, Settings
from app.models import NewsArticle
from app.schemas.news import FeedRegistry, FeedSource


class FakeArticleStore:
    """In-memory ArticleStore keyed by source_hash."""

    def __init__(self) -> None:
        self.articles: dict[str, NewsArticle] = {}
        self.reject_urls: set[str] = set()
        self.exists_calls: list[str] = []

    async def exists(self, source_hash: str) -> bool:
        self.exists_calls.append(source_hash)
        return source_hash in self.articles

    async def insert(self, article: NewsArticle) -> NewsArticle:
        if article.source_url in self.reject_urls:
            raise SQLAlchemyError(f"insert rejected for {article.source_url}")
        self.articles[article.source_hash] = article
        return article


def rss_item(
    title: str,
    link: str,
    description: str = "",
    pub_date: str = "Mon, 15 Jan 2024 10:00:00 GMT",
    extra: str = "",
) -> str:
    return (
        f"<item><title>{title}</title><link>{link}</link>"
        f"<description>{description}</description>"
        f"<pubDate>{pub_date}</pubDate>{extra}</item>"
    )


def rss_document(*items: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/" '
        'xmlns:content="http://purl.org/rss/1.0/modules/content/">'
        "<channel><title>Test Feed</title><link>https://feeds.test/</link>"
        + "".join(items)
        + "</channel></rss>"
    )


@pytest.fixture
def make_item() -> Callable[..., str]:
    return rss_item


@pytest.fixture
def make_feed() -> Callable[..., str]:
    return rss_document


@pytest.fixture
def store() -> FakeArticleStore:
    return FakeArticleStore()


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    return PipelineConfig(scrape_delay_seconds=0, summarize_delay_seconds=0)


@pytest.fixture
def registry() -> FeedRegistry:
    return FeedRegistry(
        feeds=(
            FeedSource("Gulf Property", "https://feeds.test/gulf.xml", frozenset({"villa"})),
            FeedSource("Emirates Homes", "https://feeds.test/homes.xml", frozenset({"apartment"})),
        ),
        global_keywords=frozenset({"dubai", "property"}),
    )


@pytest.fixture
def feed_responses() -> dict[str, tuple[int, str]]:
    """URL -> (status, body) served by the mock transport."""
    return {}


@pytest.fixture
def feed_transport(feed_responses: dict[str, tuple[int, str]]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        status, body = feed_responses.get(str(request.url), (404, "not found"))
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


@pytest.fixture
def offline_settings() -> Settings:
    """Settings with no external credentials, ignoring any local .env."""
    return Settings(
        _env_file=None,
        firecrawl_api_key="",
        anthropic_api_key="",
        gemini_api_key="",
        database_url="sqlite+aiosqlite://",
    )
