"""News sync service - drives one ingestion run over the feed registry."""

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import PipelineConfig, Settings, get_settings
from app.schemas.news import (
    Enrichment,
    FeedRegistry,
    FeedSource,
    FetchFailed,
    ParsedItem,
    RelevantItem,
    SyncSummary,
)
from app.services.article_service import ArticleRepository, ArticleStore, build_article
from app.services.classifier import categorize, matched_keywords
from app.services.enrichment import ArticleEnricher, build_enricher
from app.services.feed_fetcher import FeedFetcher
from app.services.rss_parser import parse_feed, parse_published_at
from app.utils.hashing import compute_source_hash

logger = logging.getLogger(__name__)


class NewsSyncError(Exception):
    """Failure that ends a whole sync run."""


class UnknownFeedError(NewsSyncError):
    """Requested feed is not in the registry."""


def select_relevant(
    items: Iterable[ParsedItem],
    feed: FeedSource,
    keywords: frozenset[str],
    config: PipelineConfig,
) -> list[RelevantItem]:
    """
    Keep items matching at least one keyword and give each a category.

    Matching and categorizing look at the title and the stored excerpt only.
    """
    relevant = []
    for item in items:
        excerpt = item.description[: config.excerpt_max_chars]
        text = f"{item.title} {excerpt}".lower()
        matches = matched_keywords(text, keywords)
        if not matches:
            continue

        logger.debug("[%s] Matched: %r (%d keywords)", feed.name, item.title[:50], len(matches))
        relevant.append(
            RelevantItem(
                title=item.title,
                excerpt=excerpt,
                source_name=feed.name,
                source_url=item.link,
                source_hash=compute_source_hash(item.link),
                category=categorize(text),
                published_at=parse_published_at(item.published),
                image_url=item.image_url,
                matched_keywords=matches,
            )
        )
    return relevant


class NewsSyncService:
    """
    Runs the feeds in registry order, one at a time.

    Per feed: fetch, parse, filter. Per surviving item: dedup, enrich (when
    configured), insert. Feed and item failures are recovered locally; only
    store read failures escape run().
    """

    def __init__(
        self,
        store: ArticleStore,
        fetcher: FeedFetcher,
        registry: FeedRegistry | None = None,
        enricher: ArticleEnricher | None = None,
        config: PipelineConfig | None = None,
    ):
        self.store = store
        self.fetcher = fetcher
        self.registry = registry or FeedRegistry.default()
        self.enricher = enricher
        self.config = config or PipelineConfig()

    async def run(self, source: str | None = None) -> SyncSummary:
        """Sync all feeds, or only the feed named by source."""
        feeds = list(self.registry.feeds)
        if source:
            feed = self.registry.get(source)
            if feed is None:
                raise UnknownFeedError(f"Unknown feed source: {source}")
            feeds = [feed]

        logger.info(
            "Starting news sync: %d feeds, enrichment %s",
            len(feeds),
            "enabled" if self.enricher else "disabled",
        )

        summary = SyncSummary()
        for feed in feeds:
            await self._sync_feed(feed, summary)

        logger.info(
            "Sync complete: %d new, %d enriched, %d with images, %d skipped, %d errors",
            summary.synced,
            summary.enriched,
            summary.with_images,
            summary.skipped,
            len(summary.errors),
        )
        return summary

    async def _sync_feed(self, feed: FeedSource, summary: SyncSummary) -> None:
        document = await self.fetcher.fetch(feed)
        if isinstance(document, FetchFailed):
            logger.warning("[%s] Skipping feed: %s", feed.name, document.message)
            return

        items = parse_feed(document, self.config.feed_item_cap)
        relevant = select_relevant(items, feed, self.registry.keywords_for(feed), self.config)
        logger.info("[%s] %d relevant articles", feed.name, len(relevant))

        for item in relevant:
            await self._sync_item(item, summary)

    async def _sync_item(self, item: RelevantItem, summary: SyncSummary) -> None:
        # Dedup before enrichment so known articles cost no scrape/AI calls
        if await self.store.exists(item.source_hash):
            summary.skipped += 1
            return

        enrichment = Enrichment(image_url=item.image_url)
        if self.enricher is not None:
            enrichment = await self.enricher.enrich(item)
            if enrichment.content:
                summary.enriched += 1

        article = build_article(item, enrichment, self.config)
        try:
            await self.store.insert(article)
        except SQLAlchemyError as e:
            logger.error("Error inserting article %s: %s", item.source_url, e)
            summary.errors.append(str(e))
            return

        summary.synced += 1
        if article.image_url:
            summary.with_images += 1
        logger.info("[Saved] %s", item.title[:50])

    async def close(self) -> None:
        await self.fetcher.close()
        if self.enricher is not None:
            await self.enricher.close()


async def execute_sync(service: NewsSyncService, source: str | None = None) -> dict[str, Any]:
    """Run once and always return a structured response."""
    try:
        summary = await service.run(source)
    except Exception as e:
        logger.exception("News sync failed")
        return {"success": False, "error": str(e) or type(e).__name__}
    return summary.to_response()


def build_sync_service(
    session: AsyncSession,
    settings: Settings | None = None,
    registry: FeedRegistry | None = None,
) -> NewsSyncService:
    """Wire a NewsSyncService against the database session and settings."""
    settings = settings or get_settings()
    config = PipelineConfig.from_settings(settings)
    return NewsSyncService(
        store=ArticleRepository(session),
        fetcher=FeedFetcher(timeout_seconds=config.feed_timeout_seconds),
        registry=registry or FeedRegistry.default(),
        enricher=build_enricher(settings, config),
        config=config,
    )
