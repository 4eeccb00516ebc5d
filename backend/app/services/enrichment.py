"""Enrichment - full-text scraping plus an AI investor summary per article."""

import asyncio
import logging

from app.agents.scraper_agent import ScraperAgent, extract_image_from_markdown
from app.agents.summary_agent import SummaryAgent, get_summary_agent
from app.config import PipelineConfig, Settings
from app.schemas.news import Enrichment, RelevantItem

logger = logging.getLogger(__name__)


class ArticleEnricher:
    """
    Scrapes an article and asks the summarizer for an investor analysis.

    Calls are spaced by fixed delays to stay under the providers' rate limits.
    Any failure degrades to content=None; nothing is raised to the caller.
    """

    def __init__(
        self,
        scraper: ScraperAgent,
        summarizer: SummaryAgent,
        config: PipelineConfig | None = None,
    ) -> None:
        self.scraper = scraper
        self.summarizer = summarizer
        self.config = config or PipelineConfig()

    async def enrich(self, item: RelevantItem) -> Enrichment:
        enrichment = Enrichment(image_url=item.image_url)

        await asyncio.sleep(self.config.scrape_delay_seconds)
        try:
            page = await self.scraper.scrape_article(item.source_url)
        except Exception:
            logger.exception("Scrape failed for %s", item.source_url)
            return enrichment
        if page is None:
            return enrichment

        if not enrichment.image_url:
            enrichment.image_url = page.image_url or extract_image_from_markdown(page.content)
            if enrichment.image_url:
                logger.debug("[Image] Using image from scraped page for %s", item.source_url)

        if len(page.content) < self.config.min_scraped_chars:
            logger.info(
                "Scraped content too short (%d chars) for %s, skipping summary",
                len(page.content),
                item.source_url,
            )
            return enrichment

        await asyncio.sleep(self.config.summarize_delay_seconds)
        try:
            enrichment.content = await self.summarizer.summarize(item.title, page.content)
        except Exception:
            logger.exception("Summary failed for %s", item.source_url)
            return enrichment
        if enrichment.content:
            logger.info("[AI] Generated investor summary for: %s", item.title[:40])
        return enrichment

    async def close(self) -> None:
        await self.scraper.close()
        await self.summarizer.close()


def build_enricher(settings: Settings, config: PipelineConfig) -> ArticleEnricher | None:
    """Enricher for this run, or None when either credential is missing."""
    if not settings.enrichment_enabled:
        logger.info(
            "Enrichment disabled (scraper key: %s, %s key: %s)",
            "configured" if settings.firecrawl_api_key else "missing",
            settings.llm_provider,
            "configured" if settings.summarizer_api_key else "missing",
        )
        return None

    return ArticleEnricher(
        scraper=ScraperAgent(
            api_key=settings.firecrawl_api_key,
            api_url=settings.firecrawl_api_url,
            timeout_seconds=config.scrape_timeout_seconds,
        ),
        summarizer=get_summary_agent(settings, max_input_chars=config.summary_input_chars),
        config=config,
    )
