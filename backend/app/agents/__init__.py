"""Agents package - scraping and AI summarization clients."""

from app.agents.scraper_agent import (
    ScrapedPage,
    ScraperAgent,
    extract_image_from_markdown,
)
from app.agents.summary_agent import (
    ClaudeSummaryAgent,
    GeminiSummaryAgent,
    SummaryAgent,
    get_summary_agent,
)

__all__ = [
    # Firecrawl scraper
    "ScraperAgent",
    "ScrapedPage",
    "extract_image_from_markdown",
    # Summarizers
    "SummaryAgent",
    "ClaudeSummaryAgent",
    "GeminiSummaryAgent",
    "get_summary_agent",
]
