"""Scraper Agent - Extracts an article's main content through the Firecrawl API."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

import httpx

from app.config import get_settings

logger = logging.getLogger(__name__)

_MARKDOWN_IMAGE_RE = re.compile(r"!\[[^\]]*\]\((https?://[^)\s]+)\)")
_HTML_IMAGE_RE = re.compile(r"<img[^>]*src=\"(https?://[^\"]+)\"")


@dataclass
class ScrapedPage:
    """Main content of a scraped article page."""

    content: str
    image_url: str | None = None


def extract_image_from_markdown(markdown: str) -> str | None:
    """First image referenced in markdown (or inline HTML) content."""
    match = _MARKDOWN_IMAGE_RE.search(markdown) or _HTML_IMAGE_RE.search(markdown)
    return match.group(1) if match else None


class ScraperAgent:
    """
    Fetches the main content of an article page as markdown.

    Firecrawl renders the page and strips navigation, ads and footers, so no
    per-site selectors are needed. Errors are logged and reported as None.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.firecrawl_api_key
        self.api_url = api_url or settings.firecrawl_api_url
        self.http = httpx.AsyncClient(
            timeout=timeout_seconds,
            transport=transport,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )

    @staticmethod
    def _parse_response(data: dict[str, Any]) -> ScrapedPage:
        payload = data.get("data") or data
        metadata = payload.get("metadata") or {}
        return ScrapedPage(
            content=payload.get("markdown") or "",
            image_url=metadata.get("ogImage") or None,
        )

    async def scrape_article(self, url: str) -> ScrapedPage | None:
        """
        Scrape a single article page.

        Args:
            url: URL of the article to scrape

        Returns:
            ScrapedPage with markdown content and Open-Graph image, or None if failed
        """
        logger.debug("[Firecrawl] Scraping: %s", url)
        try:
            response = await self.http.post(
                self.api_url,
                json={"url": url, "formats": ["markdown"], "onlyMainContent": True},
            )
            if not response.is_success:
                logger.warning("[Firecrawl] Failed for %s: HTTP %d", url, response.status_code)
                return None

            page = self._parse_response(response.json())
        except httpx.HTTPError as e:
            logger.warning("[Firecrawl] HTTP error scraping %s: %s", url, e)
            return None
        except (json.JSONDecodeError, AttributeError) as e:
            logger.warning("[Firecrawl] Malformed response for %s: %s", url, e)
            return None

        logger.info(
            "[Firecrawl] Got %d chars, OG image: %s",
            len(page.content),
            "yes" if page.image_url else "no",
        )
        return page

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.http.aclose()
