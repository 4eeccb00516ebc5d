"""Feed fetcher - retrieves raw RSS/Atom documents over HTTP."""

import logging
import time

import httpx

from app.schemas.news import FeedSource, FetchFailed

logger = logging.getLogger(__name__)

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
FEED_ACCEPT = "application/rss+xml, application/atom+xml, application/xml, text/xml, */*"


class FeedFetcher:
    """Fetches feed documents. Failures are returned as FetchFailed, never raised."""

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.http = httpx.AsyncClient(
            timeout=timeout_seconds,
            follow_redirects=True,
            transport=transport,
            headers={
                "User-Agent": BROWSER_USER_AGENT,
                "Accept": FEED_ACCEPT,
            },
        )

    async def fetch(self, feed: FeedSource) -> str | FetchFailed:
        """Return the feed body as text, or a FetchFailed describing why not."""
        start = time.perf_counter()
        try:
            response = await self.http.get(feed.url)
        except httpx.HTTPError as e:
            elapsed_ms = int((time.perf_counter() - start) * 1000)
            logger.warning("[%s] Transport error after %dms: %s", feed.name, elapsed_ms, e)
            return FetchFailed(status=None, message=str(e) or type(e).__name__)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info("[%s] Response: %d in %dms", feed.name, response.status_code, elapsed_ms)

        if not response.is_success:
            message = f"HTTP {response.status_code} {response.reason_phrase}".strip()
            logger.warning("[%s] FAILED: %s", feed.name, message)
            return FetchFailed(status=response.status_code, message=message)

        return response.text

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.http.aclose()
