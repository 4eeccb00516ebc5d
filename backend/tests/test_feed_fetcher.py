"""Tests for the feed fetcher."""

import httpx

from app.schemas.news import FeedSource, FetchFailed
from app.services.feed_fetcher import BROWSER_USER_AGENT, FeedFetcher

FEED = FeedSource("Gulf Property", "https://feeds.test/gulf.xml")


class TestFeedFetcher:
    async def test_returns_body_and_sends_browser_headers(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["ua"] = request.headers["User-Agent"]
            seen["accept"] = request.headers["Accept"]
            return httpx.Response(200, text="<rss></rss>")

        fetcher = FeedFetcher(transport=httpx.MockTransport(handler))
        try:
            assert await fetcher.fetch(FEED) == "<rss></rss>"
        finally:
            await fetcher.close()

        assert seen["ua"] == BROWSER_USER_AGENT
        assert "application/rss+xml" in seen["accept"]

    async def test_error_status_is_reported_not_raised(self) -> None:
        fetcher = FeedFetcher(transport=httpx.MockTransport(lambda r: httpx.Response(500)))
        try:
            result = await fetcher.fetch(FEED)
        finally:
            await fetcher.close()

        assert isinstance(result, FetchFailed)
        assert result.status == 500
        assert "500" in result.message

    async def test_transport_error_is_reported_not_raised(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = FeedFetcher(transport=httpx.MockTransport(handler))
        try:
            result = await fetcher.fetch(FEED)
        finally:
            await fetcher.close()

        assert result == FetchFailed(status=None, message="connection refused")
