"""Unit tests for RSSFeedProvider."""

from __future__ import annotations

import httpx
import pytest

from newsrag.providers.feed.rss_feed_provider import RSSFeedProvider
from newsrag.utils.errors import FeedParseError

_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Test News</title>
    <item>
      <title>First headline</title>
      <link>https://news.test/1</link>
      <pubDate>Fri, 01 Mar 2024 12:00:00 GMT</pubDate>
      <description>&lt;p&gt;First summary&lt;/p&gt;</description>
    </item>
    <item>
      <title>Second headline</title>
      <link>https://news.test/2</link>
    </item>
  </channel>
</rss>
"""

_ATOM = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom News</title>
  <entry>
    <title>Atom headline</title>
    <link href="https://news.test/atom/1"/>
    <updated>2024-03-01T12:00:00Z</updated>
    <content type="html">Atom body</content>
  </entry>
</feed>
"""


def _provider(handler) -> RSSFeedProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RSSFeedProvider(http_client=client, user_agent="newsrag-test/1.0")


class TestRSSFeedProvider:
    def test_get_provider_name(self) -> None:
        assert _provider(lambda r: httpx.Response(200)).get_provider_name() == "rss"

    @pytest.mark.asyncio
    async def test_parses_rss_entries_in_order(self) -> None:
        entries = await _provider(lambda r: httpx.Response(200, text=_RSS)).fetch_entries(
            "https://news.test/rss"
        )

        assert [e.title for e in entries] == ["First headline", "Second headline"]
        assert entries[0].link == "https://news.test/1"
        assert entries[0].published == "Fri, 01 Mar 2024 12:00:00 GMT"
        assert "First summary" in entries[0].summary
        assert entries[1].published is None
        assert entries[1].summary == ""

    @pytest.mark.asyncio
    async def test_atom_uses_updated_date(self) -> None:
        entries = await _provider(lambda r: httpx.Response(200, text=_ATOM)).fetch_entries(
            "https://news.test/atom"
        )

        assert len(entries) == 1
        assert entries[0].published == "2024-03-01T12:00:00Z"
        assert entries[0].link == "https://news.test/atom/1"
        assert "Atom body" in entries[0].summary

    @pytest.mark.asyncio
    async def test_sends_user_agent(self) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["ua"] = request.headers["User-Agent"]
            return httpx.Response(200, text=_RSS)

        await _provider(handler).fetch_entries("https://news.test/rss")

        assert seen["ua"] == "newsrag-test/1.0"

    @pytest.mark.asyncio
    async def test_garbage_body_raises(self) -> None:
        with pytest.raises(FeedParseError):
            await _provider(lambda r: httpx.Response(200, text="this is not xml <<<")).fetch_entries(
                "https://news.test/rss"
            )

    @pytest.mark.asyncio
    async def test_http_error_raises(self) -> None:
        with pytest.raises(FeedParseError, match="HTTP 500"):
            await _provider(lambda r: httpx.Response(500)).fetch_entries("https://news.test/rss")

    @pytest.mark.asyncio
    async def test_timeout_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(FeedParseError, match="Timeout"):
            await _provider(handler).fetch_entries("https://news.test/rss")
