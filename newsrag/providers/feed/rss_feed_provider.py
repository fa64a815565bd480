"""RSS/Atom feed provider using httpx and feedparser.

Downloads the feed document with the shared ``httpx.AsyncClient`` and hands
the raw bytes to ``feedparser`` (which is synchronous but CPU-only, so it
does not block on I/O).  feedparser is lenient: it flags malformed XML via
``bozo`` but usually still recovers entries.  A feed is rejected only when
it is flagged *and* yields no entries.
"""

from __future__ import annotations

from typing import Any

import feedparser
import httpx
import structlog

from newsrag.interfaces.feed_provider import IFeedProvider
from newsrag.models.document import FeedEntry
from newsrag.utils.errors import FeedParseError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 15.0


class RSSFeedProvider(IFeedProvider):
    """Feed reader backed by httpx + feedparser."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        user_agent: str = "Mozilla/5.0 (compatible; newsrag/0.1)",
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._client = http_client
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "application/rss+xml, application/atom+xml, application/xml;q=0.9, */*;q=0.8",
        }
        self._timeout = timeout

    async def fetch_entries(self, feed_url: str) -> list[FeedEntry]:
        """Fetch *feed_url* and decode its entries in feed order."""
        try:
            response = await self._client.get(
                feed_url,
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise FeedParseError(
                message=f"Timeout fetching feed {feed_url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise FeedParseError(
                message=f"HTTP {exc.response.status_code} for feed {feed_url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise FeedParseError(
                message=f"HTTP error fetching feed {feed_url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        parsed = feedparser.parse(response.content)
        raw_entries = list(parsed.entries or [])
        if parsed.get("bozo") and not raw_entries:
            raise FeedParseError(
                message=f"Unparseable feed {feed_url}: {parsed.get('bozo_exception')}",
                provider_name=self.get_provider_name(),
            )

        entries = [_to_feed_entry(raw) for raw in raw_entries]
        logger.debug("feed_parsed", url=feed_url, entries=len(entries))
        return entries

    def get_provider_name(self) -> str:
        return "rss"


def _to_feed_entry(raw: Any) -> FeedEntry:
    """Map a feedparser entry dict onto :class:`FeedEntry`."""
    summary = raw.get("summary") or ""
    if not summary:
        content = raw.get("content") or []
        if content:
            summary = content[0].get("value", "") or ""
    return FeedEntry(
        title=raw.get("title") or "",
        link=raw.get("link") or "",
        published=raw.get("published") or raw.get("updated") or None,
        summary=summary,
    )
