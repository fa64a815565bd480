"""Content harvester: feed entries in, cleaned Documents out.

For one :class:`NewsSource` the harvester reads the feed, walks at most
``max_per_source`` entries **in feed order, one at a time**, and yields a
:class:`Document` for every entry whose final content reaches the minimum
length.  Entries are never fetched concurrently; a fixed delay separates
consecutive entries to keep load on the upstream site low.

Content for each entry comes from an ordered list of strategies, tried in
sequence with a "first non-empty result wins" rule:

    1. ``_page_text``   -- fetch the linked page, run the selector chain
    2. ``_entry_summary`` -- the feed entry's own summary/snippet

A page fetch failure is logged and the next strategy is tried; it never
aborts the source.  A feed fetch/parse failure ends the source with no
documents and is logged as a warning.
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timezone
from typing import AsyncIterator, Awaitable, Callable

import structlog

from newsrag.interfaces.article_provider import IArticleProvider
from newsrag.interfaces.feed_provider import IFeedProvider
from newsrag.models.document import Document, FeedEntry, NewsSource
from newsrag.utils.errors import FeedParseError, HarvestError
from newsrag.utils.text_normalizer import clean_text, truncate

logger = structlog.get_logger(logger_name=__name__)

Sleep = Callable[[float], Awaitable[None]]
ContentStrategy = Callable[[FeedEntry], Awaitable[str]]


class ContentHarvester:
    """Turns a feed source into a lazy sequence of Documents.

    Parameters
    ----------
    feed_provider:
        Reads a feed URL into entries.
    article_provider:
        Fetches and extracts linked page text.
    max_per_source:
        Maximum number of feed entries considered per source.
    min_content_length:
        Documents with shorter cleaned content are discarded.
    max_content_length:
        Content is truncated to this many characters.
    summary_length:
        ``Document.summary`` is truncated to this many characters.
    entry_delay:
        Seconds to wait after each entry.
    sleep:
        Awaitable sleep, injectable for tests.
    clock:
        Returns epoch milliseconds, used in natural document ids.
    """

    def __init__(
        self,
        feed_provider: IFeedProvider,
        article_provider: IArticleProvider,
        max_per_source: int = 15,
        min_content_length: int = 100,
        max_content_length: int = 2000,
        summary_length: int = 300,
        entry_delay: float = 0.7,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._feed_provider = feed_provider
        self._article_provider = article_provider
        self._max_per_source = max_per_source
        self._min_content_length = min_content_length
        self._max_content_length = max_content_length
        self._summary_length = summary_length
        self._entry_delay = entry_delay
        self._sleep = sleep
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._content_strategies: tuple[ContentStrategy, ...] = (
            self._page_text,
            self._entry_summary,
        )

    async def harvest(self, source: NewsSource) -> AsyncIterator[Document]:
        """Yield Documents for *source*, in feed order.

        The returned async generator is single-use: iterating it again
        after exhaustion yields nothing.
        """
        logger.info("harvest_source_started", source=source.name, feed_url=source.feed_url)
        try:
            entries = await self._feed_provider.fetch_entries(source.feed_url)
        except FeedParseError as exc:
            logger.warning("harvest_feed_failed", source=source.name, error=str(exc))
            return

        produced = 0
        for index, entry in enumerate(entries[: self._max_per_source]):
            logger.debug("harvest_entry", source=source.name, index=index, title=entry.title)
            document = await self._build_document(source, entry, index)
            if document is not None:
                produced += 1
                yield document
            await self._sleep(self._entry_delay)

        logger.info("harvest_source_complete", source=source.name, documents=produced)

    async def collect(self, source: NewsSource) -> list[Document]:
        """Harvest *source* fully and return the Documents as a list."""
        return [document async for document in self.harvest(source)]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _build_document(
        self, source: NewsSource, entry: FeedEntry, index: int
    ) -> Document | None:
        content = await self._first_content(entry)
        if len(content) < self._min_content_length:
            logger.debug(
                "harvest_entry_too_short",
                source=source.name,
                index=index,
                length=len(content),
            )
            return None

        return Document(
            id=f"{source.name.lower()}_{self._clock()}_{index}",
            title=clean_text(entry.title),
            content=content,
            source_name=source.name,
            source_url=entry.link,
            published_at=entry.published or datetime.now(timezone.utc).isoformat(),
            summary=truncate(clean_text(entry.summary), self._summary_length),
        )

    async def _first_content(self, entry: FeedEntry) -> str:
        for strategy in self._content_strategies:
            content = await strategy(entry)
            if content:
                return content
        return ""

    async def _page_text(self, entry: FeedEntry) -> str:
        if not entry.link:
            return ""
        try:
            article = await self._article_provider.extract_content(entry.link)
        except HarvestError as exc:
            logger.warning("harvest_page_fetch_failed", url=entry.link, error=str(exc))
            return ""
        return article.text if article is not None else ""

    async def _entry_summary(self, entry: FeedEntry) -> str:
        return truncate(clean_text(entry.summary), self._max_content_length)
