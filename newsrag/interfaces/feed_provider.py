"""Abstract base class for syndication feed readers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from newsrag.models.document import FeedEntry


# Concrete implementation: RSSFeedProvider (newsrag/providers/feed/)
class IFeedProvider(ABC):
    """Contract for services that read a feed URL into entries."""

    @abstractmethod
    async def fetch_entries(self, feed_url: str) -> list[FeedEntry]:
        """Fetch *feed_url* and return its entries in feed order.

        Raises
        ------
        newsrag.utils.errors.FeedParseError
            If the feed cannot be fetched or is not a parseable feed.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this feed provider."""
