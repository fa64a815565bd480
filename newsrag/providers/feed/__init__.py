"""Feed providers -- RSS/Atom via feedparser."""

from newsrag.providers.feed.rss_feed_provider import RSSFeedProvider

__all__ = ["RSSFeedProvider"]
