"""Article providers -- page fetch and body-text extraction."""

from newsrag.providers.article.web_scraper_provider import SELECTOR_CHAIN, WebScraperProvider

__all__ = ["SELECTOR_CHAIN", "WebScraperProvider"]
