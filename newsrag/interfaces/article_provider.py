"""Abstract base class for article-extraction service providers.

Defines the contract for extracting readable body text from a linked news
page.  The harvester falls back to the feed entry's own summary whenever
extraction fails or returns nothing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ArticleContent:
    """Extracted content from a web article.

    Attributes
    ----------
    text:
        The body text with markup stripped, whitespace collapsed, and
        length already capped by the provider.
    url:
        The source URL the content was extracted from.
    selector:
        The CSS selector that produced the text.
    """

    text: str
    url: str = ""
    selector: str = ""


class IArticleProvider(ABC):
    """Contract for services that extract readable content from web URLs."""

    @abstractmethod
    async def extract_content(self, url: str) -> ArticleContent | None:
        """Fetch and extract readable content from *url*.

        Returns
        -------
        ArticleContent or None
            The extracted article content, or ``None`` if the page contains
            no usable text.

        Raises
        ------
        newsrag.utils.errors.HarvestError
            If the HTTP request fails or times out.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this article provider."""
