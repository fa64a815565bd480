"""Web scraper article provider using httpx and BeautifulSoup.

Extracts article body text from heterogeneous news page layouts with an
ordered chain of CSS selectors.  The rule is **first selector with any
match wins**: the chain runs from most specific (``article p``) to least
(``p``), and the first selector that matches at least one element supplies
all of the text.  Later selectors are never consulted, even if they would
have matched more content.
"""

from __future__ import annotations

import httpx
import structlog
from bs4 import BeautifulSoup

from newsrag.interfaces.article_provider import ArticleContent, IArticleProvider
from newsrag.utils.errors import HarvestError
from newsrag.utils.text_normalizer import clean_text, truncate

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 10.0
_DEFAULT_MAX_LENGTH = 2000
_DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; newsrag/0.1)"

# Removed before selector matching.
_NOISE_SELECTOR = "script, style, nav, header, footer, aside, .advertisement"

SELECTOR_CHAIN: tuple[str, ...] = (
    "article p",
    ".article-body p",
    ".story-body p",
    ".content p",
    "main p",
    "p",
)


class WebScraperProvider(IArticleProvider):
    """Article extraction backed by httpx + BeautifulSoup.

    Parameters
    ----------
    http_client:
        Shared ``httpx.AsyncClient``.  One is created when omitted.
    timeout:
        Per-request timeout in seconds.
    user_agent:
        Client identifier sent with every page request.
    max_length:
        Extracted text is cut to this many characters.
    selectors:
        Override for :data:`SELECTOR_CHAIN`.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = _DEFAULT_TIMEOUT,
        user_agent: str = _DEFAULT_USER_AGENT,
        max_length: int = _DEFAULT_MAX_LENGTH,
        selectors: tuple[str, ...] = SELECTOR_CHAIN,
    ) -> None:
        self._client = http_client or httpx.AsyncClient(follow_redirects=True)
        self._timeout = timeout
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }
        self._max_length = max_length
        self._selectors = selectors

    # ------------------------------------------------------------------
    # IArticleProvider implementation
    # ------------------------------------------------------------------

    async def extract_content(self, url: str) -> ArticleContent | None:
        """Fetch *url* and extract its body text via the selector chain."""
        try:
            response = await self._client.get(
                url,
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise HarvestError(
                message=f"Timeout fetching {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise HarvestError(
                message=f"HTTP {exc.response.status_code} for {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise HarvestError(
                message=f"HTTP error fetching {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        selector, text = self.extract_text(response.text)
        if not text:
            logger.debug("article_extraction_empty", url=url)
            return None

        logger.debug("article_extracted", url=url, selector=selector, text_length=len(text))
        return ArticleContent(text=text, url=url, selector=selector)

    def get_provider_name(self) -> str:
        return "web_scraper"

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def extract_text(self, html: str) -> tuple[str, str]:
        """Return ``(selector, text)`` for the first selector that matches.

        ``("", "")`` when no selector matches anything.
        """
        soup = BeautifulSoup(html, "html.parser")
        for element in soup.select(_NOISE_SELECTOR):
            element.decompose()

        for selector in self._selectors:
            matches = soup.select(selector)
            if not matches:
                continue
            joined = " ".join(el.get_text(" ") for el in matches)
            return selector, truncate(clean_text(joined), self._max_length)
        return "", ""
