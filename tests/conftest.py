"""Shared pytest fixtures for the newsrag test suite."""

from __future__ import annotations

import hashlib
import struct
from typing import Any, Callable

import pytest

from newsrag.interfaces.article_provider import ArticleContent, IArticleProvider
from newsrag.interfaces.embedding_provider import IEmbeddingProvider
from newsrag.interfaces.feed_provider import IFeedProvider
from newsrag.interfaces.vector_store_provider import IVectorStoreProvider
from newsrag.models.document import Document, FeedEntry, NewsSource
from newsrag.models.embedding import EmbeddingFailure, EmbeddingOutcome, EmbeddingSuccess, FailureKind
from newsrag.models.ingestion import SearchHit
from newsrag.utils.errors import FeedParseError, HarvestError, VectorStoreError

# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------

_EMBEDDING_DIM = 8


def _hash_to_vector(text: str, dim: int = _EMBEDDING_DIM) -> list[float]:
    """Deterministic pseudo-embedding derived from SHA-256 of *text*."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    raw = [struct.unpack_from("B", digest, i % len(digest))[0] for i in range(dim)]
    norm = sum(v * v for v in raw) ** 0.5 or 1.0
    return [v / norm for v in raw]


class RecordingSleep:
    """Awaitable stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class ScriptedEmbeddingProvider(IEmbeddingProvider):
    """Embedding gateway whose outcomes are scripted per call.

    ``outcomes`` is consumed one item per :meth:`embed` call; once it runs
    out (or an item is ``None``) the call succeeds with hash vectors unless
    ``fail_when(texts)`` returns a failure.
    """

    def __init__(
        self,
        outcomes: list[EmbeddingOutcome | None] | None = None,
        fail_when: Callable[[list[str]], EmbeddingFailure | None] | None = None,
        available: bool = True,
        dimension: int = _EMBEDDING_DIM,
    ) -> None:
        self.calls: list[list[str]] = []
        self.timeouts: list[float | None] = []
        self._outcomes = list(outcomes or [])
        self._fail_when = fail_when
        self._available = available
        self._dimension = dimension

    async def embed(self, texts: list[str], timeout: float | None = None) -> EmbeddingOutcome:
        self.calls.append(list(texts))
        self.timeouts.append(timeout)
        if self._outcomes:
            scripted = self._outcomes.pop(0)
            if scripted is not None:
                return scripted
        if self._fail_when is not None:
            failure = self._fail_when(texts)
            if failure is not None:
                return failure
        return EmbeddingSuccess(vectors=[_hash_to_vector(t, self._dimension) for t in texts])

    def get_dimension(self) -> int:
        return self._dimension

    def get_provider_name(self) -> str:
        return "scripted"

    def is_available(self) -> bool:
        return self._available


class InMemoryVectorStore(IVectorStoreProvider):
    """Dict-backed vector store ranking by dot product."""

    def __init__(
        self,
        fail_ensure: bool = False,
        fail_upsert_for: set[str] | None = None,
    ) -> None:
        self.points: dict[int | str, tuple[list[float], dict[str, Any]]] = {}
        self.ensure_calls = 0
        self._fail_ensure = fail_ensure
        self._fail_upsert_for = fail_upsert_for or set()

    async def ensure_collection(self) -> None:
        self.ensure_calls += 1
        if self._fail_ensure:
            raise VectorStoreError(message="connection refused", provider_name="memory")

    async def upsert(self, point_id: int | str, vector: list[float], payload: dict[str, Any]) -> None:
        if payload.get("document_id") in self._fail_upsert_for:
            raise VectorStoreError(message="write rejected", provider_name="memory")
        self.points[point_id] = (vector, payload)

    async def search(self, vector: list[float], limit: int = 5) -> list[SearchHit]:
        scored = [
            (sum(a * b for a, b in zip(vector, stored)), payload)
            for stored, payload in self.points.values()
        ]
        scored.sort(key=lambda item: item[0], reverse=True)
        return [SearchHit.from_payload(payload, score=score) for score, payload in scored[:limit]]

    async def scroll(self, limit: int = 5) -> list[SearchHit]:
        return [SearchHit.from_payload(payload) for _, payload in list(self.points.values())[:limit]]

    def get_provider_name(self) -> str:
        return "memory"


class FakeFeedProvider(IFeedProvider):
    """Serves canned entries per feed URL; an unknown URL is a parse error."""

    def __init__(self, feeds: dict[str, list[FeedEntry]]) -> None:
        self._feeds = feeds
        self.requested: list[str] = []

    async def fetch_entries(self, feed_url: str) -> list[FeedEntry]:
        self.requested.append(feed_url)
        if feed_url not in self._feeds:
            raise FeedParseError(message=f"Unparseable feed {feed_url}", provider_name="fake")
        return list(self._feeds[feed_url])

    def get_provider_name(self) -> str:
        return "fake_feed"


class FakeArticleProvider(IArticleProvider):
    """Serves canned page text per URL; ``None`` values simulate fetch errors."""

    def __init__(self, pages: dict[str, str | None] | None = None) -> None:
        self._pages = pages or {}
        self.requested: list[str] = []

    async def extract_content(self, url: str) -> ArticleContent | None:
        self.requested.append(url)
        if url not in self._pages:
            return None
        text = self._pages[url]
        if text is None:
            raise HarvestError(message=f"HTTP 503 for {url}", provider_name="fake")
        return ArticleContent(text=text, url=url, selector="article p")

    def get_provider_name(self) -> str:
        return "fake_article"


def make_document(index: int, source: str = "BBC", content: str | None = None) -> Document:
    """Build a Document with predictable fields."""
    return Document(
        id=f"{source.lower()}_1700000000000_{index}",
        title=f"Story {index}",
        content=content or f"Body of story {index}. " * 10,
        source_name=source,
        source_url=f"https://example.com/{source.lower()}/{index}",
        published_at="2024-03-01T12:00:00+00:00",
        summary=f"Summary {index}",
    )


def entry(index: int, host: str = "example.com", summary: str = "") -> FeedEntry:
    """Build a FeedEntry linking to ``https://{host}/{index}``."""
    return FeedEntry(
        title=f"Headline {index}",
        link=f"https://{host}/{index}",
        published="Fri, 01 Mar 2024 12:00:00 GMT",
        summary=summary,
    )


def auth_failure() -> EmbeddingFailure:
    return EmbeddingFailure(kind=FailureKind.AUTHORIZATION, message="HTTP 401", status_code=401)


def transient_failure(kind: FailureKind = FailureKind.SERVER_ERROR) -> EmbeddingFailure:
    return EmbeddingFailure(kind=kind, message="HTTP 503", status_code=503)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def vector_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture
def sample_documents() -> list[Document]:
    return [make_document(i) for i in range(7)]


@pytest.fixture
def bbc_source() -> NewsSource:
    return NewsSource(name="BBC", feed_url="https://feeds.example.com/bbc.xml")
