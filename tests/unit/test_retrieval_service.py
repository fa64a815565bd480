"""Unit tests for RetrievalService -- semantic search with scroll fallback."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from newsrag.providers.cache.memory_cache import MemoryCacheProvider
from newsrag.services.embedding.cached_accessor import CachedEmbeddingAccessor
from newsrag.services.retrieval_service import RetrievalService
from newsrag.utils.errors import InvalidInputError
from tests.conftest import (
    InMemoryVectorStore,
    RecordingSleep,
    ScriptedEmbeddingProvider,
    auth_failure,
    make_document,
)


async def _seed(store: InMemoryVectorStore, provider: ScriptedEmbeddingProvider, count: int = 3) -> None:
    for i in range(count):
        doc = make_document(i)
        outcome = await provider.embed([doc.embeddable_text()])
        await store.upsert(i, outcome.vectors[0], doc.to_payload())


def _service(provider: ScriptedEmbeddingProvider, store: InMemoryVectorStore) -> RetrievalService:
    accessor = CachedEmbeddingAccessor(
        provider=provider,
        cache=MemoryCacheProvider(),
        sleep=RecordingSleep(),
    )
    return RetrievalService(accessor=accessor, vector_store=store)


class TestRetrievalService:
    @pytest.mark.asyncio
    async def test_semantic_search(self, vector_store: InMemoryVectorStore) -> None:
        seeder = ScriptedEmbeddingProvider()
        await _seed(vector_store, seeder)
        query = make_document(1).embeddable_text()

        result = await _service(ScriptedEmbeddingProvider(), vector_store).retrieve(query, limit=2)

        assert result.semantic is True
        assert len(result.hits) == 2
        assert result.hits[0].title == "Story 1"
        assert result.hits[0].score is not None

    @pytest.mark.asyncio
    async def test_scroll_fallback_without_credentials(self, vector_store: InMemoryVectorStore) -> None:
        await _seed(vector_store, ScriptedEmbeddingProvider())

        result = await _service(ScriptedEmbeddingProvider(available=False), vector_store).retrieve(
            "anything", limit=2
        )

        assert result.semantic is False
        assert len(result.hits) == 2
        assert all(hit.score is None for hit in result.hits)

    @pytest.mark.asyncio
    async def test_scroll_fallback_on_auth_failure(self, vector_store: InMemoryVectorStore) -> None:
        await _seed(vector_store, ScriptedEmbeddingProvider())
        provider = ScriptedEmbeddingProvider(outcomes=[auth_failure()])

        result = await _service(provider, vector_store).retrieve("anything")

        assert result.semantic is False
        assert len(result.hits) == 3

    @pytest.mark.asyncio
    async def test_passes_limit_to_store(self) -> None:
        store = AsyncMock()
        store.search.return_value = []

        await _service(ScriptedEmbeddingProvider(), store).retrieve("query", limit=7)

        assert store.search.call_args.kwargs["limit"] == 7

    @pytest.mark.asyncio
    async def test_empty_query_rejected(self, vector_store: InMemoryVectorStore) -> None:
        with pytest.raises(InvalidInputError):
            await _service(ScriptedEmbeddingProvider(), vector_store).retrieve("  ")
