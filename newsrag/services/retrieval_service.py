"""Query-time retrieval over the ingested news collection.

Embeds the query through the cache-aside accessor and ranks stored
documents by similarity.  When no query vector can be produced the
service still returns documents, via an unranked scroll, so the chat layer
always has some context to cite.
"""

from __future__ import annotations

import structlog

from newsrag.interfaces.vector_store_provider import IVectorStoreProvider
from newsrag.models.ingestion import RetrievalResult
from newsrag.services.embedding.cached_accessor import CachedEmbeddingAccessor

logger = structlog.get_logger(logger_name=__name__)


class RetrievalService:
    """Semantic search with a scroll fallback."""

    def __init__(
        self,
        accessor: CachedEmbeddingAccessor,
        vector_store: IVectorStoreProvider,
    ) -> None:
        self._accessor = accessor
        self._vector_store = vector_store

    async def retrieve(self, query: str, limit: int = 5) -> RetrievalResult:
        """Return up to *limit* documents relevant to *query*.

        Raises
        ------
        InvalidInputError
            If *query* is empty.
        VectorStoreError
            If the vector store cannot be read.
        """
        vector = await self._accessor.embed_one(query)
        if vector is not None:
            hits = await self._vector_store.search(vector, limit=limit)
            logger.info("retrieval_semantic", hits=len(hits), limit=limit)
            return RetrievalResult(hits=hits, semantic=True)

        hits = await self._vector_store.scroll(limit=limit)
        logger.info("retrieval_scroll_fallback", hits=len(hits), limit=limit)
        return RetrievalResult(hits=hits, semantic=False)
