"""Qdrant vector store provider adapter.

Wraps ``qdrant_client.AsyncQdrantClient`` to implement
:class:`IVectorStoreProvider`.  The collection uses cosine distance and a
fixed vector size (768 for the Jina base model).  Any client-side or server
error is re-raised as :class:`VectorStoreError` so callers see a single
exception type regardless of transport (REST or gRPC).
"""

from __future__ import annotations

from typing import Any

import structlog
from qdrant_client import AsyncQdrantClient, models

from newsrag.interfaces.vector_store_provider import IVectorStoreProvider
from newsrag.models.ingestion import SearchHit
from newsrag.utils.errors import VectorStoreError

logger = structlog.get_logger(logger_name=__name__)


class QdrantVectorStoreProvider(IVectorStoreProvider):
    """Vector store provider backed by a Qdrant server.

    Parameters
    ----------
    client:
        Injected async client; build one with :meth:`from_url` in production.
    collection_name:
        Collection holding one point per stored document.
    dimension:
        Vector size used when the collection has to be created.
    """

    def __init__(
        self,
        client: AsyncQdrantClient,
        collection_name: str = "news_articles",
        dimension: int = 768,
    ) -> None:
        self._client = client
        self._collection_name = collection_name
        self._dimension = dimension

    @classmethod
    def from_url(
        cls,
        url: str,
        api_key: str | None = None,
        collection_name: str = "news_articles",
        dimension: int = 768,
        timeout: float | None = None,
    ) -> QdrantVectorStoreProvider:
        """Build a provider talking to the Qdrant server at *url*."""
        client = AsyncQdrantClient(
            url=url,
            api_key=api_key or None,
            timeout=int(timeout) if timeout else None,
        )
        return cls(client=client, collection_name=collection_name, dimension=dimension)

    # ------------------------------------------------------------------
    # IVectorStoreProvider implementation
    # ------------------------------------------------------------------

    async def ensure_collection(self) -> None:
        """Create the collection with cosine distance if it is missing."""
        try:
            if await self._client.collection_exists(collection_name=self._collection_name):
                logger.info("qdrant_collection_exists", collection=self._collection_name)
                return
            await self._client.create_collection(
                collection_name=self._collection_name,
                vectors_config=models.VectorParams(
                    size=self._dimension,
                    distance=models.Distance.COSINE,
                ),
            )
            logger.info(
                "qdrant_collection_created",
                collection=self._collection_name,
                dimension=self._dimension,
            )
        except Exception as exc:
            raise VectorStoreError(
                message=f"Qdrant initialization failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def upsert(self, point_id: int | str, vector: list[float], payload: dict[str, Any]) -> None:
        """Write one point and wait for the server to apply it."""
        try:
            await self._client.upsert(
                collection_name=self._collection_name,
                points=[models.PointStruct(id=point_id, vector=vector, payload=payload)],
                wait=True,
            )
        except Exception as exc:
            raise VectorStoreError(
                message=f"Failed to upsert point {point_id}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def search(self, vector: list[float], limit: int = 5) -> list[SearchHit]:
        """Return the *limit* nearest stored documents with their scores."""
        if limit <= 0:
            return []
        try:
            response = await self._client.query_points(
                collection_name=self._collection_name,
                query=vector,
                limit=limit,
                with_payload=True,
                with_vectors=False,
            )
        except Exception as exc:
            raise VectorStoreError(
                message=f"Qdrant search failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        return [SearchHit.from_payload(point.payload, score=point.score) for point in response.points]

    async def scroll(self, limit: int = 5) -> list[SearchHit]:
        """Return up to *limit* stored documents without ranking."""
        if limit <= 0:
            return []
        try:
            points, _next_offset = await self._client.scroll(
                collection_name=self._collection_name,
                limit=limit,
                with_payload=True,
                with_vectors=False,
            )
        except Exception as exc:
            raise VectorStoreError(
                message=f"Qdrant scroll failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        return [SearchHit.from_payload(point.payload) for point in points]

    def get_provider_name(self) -> str:
        return "qdrant"

    async def close(self) -> None:
        """Release the underlying client's connections."""
        await self._client.close()
