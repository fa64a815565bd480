"""Abstract base class for vector-store service providers.

Defines the contract for persisting document vectors and reading them back
either by similarity (``search``) or without a query vector (``scroll``,
used when no query embedding could be produced).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from newsrag.models.ingestion import SearchHit


# Concrete implementation: QdrantVectorStoreProvider (newsrag/providers/vector_store/)
class IVectorStoreProvider(ABC):
    """Contract for vector-store services used by ingestion and retrieval."""

    @abstractmethod
    async def ensure_collection(self) -> None:
        """Create the collection if it does not exist yet.

        Raises
        ------
        newsrag.utils.errors.VectorStoreError
            If the store is unreachable.  Callers treat this as a setup
            failure.
        """

    @abstractmethod
    async def upsert(self, point_id: int | str, vector: list[float], payload: dict[str, Any]) -> None:
        """Insert or overwrite a single point.

        Parameters
        ----------
        point_id:
            Unsigned integer or UUID string; see
            :func:`newsrag.services.ingestion.point_ids.to_point_id`.
        vector:
            Embedding vector of the collection's dimensionality.
        payload:
            Arbitrary JSON-serialisable metadata stored with the point.

        Raises
        ------
        newsrag.utils.errors.VectorStoreError
            If the write fails.
        """

    @abstractmethod
    async def search(self, vector: list[float], limit: int = 5) -> list[SearchHit]:
        """Return up to *limit* stored documents ranked by cosine similarity."""

    @abstractmethod
    async def scroll(self, limit: int = 5) -> list[SearchHit]:
        """Return up to *limit* stored documents in arbitrary order (score ``None``)."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this provider, e.g. ``"qdrant"``."""
