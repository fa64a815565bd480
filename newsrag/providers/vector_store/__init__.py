"""Vector store provider -- Qdrant.

Qdrant persists one point per harvested document (768-dim cosine vectors)
and serves both ranked search and unranked scroll reads.  It is accessed
exclusively through IVectorStoreProvider, so other stores (pgvector,
Chroma) can be substituted by adding an adapter here.
"""

from newsrag.providers.vector_store.qdrant_provider import QdrantVectorStoreProvider

__all__ = ["QdrantVectorStoreProvider"]
