"""Embedding provider implementations.

Embeddings convert text into numeric vectors that capture semantic meaning.
These vectors are stored in Qdrant and used for similarity search.

    JinaEmbeddingProvider -- jina-embeddings-v2-base-en (768 dims) over HTTPS.
"""

from newsrag.providers.embedding.jina_embedding_provider import JinaEmbeddingProvider

__all__ = ["JinaEmbeddingProvider"]
