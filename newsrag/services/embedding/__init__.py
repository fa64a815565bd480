"""Embedding services: retry loop, bulk batch client, query-time cache-aside."""

from newsrag.services.embedding.batch_client import BatchedEmbeddingClient
from newsrag.services.embedding.cached_accessor import CachedEmbeddingAccessor, cache_key
from newsrag.services.embedding.retry import RetryPolicy, embed_with_retries

__all__ = [
    "BatchedEmbeddingClient",
    "CachedEmbeddingAccessor",
    "RetryPolicy",
    "cache_key",
    "embed_with_retries",
]
