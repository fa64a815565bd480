"""Public interface definitions for all external service providers.

Every external API or service used by newsrag is accessed through the
abstract base classes defined in this package.  Concrete adapters implement
these interfaces and are injected at startup by ``newsrag/main.py``, so
unit tests can pass fakes without any network access.

CONCRETE PROVIDER MAP:
    Interface                  →  Concrete implementations (in newsrag/providers/)
    ─────────────────────────────────────────────────────────────────────
    IEmbeddingProvider         →  JinaEmbeddingProvider
    ICacheProvider             →  MemoryCacheProvider
    IVectorStoreProvider       →  QdrantVectorStoreProvider
    IArticleProvider           →  WebScraperProvider
    IFeedProvider              →  RSSFeedProvider
"""

from newsrag.interfaces.article_provider import ArticleContent, IArticleProvider
from newsrag.interfaces.cache_provider import ICacheProvider
from newsrag.interfaces.embedding_provider import IEmbeddingProvider
from newsrag.interfaces.feed_provider import IFeedProvider
from newsrag.interfaces.vector_store_provider import IVectorStoreProvider

__all__ = [
    "ArticleContent",
    "IArticleProvider",
    "ICacheProvider",
    "IEmbeddingProvider",
    "IFeedProvider",
    "IVectorStoreProvider",
]
