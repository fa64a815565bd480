"""Concrete adapters for the interfaces in ``newsrag.interfaces``.

    embedding/     -- JinaEmbeddingProvider (HTTPS gateway, no retries)
    cache/         -- MemoryCacheProvider (cachetools, per-entry TTL)
    vector_store/  -- QdrantVectorStoreProvider (AsyncQdrantClient)
    feed/          -- RSSFeedProvider (httpx + feedparser)
    article/       -- WebScraperProvider (httpx + BeautifulSoup selector chain)
"""
