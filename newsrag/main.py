"""newsrag composition root.

Wires providers and services together via constructor injection.  Every
component is built once from a single :class:`Settings` instance and shared
by reference; nothing here is reassigned after startup.

Used by the operator CLI (``python -m newsrag.cli``) and by any host
application that wants the ingestion or retrieval path.
"""

from __future__ import annotations

from typing import Any, Sequence

import httpx
import structlog

from newsrag.config.loader import load_sources
from newsrag.config.settings import Settings
from newsrag.models.document import NewsSource
from newsrag.providers.article.web_scraper_provider import WebScraperProvider
from newsrag.providers.cache.memory_cache import MemoryCacheProvider
from newsrag.providers.embedding.jina_embedding_provider import JinaEmbeddingProvider
from newsrag.providers.feed.rss_feed_provider import RSSFeedProvider
from newsrag.providers.vector_store.qdrant_provider import QdrantVectorStoreProvider
from newsrag.services.embedding.batch_client import BatchedEmbeddingClient
from newsrag.services.embedding.cached_accessor import CachedEmbeddingAccessor
from newsrag.services.embedding.retry import RetryPolicy
from newsrag.services.harvester import ContentHarvester
from newsrag.services.ingestion.orchestrator import IngestionOrchestrator
from newsrag.services.retrieval_service import RetrievalService

logger = structlog.get_logger(logger_name=__name__)


# ---------------------------------------------------------------------------
# Retry policies
# ---------------------------------------------------------------------------


def bulk_retry_policy(app_settings: Settings) -> RetryPolicy:
    """Retry policy for the ingestion path."""
    return RetryPolicy(
        max_attempts=app_settings.embedding_max_attempts,
        base_delay=app_settings.embedding_backoff_base,
        max_jitter=app_settings.embedding_backoff_jitter,
        timeout=app_settings.embedding_timeout,
    )


def query_retry_policy(app_settings: Settings) -> RetryPolicy:
    """Retry policy for the query path: fewer attempts, shorter timeout."""
    return RetryPolicy(
        max_attempts=app_settings.embedding_chat_max_attempts,
        base_delay=app_settings.embedding_backoff_base,
        max_jitter=app_settings.embedding_backoff_jitter,
        timeout=app_settings.embedding_chat_timeout,
    )


# ---------------------------------------------------------------------------
# Full DI assembly
# ---------------------------------------------------------------------------


def build_components(
    app_settings: Settings,
    sources: Sequence[NewsSource] | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Construct every provider and service instance.

    Returns a flat dict of named components.  The caller owns
    ``components["http_client"]`` and must close it when done.
    """
    # -- Shared resources --
    http_client = http_client or httpx.AsyncClient(
        timeout=app_settings.harvest_fetch_timeout,
        follow_redirects=True,
    )
    if sources is None:
        sources = load_sources(app_settings.sources_config_path)

    # -- Providers --
    embedding_provider = JinaEmbeddingProvider(settings=app_settings, http_client=http_client)
    cache = MemoryCacheProvider(
        max_size=app_settings.embedding_cache_max_size,
        ttl=app_settings.embedding_cache_ttl,
    )
    vector_store = QdrantVectorStoreProvider.from_url(
        url=app_settings.qdrant_url,
        api_key=app_settings.qdrant_api_key,
        collection_name=app_settings.qdrant_collection,
        dimension=app_settings.embedding_dimension,
        timeout=app_settings.qdrant_timeout,
    )
    feed_provider = RSSFeedProvider(
        http_client=http_client,
        user_agent=app_settings.harvest_user_agent,
        timeout=app_settings.harvest_fetch_timeout,
    )
    article_provider = WebScraperProvider(
        http_client=http_client,
        timeout=app_settings.harvest_fetch_timeout,
        user_agent=app_settings.harvest_user_agent,
        max_length=app_settings.harvest_max_content_length,
    )

    # -- Services --
    harvester = ContentHarvester(
        feed_provider=feed_provider,
        article_provider=article_provider,
        max_per_source=app_settings.harvest_max_per_source,
        min_content_length=app_settings.harvest_min_content_length,
        max_content_length=app_settings.harvest_max_content_length,
        summary_length=app_settings.harvest_summary_length,
        entry_delay=app_settings.harvest_entry_delay,
    )
    embedding_client = BatchedEmbeddingClient(
        provider=embedding_provider,
        policy=bulk_retry_policy(app_settings),
        batch_size=app_settings.embedding_batch_size,
        inter_batch_delay=app_settings.embedding_inter_batch_delay,
    )
    accessor = CachedEmbeddingAccessor(
        provider=embedding_provider,
        cache=cache,
        policy=query_retry_policy(app_settings),
        ttl=app_settings.embedding_cache_ttl,
    )
    orchestrator = IngestionOrchestrator(
        harvester=harvester,
        embedding_client=embedding_client,
        vector_store=vector_store,
        sources=sources,
        content_hash_ids=app_settings.content_hash_ids,
    )
    retrieval = RetrievalService(accessor=accessor, vector_store=vector_store)

    if not app_settings.has_embedding_credentials():
        logger.warning("embedding_provider_not_configured", provider=embedding_provider.get_provider_name())

    logger.info(
        "components_built",
        sources=[source.name for source in sources],
        collection=app_settings.qdrant_collection,
        embedding_model=app_settings.jina_model,
    )

    return {
        "http_client": http_client,
        "sources": list(sources),
        "embedding_provider": embedding_provider,
        "cache": cache,
        "vector_store": vector_store,
        "harvester": harvester,
        "embedding_client": embedding_client,
        "embedding_accessor": accessor,
        "orchestrator": orchestrator,
        "retrieval": retrieval,
    }
