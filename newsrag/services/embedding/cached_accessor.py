"""Cache-aside embedding for single query strings.

Used on the query path, where a user is waiting.  It therefore gets one
attempt with a short timeout instead of the bulk path's backoff loop, and
every failure (including an authorization rejection) collapses to ``None``
so the caller can fall back to non-semantic retrieval.

Cache reads and writes are best-effort: a broken cache never changes the
returned vector.
"""

from __future__ import annotations

import asyncio
import random
from typing import Awaitable, Callable

import structlog

from newsrag.interfaces.cache_provider import ICacheProvider
from newsrag.interfaces.embedding_provider import IEmbeddingProvider
from newsrag.services.embedding.retry import RetryPolicy, embed_with_retries
from newsrag.utils.errors import EmbeddingAuthorizationError, InvalidInputError
from newsrag.utils.text_normalizer import text_digest

logger = structlog.get_logger(logger_name=__name__)

_KEY_PREFIX = "embedding:"


def cache_key(text: str) -> str:
    """Return the cache key for *text*; whitespace variants share a key."""
    return _KEY_PREFIX + text_digest(text)


class CachedEmbeddingAccessor:
    """Read-through cache in front of a single-attempt embedding call."""

    def __init__(
        self,
        provider: IEmbeddingProvider,
        cache: ICacheProvider,
        policy: RetryPolicy | None = None,
        ttl: int = 3600,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._policy = policy or RetryPolicy(max_attempts=1, timeout=8.0)
        self._ttl = ttl
        self._sleep = sleep
        self._rng = rng

    async def embed_one(self, text: str) -> list[float] | None:
        """Return the embedding for *text*, or ``None`` if none is available.

        Raises
        ------
        InvalidInputError
            If *text* is empty or not a string.
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidInputError()

        key = cache_key(text)
        cached = await self._cache_get(key)
        if cached is not None:
            return list(cached)

        if not self._provider.is_available():
            logger.warning("query_embedding_unavailable", provider=self._provider.get_provider_name())
            return None

        try:
            vectors = await embed_with_retries(
                self._provider,
                [text],
                self._policy,
                sleep=self._sleep,
                rng=self._rng,
            )
        except EmbeddingAuthorizationError as exc:
            logger.error("query_embedding_unauthorized", error=str(exc))
            return None

        if not vectors:
            return None

        vector = vectors[0]
        await self._cache_set(key, vector)
        return vector

    async def _cache_get(self, key: str) -> list[float] | None:
        try:
            return await self._cache.get(key)
        except Exception as exc:
            logger.warning("embedding_cache_read_failed", key=key, error=str(exc))
            return None

    async def _cache_set(self, key: str, vector: list[float]) -> None:
        try:
            await self._cache.set(key, vector, ttl=self._ttl)
        except Exception as exc:
            logger.warning("embedding_cache_write_failed", key=key, error=str(exc))
