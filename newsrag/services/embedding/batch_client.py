"""Bulk embedding client used by the ingestion path.

Splits a text collection into fixed-size chunks and embeds them one chunk
at a time through :func:`embed_with_retries`.  The output is always the
same length as the input: position ``i`` holds the vector for text ``i``,
or ``None`` when that text's chunk failed on every attempt.  Failure is
chunk-granular because the provider call is itself batched.
"""

from __future__ import annotations

import asyncio
import random
from typing import Awaitable, Callable, Sequence

import structlog

from newsrag.interfaces.embedding_provider import IEmbeddingProvider
from newsrag.services.embedding.retry import RetryPolicy, embed_with_retries
from newsrag.utils.errors import InvalidInputError

logger = structlog.get_logger(logger_name=__name__)


class BatchedEmbeddingClient:
    """Length-preserving, sequential, retrying batch embedder.

    Parameters
    ----------
    provider:
        The embedding gateway.
    policy:
        Attempt budget, backoff and per-call timeout for each chunk.
    batch_size:
        Default chunk size when :meth:`embed_batch` is not given one.
    inter_batch_delay:
        Seconds slept after every chunk, successful or not.
    """

    def __init__(
        self,
        provider: IEmbeddingProvider,
        policy: RetryPolicy | None = None,
        batch_size: int = 3,
        inter_batch_delay: float = 1.2,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Callable[[], float] = random.random,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self._provider = provider
        self._policy = policy or RetryPolicy()
        self._batch_size = batch_size
        self._inter_batch_delay = inter_batch_delay
        self._sleep = sleep
        self._rng = rng

    async def embed_batch(
        self, texts: Sequence[str], batch_size: int | None = None
    ) -> list[list[float] | None]:
        """Embed *texts*, returning one vector or ``None`` per input.

        Raises
        ------
        InvalidInputError
            If any text is empty or not a string.  Nothing is sent.
        EmbeddingAuthorizationError
            If the provider rejects the credential.  Chunks not yet sent
            are abandoned.
        """
        size = batch_size or self._batch_size
        if size < 1:
            raise ValueError("batch_size must be >= 1")
        for position, text in enumerate(texts):
            if not isinstance(text, str) or not text.strip():
                raise InvalidInputError(f"Text at position {position} must be a non-empty string")

        results: list[list[float] | None] = []
        total_chunks = (len(texts) + size - 1) // size

        for chunk_index, start in enumerate(range(0, len(texts), size)):
            chunk = list(texts[start : start + size])
            vectors = await embed_with_retries(
                self._provider,
                chunk,
                self._policy,
                sleep=self._sleep,
                rng=self._rng,
            )
            if vectors is None:
                logger.warning(
                    "embedding_batch_failed",
                    batch=chunk_index + 1,
                    total_batches=total_chunks,
                    items=len(chunk),
                )
                results.extend([None] * len(chunk))
            else:
                logger.debug("embedding_batch_done", batch=chunk_index + 1, total_batches=total_chunks)
                results.extend(vectors)

            await self._sleep(self._inter_batch_delay)

        return results
