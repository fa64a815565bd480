"""Retry loop around a single embedding gateway call.

The gateway never raises on provider failures; it returns an
:class:`EmbeddingFailure` whose ``kind`` says whether another attempt is
worth making.  This module turns that into a bounded attempt loop:

* non-retryable failure (an authorization rejection) -> raise
  :class:`EmbeddingAuthorizationError` at once, with no sleep and no
  further attempts
* any other failure -> wait ``2**attempt * base_delay + jitter`` seconds
  (``attempt`` counts from 1) and try again
* attempts exhausted -> return ``None``

Both the sleep and the jitter source are injectable so tests can record
delays instead of waiting for them.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Awaitable, Callable

import structlog

from newsrag.interfaces.embedding_provider import IEmbeddingProvider
from newsrag.models.embedding import EmbeddingFailure
from newsrag.utils.errors import EmbeddingAuthorizationError

logger = structlog.get_logger(logger_name=__name__)

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and backoff shape for one gateway call chain."""

    max_attempts: int = 3
    base_delay: float = 1.0
    max_jitter: float = 0.5
    timeout: float | None = None

    def backoff(self, attempt: int, rng: Callable[[], float] = random.random) -> float:
        """Seconds to wait after failed *attempt* (1-based)."""
        return (2 ** attempt) * self.base_delay + rng() * self.max_jitter


async def embed_with_retries(
    provider: IEmbeddingProvider,
    texts: list[str],
    policy: RetryPolicy,
    *,
    sleep: Sleep = asyncio.sleep,
    rng: Callable[[], float] = random.random,
) -> list[list[float]] | None:
    """Embed *texts* with up to ``policy.max_attempts`` gateway calls.

    Returns the vectors on success, ``None`` when every attempt failed.

    Raises
    ------
    EmbeddingAuthorizationError
        If the provider rejects the credential.  Raised before any backoff.
    """
    last_failure: EmbeddingFailure | None = None

    for attempt in range(1, policy.max_attempts + 1):
        logger.debug(
            "embedding_attempt",
            provider=provider.get_provider_name(),
            attempt=attempt,
            batch_size=len(texts),
        )
        outcome = await provider.embed(texts, timeout=policy.timeout)
        if not isinstance(outcome, EmbeddingFailure):
            return outcome.vectors

        last_failure = outcome
        if not outcome.retryable:
            logger.error(
                "embedding_authorization_failed",
                provider=provider.get_provider_name(),
                status_code=outcome.status_code,
                error=outcome.message,
            )
            raise EmbeddingAuthorizationError(
                message=outcome.message or "Embedding provider authorization failed",
                provider_name=provider.get_provider_name(),
            )

        logger.warning(
            "embedding_attempt_failed",
            provider=provider.get_provider_name(),
            attempt=attempt,
            kind=outcome.kind.value,
            status_code=outcome.status_code,
            error=outcome.message,
        )
        if attempt >= policy.max_attempts:
            break

        delay = policy.backoff(attempt, rng)
        logger.info("embedding_retry_scheduled", attempt=attempt, delay_s=round(delay, 3))
        await sleep(delay)

    logger.error(
        "embedding_attempts_exhausted",
        provider=provider.get_provider_name(),
        max_attempts=policy.max_attempts,
        kind=last_failure.kind.value if last_failure else None,
        error=last_failure.message if last_failure else None,
    )
    return None
