"""Abstract base class for text-embedding gateways.

Defines the contract for the single external call that turns a batch of
texts into vectors.  Unlike most adapters, a gateway does not raise on
provider failures: it decodes every outcome into an
:class:`~newsrag.models.embedding.EmbeddingSuccess` or
:class:`~newsrag.models.embedding.EmbeddingFailure` so that retry policy
lives in one place (``newsrag/services/embedding/retry.py``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from newsrag.models.embedding import EmbeddingOutcome


# Concrete implementation: JinaEmbeddingProvider (newsrag/providers/embedding/)
class IEmbeddingProvider(ABC):
    """Contract for embedding gateways used by the batch client and the
    cache-aside accessor.
    """

    @abstractmethod
    async def embed(self, texts: list[str], timeout: float | None = None) -> EmbeddingOutcome:
        """Embed *texts* in a single provider call.

        Parameters
        ----------
        texts:
            The batch to embed.  Callers are responsible for batch sizing.
        timeout:
            Per-call timeout in seconds.  ``None`` uses the provider default.

        Returns
        -------
        EmbeddingOutcome
            ``EmbeddingSuccess`` with exactly ``len(texts)`` vectors of
            dimension :meth:`get_dimension`, in input order; otherwise an
            ``EmbeddingFailure`` describing what went wrong.
        """

    @abstractmethod
    def get_dimension(self) -> int:
        """Return the dimensionality of the vectors this provider produces."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this provider, e.g. ``"jina"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if a credential is configured.

        Must not perform a network call.
        """
