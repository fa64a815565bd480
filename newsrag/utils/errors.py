"""Custom exception hierarchy for newsrag.

All application exceptions inherit from :class:`NewsRagError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "jina", "qdrant", "rss") caused the failure.

The hierarchy is organized by pipeline domain:

    NewsRagError  (base -- catch-all for any newsrag error)
    +-- InvalidInputError            (empty / wrong-typed text for embedding)
    +-- EmbeddingError               (embedding call failed after retries)
    |   +-- EmbeddingAuthorizationError  (provider refused the credential)
    +-- HarvestError                 (one article page could not be fetched)
    +-- FeedParseError               (a whole source feed could not be read)
    +-- VectorStoreError             (vector store init / upsert / search)
    +-- CacheError                   (key-value cache backend failure)
    +-- ConfigurationError           (startup / missing config)

Only :class:`EmbeddingAuthorizationError` is treated as non-retryable by the
embedding retry loop; every other provider failure is retried with backoff.
"""


class NewsRagError(Exception):
    """Base exception for all newsrag errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[jina] Request timed out``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Embedding errors
# ---------------------------------------------------------------------------

class InvalidInputError(NewsRagError):
    """Raised when text handed to an embedding call is empty or not a string."""

    def __init__(
        self,
        message: str = "Text must be a non-empty string",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EmbeddingError(NewsRagError):
    """Raised when an embedding call fails and cannot be recovered."""

    def __init__(
        self,
        message: str = "Embedding call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EmbeddingAuthorizationError(EmbeddingError):
    """Raised when the embedding provider rejects the configured credential.

    This is never retried: a 401/403 will not fix itself between attempts.
    """

    def __init__(
        self,
        message: str = "Embedding provider authorization failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Harvesting errors
# ---------------------------------------------------------------------------

class HarvestError(NewsRagError):
    """Raised when a linked article page cannot be fetched."""

    def __init__(
        self,
        message: str = "Article fetch failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class FeedParseError(NewsRagError):
    """Raised when a syndication feed cannot be fetched or parsed."""

    def __init__(
        self,
        message: str = "Feed could not be parsed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Storage errors
# ---------------------------------------------------------------------------

class VectorStoreError(NewsRagError):
    """Raised when a vector-store operation fails."""

    def __init__(
        self,
        message: str = "Vector store operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class CacheError(NewsRagError):
    """Raised when the key-value cache backend fails."""

    def __init__(
        self,
        message: str = "Cache operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(NewsRagError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
