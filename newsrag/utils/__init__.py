"""Utility modules for newsrag.

- **errors** -- Domain-specific exception hierarchy rooted at NewsRagError;
  each pipeline stage raises its own subclass so callers can separate
  fatal failures (authorization, setup) from degradable ones.
- **logging** -- structlog setup with a dual-renderer pattern (console in
  development, JSON in production) on stderr, plus the per-run ``run_id``
  context.
- **text_normalizer** -- Markup stripping, whitespace collapsing, and the
  normalized digests used as embedding cache keys.
"""

from newsrag.utils.errors import (
    CacheError,
    ConfigurationError,
    EmbeddingAuthorizationError,
    EmbeddingError,
    FeedParseError,
    HarvestError,
    InvalidInputError,
    NewsRagError,
    VectorStoreError,
)
from newsrag.utils.logging import configure_logging, run_context
from newsrag.utils.text_normalizer import clean_text, normalize_for_key, text_digest, truncate

__all__ = [
    "CacheError",
    "ConfigurationError",
    "EmbeddingAuthorizationError",
    "EmbeddingError",
    "FeedParseError",
    "HarvestError",
    "InvalidInputError",
    "NewsRagError",
    "VectorStoreError",
    "clean_text",
    "configure_logging",
    "normalize_for_key",
    "run_context",
    "text_digest",
    "truncate",
]
