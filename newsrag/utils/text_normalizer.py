"""Text normalization utilities for harvested news content.

This module handles two distinct normalization concerns:

1. **Markup cleaning** -- Strips leftover HTML tags from feed titles and
   summaries, collapses runs of whitespace, and trims the result so that
   length thresholds are measured on readable characters only.

2. **Cache-key normalization** -- Produces a stable form of a query string
   (trimmed, whitespace-collapsed) and a digest of it, so identical queries
   typed with different spacing hit the same embedding cache entry.
"""

import hashlib
import re

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(text: str | None) -> str:
    """Strip markup and collapse whitespace.

    Args:
        text: Raw text, possibly containing HTML tags. ``None`` is treated
              as the empty string.

    Returns:
        Cleaned single-line text.
    """
    if not text:
        return ""
    stripped = _TAG_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", stripped).strip()


def truncate(text: str, max_length: int) -> str:
    """Cut *text* to at most *max_length* characters."""
    if max_length <= 0:
        return ""
    return text[:max_length]


def normalize_for_key(text: str) -> str:
    """Return the whitespace-normalized form of *text* used for cache keys."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def text_digest(text: str) -> str:
    """Return a hex SHA-256 digest of the normalized *text*."""
    return hashlib.sha256(normalize_for_key(text).encode("utf-8")).hexdigest()
