"""newsrag domain models -- re-exports all public model classes.

    - document.py   -- Feed sources, feed entries, harvested documents
    - embedding.py  -- Gateway result variants (success / classified failure)
    - ingestion.py  -- Ingestion run report, search hits, retrieval results
"""

from __future__ import annotations

from newsrag.models.document import Document, FeedEntry, NewsSource
from newsrag.models.embedding import (
    EmbeddingFailure,
    EmbeddingOutcome,
    EmbeddingSuccess,
    FailureKind,
)
from newsrag.models.ingestion import IngestionReport, RetrievalResult, SearchHit

__all__ = [
    "Document",
    "EmbeddingFailure",
    "EmbeddingOutcome",
    "EmbeddingSuccess",
    "FailureKind",
    "FeedEntry",
    "IngestionReport",
    "NewsSource",
    "RetrievalResult",
    "SearchHit",
]
