"""Ingestion and retrieval result models.

``IngestionReport`` is the operator-facing summary of one ingestion run.
``SearchHit`` is a vector-store result decoded from a stored payload; it is
what the query-time retrieval path hands to the chat layer for citations.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchHit(BaseModel):
    """A stored document returned by a vector-store search or scroll."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    content: str = ""
    url: str = ""
    source: str = ""
    published_at: str | None = None
    summary: str = ""
    # None for scroll results (no similarity was computed).
    score: float | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None, score: float | None = None) -> SearchHit:
        """Build a hit from a stored payload dict, tolerating missing keys."""
        payload = payload or {}
        return cls(
            title=payload.get("title") or "",
            content=payload.get("content") or "",
            url=payload.get("url") or "",
            source=payload.get("source") or "",
            published_at=payload.get("published_at"),
            summary=payload.get("summary") or "",
            score=score,
        )


class IngestionReport(BaseModel):
    """Counts for a single ingestion run."""

    run_id: str = Field(default="", description="Id bound to every log line of the run.")
    documents_per_source: dict[str, int] = Field(default_factory=dict)
    candidates: int = Field(default=0, ge=0, description="Documents harvested across all sources.")
    stored: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0, description="Documents with no embedding.")
    failed: int = Field(default=0, ge=0, description="Documents whose upsert raised.")
    embedding_error: str | None = Field(
        default=None,
        description="Set when embedding aborted with a non-retryable error.",
    )
    duration_s: float = 0.0


class RetrievalResult(BaseModel):
    """Hits for one query and whether they were ranked semantically."""

    model_config = ConfigDict(frozen=True)

    hits: list[SearchHit] = Field(default_factory=list)
    semantic: bool = False
