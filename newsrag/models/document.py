"""Harvesting data models: feed sources, feed entries, and documents.

Defines Pydantic v2 models for the content that flows from the Content
Harvester into the ingestion orchestrator.  All models use frozen config:
a Document is created once per feed entry and never mutated afterwards.

Flow overview:

    NewsSource  --(feed fetch)-->  FeedEntry*  --(page fetch + clean)-->  Document*

``FeedEntry`` is the decoded form of one syndication item; ``Document`` is
what survives content extraction and the minimum-length filter.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NewsSource(BaseModel):
    """A configured syndication feed to harvest."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Display name, also used in document ids.")
    feed_url: str = Field(min_length=1, description="URL of the RSS/Atom feed.")


class FeedEntry(BaseModel):
    """One entry decoded from a feed, before its linked page is fetched."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    link: str = ""
    published: str | None = Field(
        default=None,
        description="Publish date string exactly as the feed reports it.",
    )
    summary: str = Field(default="", description="The entry's own summary/snippet (may contain markup).")


class Document(BaseModel):
    """A harvested article ready for embedding.

    ``content`` is already cleaned and truncated; Documents shorter than the
    harvester's minimum length are never constructed.
    """

    model_config = ConfigDict(frozen=True)

    # Natural id: "<source>_<epoch ms>_<entry index>".  Not a valid vector
    # store id unless purely numeric; see services/ingestion/point_ids.py.
    id: str
    title: str
    content: str
    source_name: str
    source_url: str = ""
    published_at: str
    summary: str = ""

    def embeddable_text(self) -> str:
        """Return the string sent to the embedding provider for this document."""
        return f"{self.title}\n\n{self.content}\n\nSource: {self.source_name}"

    def to_payload(self) -> dict[str, Any]:
        """Return the vector-store payload for this document."""
        return {
            "document_id": self.id,
            "title": self.title,
            "content": self.content,
            "url": self.source_url,
            "source": self.source_name,
            "published_at": self.published_at,
            "summary": self.summary,
        }
