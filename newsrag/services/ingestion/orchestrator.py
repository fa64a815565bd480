"""Orchestrator for one news ingestion run.

Pipeline stages: **harvest -> compose -> embed -> store**.

The :class:`IngestionOrchestrator` coordinates three collaborators (the
content harvester, the batched embedding client and the vector store)
without any of them knowing about each other:

    1. ContentHarvester -- every source in turn, in configured order
    2. Document.embeddable_text -- one string per harvested document
    3. BatchedEmbeddingClient -- one vector or ``None`` per string
    4. IVectorStoreProvider -- one upsert per embedded document

A run only raises when the vector store cannot be prepared.  Everything
after that degrades into counts on the returned :class:`IngestionReport`.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Sequence

import structlog

from newsrag.models.document import Document, NewsSource
from newsrag.models.ingestion import IngestionReport
from newsrag.services.ingestion.point_ids import to_point_id
from newsrag.utils.errors import EmbeddingAuthorizationError, VectorStoreError
from newsrag.utils.logging import run_context

if TYPE_CHECKING:
    from newsrag.interfaces.vector_store_provider import IVectorStoreProvider
    from newsrag.services.embedding.batch_client import BatchedEmbeddingClient
    from newsrag.services.harvester import ContentHarvester

logger = structlog.get_logger(logger_name=__name__)


class IngestionOrchestrator:
    """Drives harvesting, embedding and storage for a list of sources.

    Parameters
    ----------
    harvester:
        Produces Documents for one source at a time.
    embedding_client:
        Length-preserving batch embedder.
    vector_store:
        Destination for embedded documents.
    sources:
        Feeds to harvest, in order.
    content_hash_ids:
        Derive non-numeric point ids from document content instead of
        generating a fresh random id on every run.
    """

    def __init__(
        self,
        harvester: ContentHarvester,
        embedding_client: BatchedEmbeddingClient,
        vector_store: IVectorStoreProvider,
        sources: Sequence[NewsSource],
        content_hash_ids: bool = False,
    ) -> None:
        self._harvester = harvester
        self._embedding_client = embedding_client
        self._vector_store = vector_store
        self._sources = list(sources)
        self._content_hash_ids = content_hash_ids

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(self, batch_size: int | None = None) -> IngestionReport:
        """Run one full ingestion and return its report.

        Raises
        ------
        VectorStoreError
            If the collection cannot be created or reached at startup.
        """
        with run_context() as run_id:
            return await self._run(IngestionReport(run_id=run_id), batch_size)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _run(self, report: IngestionReport, batch_size: int | None) -> IngestionReport:
        start = time.monotonic()
        await self._vector_store.ensure_collection()

        documents = await self._harvest_all(report)
        report.candidates = len(documents)

        if not documents:
            logger.info("ingestion_no_documents", sources=len(self._sources))
            report.duration_s = round(time.monotonic() - start, 3)
            return report

        texts = [document.embeddable_text() for document in documents]
        try:
            vectors = await self._embedding_client.embed_batch(texts, batch_size=batch_size)
        except EmbeddingAuthorizationError as exc:
            logger.error("ingestion_embedding_aborted", error=str(exc), documents=len(documents))
            report.embedding_error = str(exc)
            report.skipped = len(documents)
            report.duration_s = round(time.monotonic() - start, 3)
            return report

        for document, vector in zip(documents, vectors):
            await self._store(document, vector, report)

        report.duration_s = round(time.monotonic() - start, 3)
        logger.info(
            "ingestion_complete",
            candidates=report.candidates,
            stored=report.stored,
            skipped=report.skipped,
            failed=report.failed,
            duration_s=report.duration_s,
        )
        return report

    async def _harvest_all(self, report: IngestionReport) -> list[Document]:
        documents: list[Document] = []
        for source in self._sources:
            harvested = await self._harvester.collect(source)
            report.documents_per_source[source.name] = len(harvested)
            if not harvested:
                logger.warning("ingestion_source_empty", source=source.name)
                continue
            documents.extend(harvested)
        return documents

    async def _store(
        self, document: Document, vector: list[float] | None, report: IngestionReport
    ) -> None:
        if vector is None:
            report.skipped += 1
            logger.info("document_skipped_no_embedding", document_id=document.id, title=document.title)
            return

        point_id = to_point_id(
            document.id,
            content=document.content,
            content_hash=self._content_hash_ids,
        )
        try:
            await self._vector_store.upsert(point_id, vector, document.to_payload())
        except VectorStoreError as exc:
            report.failed += 1
            logger.error("document_upsert_failed", document_id=document.id, error=str(exc))
            return

        report.stored += 1
        logger.debug("document_stored", document_id=document.id, point_id=str(point_id))
