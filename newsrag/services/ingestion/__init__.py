"""Ingestion run orchestration and point-id normalisation."""

from newsrag.services.ingestion.orchestrator import IngestionOrchestrator
from newsrag.services.ingestion.point_ids import to_point_id

__all__ = ["IngestionOrchestrator", "to_point_id"]
