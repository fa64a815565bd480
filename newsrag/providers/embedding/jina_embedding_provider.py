"""Jina AI embedding gateway.

Wraps a single ``POST /v1/embeddings`` call over an injected
``httpx.AsyncClient`` and decodes the exchange into an
:class:`EmbeddingSuccess` or a classified :class:`EmbeddingFailure`.  This
adapter performs no retries; see ``newsrag/services/embedding/retry.py``.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from newsrag.config.settings import Settings
from newsrag.interfaces.embedding_provider import IEmbeddingProvider
from newsrag.models.embedding import (
    EmbeddingFailure,
    EmbeddingOutcome,
    EmbeddingSuccess,
    FailureKind,
)

logger = structlog.get_logger(logger_name=__name__)


class JinaEmbeddingProvider(IEmbeddingProvider):
    """Embedding gateway backed by the Jina embeddings HTTP API.

    Uses ``jina-embeddings-v2-base-en`` (768 dims) by default.  The bearer
    credential comes from ``Settings.jina_api_key``.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._api_key = settings.jina_api_key
        self._url = settings.jina_api_url
        self._model = settings.jina_model
        self._dimension = settings.embedding_dimension
        self._default_timeout = settings.embedding_timeout
        self._client = http_client or httpx.AsyncClient()

    # ------------------------------------------------------------------
    # IEmbeddingProvider implementation
    # ------------------------------------------------------------------

    async def embed(self, texts: list[str], timeout: float | None = None) -> EmbeddingOutcome:
        """POST *texts* to Jina and decode the response."""
        if not texts:
            return EmbeddingSuccess(vectors=[])

        try:
            response = await self._client.post(
                self._url,
                json={"model": self._model, "input": texts},
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                timeout=timeout if timeout is not None else self._default_timeout,
            )
        except httpx.TimeoutException as exc:
            return EmbeddingFailure(kind=FailureKind.TIMEOUT, message=f"Request timed out: {exc}")
        except httpx.HTTPError as exc:
            return EmbeddingFailure(kind=FailureKind.NETWORK, message=f"HTTP error: {exc}")

        status = response.status_code
        if status in (401, 403):
            return EmbeddingFailure(
                kind=FailureKind.AUTHORIZATION,
                message=f"HTTP {status}: {_error_detail(response)}",
                status_code=status,
            )
        if status == 429:
            return EmbeddingFailure(
                kind=FailureKind.RATE_LIMITED,
                message=f"HTTP 429: {_error_detail(response)}",
                status_code=status,
            )
        if status >= 500:
            return EmbeddingFailure(
                kind=FailureKind.SERVER_ERROR,
                message=f"HTTP {status}: {_error_detail(response)}",
                status_code=status,
            )
        if status >= 400:
            return EmbeddingFailure(
                kind=FailureKind.CLIENT_ERROR,
                message=f"HTTP {status}: {_error_detail(response)}",
                status_code=status,
            )

        return self._decode(response, expected=len(texts))

    def get_dimension(self) -> int:
        return self._dimension

    def get_provider_name(self) -> str:
        return "jina"

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured."""
        return bool(self._api_key)

    # ------------------------------------------------------------------
    # Response decoding
    # ------------------------------------------------------------------

    def _decode(self, response: httpx.Response, expected: int) -> EmbeddingOutcome:
        """Validate the JSON body and extract vectors in input order."""
        try:
            body = response.json()
        except ValueError:
            return EmbeddingFailure(
                kind=FailureKind.MALFORMED,
                message="Response body is not JSON",
                status_code=response.status_code,
            )

        items = body.get("data") if isinstance(body, dict) else None
        if not isinstance(items, list):
            return EmbeddingFailure(
                kind=FailureKind.MALFORMED,
                message="Invalid Jina response format",
                status_code=response.status_code,
            )

        # Jina tags each item with its input position; honour it when present.
        if all(isinstance(item, dict) and isinstance(item.get("index"), int) for item in items):
            items = sorted(items, key=lambda item: item["index"])

        vectors: list[list[float]] = []
        for item in items:
            vector = item.get("embedding") if isinstance(item, dict) else None
            if not isinstance(vector, list) or len(vector) != self._dimension:
                return EmbeddingFailure(
                    kind=FailureKind.MALFORMED,
                    message=f"Expected {self._dimension}-dim vectors",
                    status_code=response.status_code,
                )
            try:
                vectors.append([float(v) for v in vector])
            except (TypeError, ValueError):
                return EmbeddingFailure(
                    kind=FailureKind.MALFORMED,
                    message="Non-numeric vector component",
                    status_code=response.status_code,
                )

        if len(vectors) != expected:
            return EmbeddingFailure(
                kind=FailureKind.MALFORMED,
                message=f"Expected {expected} vectors, got {len(vectors)}",
                status_code=response.status_code,
            )

        usage = body.get("usage")
        logger.debug(
            "jina_embedding_batch",
            model=self._model,
            batch_size=expected,
            tokens=usage.get("total_tokens") if isinstance(usage, dict) else None,
        )
        return EmbeddingSuccess(vectors=vectors)


def _error_detail(response: httpx.Response) -> Any:
    """Return the provider's error body for log context, JSON when possible."""
    try:
        return response.json()
    except ValueError:
        return response.text[:200]
