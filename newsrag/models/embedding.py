"""Embedding gateway result variants.

The embedding provider gateway decodes every HTTP exchange into exactly one
of two shapes before returning:

* :class:`EmbeddingSuccess` -- one vector per input text, in input order.
* :class:`EmbeddingFailure` -- a classified failure with a message.

Callers branch on the variant instead of inspecting raw response JSON.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class FailureKind(str, Enum):
    """Classification of an embedding provider failure."""

    AUTHORIZATION = "authorization"
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    CLIENT_ERROR = "client_error"
    NETWORK = "network"
    MALFORMED = "malformed"

    @property
    def retryable(self) -> bool:
        # Only an auth rejection is permanent.
        return self is not FailureKind.AUTHORIZATION


class EmbeddingSuccess(BaseModel):
    """Vectors returned for a batch, positionally aligned with the inputs."""

    model_config = ConfigDict(frozen=True)

    vectors: list[list[float]]


class EmbeddingFailure(BaseModel):
    """A classified failure of a single gateway call."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    message: str = ""
    status_code: int | None = Field(default=None, description="HTTP status, when one was received.")

    @property
    def retryable(self) -> bool:
        return self.kind.retryable


EmbeddingOutcome = Union[EmbeddingSuccess, EmbeddingFailure]
