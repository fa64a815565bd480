"""Vector-store point ids for harvested documents.

Qdrant accepts only unsigned integers or UUIDs as point ids, while the
harvester produces natural ids like ``"techcrunch_1712345678901_3"``.

* a purely numeric natural id is used as an integer
* otherwise a random UUID is generated, or, with ``content_hash=True``,
  a UUIDv5 derived from the content so re-ingesting the same article
  overwrites its earlier point
"""

from __future__ import annotations

import hashlib
import re
import uuid

_NUMERIC_RE = re.compile(r"[0-9]+")
_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "newsrag/documents")


def to_point_id(natural_id: str, content: str | None = None, content_hash: bool = False) -> int | str:
    """Map *natural_id* to a valid point id."""
    if _NUMERIC_RE.fullmatch(natural_id):
        return int(natural_id)
    if content_hash and content:
        digest = hashlib.sha256(content.encode("utf-8")).hexdigest()
        return str(uuid.uuid5(_NAMESPACE, digest))
    return str(uuid.uuid4())
