"""Cache providers.

In-memory TTL cache used to avoid repeated embedding calls for identical
chat queries.  MemoryCacheProvider is not shared across processes; for
multi-worker deployments, swap in a network-backed adapter implementing
ICacheProvider without changing any service code.
"""

from newsrag.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
