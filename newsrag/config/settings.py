"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings reads configuration from TWO sources (priority order):
#
#   1. **Environment variables** -- e.g. JINA_API_KEY=jina_abc123
#   2. **.env file** -- key=value lines in the project root .env file
#
# Field ``jina_api_key`` maps to env var ``JINA_API_KEY``.  Defaults below
# apply when neither source sets a value.
#
# A Settings instance is built once at startup and handed to the factories
# in newsrag/main.py; nothing re-reads the environment after that.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """newsrag settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Embedding provider ===
    # Empty key = "not configured": the query path returns no vector and
    # retrieval falls back to an unranked scroll.
    jina_api_key: str = ""
    jina_api_url: str = "https://api.jina.ai/v1/embeddings"
    jina_model: str = "jina-embeddings-v2-base-en"
    embedding_dimension: int = 768

    # Bulk (ingestion) path
    embedding_batch_size: int = Field(default=3, ge=1)
    embedding_max_attempts: int = Field(default=3, ge=1)
    embedding_timeout: float = 30.0
    embedding_backoff_base: float = 1.0
    embedding_backoff_jitter: float = 0.5
    embedding_inter_batch_delay: float = 1.2

    # Query (chat) path: one short attempt, cached for an hour.
    embedding_chat_timeout: float = 8.0
    embedding_chat_max_attempts: int = Field(default=1, ge=1)
    embedding_cache_ttl: int = 3600
    embedding_cache_max_size: int = 1000

    # === Vector store ===
    qdrant_url: str = "http://localhost:6333"
    qdrant_api_key: str = ""
    qdrant_collection: str = "news_articles"
    qdrant_timeout: float = 10.0

    # === Harvesting ===
    harvest_max_per_source: int = Field(default=15, ge=1)
    harvest_min_content_length: int = 100
    harvest_max_content_length: int = 2000
    harvest_summary_length: int = 300
    harvest_entry_delay: float = 0.7
    harvest_fetch_timeout: float = 10.0
    harvest_user_agent: str = "Mozilla/5.0 (compatible; newsrag/0.1)"
    sources_config_path: str = "config/sources.yaml"

    # Deterministic ids for non-numeric documents (re-ingest overwrites
    # instead of adding a duplicate point).
    content_hash_ids: bool = False

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def has_embedding_credentials(self) -> bool:
        """Return ``True`` if an embedding API key is configured."""
        return bool(self.jina_api_key)
