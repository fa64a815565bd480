"""Configuration module -- exports Settings and the source-list loader."""

from newsrag.config.loader import DEFAULT_SOURCES, load_sources
from newsrag.config.settings import Settings

__all__ = ["DEFAULT_SOURCES", "Settings", "load_sources"]
