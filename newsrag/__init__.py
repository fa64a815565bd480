"""newsrag: news feed harvesting, resilient batched embedding and vector retrieval."""

__version__ = "0.1.0"
