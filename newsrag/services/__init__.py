"""Business services: harvesting, embedding, ingestion and retrieval.

Services depend only on the ABCs in ``newsrag.interfaces``; concrete
providers are wired in ``newsrag.main``.
"""
