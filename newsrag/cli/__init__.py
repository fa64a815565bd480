"""Command-line tools for newsrag.

- ``python -m newsrag.cli.ingest run`` -- harvest all sources into the vector store
- ``python -m newsrag.cli.ingest search QUERY`` -- query the stored articles
- ``python -m newsrag.cli.ingest sources`` -- list configured feeds
"""
