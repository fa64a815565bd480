"""Operator CLI for the news ingestion pipeline.

Usage::

    python -m newsrag.cli.ingest run
    python -m newsrag.cli.ingest run --sources config/sources.yaml --batch-size 5
    python -m newsrag.cli.ingest search "interest rates" --limit 3
    python -m newsrag.cli.ingest sources

``run`` always finishes with a stored/skipped summary.  The exit code is
1 only when setup fails (bad source config or an unreachable vector store).
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any, Sequence

from pydantic import ValidationError

from newsrag.config.loader import load_sources
from newsrag.config.settings import Settings
from newsrag.utils.errors import ConfigurationError, NewsRagError, VectorStoreError
from newsrag.utils.logging import configure_logging


def _apply_overrides(args: argparse.Namespace, app_settings: Settings) -> Settings:
    """Return *app_settings* with any command-line overrides applied."""
    updates: dict[str, Any] = {}
    if getattr(args, "sources", None):
        updates["sources_config_path"] = args.sources
    if getattr(args, "batch_size", None) is not None:
        updates["embedding_batch_size"] = args.batch_size
    if getattr(args, "max_per_source", None) is not None:
        updates["harvest_max_per_source"] = args.max_per_source
    return app_settings.model_copy(update=updates) if updates else app_settings


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


async def _close(components: dict[str, Any]) -> None:
    await components["vector_store"].close()
    await components["http_client"].aclose()


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


async def _handle_run(app_settings: Settings) -> int:
    """Run one full ingestion."""
    from newsrag.main import build_components

    try:
        components = build_components(app_settings)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Sources: {', '.join(source.name for source in components['sources'])}")
    print()
    try:
        report = await components["orchestrator"].run()
    except VectorStoreError as exc:
        print(f"Error: vector store setup failed: {exc}", file=sys.stderr)
        return 1
    finally:
        await _close(components)

    print(f"Ingestion complete (run {report.run_id}):")
    for name, count in report.documents_per_source.items():
        print(f"  {name:<15} {count} documents")
    print(f"  Candidates:  {report.candidates}")
    print(f"  Stored:      {report.stored}")
    print(f"  Skipped:     {report.skipped}")
    if report.failed:
        print(f"  Failed:      {report.failed}")
    if report.embedding_error:
        print(f"  Embedding aborted: {report.embedding_error}")
    print(f"  Time:        {report.duration_s:.2f}s")
    return 0


async def _handle_search(args: argparse.Namespace, app_settings: Settings) -> int:
    """Run the query-time retrieval path and print ranked hits."""
    from newsrag.main import build_components

    try:
        components = build_components(app_settings, sources=[])
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        result = await components["retrieval"].retrieve(args.query, limit=args.limit)
    except NewsRagError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        await _close(components)

    mode = "semantic" if result.semantic else "unranked (no query embedding)"
    print(f"{len(result.hits)} results, {mode}:")
    for rank, hit in enumerate(result.hits, start=1):
        score = f"{hit.score:.3f}" if hit.score is not None else "-"
        print(f"  {rank}. [{score}] {hit.title} ({hit.source})")
        if hit.url:
            print(f"     {hit.url}")
    return 0


def _handle_sources(app_settings: Settings) -> int:
    """List configured sources."""
    try:
        sources = load_sources(app_settings.sources_config_path)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for source in sources:
        print(f"  {source.name:<15} {source.feed_url}")
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ingestion CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m newsrag.cli.ingest",
        description="Harvest news feeds into the vector store and query it.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # -- run --
    run_parser = subparsers.add_parser("run", help="Run one ingestion over all sources")
    run_parser.add_argument("--sources", help="Path to a sources YAML file")
    run_parser.add_argument("--batch-size", type=_positive_int, dest="batch_size", help="Texts per embedding call")
    run_parser.add_argument(
        "--max-per-source",
        type=_positive_int,
        dest="max_per_source",
        help="Feed entries considered per source",
    )

    # -- search --
    search_parser = subparsers.add_parser("search", help="Retrieve stored articles for a query")
    search_parser.add_argument("query", help="Free-text query")
    search_parser.add_argument("--limit", type=_positive_int, default=5, help="Maximum results (default: 5)")

    # -- sources --
    sources_parser = subparsers.add_parser("sources", help="List configured sources")
    sources_parser.add_argument("--sources", help="Path to a sources YAML file")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point: parse arguments, load Settings, dispatch."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        app_settings = _apply_overrides(args, Settings())
    except ValidationError as exc:
        print(f"Error: invalid settings:\n{exc}", file=sys.stderr)
        sys.exit(1)
    configure_logging(
        log_level=app_settings.log_level,
        json_output=app_settings.app_env == "production",
    )

    if args.command == "sources":
        sys.exit(_handle_sources(app_settings))

    if args.command == "run":
        exit_code = asyncio.run(_handle_run(app_settings))
    elif args.command == "search":
        exit_code = asyncio.run(_handle_search(args, app_settings))
    else:
        parser.print_help()
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
