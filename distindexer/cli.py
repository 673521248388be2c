"""CLI entry point: dist-indexer.

Usage:
    dist-indexer --dist /srv/dist --indexjson index.json --indextab index.tab
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
import structlog

from distindexer.core.config import IndexerConfig
from distindexer.core.logging import setup_logging
from distindexer.exceptions import OutputError
from distindexer.runner import run

log = structlog.get_logger("distindexer.cli")


@click.command()
@click.option(
    "--dist",
    "dist_dir",
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory holding one subdirectory per release",
)
@click.option(
    "--indexjson",
    "index_json",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to write the JSON index",
)
@click.option(
    "--indextab",
    "index_tab",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to write the tab-separated index",
)
@click.option(
    "--cache",
    "cache_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Version cache file (default: ~/.dist-indexer-version-cache)",
)
@click.option(
    "--concurrency",
    default=None,
    type=click.IntRange(min=1),
    help="Release directories inspected at once",
)
@click.option("--timeout", default=None, type=float, help="Per-request timeout in seconds")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def main(
    dist_dir: Path,
    index_json: Path,
    index_tab: Path,
    cache_path: Path | None,
    concurrency: int | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Index the releases under --dist into JSON and tab-separated files."""
    setup_logging("DEBUG" if verbose else None)

    config = IndexerConfig.from_env(
        dist_dir,
        index_json,
        index_tab,
        cache_path=cache_path,
        concurrency=concurrency,
        timeout=timeout,
    )
    try:
        summary = asyncio.run(run(config))
    except OutputError as exc:
        log.error("cli.output_failed", error=str(exc))
        sys.exit(1)

    click.echo(
        f"Indexed {summary.records} releases from {summary.directories} directories "
        f"({summary.fetches} fetches, {summary.elapsed}s)",
        err=True,
    )


if __name__ == "__main__":
    main()
