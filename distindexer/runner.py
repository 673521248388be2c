"""Run driver — index every release directory, persist the cache, write outputs."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path

import structlog

from distindexer.cache import VersionCache
from distindexer.core.config import IndexerConfig
from distindexer.fetcher import SourceFetcher
from distindexer.models import AggregateRecord
from distindexer.orchestrator import inspect_dir
from distindexer.output import write_json, write_tab
from distindexer.refs import release_precedence

log = structlog.get_logger("distindexer.runner")


@dataclass
class RunSummary:
    """Summary of a single indexing run."""

    directories: int
    records: int
    fetches: int
    elapsed: float


def list_release_dirs(dist_dir: Path) -> list[str]:
    """Directory entry names, reverse lexical so recent releases warm the cache first."""
    return sorted((entry.name for entry in dist_dir.iterdir()), reverse=True)


async def build_index(
    dist_dir: Path,
    fetcher: SourceFetcher,
    cache: VersionCache,
    *,
    concurrency: int = 4,
) -> list[AggregateRecord]:
    """Inspect every directory under *dist_dir* with bounded concurrency.

    Returns the records sorted newest first by release precedence.
    """
    names = list_release_dirs(dist_dir)
    sem = asyncio.Semaphore(concurrency)

    async def _inspect_one(name: str) -> AggregateRecord | None:
        async with sem:
            return await inspect_dir(dist_dir, name, fetcher, cache)

    results = await asyncio.gather(
        *(_inspect_one(name) for name in names),
        return_exceptions=True,
    )

    records: list[AggregateRecord] = []
    for name, result in zip(names, results, strict=True):
        if isinstance(result, BaseException):
            log.error(
                "runner.inspect_failed",
                directory=name,
                error=f"{type(result).__name__}: {result}",
            )
            continue
        if result is not None:
            records.append(result)
    records.sort(key=lambda r: release_precedence(r.version), reverse=True)
    return records


async def run(config: IndexerConfig, fetcher: SourceFetcher | None = None) -> RunSummary:
    """Full pipeline: load cache -> build index -> save cache -> write both outputs."""
    started = time.monotonic()
    cache = VersionCache.load(config.cache_path)

    owns_fetcher = fetcher is None
    if fetcher is None:
        fetcher = SourceFetcher(timeout=config.timeout, token=config.github_token)
    try:
        records = await build_index(
            config.dist_dir, fetcher, cache, concurrency=config.concurrency
        )
    finally:
        if owns_fetcher:
            await fetcher.close()

    # Single persist point, after every directory has settled
    try:
        cache.save(config.cache_path)
    except OSError as exc:
        log.error("cache.save_failed", path=str(config.cache_path), error=str(exc))

    write_json(records, config.index_json)
    write_tab(records, config.index_tab)

    summary = RunSummary(
        directories=len(list_release_dirs(config.dist_dir)),
        records=len(records),
        fetches=fetcher.requests,
        elapsed=round(time.monotonic() - started, 2),
    )
    log.info(
        "run.complete",
        directories=summary.directories,
        records=summary.records,
        fetches=summary.fetches,
        elapsed=summary.elapsed,
    )
    return summary
