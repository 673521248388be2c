"""Per-release orchestration — decode, gather metadata, resolve, aggregate."""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from distindexer.cache import VersionCache
from distindexer.dist import read_files, release_date
from distindexer.exceptions import DecodeMismatch, MetadataUnavailable
from distindexer.fetcher import SourceFetcher
from distindexer.models import COMPONENTS, AggregateRecord, Resolution
from distindexer.refs import decode_ref, is_ignorable
from distindexer.resolvers import RESOLVER_REGISTRY, ComponentResolver

log = structlog.get_logger("distindexer.orchestrator")


async def inspect_dir(
    dist_dir: Path,
    name: str,
    fetcher: SourceFetcher,
    cache: VersionCache,
    resolvers: list[ComponentResolver] | None = None,
) -> AggregateRecord | None:
    """Build the :class:`AggregateRecord` for one release directory.

    Returns ``None`` when the directory is not a release or its metadata
    can't be read; the reason has already been logged. A failing resolver
    never drops the directory, its component is left unresolved.
    """
    resolvers = list(RESOLVER_REGISTRY.values()) if resolvers is None else resolvers
    release_dir = dist_dir / name

    with structlog.contextvars.bound_contextvars(directory=name):
        try:
            ref = decode_ref(name)
        except DecodeMismatch as exc:
            if release_dir.is_dir() and not is_ignorable(name):
                log.warning("orchestrator.undecodable", reason=str(exc))
            return None

        try:
            files = read_files(release_dir)
            date = release_date(release_dir)
        except MetadataUnavailable as exc:
            log.warning("orchestrator.dropped", revision=ref.revision, reason=str(exc))
            return None

        results = await asyncio.gather(
            *(resolver.resolve(ref, fetcher, cache) for resolver in resolvers),
            return_exceptions=True,
        )

        components: dict[str, Resolution] = {}
        for resolver, result in zip(resolvers, results, strict=True):
            if isinstance(result, BaseException):
                log.error(
                    "orchestrator.resolver_failed",
                    component=resolver.component,
                    revision=ref.revision,
                    error=f"{type(result).__name__}: {result}",
                )
                result = None
            components[resolver.component] = result

        log.debug(
            "orchestrator.done",
            revision=ref.revision,
            files=len(files),
            resolved=sum(v is not None for v in components.values()),
        )
        return AggregateRecord(
            version=name,
            date=date.isoformat(),
            files=files,
            **{component: components.get(component) for component in COMPONENTS},
        )
