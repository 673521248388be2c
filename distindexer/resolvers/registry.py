"""Resolver chains — ordered (location, extractor) candidates per component."""

from __future__ import annotations

import re
from dataclasses import dataclass

import structlog

from distindexer.cache import VersionCache
from distindexer.exceptions import FetchError, ParseMismatch
from distindexer.fetcher import SourceFetcher, expand
from distindexer.models import ReleaseReference, Resolution
from distindexer.resolvers.extractors import Extractor

log = structlog.get_logger("distindexer.resolver")


@dataclass(frozen=True)
class Candidate:
    """One remote location and the extractor that understands its format."""

    url_template: str
    extractor: Extractor


@dataclass(frozen=True)
class ComponentResolver:
    """Recover one component's value for a release.

    *short_circuit* matches revisions for which the component is known not
    to exist; those resolve to *short_circuit_value* without any fetch.
    """

    component: str
    candidates: tuple[Candidate, ...]
    short_circuit: re.Pattern[str] | None = None
    short_circuit_value: Resolution = None

    async def resolve(
        self,
        ref: ReleaseReference,
        fetcher: SourceFetcher,
        cache: VersionCache,
    ) -> Resolution:
        """Return the cached value, the short-circuit value, or the first candidate hit.

        Returns ``None`` (and caches nothing) when every candidate fails.
        """
        if cache.has(ref.revision, self.component):
            return cache.get(ref.revision, self.component)

        if self.short_circuit is not None and self.short_circuit.search(ref.revision):
            cache.put(ref.revision, self.component, self.short_circuit_value)
            return self.short_circuit_value

        for candidate in self.candidates:
            url = expand(candidate.url_template, ref)
            try:
                content = await fetcher.fetch(candidate.url_template, ref)
            except FetchError as exc:
                log.warning(
                    "resolver.candidate_failed",
                    component=self.component,
                    revision=ref.revision,
                    url=url,
                    error=str(exc.cause),
                )
                continue

            try:
                value = candidate.extractor.extract(content)
            except ParseMismatch as exc:
                log.warning(
                    "resolver.parse_failed",
                    component=self.component,
                    revision=ref.revision,
                    url=url,
                    error=str(exc),
                )
                continue

            if value is None or value == "":
                log.info(
                    "resolver.no_match",
                    component=self.component,
                    revision=ref.revision,
                    url=url,
                    extractor=repr(candidate.extractor),
                )
                continue

            cache.put(ref.revision, self.component, value)
            return value

        log.warning(
            "resolver.unresolved",
            component=self.component,
            revision=ref.revision,
            candidates=len(self.candidates),
        )
        return None


RESOLVER_REGISTRY: dict[str, ComponentResolver] = {}


def register_resolver(resolver: ComponentResolver) -> None:
    """Register a resolver instance by its component name."""
    RESOLVER_REGISTRY[resolver.component] = resolver
