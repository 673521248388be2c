"""npm version, read from the bundled package manifest."""

from __future__ import annotations

import re

from distindexer.core.config import CONTENT_BASE_URL
from distindexer.resolvers.extractors import JsonFieldExtractor
from distindexer.resolvers.registry import Candidate, ComponentResolver, register_resolver

# npm was not bundled before v0.6.3
_NOT_BUNDLED_RE = re.compile(r"^v0\.([0-5]\.\d+|6\.[0-2])$")

NPM_RESOLVER = ComponentResolver(
    component="npm",
    candidates=(
        Candidate(f"{CONTENT_BASE_URL}/deps/npm/package.json", JsonFieldExtractor("version")),
    ),
    short_circuit=_NOT_BUNDLED_RE,
)

register_resolver(NPM_RESOLVER)
