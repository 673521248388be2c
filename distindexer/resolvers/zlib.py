"""zlib version."""

from __future__ import annotations

import re

from distindexer.core.config import CONTENT_BASE_URL
from distindexer.resolvers.extractors import PatternExtractor
from distindexer.resolvers.registry import Candidate, ComponentResolver, register_resolver

_NO_ZLIB_RE = re.compile(r"^v0\.([0-4]\.\d+|5\.[0-7])$")

ZLIB_RESOLVER = ComponentResolver(
    component="zlib",
    candidates=(
        Candidate(
            f"{CONTENT_BASE_URL}/deps/zlib/zlib.h",
            PatternExtractor(r'^#define ZLIB_VERSION\s+"(.+)"$'),
        ),
    ),
    short_circuit=_NO_ZLIB_RE,
)

register_resolver(ZLIB_RESOLVER)
