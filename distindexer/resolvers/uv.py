"""libuv version. The header moved three times over the project's history."""

from __future__ import annotations

import re

from distindexer.core.config import CONTENT_BASE_URL
from distindexer.resolvers.extractors import MacroDefineExtractor
from distindexer.resolvers.registry import Candidate, ComponentResolver, register_resolver

_NO_LIBUV_RE = re.compile(r"^v0\.([0-4]\.\d+|5\.0)$")
_extractor = MacroDefineExtractor(["UV_VERSION_MAJOR", "UV_VERSION_MINOR", "UV_VERSION_PATCH"])

UV_RESOLVER = ComponentResolver(
    component="uv",
    candidates=(
        Candidate(f"{CONTENT_BASE_URL}/deps/uv/include/uv-version.h", _extractor),
        Candidate(f"{CONTENT_BASE_URL}/deps/uv/src/version.c", _extractor),
        Candidate(f"{CONTENT_BASE_URL}/deps/uv/include/uv.h", _extractor),
        Candidate(f"{CONTENT_BASE_URL}/deps/uv/include/uv/version.h", _extractor),
    ),
    short_circuit=_NO_LIBUV_RE,
)

register_resolver(UV_RESOLVER)
