"""V8 version, from version.cc (old trees) or v8-version.h (V8_ prefixed macros)."""

from __future__ import annotations

from distindexer.core.config import CONTENT_BASE_URL
from distindexer.resolvers.extractors import MacroDefineExtractor
from distindexer.resolvers.registry import Candidate, ComponentResolver, register_resolver

_V8_MACROS = ["MAJOR_VERSION", "MINOR_VERSION", "BUILD_NUMBER", "PATCH_LEVEL"]
_extractor = MacroDefineExtractor(_V8_MACROS, prefixes=("", "V8_"))

V8_RESOLVER = ComponentResolver(
    component="v8",
    candidates=(
        Candidate(f"{CONTENT_BASE_URL}/deps/v8/src/version.cc", _extractor),
        Candidate(f"{CONTENT_BASE_URL}/deps/v8/include/v8-version.h", _extractor),
    ),
)

register_resolver(V8_RESOLVER)
