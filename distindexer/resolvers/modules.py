"""Native module ABI version (NODE_MODULE_VERSION)."""

from __future__ import annotations

import re

from distindexer.core.config import CONTENT_BASE_URL
from distindexer.resolvers.extractors import PatternExtractor
from distindexer.resolvers.registry import Candidate, ComponentResolver, register_resolver

_NO_MODULE_VERSION_RE = re.compile(r"^v0\.1\.\d+$")

MODULES_RESOLVER = ComponentResolver(
    component="modules",
    candidates=(
        # Newer headers may alias it to NODE_EMBEDDER_MODULE_VERSION; skip that line
        Candidate(
            f"{CONTENT_BASE_URL}/src/node_version.h",
            PatternExtractor(
                r"^#define NODE_MODULE_VERSION\s+((?!NODE_EMBEDDER_MODULE_VERSION)[^\s]+)\s+.+$"
            ),
        ),
        Candidate(
            f"{CONTENT_BASE_URL}/src/node.h",
            PatternExtractor(r"^#define NODE_MODULE_VERSION\s+\(?([^\s)]+)\)?\s+.+$"),
        ),
    ),
    short_circuit=_NO_MODULE_VERSION_RE,
)

register_resolver(MODULES_RESOLVER)
