"""LTS codename, or ``False`` for non-LTS releases."""

from __future__ import annotations

from distindexer.core.config import CONTENT_BASE_URL
from distindexer.resolvers.extractors import FlagCodenameExtractor
from distindexer.resolvers.registry import Candidate, ComponentResolver, register_resolver

LTS_RESOLVER = ComponentResolver(
    component="lts",
    candidates=(
        Candidate(
            f"{CONTENT_BASE_URL}/src/node_version.h",
            FlagCodenameExtractor(
                r"^#define NODE_VERSION_IS_LTS 1$",
                r'^#define NODE_VERSION_LTS_CODENAME "([^"]+)"$',
            ),
        ),
    ),
)

register_resolver(LTS_RESOLVER)
