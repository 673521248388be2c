"""Security release flag, classified from the revision's commit feed."""

from __future__ import annotations

from distindexer.core.config import FEED_URL
from distindexer.resolvers.extractors import SecurityFeedExtractor
from distindexer.resolvers.registry import Candidate, ComponentResolver, register_resolver

SECURITY_RESOLVER = ComponentResolver(
    component="security",
    candidates=(Candidate(FEED_URL, SecurityFeedExtractor()),),
)

register_resolver(SECURITY_RESOLVER)
