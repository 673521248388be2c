"""OpenSSL version.

Trees before the 1.1 config rework carry the header in the openssl source
tree; later ones only in the generated per-arch config. The oldest bundled
copies only state it in the Makefile.
"""

from __future__ import annotations

import re

from distindexer.core.config import CONTENT_BASE_URL
from distindexer.resolvers.extractors import KeyValueExtractor, PatternExtractor
from distindexer.resolvers.registry import Candidate, ComponentResolver, register_resolver

_NO_OPENSSL_RE = re.compile(r"^v0\.([0-4]\.\d+|5\.[0-4])$")
_version_text = PatternExtractor(
    r'^#\s*define OPENSSL_VERSION_TEXT\s+"OpenSSL ([^\s"]+)', strip_suffix="-fips"
)

OPENSSL_RESOLVER = ComponentResolver(
    component="openssl",
    candidates=(
        Candidate(
            f"{CONTENT_BASE_URL}/deps/openssl/openssl/include/openssl/opensslv.h",
            _version_text,
        ),
        Candidate(
            f"{CONTENT_BASE_URL}/deps/openssl/config/archs/linux-x86_64/asm/include/openssl/opensslv.h",
            _version_text,
        ),
        Candidate(
            f"{CONTENT_BASE_URL}/deps/openssl/openssl/Makefile",
            KeyValueExtractor("VERSION"),
        ),
    ),
    short_circuit=_NO_OPENSSL_RE,
)

register_resolver(OPENSSL_RESOLVER)
