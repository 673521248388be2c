"""Component resolvers — auto-registered on import."""

from distindexer.resolvers import (
    lts,  # noqa: F401
    modules,  # noqa: F401
    npm,  # noqa: F401
    openssl,  # noqa: F401
    security,  # noqa: F401
    uv,  # noqa: F401
    v8,  # noqa: F401
    zlib,  # noqa: F401
)
from distindexer.resolvers.registry import (
    RESOLVER_REGISTRY,
    Candidate,
    ComponentResolver,
    register_resolver,
)

__all__ = ["RESOLVER_REGISTRY", "Candidate", "ComponentResolver", "register_resolver"]
