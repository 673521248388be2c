"""Data models for the release index."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

# ``None`` means every candidate failed; ``False`` is a confirmed negative.
Resolution = str | bool | None

COMPONENTS = ("npm", "v8", "uv", "zlib", "openssl", "modules", "lts", "security")


class Family(enum.Enum):
    """Repository family a release's source lives in."""

    MAINLINE = "node"
    LEGACY_V0 = "node-v0.x-archive"
    CANARY = "node-v8"


@dataclass(frozen=True)
class ReleaseReference:
    """Decoded (family, revision) identity of one release directory."""

    family: Family
    revision: str  # tag name or commit sha

    @property
    def repository(self) -> str:
        return self.family.value

    def __str__(self) -> str:
        return f"{self.repository}/{self.revision}"


@dataclass(frozen=True)
class AggregateRecord:
    """One row of the index: filesystem facts plus resolved component versions."""

    version: str
    date: str  # YYYY-MM-DD
    files: tuple[str, ...]
    npm: Resolution = None
    v8: Resolution = None
    uv: Resolution = None
    zlib: Resolution = None
    openssl: Resolution = None
    modules: Resolution = None
    lts: Resolution = None
    security: Resolution = None

    def as_dict(self) -> dict[str, Any]:
        """Render the JSON object; unresolved components are left out."""
        data: dict[str, Any] = {
            "version": self.version,
            "date": self.date,
            "files": list(self.files),
        }
        for component in COMPONENTS:
            value = getattr(self, component)
            if value is not None:
                data[component] = value
        return data
