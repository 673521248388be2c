"""Persistent (revision, component) -> value cache."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

import structlog

from distindexer.exceptions import CacheLoadError
from distindexer.models import Resolution

log = structlog.get_logger("distindexer.cache")

DEFAULT_CACHE_PATH = Path.home() / ".dist-indexer-version-cache"


class VersionCache:
    """In-memory version cache, loaded once at startup and saved once at the end.

    Values are strings or booleans. ``False`` is a confirmed negative and is
    stored like any other value; ``None`` and empty strings are never stored,
    so those lookups are retried on the next run.
    """

    def __init__(self, data: dict[str, dict[str, str | bool]] | None = None) -> None:
        self._data: dict[str, dict[str, str | bool]] = data if data is not None else {}

    # ── persistence ────────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: Path) -> VersionCache:
        """Load the cache from *path*, starting empty if it is missing or corrupt."""
        try:
            return cls(cls._read(path))
        except CacheLoadError as exc:
            log.warning("cache.load_failed", path=str(path), error=str(exc))
            return cls()

    @staticmethod
    def _read(path: Path) -> dict[str, dict[str, str | bool]]:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CacheLoadError(f"cannot read {path}: {exc}") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CacheLoadError(f"corrupt cache {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise CacheLoadError(f"corrupt cache {path}: top level is not an object")

        cleaned: dict[str, dict[str, str | bool]] = {}
        for revision, entries in data.items():
            if not isinstance(entries, dict):
                continue
            cleaned[revision] = {
                component: value
                for component, value in entries.items()
                if isinstance(value, (str, bool)) and value != ""
            }
        return cleaned

    def save(self, path: Path) -> None:
        """Write the cache to *path* atomically (temp file + rename)."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(self._data, fh)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        log.info("cache.saved", path=str(path), revisions=len(self._data))

    # ── access ─────────────────────────────────────────────────────────────

    def has(self, revision: str, component: str) -> bool:
        return component in self._data.get(revision, {})

    def get(self, revision: str, component: str) -> Resolution:
        return self._data.get(revision, {}).get(component)

    def put(self, revision: str, component: str, value: Resolution) -> None:
        if value is None or value == "":
            return
        self._data.setdefault(revision, {})[component] = value

    def to_dict(self) -> dict[str, dict[str, str | bool]]:
        return {revision: dict(entries) for revision, entries in self._data.items()}

    def __len__(self) -> int:
        return len(self._data)
