"""Run configuration — environment defaults overridden by CLI options."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import structlog

from distindexer.cache import DEFAULT_CACHE_PATH

CONTENT_BASE_URL = "https://raw.githubusercontent.com/nodejs/{repo}/{gitref}"
FEED_URL = "https://github.com/nodejs/{repo}/commits/{gitref}.atom"

_DEFAULT_CONCURRENCY = 4
_DEFAULT_TIMEOUT = 30.0


log = structlog.get_logger("distindexer.config")


def _env_number(key: str, default, cast: Callable):
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        log.warning("config.invalid_env", key=key, value=raw, default=default)
        return default


def _env_int(key: str, default: int) -> int:
    return _env_number(key, default, int)


def _env_float(key: str, default: float) -> float:
    return _env_number(key, default, float)


@dataclass
class IndexerConfig:
    """Everything a single indexing run needs."""

    dist_dir: Path
    index_json: Path
    index_tab: Path
    cache_path: Path = DEFAULT_CACHE_PATH
    concurrency: int = _DEFAULT_CONCURRENCY
    timeout: float = _DEFAULT_TIMEOUT
    github_token: str | None = None

    @classmethod
    def from_env(
        cls, dist_dir: Path, index_json: Path, index_tab: Path, **overrides
    ) -> IndexerConfig:
        """Build a config from ``DIST_INDEXER_*`` environment variables.

        Keyword *overrides* that are not ``None`` take precedence.
        """
        values = {
            "cache_path": Path(os.environ.get("DIST_INDEXER_CACHE", str(DEFAULT_CACHE_PATH))),
            "concurrency": _env_int("DIST_INDEXER_CONCURRENCY", _DEFAULT_CONCURRENCY),
            "timeout": _env_float("DIST_INDEXER_TIMEOUT", _DEFAULT_TIMEOUT),
            "github_token": os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        if values["concurrency"] < 1:
            raise ValueError(f"concurrency must be >= 1, got {values['concurrency']}")
        return cls(dist_dir=dist_dir, index_json=index_json, index_tab=index_tab, **values)
