"""Format extractors — pure text-to-value functions, one per file format.

Every extractor returns ``None`` when nothing usable was found so the
resolver chain moves on to its next candidate. An empty string is treated
the same as no match.
"""

from __future__ import annotations

import json
import re
from typing import Protocol, runtime_checkable

from distindexer.models import Resolution
from distindexer.security_feed import is_security_release


@runtime_checkable
class Extractor(Protocol):
    """Interface that every format extractor must satisfy."""

    def extract(self, content: str) -> Resolution: ...


class MacroDefineExtractor:
    """Join the numeric values of ``#define NAME <n>`` lines with ``.``.

    Values are joined in the order the lines appear. Each prefix spelling
    (e.g. ``""`` and ``"V8_"``) is tried in turn; the first spelling with
    any match wins.
    """

    def __init__(self, names: list[str], prefixes: tuple[str, ...] = ("",)) -> None:
        self.names = names
        self.prefixes = prefixes
        alternation = "|".join(re.escape(name) for name in names)
        self._patterns = [
            re.compile(rf"^#define {re.escape(prefix)}(?:{alternation})\s+(\d+)$")
            for prefix in prefixes
        ]

    def extract(self, content: str) -> Resolution:
        lines = content.splitlines()
        for pattern in self._patterns:
            parts = [m.group(1) for m in map(pattern.match, lines) if m]
            if parts:
                return ".".join(parts)
        return None

    def __repr__(self) -> str:
        return f"MacroDefineExtractor({self.names!r}, prefixes={self.prefixes!r})"


class PatternExtractor:
    """Capture group 1 of a single-line pattern such as ``#define LABEL "text"``.

    A known suffix (e.g. a build tag) is stripped from the captured text.
    """

    def __init__(self, pattern: str, strip_suffix: str | None = None) -> None:
        self._pattern = re.compile(pattern, re.MULTILINE)
        self.strip_suffix = strip_suffix

    def extract(self, content: str) -> Resolution:
        m = self._pattern.search(content)
        if not m:
            return None
        value = m.group(1)
        if self.strip_suffix and value.endswith(self.strip_suffix):
            value = value[: -len(self.strip_suffix)]
        return value or None

    def __repr__(self) -> str:
        return f"PatternExtractor({self._pattern.pattern!r})"


class KeyValueExtractor:
    """``KEY=value`` line inside a makefile."""

    def __init__(self, key: str) -> None:
        self.key = key
        self._pattern = re.compile(rf"^{re.escape(key)}=(.+)$", re.MULTILINE)

    def extract(self, content: str) -> Resolution:
        m = self._pattern.search(content)
        if not m:
            return None
        return m.group(1).strip() or None

    def __repr__(self) -> str:
        return f"KeyValueExtractor({self.key!r})"


class JsonFieldExtractor:
    """Top-level string field of a JSON document."""

    def __init__(self, field: str) -> None:
        self.field = field

    def extract(self, content: str) -> Resolution:
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, dict):
            return None
        value = data.get(self.field)
        if not isinstance(value, str) or not value:
            return None
        return value

    def __repr__(self) -> str:
        return f"JsonFieldExtractor({self.field!r})"


class FlagCodenameExtractor:
    """Two-step flag: marker line absent -> ``False``; present -> quoted codename."""

    def __init__(self, marker: str, codename_pattern: str) -> None:
        self._marker = re.compile(marker, re.MULTILINE)
        self._codename = PatternExtractor(codename_pattern)

    def extract(self, content: str) -> Resolution:
        if not self._marker.search(content):
            return False
        return self._codename.extract(content)

    def __repr__(self) -> str:
        return f"FlagCodenameExtractor({self._marker.pattern!r})"


class SecurityFeedExtractor:
    """Commit-activity feed -> security release flag."""

    def extract(self, content: str) -> Resolution:
        return is_security_release(content)

    def __repr__(self) -> str:
        return "SecurityFeedExtractor()"
