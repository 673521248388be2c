"""Classify a release as security-related from its commit Atom feed."""

from __future__ import annotations

import html
import re
import xml.etree.ElementTree as ET

from distindexer.exceptions import ParseMismatch

_NS = "{http://www.w3.org/2005/Atom}"

# Release commits are titled like "2018-06-12, Version 10.4.1 (Current)".
_RELEASE_TITLE_RE = re.compile(r"^\d{4}-\d{2}-\d{2},?\s+Version\s+\d+\.\d+\.\d+")

_SECURITY_RE = re.compile(
    r"(?i)("
    r"\bsecurity\s+(?:release|fix(?:es)?|update|patch)|"
    r"\bCVE-\d{4}-\d+|"
    r"\bvulnerab"
    r")"
)

_TAG_RE = re.compile(r"<[^>]+>")


def _text(element: ET.Element | None) -> str:
    if element is None or not element.text:
        return ""
    # Atom content is escaped HTML; reduce it to plain text
    return html.unescape(_TAG_RE.sub(" ", html.unescape(element.text)))


def _entries(root: ET.Element) -> list[tuple[str, str]]:
    entries: list[tuple[str, str]] = []
    # Try both namespaced and non-namespaced
    for ns in (_NS, ""):
        for entry in root.iter(f"{ns}entry"):
            title = _text(entry.find(f"{ns}title")).strip()
            content = _text(entry.find(f"{ns}content"))
            entries.append((title, content))
        if entries:
            break
    return entries


def is_security_release(feed: str) -> bool:
    """Return True when the release commit in *feed* mentions a security fix.

    The release commit is the first entry with a release-style title; when
    there is none, the newest entry stands in for it.

    Raises :class:`ParseMismatch` when *feed* is not an XML document.
    """
    try:
        root = ET.fromstring(feed)
    except ET.ParseError as exc:
        raise ParseMismatch(f"commit feed is not valid XML: {exc}") from exc

    entries = _entries(root)
    if not entries:
        return False

    release = next(
        (entry for entry in entries if _RELEASE_TITLE_RE.match(entry[0])),
        entries[0],
    )
    title, content = release
    return bool(_SECURITY_RE.search(f"{title}\n{content}"))
