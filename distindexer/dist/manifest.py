"""Read a release's SHASUMS256.txt and map shipped files to platform ids."""

from __future__ import annotations

import re
from pathlib import Path

from distindexer.exceptions import MetadataUnavailable

MANIFEST_NAME = "SHASUMS256.txt"

# Version embedded in artifact names, with its optional prerelease suffix
_VERSION = (
    r"v\d+\.\d+\.\d+"
    r"(?:-(?:rc\.\d+|(?:nightly|test|v8-canary)\d{8}[0-9a-f]+))?"
)

_SRC_RE = re.compile(rf"^node-{_VERSION}\.tar\.[gx]z$")
_HEADERS_RE = re.compile(rf"^node-{_VERSION}-headers\.tar\.[gx]z$")
_WIN_ARCHIVE_RE = re.compile(rf"^node-{_VERSION}-win-(\w+)\.(zip|7z)$")
_DARWIN_RE = re.compile(rf"^node-{_VERSION}-darwin-(\w+)\.tar\.[gx]z$")
_POSIX_RE = re.compile(rf"^node-{_VERSION}-(linux|sunos|aix)-(\w+)\.tar\.[gx]z$")
_MSI_RE = re.compile(rf"^(?:x64/)?node-{_VERSION}(?:-(x86|x64|arm64))?\.msi$")
_WIN_EXE_RE = re.compile(r"^(?:win-)?(x86|x64|arm64)/node\.exe$")

# Debug symbols, import libraries and docs are not distributables
_AUXILIARY_RE = re.compile(r"(\.lib|\.pdb|_pdb\.(?:zip|7z)|\.txt|\.asc|\.sig)$|^docs/")


def transform_filename(name: str) -> str | None:
    """Map a shipped artifact name to its platform identifier.

    Returns ``None`` for auxiliary files. Names of unknown shape are
    returned unchanged so they stay visible in the index.
    """
    name = name.strip()
    if name.startswith("./"):
        name = name[2:]
    if not name:
        return None

    if _HEADERS_RE.match(name):
        return "headers"
    if _SRC_RE.match(name):
        return "src"
    if name.endswith(".pkg"):
        return "osx-x64-pkg"

    m = _MSI_RE.match(name)
    if m:
        return f"win-{m.group(1) or 'x86'}-msi"
    m = _WIN_EXE_RE.match(name)
    if m:
        return f"win-{m.group(1)}-exe"
    if name == "node.exe":
        return "win-x86-exe"
    m = _WIN_ARCHIVE_RE.match(name)
    if m:
        return f"win-{m.group(1)}-{m.group(2)}"
    m = _DARWIN_RE.match(name)
    if m:
        return f"osx-{m.group(1)}-tar"
    m = _POSIX_RE.match(name)
    if m:
        return f"{m.group(1)}-{m.group(2)}"

    if _AUXILIARY_RE.search(name):
        return None
    return name


def parse_manifest(contents: str) -> tuple[str, ...]:
    """Second whitespace column of each line, normalized, de-duplicated and sorted."""
    files: set[str] = set()
    for line in contents.splitlines():
        seg = line.split()
        if len(seg) < 2:
            continue
        transformed = transform_filename(seg[1])
        if transformed:
            files.add(transformed)
    return tuple(sorted(files))


def read_files(release_dir: Path) -> tuple[str, ...]:
    """Read the shipped-file list of *release_dir*.

    Raises :class:`MetadataUnavailable` when the manifest cannot be read.
    """
    path = release_dir / MANIFEST_NAME
    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MetadataUnavailable(f"can't read {path}: {exc}") from exc
    return parse_manifest(contents)
