"""Decode release directory names into release references."""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version

from distindexer.exceptions import DecodeMismatch
from distindexer.models import Family, ReleaseReference

_RELEASE_RE = re.compile(r"^v\d+\.\d+\.\d+(?:-rc\.\d+)?$")
_NIGHTLY_RE = re.compile(r"^v\d+\.\d+\.\d+-(?:nightly|test)\d{8}([0-9a-f]{7,40})$")
_CANARY_RE = re.compile(r"^v\d+\.\d+\.\d+-v8-canary\d{8}([0-9a-f]{7,40})$")

# Zero-major releases before v0.10 live in the archived repository.
LEGACY_V0_RE = re.compile(r"^v0\.\d\.")

# Directories that are known not to be releases; dropped without a warning.
_IGNORABLE_RE = re.compile(r"^(latest|npm$|patch$|v0\.10\.16-isaacs-manual$)")

_SEMVER_RE = re.compile(r"^v?(\d+\.\d+\.\d+)(?:-([0-9A-Za-z.-]+))?$")


def decode_ref(dirname: str) -> ReleaseReference:
    """Map a directory name to a :class:`ReleaseReference`.

    Raises :class:`DecodeMismatch` when the name does not follow any known
    release naming convention.
    """
    m = _CANARY_RE.match(dirname)
    if m:
        return ReleaseReference(Family.CANARY, m.group(1))

    m = _NIGHTLY_RE.match(dirname)
    if m:
        return ReleaseReference(Family.MAINLINE, m.group(1))

    if _RELEASE_RE.match(dirname):
        family = Family.LEGACY_V0 if LEGACY_V0_RE.match(dirname) else Family.MAINLINE
        return ReleaseReference(family, dirname)

    raise DecodeMismatch(dirname)


def is_ignorable(dirname: str) -> bool:
    """Return True for directory names that are expected not to decode."""
    return bool(_IGNORABLE_RE.match(dirname))


def _prerelease_key(prerelease: str) -> tuple[tuple[int, int | str], ...]:
    # Numeric identifiers sort before alphanumeric ones.
    key: list[tuple[int, int | str]] = []
    for ident in prerelease.split("."):
        if ident.isdigit():
            key.append((0, int(ident)))
        else:
            key.append((1, ident))
    return tuple(key)


def release_precedence(version: str) -> tuple:
    """Sort key ordering release names by semver precedence.

    A prerelease sorts below its release; names that are not versions at
    all sort below everything else.
    """
    m = _SEMVER_RE.match(version)
    if not m:
        return (0, Version("0"), 0, ())
    try:
        core = Version(m.group(1))
    except InvalidVersion:
        return (0, Version("0"), 0, ())
    prerelease = m.group(2)
    if prerelease is None:
        return (1, core, 1, ())
    return (1, core, 0, _prerelease_key(prerelease))
