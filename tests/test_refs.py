"""Tests for release reference decoding and precedence ordering."""

from __future__ import annotations

import pytest

from distindexer.exceptions import DecodeMismatch
from distindexer.models import Family, ReleaseReference
from distindexer.refs import decode_ref, is_ignorable, release_precedence

# ── decode_ref ────────────────────────────────────────────────────────────


class TestDecodeRef:
    def test_contemporary_release(self):
        assert decode_ref("v10.0.0") == ReleaseReference(Family.MAINLINE, "v10.0.0")

    def test_release_candidate(self):
        assert decode_ref("v12.0.0-rc.3") == ReleaseReference(Family.MAINLINE, "v12.0.0-rc.3")

    def test_legacy_zero_major_low_minor(self):
        ref = decode_ref("v0.8.28")
        assert ref == ReleaseReference(Family.LEGACY_V0, "v0.8.28")
        assert ref.repository == "node-v0.x-archive"

    def test_zero_major_two_digit_minor_is_mainline(self):
        ref = decode_ref("v0.10.48")
        assert ref.family is Family.MAINLINE
        assert ref.repository == "node"

    def test_nightly_uses_commit_sha(self):
        ref = decode_ref("v11.0.0-nightly20180520a1b2c3d4e5")
        assert ref == ReleaseReference(Family.MAINLINE, "a1b2c3d4e5")

    def test_canary_uses_commit_sha_and_v8_repo(self):
        ref = decode_ref("v11.0.0-v8-canary20180605f00dfacecafe")
        assert ref == ReleaseReference(Family.CANARY, "f00dfacecafe")
        assert ref.repository == "node-v8"

    @pytest.mark.parametrize(
        "name",
        ["latest", "latest-v10.x", "npm", "index.json", "v10", "v10.0", "docs", "v1.0.0-beta"],
    )
    def test_not_a_release(self, name):
        with pytest.raises(DecodeMismatch) as exc_info:
            decode_ref(name)
        assert exc_info.value.dirname == name

    def test_str_is_repo_and_revision(self):
        assert str(ReleaseReference(Family.MAINLINE, "v10.0.0")) == "node/v10.0.0"


class TestIgnorable:
    @pytest.mark.parametrize(
        "name", ["latest", "latest-dubnium", "npm", "patch", "v0.10.16-isaacs-manual"]
    )
    def test_allowlisted(self, name):
        assert is_ignorable(name)

    @pytest.mark.parametrize("name", ["npm-old", "patches", "v99-weird", "docs"])
    def test_not_allowlisted(self, name):
        assert not is_ignorable(name)


# ── release_precedence ────────────────────────────────────────────────────


class TestReleasePrecedence:
    def test_sorts_newest_first(self):
        versions = ["10.2.0", "9.9.9", "10.1.5"]
        ordered = sorted(versions, key=release_precedence, reverse=True)
        assert ordered == ["10.2.0", "10.1.5", "9.9.9"]

    def test_leading_v_accepted(self):
        ordered = sorted(["v9.9.9", "v10.0.0", "v0.12.18"], key=release_precedence, reverse=True)
        assert ordered == ["v10.0.0", "v9.9.9", "v0.12.18"]

    def test_prerelease_below_release(self):
        assert release_precedence("v12.0.0-rc.1") < release_precedence("v12.0.0")

    def test_numeric_prerelease_identifiers(self):
        assert release_precedence("v12.0.0-rc.9") < release_precedence("v12.0.0-rc.10")

    def test_non_version_sorts_last(self):
        assert release_precedence("garbage") < release_precedence("v0.0.1")
