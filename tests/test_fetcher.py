"""Tests for the remote source fetcher (mocked transport)."""

from __future__ import annotations

import httpx
import pytest

from distindexer.exceptions import FetchError
from distindexer.fetcher import SourceFetcher, expand, repository_for
from distindexer.models import Family, ReleaseReference

TEMPLATE = "https://raw.githubusercontent.com/nodejs/{repo}/{gitref}/src/node_version.h"


class TestRepositorySelection:
    def test_mainline(self):
        assert repository_for(ReleaseReference(Family.MAINLINE, "v10.0.0")) == "node"

    def test_legacy_by_revision(self):
        assert repository_for(ReleaseReference(Family.LEGACY_V0, "v0.6.21")) == "node-v0.x-archive"

    def test_zero_ten_is_mainline(self):
        assert repository_for(ReleaseReference(Family.MAINLINE, "v0.10.0")) == "node"

    def test_canary(self):
        assert repository_for(ReleaseReference(Family.CANARY, "abcdef1234")) == "node-v8"

    def test_expand(self):
        url = expand(TEMPLATE, ReleaseReference(Family.LEGACY_V0, "v0.4.12"))
        assert url == (
            "https://raw.githubusercontent.com/nodejs/node-v0.x-archive/v0.4.12/src/node_version.h"
        )


class TestSourceFetcher:
    @pytest.mark.anyio
    async def test_fetch_ok_sends_rev_and_accept(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="#define NODE_MODULE_VERSION 64 /* x */\n")

        ref = ReleaseReference(Family.MAINLINE, "v10.0.0")
        async with SourceFetcher(httpx.AsyncClient(transport=httpx.MockTransport(handler))) as f:
            text = await f.fetch(TEMPLATE, ref)

        assert "NODE_MODULE_VERSION" in text
        assert len(seen) == 1
        assert seen[0].url.params["rev"] == "v10.0.0"
        assert seen[0].url.path == "/nodejs/node/v10.0.0/src/node_version.h"
        assert "application/vnd.github.v3.raw" in seen[0].headers["Accept"]
        assert f.requests == 1

    @pytest.mark.anyio
    async def test_non_success_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="404: Not Found")

        fetcher = SourceFetcher(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        with pytest.raises(FetchError) as excinfo:
            await fetcher.fetch(TEMPLATE, ReleaseReference(Family.MAINLINE, "v10.0.0"))
        assert isinstance(excinfo.value.cause, httpx.HTTPStatusError)
        assert excinfo.value.url.endswith("/v10.0.0/src/node_version.h")
        await fetcher.close()

    @pytest.mark.anyio
    async def test_empty_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="")

        fetcher = SourceFetcher(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        with pytest.raises(FetchError, match="empty body"):
            await fetcher.fetch(TEMPLATE, ReleaseReference(Family.MAINLINE, "v10.0.0"))
        await fetcher.close()

    @pytest.mark.anyio
    async def test_transport_error_not_retried(self):
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = SourceFetcher(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        with pytest.raises(FetchError) as excinfo:
            await fetcher.fetch(TEMPLATE, ReleaseReference(Family.MAINLINE, "v10.0.0"))
        assert isinstance(excinfo.value.cause, httpx.ConnectError)
        assert calls == 1
        await fetcher.close()

    @pytest.mark.anyio
    async def test_timeout_surfaces_as_fetch_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        fetcher = SourceFetcher(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        with pytest.raises(FetchError):
            await fetcher.fetch(TEMPLATE, ReleaseReference(Family.CANARY, "abcdef1234"))
        await fetcher.close()
