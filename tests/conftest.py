"""Shared pytest fixtures for dist-indexer tests — no network access (mocked transport)."""

from __future__ import annotations

import httpx
import pytest

from distindexer.fetcher import SourceFetcher



@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


class FakeRemote:
    """Routes full URLs (query string ignored) to canned responses and records requests."""

    def __init__(self, routes: dict[str, str | int | Exception] | None = None) -> None:
        self.routes: dict[str, str | int | Exception] = dict(routes or {})
        self.requested: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url).split("?", 1)[0]
        self.requested.append(url)
        route = self.routes.get(url, 404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, int):
            return httpx.Response(route, text="Not Found", request=request)
        return httpx.Response(200, text=route, request=request)

    def fetcher(self) -> SourceFetcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return SourceFetcher(client)


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()
