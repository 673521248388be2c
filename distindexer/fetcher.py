"""Single-shot async retrieval of raw source files by revision."""

from __future__ import annotations

import httpx
import structlog

from distindexer.exceptions import FetchError
from distindexer.models import Family, ReleaseReference
from distindexer.refs import LEGACY_V0_RE

log = structlog.get_logger("distindexer.fetcher")

_ACCEPT = "text/plain,application/vnd.github.v3.raw"


def repository_for(ref: ReleaseReference) -> str:
    """Pick the backing repository for *ref*.

    Canary builds live in the V8 integration repository, early zero-major
    tags in the archived repository, everything else in mainline.
    """
    if ref.family is Family.CANARY:
        return Family.CANARY.value
    if LEGACY_V0_RE.match(ref.revision):
        return Family.LEGACY_V0.value
    return Family.MAINLINE.value


def expand(template: str, ref: ReleaseReference) -> str:
    """Substitute ``{repo}`` and ``{gitref}`` in a URL template."""
    return template.replace("{gitref}", ref.revision).replace("{repo}", repository_for(ref))


class SourceFetcher:
    """Thin async wrapper performing exactly one GET per call.

    Retry and fallback belong to the resolver chains, not to the transport.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = 30.0,
        token: str | None = None,
    ) -> None:
        headers = {"Accept": _ACCEPT}
        if token:
            headers["Authorization"] = f"token {token}"
        self._client = client or httpx.AsyncClient(
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
        )
        self.requests = 0

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> SourceFetcher:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def fetch(self, template: str, ref: ReleaseReference) -> str:
        """Fetch the text behind *template* at *ref*'s revision.

        Raises :class:`FetchError` on any transport error, non-2xx status,
        or empty body.
        """
        url = expand(template, ref)
        self.requests += 1
        try:
            resp = await self._client.get(
                url,
                params={"rev": ref.revision},
                headers={"Accept": _ACCEPT},
            )
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise FetchError(url, exc) from exc

        if not resp.text:
            raise FetchError(url, "empty body")

        log.debug("fetcher.ok", url=url, status=resp.status_code, size=len(resp.text))
        return resp.text
