"""Relay-backed content fetcher.

All network I/O goes through a single ContentFetcher sharing one
httpx.AsyncClient; the app lifespan owns the client. Each call issues exactly
one GET through the CORS relay. There are no retries, and no timeout unless
one is configured.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
import structlog

from htmlpreview.errors import FetchError
from htmlpreview.normalizer import normalize_from_string

if TYPE_CHECKING:
    from htmlpreview.config import FetcherSettings

log = structlog.get_logger()

# Characters left alone by JavaScript's encodeURIComponent; relays expect that form.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_http_client(settings: FetcherSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=settings.follow_redirects,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": settings.user_agent},
    )


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_relay_url(url: str, proxy_prefix: str) -> str:
    """Return the relay URL that serves the raw form of ``url``."""
    return proxy_prefix + encode_uri_component(normalize_from_string(url))


class ContentFetcher:
    """Fetches raw file content through a CORS relay."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, url: str, proxy_prefix: str) -> str:
        """Fetch the raw form of ``url`` through ``proxy_prefix``.

        Returns the response text. Raises InvalidUrlError for an unparseable
        ``url`` and FetchError for non-2xx responses or network failures.
        """
        relay_url = build_relay_url(url, proxy_prefix)

        try:
            response = await self._client.get(relay_url)
        except httpx.HTTPError as exc:
            log.warning("fetch_network_error", url=url, relay_url=relay_url, error=str(exc))
            raise FetchError(url, cause=exc) from exc

        if not response.is_success:
            log.warning("fetch_http_error", url=url, status_code=response.status_code)
            raise FetchError(url, status=response.status_code)

        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(response.text),
        )
        return response.text
