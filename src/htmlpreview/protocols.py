"""Protocol interfaces for swappable components.

The orchestrator and AppState reference these protocols, not the concrete
implementations, so tests can plug in lightweight fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from htmlpreview.models.cache import CacheEntry


class CacheProtocol(Protocol):
    """Interface for the preview cache backend."""

    def __len__(self) -> int: ...

    def get(self, key: str, cache_time_seconds: float) -> CacheEntry | None: ...

    def put(self, key: str, html: str) -> CacheEntry: ...


class FetcherProtocol(Protocol):
    """Interface for the relay-backed content fetcher."""

    async def fetch(self, url: str, proxy_prefix: str) -> str: ...
