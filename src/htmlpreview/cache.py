"""In-memory preview cache with lazy, time-based invalidation.

Entries are keyed by the raw query string of the request that produced them,
so two requests differing in any parameter never share an entry. Validity is
decided at read time against the caller's ``cache_time``; stale entries are
ignored and later overwritten, never swept. The store therefore grows for the
lifetime of the process.

There is no locking: all access happens on the event loop thread, between
awaits, so each ``get``/``put`` is atomic.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import structlog

from htmlpreview.models.cache import CacheEntry

if TYPE_CHECKING:
    from collections.abc import Callable

log = structlog.get_logger()


def _utc_now() -> datetime:
    return datetime.now(UTC)


class PreviewCache:
    """Process-scoped cache implementing CacheProtocol."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str, cache_time_seconds: float) -> CacheEntry | None:
        """Return the entry for ``key`` if it is younger than ``cache_time_seconds``."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        age = self._clock() - entry.created_at
        if age < timedelta(seconds=cache_time_seconds):
            return entry

        log.debug("cache_entry_stale", key=key, age_seconds=age.total_seconds())
        return None

    def put(self, key: str, html: str) -> CacheEntry:
        """Store ``html`` under ``key``, replacing any previous entry."""
        entry = CacheEntry(html=html, created_at=self._clock())
        self._entries[key] = entry
        return entry
