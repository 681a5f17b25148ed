"""Shared test fixtures for the htmlpreview test suite."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from htmlpreview.cache import PreviewCache
from htmlpreview.config import Settings


class FakeClock:
    """Deterministic clock for cache tests; advance it instead of sleeping."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> PreviewCache:
    return PreviewCache(clock=clock)


@pytest.fixture()
def settings() -> Settings:
    return Settings()
