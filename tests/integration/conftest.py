"""Integration test fixtures.

Provides a fully wired AppState (real cache with a fake clock, real fetcher
on an httpx client that tests mock with respx) and an in-process HTTP client
for the Starlette app.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from htmlpreview.fetcher import ContentFetcher
from htmlpreview.state import AppState
from htmlpreview.transport import create_app

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from htmlpreview.cache import PreviewCache
    from htmlpreview.config import Settings


@pytest.fixture()
async def app_state(settings: Settings, cache: PreviewCache) -> AsyncGenerator[AppState, None]:
    async with httpx.AsyncClient() as client:
        yield AppState(
            settings=settings,
            cache=cache,
            fetcher=ContentFetcher(client),
            http_client=client,
        )


@pytest.fixture()
async def web_client(
    settings: Settings, app_state: AppState
) -> AsyncGenerator[httpx.AsyncClient, None]:
    app = create_app(settings, state=app_state)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client
