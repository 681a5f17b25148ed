"""Starlette HTTP application: the page-facing side of the preview service.

Routes:
  GET /               form, preview or inline error, depending on the query
  GET /api/normalize  JSON view of the forge URL rewrite
  GET /api/health     liveness and cache size
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from starlette.applications import Starlette
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route

from htmlpreview import __version__
from htmlpreview.cache import PreviewCache
from htmlpreview.errors import MissingUrlError, PreviewError
from htmlpreview.fetcher import ContentFetcher, build_http_client
from htmlpreview.forges import identify
from htmlpreview.models.preview import ErrorState, FormState
from htmlpreview.normalizer import normalize_from_string, split_url
from htmlpreview.orchestrator import evaluate
from htmlpreview.rendering import render_error, render_form, render_preview
from htmlpreview.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request

    from htmlpreview.config import Settings

log = structlog.get_logger()


def _service_base(request: Request) -> str:
    return str(request.base_url).rstrip("/") + "/?url="


async def preview_page(request: Request) -> HTMLResponse:
    state: AppState = request.app.state.preview
    query = request.url.query
    outcome = await evaluate(query, state)

    if isinstance(outcome, FormState):
        if outcome.error is not None:
            log.warning("preview_error", code=outcome.error.code, message=outcome.error.message)
        return HTMLResponse(
            render_form(service_base=_service_base(request), error=outcome.error),
            status_code=outcome.error.http_status if outcome.error is not None else 200,
        )

    if isinstance(outcome, ErrorState):
        log.warning("preview_error", code=outcome.error.code, message=outcome.error.message)
        return HTMLResponse(render_error(outcome.error), status_code=outcome.error.http_status)

    log.info(
        "preview_rendered",
        url=outcome.artifact.source_url,
        from_cache=outcome.artifact.from_cache,
    )
    return HTMLResponse(render_preview(outcome.artifact))


async def normalize_endpoint(request: Request) -> JSONResponse:
    url = request.query_params.get("url")
    try:
        if not url:
            raise MissingUrlError()
        forge = identify(split_url(url).hostname)
        raw_url = normalize_from_string(url)
    except PreviewError as exc:
        log.warning("normalize_error", code=exc.code, message=exc.message)
        return JSONResponse(exc.to_dict(), status_code=exc.http_status)

    return JSONResponse(
        {
            "url": url,
            "raw_url": raw_url,
            "software": forge.software,
            "host": forge.host,
        }
    )


async def health(request: Request) -> JSONResponse:
    state: AppState = request.app.state.preview
    return JSONResponse(
        {"status": "ok", "version": __version__, "cache_entries": len(state.cache)}
    )


def create_app(settings: Settings, state: AppState | None = None) -> Starlette:
    """Build the ASGI app.

    Without ``state`` the lifespan creates the shared httpx client, cache and
    fetcher, and closes the client on shutdown. Tests pass a ready ``state``.
    """

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
        if state is not None:
            app.state.preview = state
            yield
            return

        http_client = build_http_client(settings.fetcher)
        app.state.preview = AppState(
            settings=settings,
            cache=PreviewCache(),
            fetcher=ContentFetcher(http_client),
            http_client=http_client,
        )
        log.info("server_started", version=__version__, cors_proxy=settings.preview.cors_proxy)
        try:
            yield
        finally:
            await http_client.aclose()
            log.info("server_stopping")

    app = Starlette(
        routes=[
            Route("/", preview_page),
            Route("/api/normalize", normalize_endpoint),
            Route("/api/health", health),
        ],
        lifespan=lifespan,
    )
    if state is not None:
        # ASGITransport does not run lifespans; make the state visible anyway.
        app.state.preview = state
    return app
