"""Preview evaluation.

Turns one request's query string into a PreviewOutcome: the form, a preview,
or an error. Every expected failure is returned as an ErrorState rather than
raised, so the HTTP layer only has to render what it gets back. Unexpected
exceptions still propagate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from htmlpreview.errors import MissingUrlError, PreviewError
from htmlpreview.models.preview import ErrorState, FormState, PreviewArtifact, PreviewState
from htmlpreview.normalizer import normalize_from_string
from htmlpreview.parameters import parse_parameters
from htmlpreview.transformer import transform_html

if TYPE_CHECKING:
    from htmlpreview.models.params import RequestParameters
    from htmlpreview.models.preview import PreviewOutcome
    from htmlpreview.state import AppState


def _artifact(
    html: str,
    params: RequestParameters,
    source_url: str,
    raw_url: str,
    *,
    from_cache: bool,
) -> PreviewArtifact:
    return PreviewArtifact(
        html=html,
        source_url=source_url,
        raw_url=raw_url,
        width=params.width,
        height=params.height,
        scale=params.scale,
        sandbox=params.sandbox,
        from_cache=from_cache,
    )


async def evaluate(query: str, state: AppState) -> PreviewOutcome:
    """Evaluate one preview request.

    ``query`` is the raw query string (without the leading ``?``); it is also
    the cache key, so any parameter difference means a separate entry.
    """
    log = structlog.get_logger().bind(query=query)

    if not query:
        return FormState()

    try:
        params = parse_parameters(query, cors_proxy=state.settings.preview.cors_proxy)
    except MissingUrlError as exc:
        log.info("missing_url")
        return FormState(error=exc)
    except PreviewError as exc:
        log.info("invalid_parameters", code=exc.code)
        return ErrorState(error=exc)

    source_url = params.url
    if source_url is None:
        raise RuntimeError("parse_parameters returned no url despite require_url")

    try:
        raw_url = normalize_from_string(source_url)

        if params.cache:
            cached = state.cache.get(query, params.cache_time)
            if cached is not None:
                log.info("cache_hit", created_at=cached.created_at.isoformat())
                return PreviewState(
                    artifact=_artifact(cached.html, params, source_url, raw_url, from_cache=True)
                )

        log.info("cache_miss_fetching", url=source_url, raw_url=raw_url)
        content = await state.fetcher.fetch(source_url, params.cors_proxy)
    except PreviewError as exc:
        return ErrorState(error=exc)

    html = transform_html(content, params)
    if params.cache:
        state.cache.put(query, html)

    return PreviewState(artifact=_artifact(html, params, source_url, raw_url, from_cache=False))
