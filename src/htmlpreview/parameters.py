"""Request parameter parsing.

Reads every option from the raw query string with an explicit default.
Boolean options are true only for the exact string ``"true"``.
"""

from __future__ import annotations

import math
from urllib.parse import parse_qs, unquote

import structlog

from htmlpreview.errors import MissingUrlError
from htmlpreview.models.params import DEFAULT_CORS_PROXY, RequestParameters, Theme
from htmlpreview.normalizer import split_url

log = structlog.get_logger()

_STRING_OPTIONS = ("css", "inject_js", "base_path", "width", "height", "scale", "cors_proxy")
_BOOL_OPTIONS = ("remove_scripts", "cache", "sandbox")


def _raw_url_tail(query: str) -> str | None:
    """Return an unencoded nested URL carried by the first ``url=`` key.

    ``?theme=dark&url=https://cdn.example/page.html?v=2&lang=en`` would
    otherwise lose everything after the nested ``?``. Only applies when the
    literal ``?`` sits in the url's own segment, before the next ``&``; a
    ``?`` inside a later option (``css=...?v=1``, a relay prefix) does not count.
    """
    if query.startswith("url="):
        start = 0
    else:
        start = query.find("&url=")
        if start == -1:
            return None
        start += 1
    tail = query[start + len("url=") :]
    own_segment, _, _ = tail.partition("&")
    if "?" not in own_segment:
        return None
    return unquote(tail)


def _parse_cache_time(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        seconds = math.nan
    if not math.isfinite(seconds):
        log.warning("invalid_cache_time", value=value)
        return 0.0
    return seconds


def _parse_theme(value: str) -> Theme:
    try:
        return Theme(value)
    except ValueError:
        log.warning("unknown_theme", value=value)
        return Theme.NONE


def parse_parameters(
    query: str,
    *,
    require_url: bool = True,
    cors_proxy: str = DEFAULT_CORS_PROXY,
) -> RequestParameters:
    """Parse a request's query string into ``RequestParameters``.

    Unknown keys are ignored; repeated keys keep their first value. With
    ``require_url`` a missing or empty ``url`` raises ``MissingUrlError``;
    a present ``url`` that is not an absolute URL raises ``InvalidUrlError``.
    """
    query = query.removeprefix("?")
    params = {key: values[0] for key, values in parse_qs(query, keep_blank_values=True).items()}

    url = _raw_url_tail(query) or params.get("url") or None
    if url is None:
        if require_url:
            raise MissingUrlError()
    else:
        split_url(url)

    fields: dict[str, object] = {"url": url, "cors_proxy": cors_proxy}
    for name in _STRING_OPTIONS:
        if name in params:
            fields[name] = params[name]
    for name in _BOOL_OPTIONS:
        if name in params:
            fields[name] = params[name] == "true"
    if "theme" in params:
        fields["theme"] = _parse_theme(params["theme"])
    if "cache_time" in params:
        fields["cache_time"] = _parse_cache_time(params["cache_time"])

    return RequestParameters(**fields)
