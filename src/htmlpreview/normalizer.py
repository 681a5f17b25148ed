"""Forge URL normalization.

Rewrites a URL pointing at a forge's HTML view of a file into the URL of the
raw file on the same forge. URLs on unknown hosts pass through untouched, and
URLs that already point at raw content are left as they are, so normalizing
twice gives the same result as normalizing once.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit, urlunsplit

from htmlpreview.errors import ForgeRewriteError, InvalidUrlError
from htmlpreview.forges import ForgeSoftware, identify

GITHUB_RAW_HOST = "raw.githubusercontent.com"


@dataclass(frozen=True)
class PathRewrite:
    """Path grammar of a forge's file view and its raw replacement."""

    pattern: re.Pattern[str]
    template: str
    hostname: str | None = None  # replaces the URL's hostname when set


_OWNER_REPO_SRC = re.compile(r"^/([^/]+)/([^/]+)/src/([^/]+)/(.+)$")

REWRITES: dict[ForgeSoftware, PathRewrite] = {
    ForgeSoftware.GITHUB: PathRewrite(
        pattern=re.compile(r"^/([^/]+)/([^/]+)/blob/([^/]+)/(.+)$"),
        template=r"/\1/\2/\3/\4",
        hostname=GITHUB_RAW_HOST,
    ),
    ForgeSoftware.BITBUCKET: PathRewrite(
        pattern=_OWNER_REPO_SRC,
        template=r"/\1/\2/raw/\3/\4",
    ),
    ForgeSoftware.GITLAB: PathRewrite(
        pattern=re.compile(r"^/([^/]+)/([^/]+)/(-/)?blob/([^/]+)/(.+)$"),
        template=r"/\1/\2/-/raw/\4/\5",
    ),
    ForgeSoftware.FORGEJO: PathRewrite(
        pattern=_OWNER_REPO_SRC,
        template=r"/\1/\2/raw/branch/\3/\4",
    ),
    # Owner first, then ref, then repo.
    ForgeSoftware.SOURCEHUT: PathRewrite(
        pattern=re.compile(r"^/~([^/]+)/([^/]+)/tree/([^/]+)/(.+)$"),
        template=r"/~\1/blob/\3/\2/\4",
    ),
}


def split_url(raw: str) -> SplitResult:
    """Parse an absolute URL, raising ``InvalidUrlError`` if it is not one."""
    try:
        parts = urlsplit(raw)
        parts.port  # noqa: B018 - validates the port component
    except ValueError as exc:
        raise InvalidUrlError(raw) from exc
    if not parts.scheme or not parts.hostname:
        raise InvalidUrlError(raw)
    return parts


def _with_hostname(url: SplitResult, hostname: str) -> SplitResult:
    userinfo, _, _ = url.netloc.rpartition("@")
    netloc = f"{userinfo}@{hostname}" if userinfo else hostname
    if url.port is not None:
        netloc = f"{netloc}:{url.port}"
    return url._replace(netloc=netloc)


def _rewrite_path(path: str, rule: PathRewrite) -> str:
    match = rule.pattern.fullmatch(path)
    if match is None:
        return path
    return match.expand(rule.template)


def normalize(url: SplitResult) -> SplitResult:
    """Return the raw-content form of ``url`` if it lives on a known forge."""
    forge = identify(url.hostname)
    if not forge.is_known:
        return url

    rule = REWRITES.get(forge.software)
    if rule is None:
        raise ForgeRewriteError(forge.software)

    if rule.hostname is not None:
        url = _with_hostname(url, rule.hostname)
    return url._replace(path=_rewrite_path(url.path, rule))


def normalize_from_string(raw: str) -> str:
    """String form of :func:`normalize`.

    The query component is split off before the path is rewritten and
    re-appended verbatim afterwards. Non-forge URLs come back byte-for-byte.
    """
    parts = split_url(raw)
    if not identify(parts.hostname).is_known:
        return raw

    base, sep, query = raw.partition("?")
    return urlunsplit(normalize(split_url(base))) + sep + query
