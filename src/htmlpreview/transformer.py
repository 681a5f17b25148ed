"""Textual HTML rewrites applied to fetched documents.

Every stage is a plain string-to-string map keyed on a structural marker
(``<head>``, ``</head>`` or ``</body>``, matched case-insensitively, first
occurrence only). A document without the marker passes through that stage
unchanged. This is not an HTML parser and not a sanitizer.
"""

from __future__ import annotations

import re
from html import escape
from typing import TYPE_CHECKING

from htmlpreview.models.params import Theme

if TYPE_CHECKING:
    from htmlpreview.models.params import RequestParameters

_HEAD_OPEN_RE = re.compile(r"<head>", re.IGNORECASE)
_HEAD_CLOSE_RE = re.compile(r"</head>", re.IGNORECASE)
_BODY_CLOSE_RE = re.compile(r"</body>", re.IGNORECASE)
_SCRIPT_BLOCK_RE = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
    re.IGNORECASE,
)

THEME_STYLES: dict[Theme, str] = {
    Theme.DARK: """
                <style>
                    body { background-color: #222; color: #eee; }
                    a { color: #4da6ff; }
                    pre, code { background-color: #333; color: #f0f0f0; }
                </style>""",
    Theme.LIGHT: """
                <style>
                    body { background-color: #fff; color: #333; }
                    a { color: #0366d6; }
                    pre, code { background-color: #f6f8fa; color: #24292e; }
                </style>""",
}

VIEWPORT_META = (
    '<meta name="viewport" content="width=device-width, initial-scale=1.0, '
    'maximum-scale=1.0, user-scalable=no">'
)
FULLSCREEN_STYLE = (
    "<style>html, body { height: 100% !important; margin: 0 !important; "
    "padding: 0 !important; overflow: auto !important; }</style>"
)


def _after_head_open(html: str, fragment: str) -> str:
    return _HEAD_OPEN_RE.sub(lambda m: m.group(0) + fragment, html, count=1)


def _before_head_close(html: str, fragment: str) -> str:
    return _HEAD_CLOSE_RE.sub(lambda m: fragment + m.group(0), html, count=1)


def _before_body_close(html: str, fragment: str) -> str:
    return _BODY_CLOSE_RE.sub(lambda m: fragment + m.group(0), html, count=1)


def inject_base_path(html: str, base_path: str) -> str:
    return _after_head_open(html, f'<base href="{escape(base_path)}">')


def strip_scripts(html: str) -> str:
    return _SCRIPT_BLOCK_RE.sub("", html)


def inject_theme(html: str, theme: Theme) -> str:
    styles = THEME_STYLES.get(theme)
    if styles is None:
        return html
    return _before_head_close(html, styles)


def inject_stylesheet(html: str, href: str) -> str:
    return _before_head_close(html, f'<link rel="stylesheet" href="{escape(href)}">')


def inject_script(html: str, src: str) -> str:
    return _before_body_close(html, f'<script src="{escape(src)}"></script>')


def transform_html(html: str, params: RequestParameters) -> str:
    """Apply the parameter-driven rewrites to a fetched document.

    Order matters: the base tag goes in before scripts are stripped and
    before anything is appended to the head. Meant to run once per fetch;
    running it twice duplicates the injected tags.
    """
    if params.base_path:
        html = inject_base_path(html, params.base_path)
    if params.remove_scripts:
        html = strip_scripts(html)
    if params.theme:
        html = inject_theme(html, params.theme)
    if params.css:
        html = inject_stylesheet(html, params.css)
    if params.inject_js:
        html = inject_script(html, params.inject_js)
    return html


def prepare_for_viewport(html: str) -> str:
    """Make a document fill its viewport. Applied to every rendered preview."""
    return _after_head_open(html, VIEWPORT_META + FULLSCREEN_STYLE)
