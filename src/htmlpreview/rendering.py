"""HTML pages for the three preview outcomes.

The preview page embeds the transformed document in an ``<iframe srcdoc>``.
When sandboxing is on the frame gets exactly ``allow-same-origin
allow-scripts``: no top navigation, no popups, no forms.
"""

from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING

from jinja2 import Environment, PackageLoader, select_autoescape

from htmlpreview.transformer import prepare_for_viewport

if TYPE_CHECKING:
    from htmlpreview.errors import MissingUrlError, PreviewError
    from htmlpreview.models.preview import PreviewArtifact

SANDBOX_POLICY = "allow-same-origin allow-scripts"


@cache
def _get_env() -> Environment:
    return Environment(
        loader=PackageLoader("htmlpreview", "templates"),
        autoescape=select_autoescape(["html", "xml"]),
    )


def frame_style(artifact: PreviewArtifact) -> str:
    """Inline style of the preview frame for the requested size and scale."""
    rules: list[str] = []
    if artifact.width:
        rules.append(f"width: {artifact.width}px")
    if artifact.height:
        rules.append(f"height: {artifact.height}px")
    if artifact.scale and artifact.scale != "1.0":
        rules.append(f"transform: scale({artifact.scale})")
        rules.append("transform-origin: top left")
    return "; ".join(rules)


def render_form(
    *,
    service_base: str,
    action: str = "/",
    error: MissingUrlError | None = None,
) -> str:
    template = _get_env().get_template("form.html")
    return template.render(service_base=service_base, action=action, error=error)


def render_preview(artifact: PreviewArtifact) -> str:
    template = _get_env().get_template("preview.html")
    return template.render(
        artifact=artifact,
        document=prepare_for_viewport(artifact.html),
        sandbox=SANDBOX_POLICY if artifact.sandbox else None,
        frame_style=frame_style(artifact),
    )


def render_error(error: PreviewError, *, action: str = "/") -> str:
    template = _get_env().get_template("error.html")
    return template.render(error=error, action=action)
