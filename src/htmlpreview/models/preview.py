from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from htmlpreview.errors import MissingUrlError, PreviewError


class PreviewArtifact(BaseModel):
    """Transformed document plus the options the viewport needs to show it."""

    html: str
    source_url: str
    raw_url: str
    width: str = ""
    height: str = ""
    scale: str = "1.0"
    sandbox: bool = True
    from_cache: bool = False


class FormState(BaseModel):
    """No file requested: show the input form, hide the preview surface."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal["form"] = "form"
    error: MissingUrlError | None = None


class PreviewState(BaseModel):
    kind: Literal["preview"] = "preview"
    artifact: PreviewArtifact


class ErrorState(BaseModel):
    """The evaluation failed; nothing is rendered but the error message."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal["error"] = "error"
    error: PreviewError


PreviewOutcome = FormState | PreviewState | ErrorState
