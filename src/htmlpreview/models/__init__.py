from __future__ import annotations

from htmlpreview.models.cache import CacheEntry
from htmlpreview.models.params import (
    DEFAULT_CACHE_TIME_SECONDS,
    DEFAULT_CORS_PROXY,
    RequestParameters,
    Theme,
)
from htmlpreview.models.preview import (
    ErrorState,
    FormState,
    PreviewArtifact,
    PreviewOutcome,
    PreviewState,
)

__all__ = [
    # params
    "RequestParameters",
    "Theme",
    "DEFAULT_CORS_PROXY",
    "DEFAULT_CACHE_TIME_SECONDS",
    # cache
    "CacheEntry",
    # preview
    "PreviewArtifact",
    "FormState",
    "PreviewState",
    "ErrorState",
    "PreviewOutcome",
]
