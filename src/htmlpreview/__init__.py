"""htmlpreview: live previews of HTML files hosted on git forges."""

from __future__ import annotations

import warnings
from importlib.metadata import PackageNotFoundError, version

FALLBACK_VERSION = "0.0.0+unknown"


def _resolve_version(distribution: str = "htmlpreview") -> str:
    try:
        return version(distribution)
    except PackageNotFoundError:
        warnings.warn(
            f"htmlpreview is not installed; reporting version {FALLBACK_VERSION}",
            RuntimeWarning,
            stacklevel=2,
        )
        return FALLBACK_VERSION


__version__ = _resolve_version()
