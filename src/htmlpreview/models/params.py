from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

DEFAULT_CORS_PROXY = "https://api.allorigins.win/raw?url="
DEFAULT_CACHE_TIME_SECONDS = 3600


class Theme(StrEnum):
    NONE = ""
    LIGHT = "light"
    DARK = "dark"


class RequestParameters(BaseModel):
    """Options of one preview request, read from its query string.

    Every field has a default, so a missing query key never leaves a field
    undefined. ``url`` is ``None`` only when the request carried none.
    """

    model_config = ConfigDict(frozen=True)

    url: str | None = None

    # Theme / styling
    theme: Theme = Theme.NONE
    css: str = ""

    # Content modification
    inject_js: str = ""
    base_path: str = ""
    remove_scripts: bool = False

    # Display (unitless pixels, kept as given)
    width: str = ""
    height: str = ""
    scale: str = "1.0"

    # Caching
    cache: bool = True
    cache_time: float = DEFAULT_CACHE_TIME_SECONDS  # seconds

    # Security
    sandbox: bool = True
    cors_proxy: str = DEFAULT_CORS_PROXY
