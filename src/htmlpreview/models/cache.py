from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """A transformed preview document and the moment it was produced."""

    html: str
    created_at: datetime
