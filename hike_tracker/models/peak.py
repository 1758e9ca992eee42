"""Static peak data shown on the /peaks fragment."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HikePeak(BaseModel):
    """A named peak and its elevation in meters."""

    name: str
    elevation: int = Field(ge=0, le=65535)
