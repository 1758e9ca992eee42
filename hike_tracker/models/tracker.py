"""Tracker and hike models."""

from __future__ import annotations

import unicodedata
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

NAME_MAX_LENGTH = 200


def _reject_control_chars(v: str) -> str:
    if any(unicodedata.category(c) == "Cc" for c in v):
        raise ValueError("must not contain control characters")
    return v


class Hike(BaseModel):
    """A single hike, embedded in exactly one tracker."""

    name: str
    rank: int = Field(ge=1, le=255)
    created_at: datetime
    updated_at: datetime


class Tracker(BaseModel):
    """Core tracker model. Represents one document in the trackers collection."""

    id: UUID
    name: str
    created_by: UUID
    hikes: list[Hike] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class RenameTrackerForm(BaseModel):
    """What the edit form submits."""

    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)

    @field_validator("name", mode="before")
    @classmethod
    def _strip(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def _printable(cls, v: str) -> str:
        return _reject_control_chars(v)


class AddHikeForm(BaseModel):
    """What the add-hike form submits."""

    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    rank: int = Field(default=1, ge=1, le=255)

    @field_validator("name", mode="before")
    @classmethod
    def _strip(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def _printable(cls, v: str) -> str:
        return _reject_control_chars(v)
