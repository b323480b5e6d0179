"""Request and response models for the draft and theme endpoints."""

from __future__ import annotations

import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..tasks.models import RepeatType, Task, Theme


class DraftOpenRequest(BaseModel):
    """Body for opening a draft session."""

    model_config = ConfigDict(extra="forbid")

    theme: Optional[str] = Field(
        default=None,
        description="Theme id to pre-select; defaults to the inbox",
    )


class DraftResponse(BaseModel):
    """Current state of a draft session."""

    session_id: str
    draft: Task
    is_add_theme: bool = False
    new_theme_name: str = ""


class FieldUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    value: Any = None


class RepeatToggle(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool


class RepeatTypeUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: RepeatType


class RepeatIntervalUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    interval: int = Field(..., strict=True)


class RepeatRangeUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    from_: datetime.datetime = Field(..., alias="from")
    to: datetime.datetime


class DueAtUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    value: Union[datetime.datetime, str]


class ThemeNameUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str


class TaskCreated(BaseModel):
    id: str


class ThemeCreated(BaseModel):
    """Outcome of an add-theme submission.

    ``created`` is false when the store rejected the write; the sub-form
    state is left as it was so the name can be resubmitted.
    """

    created: bool
    theme: Optional[Theme] = None
    is_add_theme: bool
    new_theme_name: str


class ThemeList(BaseModel):
    themes: list[Theme] = Field(default_factory=list)


__all__ = [
    "DraftOpenRequest",
    "DraftResponse",
    "FieldUpdate",
    "RepeatToggle",
    "RepeatTypeUpdate",
    "RepeatIntervalUpdate",
    "RepeatRangeUpdate",
    "DueAtUpdate",
    "ThemeNameUpdate",
    "TaskCreated",
    "ThemeCreated",
    "ThemeList",
]
