"""Domain models representing tasks, their repeat rules and themes."""

from __future__ import annotations

import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.datetime_utils import ensure_utc, utcnow

INBOX_THEME_ID = "inbox"
DEFAULT_CUSTOM_WINDOW_DAYS = 7

TaskPriority = Literal["low", "normal", "high", "critical"]
TaskState = Literal["undone", "done"]
IntervalRepeatType = Literal["day", "week", "month", "year"]
RepeatType = Literal["day", "week", "month", "year", "custom"]

INTERVAL_REPEAT_TYPES: frozenset[str] = frozenset({"day", "week", "month", "year"})


class IntervalRepeat(BaseModel):
    """Repeat every ``interval`` days, weeks, months or years."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: IntervalRepeatType = "day"
    interval: int = Field(default=1, ge=1, strict=True)


class CustomRepeat(BaseModel):
    """Repeat within a fixed, closed date range."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    type: Literal["custom"] = "custom"
    from_: datetime.datetime = Field(..., alias="from")
    to: datetime.datetime

    @field_validator("from_", "to")
    @classmethod
    def _normalize_bounds(cls, value: datetime.datetime) -> datetime.datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _check_range(self) -> "CustomRepeat":
        if self.from_ > self.to:
            raise ValueError("Custom repeat range must not end before it starts")
        return self

    @classmethod
    def window(
        cls,
        start: datetime.datetime,
        days: int = DEFAULT_CUSTOM_WINDOW_DAYS,
    ) -> "CustomRepeat":
        """Return a range starting at ``start`` and spanning ``days`` days."""

        return cls(from_=start, to=start + datetime.timedelta(days=days))


RepeatConfig = Annotated[
    Union[IntervalRepeat, CustomRepeat],
    Field(discriminator="type"),
]


def default_repeat() -> IntervalRepeat:
    """Config installed whenever repeat is switched on."""

    return IntervalRepeat(type="day", interval=1)


class Task(BaseModel):
    """A task draft or a stored task.

    ``repeat_data`` is present exactly when ``repeat`` is true; the validator
    rejects any other combination.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = ""
    title: str = ""
    content: str = ""
    priority: TaskPriority = "normal"
    state: TaskState = "undone"
    repeat: bool = False
    repeat_data: Optional[RepeatConfig] = None
    due_at: Optional[datetime.datetime] = None
    theme: str = INBOX_THEME_ID
    tags: list[str] = Field(default_factory=list)
    created_at: datetime.datetime = Field(default_factory=utcnow)

    @field_validator("due_at", "created_at")
    @classmethod
    def _normalize_timestamps(
        cls, value: Optional[datetime.datetime]
    ) -> Optional[datetime.datetime]:
        if value is None:
            return None
        return ensure_utc(value)

    @field_validator("theme")
    @classmethod
    def _default_theme(cls, value: str) -> str:
        theme = value.strip() or INBOX_THEME_ID
        # Theme ids become one segment of the store path.
        if "/" in theme or theme in (".", ".."):
            raise ValueError(f"Theme id must be a single path segment: {theme!r}")
        return theme

    @model_validator(mode="after")
    def _check_repeat_presence(self) -> "Task":
        if self.repeat and self.repeat_data is None:
            raise ValueError("repeat_data is required when repeat is enabled")
        if not self.repeat and self.repeat_data is not None:
            raise ValueError("repeat_data must be absent when repeat is disabled")
        return self

    @property
    def is_inbox(self) -> bool:
        return self.theme == INBOX_THEME_ID

    @property
    def has_due_at(self) -> bool:
        return self.due_at is not None


class Theme(BaseModel):
    """A user-defined category of tasks."""

    id: str = ""
    name: str
    tasks: Optional[list[Task]] = None


class AccountContext(BaseModel):
    """Identity of the signed-in account an editing session belongs to."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)


__all__ = [
    "INBOX_THEME_ID",
    "DEFAULT_CUSTOM_WINDOW_DAYS",
    "INTERVAL_REPEAT_TYPES",
    "TaskPriority",
    "TaskState",
    "IntervalRepeatType",
    "RepeatType",
    "IntervalRepeat",
    "CustomRepeat",
    "RepeatConfig",
    "default_repeat",
    "Task",
    "Theme",
    "AccountContext",
]
