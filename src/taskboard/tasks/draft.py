"""Transition rules for editing a task draft.

Each transition is a pure function from one ``Task`` to the next. The
functions never mutate their input; the returned draft always satisfies the
repeat invariants enforced by :class:`~taskboard.tasks.models.Task`.
:class:`TaskDraftController` holds the current draft of one editing session
and applies the transitions to it.
"""

from __future__ import annotations

import datetime
import logging
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError

from ..errors import DraftFieldError, InvalidRepeatTransition
from ..utils.datetime_utils import ensure_utc, parse_datetime_input, utcnow
from .models import (
    DEFAULT_CUSTOM_WINDOW_DAYS,
    INBOX_THEME_ID,
    INTERVAL_REPEAT_TYPES,
    CustomRepeat,
    IntervalRepeat,
    RepeatType,
    Task,
    default_repeat,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime.datetime]

# Fields the generic setter may replace. Repeat and due date have dedicated
# transitions; id and created_at are owned by the store and creation.
EDITABLE_FIELDS: frozenset[str] = frozenset(
    {"title", "content", "priority", "state", "theme", "tags"}
)


def _evolve(task: Task, **changes: Any) -> Task:
    data = dict(task)
    data.update(changes)
    return Task.model_validate(data)


def new_draft(theme: Optional[str] = None, *, now: Optional[datetime.datetime] = None) -> Task:
    """Return a fresh default draft, optionally pre-assigned to ``theme``."""

    try:
        return Task(
            theme=theme or INBOX_THEME_ID,
            created_at=now if now is not None else utcnow(),
        )
    except ValidationError as exc:
        raise DraftFieldError(f"Invalid value for 'theme': {exc.errors()[0]['msg']}") from exc


def set_field(task: Task, name: str, value: Any) -> Task:
    """Replace one editable field of ``task``."""

    if name not in EDITABLE_FIELDS:
        raise DraftFieldError(f"Field '{name}' cannot be set directly")
    try:
        return _evolve(task, **{name: value})
    except ValidationError as exc:
        raise DraftFieldError(f"Invalid value for '{name}': {exc.errors()[0]['msg']}") from exc


def set_repeat(task: Task, enabled: bool) -> Task:
    """Switch repeating on or off.

    Enabling always installs ``{type: day, interval: 1}`` and discards any
    earlier configuration; disabling removes ``repeat_data`` entirely.
    """
    if enabled:
        return _evolve(task, repeat=True, repeat_data=default_repeat())
    return _evolve(task, repeat=False, repeat_data=None)


def set_repeat_type(
    task: Task,
    new_type: RepeatType,
    *,
    now: Optional[datetime.datetime] = None,
    window_days: int = DEFAULT_CUSTOM_WINDOW_DAYS,
) -> Task:
    """Change the repeat variant, resetting the variant-specific fields.

    Switching to ``custom`` installs a range from ``now`` spanning
    ``window_days`` days. Switching to an interval variant sets the interval
    to 1, including when moving between interval variants.
    """
    if task.repeat_data is None:
        raise InvalidRepeatTransition("Repeat must be enabled before choosing a repeat type")

    if new_type == "custom":
        start = now if now is not None else utcnow()
        repeat_data: Union[IntervalRepeat, CustomRepeat] = CustomRepeat.window(
            start, window_days
        )
    elif new_type in INTERVAL_REPEAT_TYPES:
        repeat_data = IntervalRepeat(type=new_type, interval=1)
    else:
        raise InvalidRepeatTransition(f"Unknown repeat type: {new_type!r}")

    return _evolve(task, repeat_data=repeat_data)


def set_repeat_interval(task: Task, interval: int) -> Task:
    """Set the interval of an interval-based repeat config."""

    current = task.repeat_data
    if not isinstance(current, IntervalRepeat):
        raise InvalidRepeatTransition("Interval only applies to day, week, month or year repeats")
    try:
        repeat_data = IntervalRepeat(type=current.type, interval=interval)
    except ValidationError as exc:
        raise InvalidRepeatTransition(
            f"Invalid repeat interval {interval!r}: {exc.errors()[0]['msg']}"
        ) from exc
    return _evolve(task, repeat_data=repeat_data)


def set_repeat_range(
    task: Task,
    start: datetime.datetime,
    end: datetime.datetime,
) -> Task:
    """Replace the range of a custom repeat config."""

    if not isinstance(task.repeat_data, CustomRepeat):
        raise InvalidRepeatTransition("A date range only applies to custom repeats")
    try:
        repeat_data = CustomRepeat(from_=start, to=end)
    except ValidationError as exc:
        raise InvalidRepeatTransition(
            f"Invalid custom repeat range: {exc.errors()[0]['msg']}"
        ) from exc
    return _evolve(task, repeat_data=repeat_data)


def toggle_due_at(task: Task, *, now: Optional[datetime.datetime] = None) -> Task:
    """Clear ``due_at`` when present, otherwise set it to ``now``."""

    if task.due_at is not None:
        return _evolve(task, due_at=None)
    return _evolve(task, due_at=now if now is not None else utcnow())


def set_due_at_value(task: Task, value: Union[datetime.datetime, str]) -> Task:
    """Overwrite ``due_at`` with an explicit instant."""

    if isinstance(value, str):
        try:
            due_at = parse_datetime_input(value)
        except ValueError as exc:
            raise DraftFieldError(str(exc)) from exc
    else:
        due_at = ensure_utc(value)
    return _evolve(task, due_at=due_at)


class TaskDraftController:
    """Hold the draft of one editing session and apply transitions to it."""

    def __init__(
        self,
        theme: Optional[str] = None,
        *,
        clock: Clock = utcnow,
        window_days: int = DEFAULT_CUSTOM_WINDOW_DAYS,
    ) -> None:
        self._theme = theme
        self._clock = clock
        self._window_days = window_days
        self._draft = new_draft(theme, now=clock())

    @property
    def draft(self) -> Task:
        return self._draft

    def _apply(self, task: Task) -> Task:
        self._draft = task
        return task

    def set_field(self, name: str, value: Any) -> Task:
        return self._apply(set_field(self._draft, name, value))

    def set_repeat(self, enabled: bool) -> Task:
        return self._apply(set_repeat(self._draft, enabled))

    def set_repeat_type(self, new_type: RepeatType) -> Task:
        return self._apply(
            set_repeat_type(
                self._draft,
                new_type,
                now=self._clock(),
                window_days=self._window_days,
            )
        )

    def set_repeat_interval(self, interval: int) -> Task:
        return self._apply(set_repeat_interval(self._draft, interval))

    def set_repeat_range(self, start: datetime.datetime, end: datetime.datetime) -> Task:
        return self._apply(set_repeat_range(self._draft, start, end))

    def toggle_due_at(self) -> Task:
        return self._apply(toggle_due_at(self._draft, now=self._clock()))

    def set_due_at_value(self, value: Union[datetime.datetime, str]) -> Task:
        return self._apply(set_due_at_value(self._draft, value))

    def reset(self) -> Task:
        """Start over from a fresh default draft for the same theme."""

        logger.debug("Resetting task draft (theme=%s)", self._theme or INBOX_THEME_ID)
        return self._apply(new_draft(self._theme, now=self._clock()))


__all__ = [
    "EDITABLE_FIELDS",
    "new_draft",
    "set_field",
    "set_repeat",
    "set_repeat_type",
    "set_repeat_interval",
    "set_repeat_range",
    "toggle_due_at",
    "set_due_at_value",
    "TaskDraftController",
]
