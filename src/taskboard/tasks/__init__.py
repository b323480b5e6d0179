"""Task domain package: draft model, transitions and submission."""

from ..errors import (
    DraftFieldError,
    EmptyThemeNameError,
    InvalidRepeatTransition,
    MissingAccountError,
    StoreWriteError,
    TaskboardError,
)
from .draft import TaskDraftController
from .models import (
    INBOX_THEME_ID,
    AccountContext,
    CustomRepeat,
    IntervalRepeat,
    RepeatConfig,
    Task,
    Theme,
)
from .submission import prepare_for_submission, submit_task
from .themes import ThemeCreationFlow, list_inbox_tasks, list_themes

__all__ = [
    "INBOX_THEME_ID",
    "AccountContext",
    "CustomRepeat",
    "IntervalRepeat",
    "RepeatConfig",
    "Task",
    "Theme",
    "TaskDraftController",
    "ThemeCreationFlow",
    "prepare_for_submission",
    "submit_task",
    "list_themes",
    "list_inbox_tasks",
    "TaskboardError",
    "MissingAccountError",
    "EmptyThemeNameError",
    "StoreWriteError",
    "InvalidRepeatTransition",
    "DraftFieldError",
]
