"""Collection paths under which an account's documents are stored."""

from __future__ import annotations

from .models import INBOX_THEME_ID

ACCOUNTS_COLLECTION = "accounts"
THEMES_COLLECTION = "themes"
TASKS_COLLECTION = "tasks"
INBOX_COLLECTION = "inbox"


def themes_path(account_id: str) -> str:
    """Return ``accounts/{account_id}/themes``."""

    return f"{ACCOUNTS_COLLECTION}/{account_id}/{THEMES_COLLECTION}"


def inbox_path(account_id: str) -> str:
    """Return the reserved inbox collection of an account."""

    return f"{ACCOUNTS_COLLECTION}/{account_id}/{INBOX_COLLECTION}"


def theme_tasks_path(account_id: str, theme_id: str) -> str:
    return f"{themes_path(account_id)}/{theme_id}/{TASKS_COLLECTION}"


def resolve_task_path(account_id: str, theme: str) -> str:
    """Return the collection a task assigned to ``theme`` is written to.

    The inbox sentinel maps to the account's inbox collection and never
    appears as a segment under ``themes``.
    """
    if theme == INBOX_THEME_ID:
        return inbox_path(account_id)
    return theme_tasks_path(account_id, theme)


__all__ = [
    "ACCOUNTS_COLLECTION",
    "THEMES_COLLECTION",
    "TASKS_COLLECTION",
    "INBOX_COLLECTION",
    "themes_path",
    "inbox_path",
    "theme_tasks_path",
    "resolve_task_path",
]
