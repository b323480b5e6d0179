"""Theme listing and the add-theme sub-flow of the task form."""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import EmptyThemeNameError, MissingAccountError
from ..store import DocumentStore
from .converters import task_from_document, theme_from_document, theme_to_document
from .models import INBOX_THEME_ID, AccountContext, Task, Theme
from .paths import inbox_path, theme_tasks_path, themes_path

logger = logging.getLogger(__name__)


class ThemeCreationFlow:
    """Visibility flag and name draft for creating a theme inline.

    Success always collapses the sub-form and clears the name. A rejected
    name or a failed write leaves both untouched.
    """

    def __init__(self) -> None:
        self.is_add_theme = False
        self.new_theme_name = ""

    def toggle_visibility(self) -> bool:
        self.is_add_theme = not self.is_add_theme
        return self.is_add_theme

    def set_name(self, value: str) -> str:
        self.new_theme_name = value
        return self.new_theme_name

    async def submit(
        self,
        store: DocumentStore,
        account: Optional[AccountContext],
        name: Optional[str] = None,
    ) -> Optional[Theme]:
        """Create a theme named ``name`` (or the current name draft).

        Returns the created theme, or ``None`` when the store rejected the
        write; the failure is logged and not raised.
        """
        candidate = (self.new_theme_name if name is None else name) or ""
        candidate = candidate.strip()
        if not candidate:
            raise EmptyThemeNameError()
        if account is None:
            raise MissingAccountError()

        theme = Theme(name=candidate)
        path = themes_path(account.id)
        try:
            theme_id = await store.create(path, theme_to_document(theme))
        except Exception:
            logger.exception("Theme creation failed path=%s name=%s", path, candidate)
            return None

        logger.info("Created theme %s (%s) at %s", theme_id, candidate, path)
        self.new_theme_name = ""
        self.is_add_theme = False
        return Theme(id=theme_id, name=candidate)


async def list_themes(
    store: DocumentStore,
    account_id: str,
    *,
    include_tasks: bool = False,
) -> list[Theme]:
    """Return the account's themes, optionally with their tasks loaded."""

    documents = await store.list(themes_path(account_id))
    themes: list[Theme] = []
    for doc_id, data in documents:
        if doc_id == INBOX_THEME_ID:
            continue
        theme = theme_from_document(doc_id, data)
        if include_tasks:
            theme.tasks = await _load_tasks(store, theme_tasks_path(account_id, doc_id))
        themes.append(theme)
    return themes


async def list_inbox_tasks(store: DocumentStore, account_id: str) -> list[Task]:
    return await _load_tasks(store, inbox_path(account_id))


async def _load_tasks(store: DocumentStore, path: str) -> list[Task]:
    tasks: list[Task] = []
    for doc_id, data in await store.list(path):
        try:
            tasks.append(task_from_document(doc_id, data))
        except ValueError as exc:
            logger.warning("Skipping invalid task %s in %s: %s", doc_id, path, exc)
    return tasks


__all__ = ["ThemeCreationFlow", "list_themes", "list_inbox_tasks"]
