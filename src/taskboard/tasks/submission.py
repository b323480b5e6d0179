"""Hand a finished task draft to the document store."""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import MissingAccountError, StoreWriteError
from ..store import DocumentStore
from .converters import Document, task_to_document
from .draft import TaskDraftController
from .models import AccountContext, Task
from .paths import resolve_task_path

logger = logging.getLogger(__name__)


def prepare_for_submission(
    task: Task, account: Optional[AccountContext]
) -> tuple[str, Document]:
    """Return the collection path and the id-less payload for ``task``.

    Raises:
        MissingAccountError: when no account context is available.
    """
    if account is None:
        raise MissingAccountError()
    return resolve_task_path(account.id, task.theme), task_to_document(task)


async def submit_task(
    store: DocumentStore,
    controller: TaskDraftController,
    account: Optional[AccountContext],
) -> str:
    """Persist the controller's draft and reset it on success.

    The account is checked before the store is touched. A failed write keeps
    the draft as it was so the user can retry.
    """
    path, payload = prepare_for_submission(controller.draft, account)

    try:
        doc_id = await store.create(path, payload)
    except StoreWriteError:
        logger.exception("Task submission failed path=%s", path)
        raise
    except Exception as exc:
        logger.exception("Task submission failed path=%s", path)
        raise StoreWriteError(f"Error creating task: {exc}") from exc

    logger.info("Created task %s at %s", doc_id, path)
    controller.reset()
    return doc_id


__all__ = ["prepare_for_submission", "submit_task"]
